"""Dependency diagrams: graph construction, styling and graphviz rendering."""

from __future__ import annotations

from collections.abc import Iterable

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.content.model import Item
from metamath_blueprints.graph.builder import (
    DependencyGraph,
    ItemNode,
    SyntheticNode,
    build_dependency_graph,
)
from metamath_blueprints.graph.dot import render_svg, strip_fixed_size, to_dot

__all__ = [
    "DependencyGraph",
    "ItemNode",
    "SyntheticNode",
    "build_dependency_graph",
    "render_dependency_graph",
]


def render_dependency_graph(items: Iterable[Item], config: BuildConfig) -> str:
    """Return the scalable SVG diagram of one project's items."""

    graph = build_dependency_graph(items)
    return strip_fixed_size(render_svg(to_dot(graph, config)))
