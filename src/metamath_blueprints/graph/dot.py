"""Graphviz rendering of a dependency graph through pydot.

`dot` owns the layout. This module fixes only its inputs: top-to-bottom
orientation, node insertion order, and the size and style of every node.
"""

from __future__ import annotations

import re

import pydot

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.errors import BlueprintError, ErrorKind
from metamath_blueprints.graph.builder import DependencyGraph
from metamath_blueprints.graph.style import node_size, node_style

POINTS_PER_INCH = 72.0

_FIXED_SIZE_RE = re.compile(
    r'<svg\s+width="[0-9.]+(?:pt|px)?"\s+height="[0-9.]+(?:pt|px)?"'
)


def _inches(points: float) -> str:
    return f"{points / POINTS_PER_INCH:.4f}"


def node_id(index: int) -> str:
    # Names may repeat (synthetic vs. item), handles never do.
    return f"n{index}"


def to_dot(graph: DependencyGraph, config: BuildConfig) -> pydot.Dot:
    dot_graph = pydot.Dot(
        graph_type="digraph",
        rankdir="TB",
        nodesep=_inches(config.node_gap),
        ranksep=_inches(config.layer_gap),
    )
    for index, node in enumerate(graph.nodes):
        style = node_style(node)
        size = node_size(node, config.font_size, config.node_padding)
        dot_graph.add_node(
            pydot.Node(
                node_id(index),
                label=node.name,
                shape=style.shape.value,
                color=style.line_color,
                fillcolor=style.fill_color,
                penwidth=str(style.line_width),
                style="filled",
                URL=node.href,
                fixedsize="true",
                width=_inches(size.width),
                height=_inches(size.height),
                fontname="Helvetica",
                fontsize=str(config.font_size),
            )
        )
    for source, target in graph.edges:
        dot_graph.add_edge(
            pydot.Edge(
                node_id(source),
                node_id(target),
                arrowhead="normal",
                arrowtail="none",
                style="solid",
            )
        )
    return dot_graph


def render_svg(dot_graph: pydot.Dot) -> str:
    """Run `dot` and return the bare `<svg>` element (XML prolog dropped)."""

    try:
        payload = dot_graph.create_svg()
    except OSError as exc:
        raise BlueprintError(ErrorKind.LAYOUT, f"could not run graphviz: {exc}") from exc
    except AssertionError as exc:
        # pydot reports a non-zero exit of `dot` this way.
        raise BlueprintError(ErrorKind.LAYOUT, f"graphviz failed: {exc}") from exc

    svg = payload.decode("utf-8")
    start = svg.find("<svg")
    if start < 0:
        raise BlueprintError(ErrorKind.LAYOUT, "graphviz produced no <svg> element")
    return svg[start:]


def strip_fixed_size(svg: str) -> str:
    """Drop the root width/height so the diagram scales to its container."""

    return _FIXED_SIZE_RE.sub("<svg", svg, count=1)
