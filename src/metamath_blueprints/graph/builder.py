from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from metamath_blueprints.content.model import Item, ItemKind, ItemState
from metamath_blueprints.errors import BlueprintError


@dataclass(frozen=True)
class ItemNode:
    name: str
    kind: ItemKind
    state: ItemState

    @property
    def href(self) -> str:
        return f"{self.name}.html"


@dataclass(frozen=True)
class SyntheticNode:
    """A dependency name that matches no item of the project.

    It still links to `<name>.html`, which is expected to exist in some project.
    """

    name: str

    @property
    def href(self) -> str:
        return f"{self.name}.html"


GraphNode = ItemNode | SyntheticNode


@dataclass(frozen=True)
class DependencyGraph:
    """Nodes in insertion order; edges are `(source, target)` node indices.

    An edge points from an item to one of its dependencies.
    """

    nodes: tuple[GraphNode, ...]
    edges: tuple[tuple[int, int], ...]


@dataclass
class _BuildContext:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[tuple[int, int]] = field(default_factory=list)
    by_name: dict[str, int] = field(default_factory=dict)

    def add_node(self, node: GraphNode) -> int:
        self.nodes.append(node)
        handle = len(self.nodes) - 1
        self.by_name[node.name] = handle
        return handle

    def resolve(self, name: str) -> int:
        handle = self.by_name.get(name)
        if handle is None:
            handle = self.add_node(SyntheticNode(name))
        return handle


def build_dependency_graph(items: Iterable[Item]) -> DependencyGraph:
    visible = [item for item in items if not item.info.hidden]
    ctx = _BuildContext()

    for item in visible:
        ctx.add_node(ItemNode(item.name, item.info.kind, item.info.state))

    for item in visible:
        for dependency in item.info.dependencies:
            source = ctx.by_name.get(item.name)
            if source is None:
                raise BlueprintError.invalid(f"Could not find node for item {item.name}")
            ctx.edges.append((source, ctx.resolve(dependency)))

    return DependencyGraph(nodes=tuple(ctx.nodes), edges=tuple(ctx.edges))
