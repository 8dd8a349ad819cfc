from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from metamath_blueprints.content.model import ItemKind, ItemState
from metamath_blueprints.graph.builder import GraphNode, ItemNode, SyntheticNode

BLACK = "#000000"
WHITE = "#ffffff"
BLUE = "#0000ff"
GREEN = "#008000"
LIGHT_BLUE = "#a3d6ff"
LIGHT_GREEN = "#9cec8b"

# Approximate glyph box of the diagram font, relative to the font size.
_CHAR_WIDTH = 0.6
_LINE_HEIGHT = 1.2


class Shape(Enum):
    BOX = "box"
    ELLIPSE = "ellipse"


@dataclass(frozen=True)
class NodeStyle:
    line_color: str
    fill_color: str
    shape: Shape
    line_width: int = 1


@dataclass(frozen=True)
class Size:
    width: float
    height: float


def line_color(state: ItemState) -> str:
    match state:
        case ItemState.READY_FOR_STATEMENT:
            return BLUE
        case ItemState.STATEMENT_FORMALIZED:
            return GREEN
        case ItemState.DRAFT | ItemState.READY_FOR_PROOF | ItemState.FORMALIZED:
            return BLACK


def fill_color(state: ItemState) -> str:
    match state:
        case ItemState.DRAFT | ItemState.READY_FOR_STATEMENT | ItemState.STATEMENT_FORMALIZED:
            return WHITE
        case ItemState.READY_FOR_PROOF:
            return LIGHT_BLUE
        case ItemState.FORMALIZED:
            return LIGHT_GREEN


def shape_for(kind: ItemKind) -> Shape:
    match kind:
        case ItemKind.THEOREM:
            return Shape.BOX
        case ItemKind.DEFINITION:
            return Shape.ELLIPSE


def node_style(node: GraphNode) -> NodeStyle:
    match node:
        case ItemNode(kind=kind, state=state):
            return NodeStyle(line_color(state), fill_color(state), shape_for(kind))
        case SyntheticNode():
            return NodeStyle(BLACK, LIGHT_GREEN, Shape.BOX)
    raise TypeError(f"unsupported graph node {node!r}")


def text_size(label: str, font_size: int) -> Size:
    lines = label.splitlines() or [""]
    longest = max(len(line) for line in lines)
    return Size(longest * font_size * _CHAR_WIDTH, len(lines) * font_size * _LINE_HEIGHT)


def node_size(node: GraphNode, font_size: int, padding: float) -> Size:
    """Label extent plus a uniform margin on each dimension."""

    text = text_size(node.name, font_size)
    return Size(text.width + padding, text.height + padding)
