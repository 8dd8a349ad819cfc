from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ItemKind(Enum):
    THEOREM = "Theorem"
    DEFINITION = "Definition"


class ItemState(Enum):
    """Lifecycle of an item, in order."""

    DRAFT = "Draft"
    READY_FOR_STATEMENT = "ReadyForStmt"
    STATEMENT_FORMALIZED = "StmtFormalized"
    READY_FOR_PROOF = "ReadyForProof"
    FORMALIZED = "Formalized"

    @classmethod
    def _missing_(cls, value: object) -> ItemState | None:
        aliases = {
            "ReadyForStatement": cls.READY_FOR_STATEMENT,
            "StatementFormalized": cls.STATEMENT_FORMALIZED,
        }
        return aliases.get(value) if isinstance(value, str) else None

    @property
    def label(self) -> str:
        return _STATE_LABELS[self]


_STATE_LABELS = {
    ItemState.DRAFT: "Draft",
    ItemState.READY_FOR_STATEMENT: "Ready for statement",
    ItemState.STATEMENT_FORMALIZED: "Statement formalized",
    ItemState.READY_FOR_PROOF: "Ready for proof",
    ItemState.FORMALIZED: "Formalized",
}


@dataclass(frozen=True)
class ItemInfo:
    kind: ItemKind = ItemKind.THEOREM
    state: ItemState = ItemState.DRAFT
    statement: str | None = None
    dependencies: tuple[str, ...] = ()
    hidden: bool = False
    reference: str | None = None
    wikipedia: str | None = None


@dataclass(frozen=True)
class Item:
    name: str
    path: Path
    info: ItemInfo
    # Rendered HTML; opaque to the graph code.
    body: str
    statement_html: str | None = None


@dataclass(frozen=True)
class Project:
    name: str
    path: Path
    items: tuple[Item, ...]
    body: str

    def get_item(self, name: str) -> Item | None:
        # Same resolution as the diagram: the last scanned item with a name wins.
        found = None
        for item in self.items:
            if item.name == name:
                found = item
        return found

    def dependents_of(self, name: str) -> list[str]:
        return [item.name for item in self.items if name in item.info.dependencies]

