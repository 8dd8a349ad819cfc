from __future__ import annotations

import hashlib
import shutil
from pathlib import Path

import pytest

from metamath_blueprints.content.model import Item, ItemInfo, ItemKind, ItemState

INDEX_README = "# Metamath Blueprints\n\nBlueprints for set.mm formalization.\n"

requires_dot = pytest.mark.skipif(shutil.which("dot") is None, reason="graphviz `dot` not installed")


def write_item(
    project_dir: Path,
    name: str,
    *,
    front_matter: str = "",
    body: str = "Proof sketch.\n",
    suffix: str = ".md",
) -> Path:
    path = project_dir / f"{name}{suffix}"
    path.write_text(f"+++\n{front_matter}+++\n{body}", encoding="utf-8")
    return path


def write_project(root: Path, name: str, *, readme: str | None = "About this project.\n") -> Path:
    project_dir = root / name
    project_dir.mkdir(parents=True, exist_ok=True)
    if readme is not None:
        (project_dir / "README.md").write_text(f"# {name}\n\n{readme}", encoding="utf-8")
    return project_dir


def write_sample_root(root: Path) -> Path:
    """Two projects: `algebra` (with a hidden item and an unresolved dependency) and `sets`."""

    root.mkdir(parents=True, exist_ok=True)
    (root / "README.md").write_text(INDEX_README, encoding="utf-8")

    algebra = write_project(root, "algebra")
    write_item(
        algebra,
        "A",
        front_matter='state = "Formalized"\ndependencies = ["B", "Ghost"]\n',
    )
    write_item(
        algebra,
        "B",
        front_matter='type = "Definition"\nstate = "ReadyForStmt"\nstatement = "$x = x$"\n',
    )
    write_item(algebra, "Secret", front_matter="hide = true\n")
    write_item(algebra, "C", front_matter='dependencies = ["Secret", "ax-ext"]\n')

    sets = write_project(root, "sets")
    write_item(
        sets,
        "ax-ext",
        front_matter='state = "ReadyForProof"\nreference = "ax-ext"\nwikipedia = "Axiom of extensionality"\n',
    )
    return root


def make_item(
    name: str,
    *,
    kind: ItemKind = ItemKind.THEOREM,
    state: ItemState = ItemState.DRAFT,
    dependencies: tuple[str, ...] = (),
    hidden: bool = False,
) -> Item:
    info = ItemInfo(kind=kind, state=state, dependencies=dependencies, hidden=hidden)
    return Item(name=name, path=Path(f"{name}.md"), info=info, body=f"<p>{name}</p>")


def tree_digest(root: Path) -> dict[str, str]:
    """sha256 of every file below `root`, keyed by POSIX relative path."""

    digests: dict[str, str] = {}
    for child in sorted(root.rglob("*")):
        if child.is_file():
            rel_name = child.relative_to(root).as_posix()
            digests[rel_name] = hashlib.sha256(child.read_bytes()).hexdigest()
    return digests
