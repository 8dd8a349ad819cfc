"""Filesystem scan producing the in-memory content model.

A content root holds one directory per project; each project directory holds
one file per item plus its own README. Items start with a TOML front matter
block delimited by `+++` lines, followed by a markdown body.

The scan is a full rescan on every build and performs no writes.
"""

from __future__ import annotations

import logging
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.content.model import Item, ItemInfo, ItemKind, ItemState, Project
from metamath_blueprints.errors import BlueprintError, ErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

MarkdownFn = Callable[[str], str]

_FRONT_MATTER_RE = re.compile(
    r"\A\+\+\+[ \t]*\r?\n(?P<matter>.*?)^\+\+\+[ \t]*(?:\r?\n|\Z)(?P<body>.*)\Z",
    re.DOTALL | re.MULTILINE,
)


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BlueprintError.io(path, exc) from exc
    except UnicodeDecodeError as exc:
        raise BlueprintError(ErrorKind.DECODE, f"{path}: {exc}") from exc


def split_front_matter(text: str) -> tuple[str, str] | None:
    """Return `(front_matter, body)` or None when no `+++` block opens the text."""

    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return None
    return match.group("matter"), match.group("body")


def _optional_str(data: dict[str, Any], key: str, name: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise BlueprintError(ErrorKind.DECODE, f"'{key}' must be a string in {name}")


def _enum_value(enum_cls: type[T], data: dict[str, Any], key: str, name: str, default: T) -> T:
    if key not in data:
        return default
    value = data[key]
    try:
        return enum_cls(value)  # type: ignore[call-arg]
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)  # type: ignore[attr-defined]
        raise BlueprintError(
            ErrorKind.DECODE,
            f"unknown {key} {value!r} in {name} (expected one of: {allowed})",
        ) from None


def parse_item_info(matter: str, name: str) -> ItemInfo:
    try:
        data = tomllib.loads(matter)
    except tomllib.TOMLDecodeError as exc:
        raise BlueprintError(ErrorKind.DECODE, f"{exc} in {name}") from exc

    dependencies = data.get("dependencies", [])
    if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
        raise BlueprintError(
            ErrorKind.DECODE, f"'dependencies' must be an array of strings in {name}"
        )

    hidden = data.get("hide", False)
    if not isinstance(hidden, bool):
        raise BlueprintError(ErrorKind.DECODE, f"'hide' must be a boolean in {name}")

    return ItemInfo(
        kind=_enum_value(ItemKind, data, "type", name, ItemKind.THEOREM),
        state=_enum_value(ItemState, data, "state", name, ItemState.DRAFT),
        statement=_optional_str(data, "statement", name),
        dependencies=tuple(dependencies),
        hidden=hidden,
        reference=_optional_str(data, "reference", name),
        wikipedia=_optional_str(data, "wikipedia", name),
    )


def traverse(
    path: Path,
    config: BuildConfig,
    classify: Callable[[Path, str], T | None],
) -> list[T]:
    """Classify the direct children of `path`, in name order.

    The output directory and dot-prefixed entries are skipped; `classify`
    returns None for entries it does not claim.
    """

    try:
        children = sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise BlueprintError.io(path, exc) from exc

    result: list[T] = []
    for child in children:
        if child.name.startswith(".") or child.name == config.out_dir_name:
            continue
        name = child.name if child.is_dir() else child.stem
        found = classify(child, name)
        if found is not None:
            result.append(found)
    return result


def load_item(
    path: Path,
    name: str,
    *,
    config: BuildConfig,
    markdown: MarkdownFn,
) -> Item | None:
    if path.is_dir() or path.name == config.readme_name or name == Path(config.readme_name).stem:
        return None

    parts = split_front_matter(read_text(path))
    if parts is None:
        raise BlueprintError.invalid(f"Could not parse front matter for {name}")
    matter, body = parts

    info = parse_item_info(matter, name)
    if info.hidden:
        logger.debug("Skipping hidden item %s", name)
        return None

    return Item(
        name=name,
        path=path,
        info=info,
        body=markdown(body),
        statement_html=markdown(info.statement) if info.statement else None,
    )


def load_project(
    path: Path,
    name: str,
    *,
    config: BuildConfig,
    markdown: MarkdownFn,
) -> Project | None:
    if not path.is_dir():
        return None

    items = traverse(
        path,
        config,
        lambda p, n: load_item(p, n, config=config, markdown=markdown),
    )

    readme = path / config.readme_name
    if not readme.is_file():
        raise BlueprintError.invalid(f"No {config.readme_name} file for project {name}")

    return Project(name=name, path=path, items=tuple(items), body=markdown(read_text(readme)))


def scan_projects(root: Path, config: BuildConfig, markdown: MarkdownFn) -> list[Project]:
    """Scan a content root into its projects (one level deep, name order)."""

    if not root.is_dir():
        raise BlueprintError.invalid(f"Content root is not a directory: {root}")
    return traverse(
        root,
        config,
        lambda p, n: load_project(p, n, config=config, markdown=markdown),
    )
