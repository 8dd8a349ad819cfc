"""One-shot build of the blueprint site.

Sequence: scan projects, build the navigation index, create the output
directory, copy static assets, write the home page, then per project write
every item page and the project page with its embedded dependency diagram.

Writes are not transactional: a failed build can leave a partial tree and a
later build overwrites files in place without removing stale ones.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Any

from metamath_blueprints.config import STATIC_ASSETS, BuildConfig
from metamath_blueprints.content.model import Item, Project
from metamath_blueprints.content.scan import scan_projects
from metamath_blueprints.errors import BlueprintError
from metamath_blueprints.graph import render_dependency_graph
from metamath_blueprints.site.nav import NavigationIndex, render_index_page
from metamath_blueprints.site.render import PageRenderer

logger = logging.getLogger(__name__)


def ensure_dir(path: Path, name: str) -> Path:
    target = path / name
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BlueprintError.io(target, exc) from exc
    return target


def _write_bytes(path: Path, content: bytes) -> None:
    logger.debug("Writing %s", path)
    try:
        path.write_bytes(content)
    except OSError as exc:
        raise BlueprintError.io(path, exc) from exc


def copy_static_dir(out_path: Path) -> Path:
    static_path = ensure_dir(out_path, "static")
    assets = resources.files("metamath_blueprints").joinpath("static")
    for name in STATIC_ASSETS:
        try:
            content = assets.joinpath(name).read_bytes()
        except OSError as exc:
            raise BlueprintError.io(f"static/{name}", exc) from exc
        _write_bytes(static_path / name, content)
    return static_path


def _dependency_links(item: Item, project: Project, nav: NavigationIndex) -> list[dict[str, Any]]:
    links = []
    for name in item.info.dependencies:
        owner = project.name if project.get_item(name) is not None else nav.find_item_project(name)
        if owner is None or owner == project.name:
            href = f"{name}.html"
        else:
            href = f"../{owner}/{name}.html"
        links.append({"name": name, "href": href, "project": owner})
    return links


def item_page_data(
    item: Item,
    project: Project,
    nav: NavigationIndex,
    config: BuildConfig,
) -> dict[str, Any]:
    info = item.info
    return {
        "nav": nav,
        "root": "../",
        "current": project.name,
        "project": project,
        "item": item,
        "kind": info.kind.value,
        "state": info.state.label,
        "dependencies": _dependency_links(item, project, nav),
        "used_by": project.dependents_of(item.name),
        "reference_url": (
            f"{config.metamath_url}{info.reference}.html" if info.reference else None
        ),
        "wikipedia_url": (
            f"{config.wikipedia_url}{info.wikipedia.replace(' ', '_')}"
            if info.wikipedia
            else None
        ),
    }


def build_item(
    item: Item,
    project: Project,
    nav: NavigationIndex,
    out_path: Path,
    config: BuildConfig,
    renderer: PageRenderer,
) -> Path:
    output = out_path / f"{item.name}.html"
    page = renderer.render_template("item", item_page_data(item, project, nav, config))
    _write_bytes(output, page)
    return output


def build_project(
    project: Project,
    nav: NavigationIndex,
    out_path: Path,
    config: BuildConfig,
    renderer: PageRenderer,
) -> Path:
    logger.info("Building: %s", project.name)
    project_out = ensure_dir(out_path, project.name)
    for item in project.items:
        build_item(item, project, nav, project_out, config, renderer)

    diagram = render_dependency_graph(project.items, config)
    page = renderer.render_template(
        "project",
        {
            "nav": nav,
            "root": "../",
            "current": project.name,
            "project": project,
            "dependencies": diagram,
        },
    )
    _write_bytes(project_out / "index.html", page)
    return project_out


def build_site(root: Path, config: BuildConfig, renderer: PageRenderer) -> Path:
    """Run one full build of `root`; returns the output directory."""

    logger.info("Building blue prints in: %s", root)
    projects = scan_projects(root, config, renderer.render_markdown)
    nav = NavigationIndex(projects=tuple(projects))

    out_path = ensure_dir(root, config.out_dir_name)
    copy_static_dir(out_path)
    _write_bytes(out_path / "index.html", render_index_page(root, nav, config, renderer))

    for project in projects:
        build_project(project, nav, out_path, config, renderer)
    return out_path
