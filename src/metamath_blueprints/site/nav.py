from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.content.model import Project
from metamath_blueprints.content.scan import read_text
from metamath_blueprints.errors import BlueprintError
from metamath_blueprints.site.render import PageRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationIndex:
    """Read-only view over every project of one build, shared by all pages."""

    projects: tuple[Project, ...]

    def find_item_project(self, name: str) -> str | None:
        """Name of the first project defining an item called `name`."""

        for project in self.projects:
            if project.get_item(name) is not None:
                return project.name
        return None


def index_body(root: Path, config: BuildConfig, renderer: PageRenderer) -> str:
    readme = root / config.readme_name
    if not readme.is_file():
        raise BlueprintError.invalid(f"No {config.readme_name} file for index")
    text = read_text(readme).replace(config.index_heading, "")
    return renderer.render_markdown(text)


def render_index_page(
    root: Path,
    nav: NavigationIndex,
    config: BuildConfig,
    renderer: PageRenderer,
) -> bytes:
    logger.info("Building Index")
    return renderer.render_template(
        "index",
        {"body": index_body(root, config, renderer), "nav": nav, "root": "", "current": None},
    )
