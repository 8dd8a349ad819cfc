from __future__ import annotations

from typing import Any

import markdown as markdown_lib
from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.errors import BlueprintError, ErrorKind

TEMPLATES = ("index", "project", "item")

# Math is passed through as `\(...\)` / `\[...\]` spans for a client-side renderer.
EXTENSION_CONFIGS: dict[str, dict[str, Any]] = {
    "pymdownx.arithmatex": {"generic": True},
    "pymdownx.tasklist": {"custom_checkbox": False},
}


class PageRenderer:
    """Markdown conversion and page templating for one process.

    Holds the Jinja2 environment; build it once and pass it to every build.
    """

    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self.env = Environment(
            loader=PackageLoader("metamath_blueprints", "templates"),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render_markdown(self, text: str) -> str:
        # A fresh converter per call: Markdown instances carry state between documents.
        return markdown_lib.markdown(
            text,
            extensions=list(self.config.markdown_extensions),
            extension_configs=EXTENSION_CONFIGS,
            output_format="html",
        )

    def render_template(self, name: str, data: dict[str, Any]) -> bytes:
        if name not in TEMPLATES:
            raise BlueprintError(ErrorKind.TEMPLATE, f"unknown template {name!r}")
        try:
            template = self.env.get_template(f"{name}.html")
            return template.render(**data).encode("utf-8")
        except TemplateError as exc:
            raise BlueprintError(ErrorKind.TEMPLATE, f"{name}: {exc}") from exc
