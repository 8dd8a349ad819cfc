from __future__ import annotations

import os
from dataclasses import dataclass, replace

from metamath_blueprints.errors import BlueprintError

OUT_DIR_ENV = "BLUEPRINTS_OUT_DIR"
WATCH_DEBOUNCE_ENV = "BLUEPRINTS_WATCH_DEBOUNCE"

STATIC_ASSETS: tuple[str, ...] = (
    "favicon.ico",
    "blueprints_logo.png",
    "blueprints.css",
    "mmlogo.svg",
    "open-sans.woff2",
)


@dataclass(frozen=True)
class BuildConfig:
    """Settings shared by every build of one process.

    Constructed once (usually via `from_env`) and passed down explicitly.
    """

    out_dir_name: str = "build"
    readme_name: str = "README.md"
    index_heading: str = "# Metamath Blueprints"
    markdown_extensions: tuple[str, ...] = (
        "extra",
        "sane_lists",
        "pymdownx.arithmatex",
        "pymdownx.tilde",
        "pymdownx.tasklist",
    )
    font_size: int = 15
    node_padding: float = 30.0
    layer_gap: float = 50.0
    node_gap: float = 20.0
    metamath_url: str = "https://us.metamath.org/mpeuni/"
    wikipedia_url: str = "https://en.wikipedia.org/wiki/"
    watch_debounce_seconds: float = 0.2

    @classmethod
    def from_env(cls) -> BuildConfig:
        config = cls()

        out_dir = (os.getenv(OUT_DIR_ENV) or "").strip()
        if out_dir:
            if "/" in out_dir or "\\" in out_dir or out_dir.startswith("."):
                raise BlueprintError.invalid(
                    f"{OUT_DIR_ENV} must be a plain directory name, got {out_dir!r}"
                )
            config = replace(config, out_dir_name=out_dir)

        debounce = (os.getenv(WATCH_DEBOUNCE_ENV) or "").strip()
        if debounce:
            try:
                seconds = float(debounce)
            except ValueError:
                seconds = -1.0
            if seconds < 0:
                raise BlueprintError.invalid(
                    f"{WATCH_DEBOUNCE_ENV} must be a non-negative number, got {debounce!r}"
                )
            config = replace(config, watch_debounce_seconds=seconds)

        return config
