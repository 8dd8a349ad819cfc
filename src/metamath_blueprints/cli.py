from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.errors import BlueprintError
from metamath_blueprints.site.build import build_site
from metamath_blueprints.site.render import PageRenderer
from metamath_blueprints.site.watch import watch

LOGGER_NAME = "metamath_blueprints"


def _setup_logging(verbose: bool) -> logging.Logger:
    """Send progress to stdout; repeated calls do not stack handlers."""

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(console_handler)
    return logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metamath-blueprints",
        description=(
            "Build a static blueprint site (item pages, project pages with dependency "
            "diagrams) from a content directory. Exit codes: 0=success, 1=error."
        ),
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every written file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the site once")
    build.add_argument("path", metavar="PATH", type=Path, help="Content root directory")

    watch_cmd = subparsers.add_parser("watch", help="Build, then rebuild on every change")
    watch_cmd.add_argument("path", metavar="PATH", type=Path, help="Content root directory")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(bool(args.verbose))

    try:
        config = BuildConfig.from_env()
        renderer = PageRenderer(config)
        if args.command == "build":
            build_site(args.path, config, renderer)
        else:
            watch(args.path, config, renderer)
    except BlueprintError as exc:
        print(f"failed: {exc}")
        return 1
    except KeyboardInterrupt:
        print("Interrupted")
        return 0

    print("Complete")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
