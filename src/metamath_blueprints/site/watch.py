"""Rebuild-on-change loop.

A watchdog observer thread only enqueues relevant change events; the calling
thread blocks on that queue and runs one full rebuild per burst of events, so
rebuilds never overlap.
"""

from __future__ import annotations

import logging
import os
import queue
import time
from collections.abc import Callable
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.errors import BlueprintError, ErrorKind
from metamath_blueprints.site.build import build_site
from metamath_blueprints.site.render import PageRenderer

logger = logging.getLogger(__name__)

# Put on the queue to end `consume_events`.
STOP = None

_CHANGE_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}
)
_ALIVE_POLL_SECONDS = 1.0


class ChangeQueueHandler(FileSystemEventHandler):
    """Forward content changes to a queue, ignoring the build's own output."""

    def __init__(self, events: queue.Queue[FileSystemEvent | None], out_path: Path) -> None:
        super().__init__()
        self.events = events
        self.out_path = out_path

    def _in_output(self, raw: bytes | str) -> bool:
        path = Path(os.fsdecode(raw))
        return path == self.out_path or self.out_path in path.parents

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _CHANGE_EVENTS:
            return
        # Directory mtime bumps duplicate the events of their children.
        if event.is_directory and event.event_type == EVENT_TYPE_MODIFIED:
            return
        paths = [event.src_path]
        if event.event_type == EVENT_TYPE_MOVED and event.dest_path:
            paths.append(event.dest_path)
        if all(self._in_output(p) for p in paths):
            return
        self.events.put(event)


def run_rebuild(rebuild: Callable[[], object]) -> bool:
    try:
        rebuild()
    except BlueprintError as exc:
        logger.error("failed: %s", exc)
        return False
    logger.info("Complete")
    return True


def _drain(events: queue.Queue[FileSystemEvent | None], debounce: float) -> bool:
    """Swallow events arriving within `debounce` seconds; True if STOP was seen."""

    deadline = time.monotonic() + debounce
    while True:
        remaining = deadline - time.monotonic()
        try:
            event = events.get(timeout=remaining) if remaining > 0 else events.get_nowait()
        except queue.Empty:
            return False
        if event is STOP:
            return True


def consume_events(
    events: queue.Queue[FileSystemEvent | None],
    rebuild: Callable[[], object],
    *,
    debounce: float,
    alive: Callable[[], bool] | None = None,
) -> int:
    """Run one rebuild per burst of queued events until STOP; returns the rebuild count.

    `alive` is polled while idle; once it reports False the watch is lost and
    a WATCH error is raised.
    """

    rebuilds = 0
    while True:
        try:
            event = events.get(timeout=_ALIVE_POLL_SECONDS)
        except queue.Empty:
            if alive is not None and not alive():
                raise BlueprintError(ErrorKind.WATCH, "filesystem observer stopped") from None
            continue
        if event is STOP:
            return rebuilds

        stop = _drain(events, debounce)
        logger.debug("Change detected: %s", event.src_path)
        run_rebuild(rebuild)
        rebuilds += 1
        if stop:
            return rebuilds


def watch(
    root: Path,
    config: BuildConfig,
    renderer: PageRenderer,
    *,
    observer_factory: Callable[[], Observer] = Observer,
) -> int:
    """Build once, then rebuild on every change below `root` until interrupted."""

    root = root.resolve()

    def rebuild() -> Path:
        return build_site(root, config, renderer)

    run_rebuild(rebuild)

    events: queue.Queue[FileSystemEvent | None] = queue.Queue()
    handler = ChangeQueueHandler(events, root / config.out_dir_name)
    observer = observer_factory()
    try:
        observer.schedule(handler, str(root), recursive=True)
        observer.start()
    except OSError as exc:
        raise BlueprintError(ErrorKind.WATCH, f"cannot watch {root}: {exc}") from exc

    logger.info("Watching blue prints in: %s", root)
    try:
        return consume_events(
            events,
            rebuild,
            debounce=config.watch_debounce_seconds,
            alive=observer.is_alive,
        )
    finally:
        observer.stop()
        observer.join()
