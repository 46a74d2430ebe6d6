"""
Directory Watcher
=================

Polls a font directory tree in a background thread and reports added,
removed and modified font files. A new or changed file is only reported
once its size and modification time have held still for one full poll,
so half-written files are never handed to the parser.
"""

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path

from ..core.models import FontEvent, FontEventType
from ..fonts.scanner import scan_directory

logger = logging.getLogger(__name__)

EventCallback = Callable[[FontEvent], object]

# (size, mtime_ns)
FileSignature = tuple[int, int]


def _signature(path: Path) -> FileSignature | None:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return st.st_size, st.st_mtime_ns


class DirectoryWatcher:
    """
    Polling watcher for one root directory.

    Use as a context manager, or call ``start()`` and ``stop()``.
    """

    def __init__(self, root: Path, callback: EventCallback, poll_interval: float = 1.0):
        self.root = Path(root).absolute()
        self.callback = callback
        self.poll_interval = poll_interval

        self._known: dict[str, FileSignature] = {}
        self._pending: dict[str, FileSignature] = {}
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._primed = False

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _current_files(self) -> dict[str, FileSignature]:
        files = {}
        if not self.root.is_dir():
            return files
        for path in scan_directory(self.root):
            signature = _signature(path)
            if signature is not None:
                files[str(path)] = signature
        return files

    def prime(self) -> None:
        """Record the current tree as known without reporting it."""
        self._known = self._current_files()
        self._pending.clear()
        self._primed = True
        logger.debug(f"Watching {len(self._known)} files under {self.root}")

    def poll(self) -> list[FontEvent]:
        """
        Compare the tree against the last poll and dispatch events.

        Returns:
            The events dispatched, in order
        """
        if not self._primed:
            self.prime()
            return []

        current = self._current_files()
        events: list[FontEvent] = []

        for path in sorted(set(self._known) - set(current)):
            del self._known[path]
            events.append(FontEvent(FontEventType.REMOVED, path))

        for path in set(self._pending) - set(current):
            del self._pending[path]

        for path, signature in sorted(current.items()):
            if self._known.get(path) == signature:
                self._pending.pop(path, None)
                continue
            if self._pending.get(path) != signature:
                # Still being written, or first sighting
                self._pending[path] = signature
                continue

            del self._pending[path]
            event_type = FontEventType.MODIFIED if path in self._known else FontEventType.ADDED
            self._known[path] = signature
            events.append(FontEvent(event_type, path))

        for event in events:
            try:
                self.callback(event)
            except Exception:
                logger.exception(f"Watcher callback failed for {event.path}")

        return events

    def _watch_loop(self) -> None:
        """Background polling loop."""
        while not self._stop_event.wait(self.poll_interval):
            try:
                self.poll()
            except Exception:
                logger.exception(f"Error while polling {self.root}")

    def start(self) -> None:
        """Start watching."""
        if self.is_running:
            return

        if not self._primed:
            self.prime()

        logger.info(f"Starting watcher for {self.root}")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop, name=f"watcher:{self.root.name}", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop watching and wait for the polling thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            logger.info(f"Stopped watcher for {self.root}")
        self._thread = None

    def __enter__(self) -> "DirectoryWatcher":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.stop()
