"""
Scoped resources — guaranteed cleanup of temp files and directories.

Every temp file or holding directory created during a run is registered
with the active ResourceScope. When the scope exits (normal return,
exception, or SIGINT/SIGTERM converted to an exception) registered
resources are released in reverse order:

    - files are unlinked
    - directories are removed only when empty; a non-empty directory is
      left in place and logged, so cleanup never deletes user files

Usage::

    with ResourceScope(handle_signals=True) as scope:
        tmp = scope.register_file(path)
        ...
        scope.forget(tmp)   # committed, nothing to clean up
"""

from __future__ import annotations

import logging
import signal
import threading
from pathlib import Path
from types import FrameType
from typing import Any

logger = logging.getLogger(__name__)

_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ScopeInterrupted(SystemExit):
    """Raised inside the scope when a termination signal arrives."""

    def __init__(self, signum: int):
        self.signum = signum
        super().__init__(128 + signum)


class ResourceScope:
    """Owns temp resources for one run and releases them on every exit path."""

    def __init__(self, handle_signals: bool = False):
        self._handle_signals = handle_signals
        self._resources: list[tuple[str, Path]] = []
        self._previous: dict[int, Any] = {}

    # ── Registration ────────────────────────────────────────────

    def register_file(self, path: Path) -> Path:
        self._resources.append(("file", Path(path)))
        logger.debug("Registered temp file %s", path)
        return Path(path)

    def register_dir(self, path: Path) -> Path:
        self._resources.append(("dir", Path(path)))
        logger.debug("Registered temp dir %s", path)
        return Path(path)

    def forget(self, path: Path) -> None:
        """Drop a resource that no longer needs cleanup (committed/removed)."""
        path = Path(path)
        self._resources = [(k, p) for k, p in self._resources if p != path]

    @property
    def pending(self) -> list[Path]:
        return [p for _, p in self._resources]

    # ── Release ─────────────────────────────────────────────────

    def release(self) -> list[Path]:
        """Release everything still registered. Returns paths left behind."""
        left: list[Path] = []
        while self._resources:
            kind, path = self._resources.pop()
            try:
                if kind == "file":
                    path.unlink(missing_ok=True)
                    logger.debug("Removed temp file %s", path)
                elif path.is_dir():
                    path.rmdir()
                    logger.debug("Removed temp dir %s", path)
            except OSError as e:
                logger.warning("Cannot release %s: %s", path, e)
                left.append(path)
        return left

    # ── Context manager ─────────────────────────────────────────

    def __enter__(self) -> ResourceScope:
        if self._handle_signals and threading.current_thread() is threading.main_thread():
            for signum in _SIGNALS:
                self._previous[signum] = signal.signal(signum, self._on_signal)
        return self

    def __exit__(self, *exc: object) -> None:
        try:
            self.release()
        finally:
            for signum, handler in self._previous.items():
                signal.signal(signum, handler)
            self._previous.clear()

    def _on_signal(self, signum: int, frame: FrameType | None) -> None:
        logger.warning("Received signal %d — cleaning up", signum)
        raise ScopeInterrupted(signum)

