"""
Logging configuration — central setup for the ``ignite`` entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

The wizard's own output (click.secho) is the user interface; logging is
the diagnostic channel underneath it. Console level is resolved as:

    --debug  >  --verbose  >  --quiet  >  IGNITE_LOG_LEVEL  >  WARNING

Optional file output via IGNITE_LOG_FILE / IGNITE_LOG_FILE_LEVEL. The file
always gets the detailed format so ``ignite logs --tail`` can show what a
run did after the terminal is gone.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "IGNITE_LOG_LEVEL"
ENV_FILE = "IGNITE_LOG_FILE"
ENV_FILE_LEVEL = "IGNITE_LOG_FILE_LEVEL"

# ── Formats by console level ────────────────────────────────────

_DETAILED = ("%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S")

_CONSOLE_FORMATS: tuple[tuple[int, tuple[str, str | None]], ...] = (
    (logging.DEBUG, _DETAILED),
    (logging.INFO, ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S")),
    (logging.CRITICAL, ("%(levelname)s: %(message)s", None)),
)

_FILE_FORMAT = ("%(asctime)s %(levelname)-7s %(name)s:%(lineno)d  %(message)s", "%Y-%m-%d %H:%M:%S")

# Libraries that get chatty below WARNING
_NOISY_LOGGERS = ("asyncio", "urllib3")


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def log_file_from_env() -> str | None:
    return os.environ.get(ENV_FILE) or None


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Log file path. Falls back to IGNITE_LOG_FILE.
        log_file_level: Level for the file. Falls back to
            IGNITE_LOG_FILE_LEVEL, then to ``level``.
        quiet_third_party: Hold noisy libraries at WARNING unless the
            console is at DEBUG.
    """
    console_level = _parse_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]
    root_level = console_level

    log_file = log_file or log_file_from_env()
    problem = None
    if log_file:
        file_level = _parse_level(log_file_level or os.environ.get(ENV_FILE_LEVEL) or level)
        try:
            handlers.append(_file_handler(log_file, file_level))
            root_level = min(root_level, file_level)
        except OSError as e:
            problem = f"Cannot open log file {log_file}: {e}"

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False
    if problem:
        logging.getLogger(__name__).warning(problem)


# ── Handlers ────────────────────────────────────────────────────


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next(f for threshold, f in _CONSOLE_FORMATS if level <= threshold)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(*_FILE_FORMAT))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
