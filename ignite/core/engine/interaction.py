"""
Interaction seams — how the orchestrator asks questions and reports.

The orchestrator never touches the terminal. It asks a Prompter for
answers and tells a Reporter what happened. The CLI plugs in click-backed
implementations; tests and ``--non-interactive`` runs use the scripted
and recording versions defined here.

Every question carries a stable key (``"role"``, ``"db_port"``, ...) so a
scripted answer sheet can address it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Iterable

logger = logging.getLogger(__name__)


class Prompter(ABC):
    """Source of answers for the wizard's questions."""

    @abstractmethod
    def choose(self, key: str, message: str, choices: list[str], default: str | None = None) -> str:
        """Pick one of ``choices``."""

    @abstractmethod
    def ask(self, key: str, message: str, default: str | None = None, secret: bool = False) -> str:
        """Free-text answer ("" when nothing was given and there is no default)."""

    @abstractmethod
    def confirm(self, key: str, message: str, default: bool = False) -> bool:
        """Yes/no answer."""


class Reporter(ABC):
    """Sink for user-facing progress and results."""

    @abstractmethod
    def section(self, title: str) -> None: ...

    @abstractmethod
    def info(self, message: str) -> None: ...

    @abstractmethod
    def success(self, message: str) -> None: ...

    @abstractmethod
    def warning(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...

    @abstractmethod
    def lines(self, lines: Iterable[str], title: str | None = None) -> None:
        """A block of verbatim lines (command lists, file previews)."""


# ── Scripted / recording implementations ────────────────────────


class ScriptedPrompter(Prompter):
    """Answers from a prepared sheet; falls back to each question's default.

    A list value is consumed one item per question, for questions asked
    in a loop (``var_name``, ``add_another``, ...). Once exhausted the
    default applies.
    """

    def __init__(self, answers: dict[str, Any] | None = None):
        self._answers: dict[str, Any] = {}
        for key, value in (answers or {}).items():
            self._answers[key] = deque(value) if isinstance(value, list) else value
        self.asked: list[str] = []

    def _take(self, key: str) -> Any:
        self.asked.append(key)
        value = self._answers.get(key)
        if isinstance(value, deque):
            return value.popleft() if value else None
        return value

    def choose(self, key: str, message: str, choices: list[str], default: str | None = None) -> str:
        value = self._take(key)
        if value is None:
            value = default
        logger.debug("choose %s → %s", key, value)
        return "" if value is None else str(value)

    def ask(self, key: str, message: str, default: str | None = None, secret: bool = False) -> str:
        value = self._take(key)
        if value is None:
            value = default
        logger.debug("ask %s → %s", key, "***" if secret else value)
        return "" if value is None else str(value)

    def confirm(self, key: str, message: str, default: bool = False) -> bool:
        value = self._take(key)
        if value is None:
            return default
        if isinstance(value, str):
            return value.strip().lower() in ("y", "yes", "true", "1")
        return bool(value)


class RecordingReporter(Reporter):
    """Keeps every report as ``(level, text)`` for later inspection."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def section(self, title: str) -> None:
        self.records.append(("section", title))

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def success(self, message: str) -> None:
        self.records.append(("success", message))

    def warning(self, message: str) -> None:
        self.records.append(("warning", message))

    def error(self, message: str) -> None:
        self.records.append(("error", message))

    def lines(self, lines: Iterable[str], title: str | None = None) -> None:
        if title:
            self.records.append(("title", title))
        for line in lines:
            self.records.append(("line", line))

    def messages(self, level: str) -> list[str]:
        return [text for lvl, text in self.records if lvl == level]
