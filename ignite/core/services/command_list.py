"""
Command lister — useful follow-up commands for a framework.

Purely informational: reads the commands catalog, holds no state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ignite.core.data import DataRegistry

logger = logging.getLogger(__name__)

_GENERIC = "_generic"


@dataclass
class CommandGroup:
    title: str
    lines: list[str] = field(default_factory=list)


class CommandLister:
    """Looks up command cheat-sheets by framework name."""

    def __init__(self, registry: DataRegistry | None = None):
        self._registry = registry or DataRegistry()

    def has_commands(self, framework: str) -> bool:
        return framework in self._registry.commands and framework != _GENERIC

    def groups(self, framework: str) -> list[CommandGroup]:
        """Titled command groups; the generic list for unknown frameworks."""
        raw = self._registry.commands.get(framework)
        if raw is None or framework == _GENERIC:
            logger.warning("No specific commands available for %s", framework)
            raw = self._registry.commands.get(_GENERIC, [])
        return [CommandGroup(title=g.get("title", ""), lines=list(g.get("lines", []))) for g in raw]

    def list_commands(self, framework: str) -> list[str]:
        """Flat list of command lines for ``framework``."""
        return [line for group in self.groups(framework) for line in group.lines]
