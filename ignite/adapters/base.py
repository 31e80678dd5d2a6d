"""
Adapter base — the contract between the wizard engine and external tools.

Cloning, scaffolding and dependency installation all shell out to tools
the wizard does not own (git, composer, npm, ...). Each tool sits behind
an adapter; the orchestrator only talks to adapters through this
protocol, via the AdapterRegistry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from ignite.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """One call: the action, the directory to run in, and its arguments."""

    action: Action
    cwd: str = "."
    params: dict[str, Any] = Field(default_factory=dict)

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)


class Adapter(ABC):
    """A single external tool seen through the Action/Receipt contract.

    Subclasses report a tool failure as a failed Receipt; raising out of
    ``execute`` is a bug, which the registry still turns into a receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key: ``git``, ``scaffold`` or ``installer``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the tool can be found on this machine."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check the call's arguments before anything runs.

        Returns ``(True, "")`` or ``(False, reason)``.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the operation named by ``context.action.id``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"
