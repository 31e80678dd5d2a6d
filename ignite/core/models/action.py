"""
Action and Receipt models — the collaborator contract.

The orchestrator hands an Action to a collaborator (cloner, template
generator, dependency installer) and gets a Receipt back. Collaborators
never raise: every failure is captured in the Receipt.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ReceiptStatus = Literal["ok", "skipped", "failed"]


class Action(BaseModel):
    """One operation requested from one collaborator."""

    id: str                         # operation: clone, init, scaffold, install
    adapter: str                    # registry key of the collaborator
    name: str = ""
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    adapter: str
    action_id: str
    status: ReceiptStatus = "ok"
    output: str = ""
    error: str | None = None
    duration_ms: int = 0
    finished_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **extra: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, output=output, **extra)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **extra: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **extra)

    @classmethod
    def skip(cls, adapter: str, action_id: str, reason: str = "", **extra: Any) -> Receipt:
        """Nothing to do; ``reason`` goes to ``output``."""
        return cls(adapter=adapter, action_id=action_id, status="skipped", output=reason, **extra)
