"""
Step models — the wizard's fixed stage list and per-step status.

Status moves Pending → Started → {Complete, Failed}. A Failed step may be
re-entered (back to Started) by an explicit ``track`` call; nothing else
moves backwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class StepStatus(str, Enum):
    PENDING = "pending"
    STARTED = "started"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def rank(self) -> int:
        """Ordering used when folding markers: terminal > started > pending."""
        return _RANK[self]

    @property
    def terminal(self) -> bool:
        return self in (StepStatus.COMPLETE, StepStatus.FAILED)


_RANK = {
    StepStatus.PENDING: 0,
    StepStatus.STARTED: 1,
    StepStatus.COMPLETE: 2,
    StepStatus.FAILED: 2,
}


# ── The wizard's stages, in order ───────────────────────────────

WIZARD_STEPS: tuple[tuple[int, str], ...] = (
    (1, "Init and TechStack Selection"),
    (2, "Framework Selection"),
    (3, "Project Source"),
    (4, "Project Structure"),
    (5, "Environment and Database Configuration"),
    (6, "Additional Environment Settings"),
    (7, "Installing Dependencies"),
    (8, "Useful Commands"),
    (9, "Completion"),
)


class Step(BaseModel):
    """In-process state of one step."""

    ordinal: int
    name: str
    status: StepStatus = StepStatus.PENDING
    attempts: int = 0


class StepSummary(BaseModel):
    """Furthest status of a step as recovered from its markers."""

    ordinal: int
    name: str = ""
    status: StepStatus = StepStatus.PENDING
    attempts: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "ordinal": self.ordinal,
            "name": self.name,
            "status": self.status.value,
            "attempts": self.attempts,
        }
