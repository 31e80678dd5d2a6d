"""
Run context — everything one wizard run has decided so far.

Owned by the orchestrator and passed explicitly to whatever needs it.
There is no module-level state: two runs in one process (tests) never
see each other's choices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

SOURCE_NEW = "new"
SOURCE_EXISTING = "existing"


@dataclass
class RunContext:
    """Mutable per-run state threaded through the steps."""

    run_id: str
    role: str | None = None
    framework: str | None = None

    project_name: str | None = None
    source: str | None = None          # "new" or "existing"
    repo_url: str | None = None
    parent_dir: Path | None = None
    target_dir: Path | None = None

    env_path: Path | None = None
    db_config_done: bool = False
    is_production: bool | None = None  # asked once, before the first .env

    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "role": self.role,
            "framework": self.framework,
            "project_name": self.project_name,
            "source": self.source,
            "repo_url": self.repo_url,
            "parent_dir": str(self.parent_dir) if self.parent_dir else None,
            "target_dir": str(self.target_dir) if self.target_dir else None,
            "env_path": str(self.env_path) if self.env_path else None,
            "db_config_done": self.db_config_done,
            "is_production": self.is_production,
            "warnings": list(self.warnings),
        }
