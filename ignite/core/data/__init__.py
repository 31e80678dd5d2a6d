"""
Central data registry for the wizard's static catalogs.

Loads catalogs from ``ignite/core/data/catalogs/`` once at first access
and caches them for the process lifetime.  The orchestrator, the
command lister and the CLI all read from this single source of truth.

Usage::

    from ignite.core.data import DataRegistry

    registry = DataRegistry()
    registry.roles                         # ["frontend", "backend", "mobile"]
    registry.frameworks_for("backend")     # ["nodejs", "laravel", "django"]
    registry.framework("django")           # {"label": "Django", ...}
"""

from __future__ import annotations

import json
import logging
from functools import cached_property
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent


def _load_json(relative_path: str) -> dict:
    """Load a JSON file relative to the data directory."""
    path = _DATA_DIR / relative_path
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class DataRegistry:
    """Central registry for the static catalogs.

    Each property lazily loads its JSON file on first access and caches
    the result for the lifetime of the instance.  Create one instance
    per process and pass it where needed.
    """

    # ── Roles and frameworks ────────────────────────────────────

    @cached_property
    def _framework_catalog(self) -> dict[str, Any]:
        data = _load_json("catalogs/frameworks.json")
        logger.debug(
            "Loaded %d roles, %d frameworks",
            len(data.get("roles", {})), len(data.get("frameworks", {})),
        )
        return data

    @property
    def roles(self) -> list[str]:
        """Developer roles in display order."""
        return list(self._framework_catalog.get("roles", {}))

    def role_label(self, role: str) -> str:
        return self._framework_catalog.get("roles", {}).get(role, {}).get("label", role)

    def frameworks_for(self, role: str) -> list[str]:
        """Frameworks offered for a role (empty for an unknown role)."""
        return list(self._framework_catalog.get("roles", {}).get(role, {}).get("frameworks", []))

    def framework(self, name: str) -> dict[str, Any] | None:
        """Catalog entry for a framework, or None."""
        return self._framework_catalog.get("frameworks", {}).get(name)

    def role_of(self, framework: str) -> str | None:
        for role in self.roles:
            if framework in self.frameworks_for(role):
                return role
        return None

    def requires_database(self, framework: str) -> bool:
        entry = self.framework(framework) or {}
        return bool(entry.get("requires_database", False))

    # ── Useful commands ─────────────────────────────────────────

    @cached_property
    def commands(self) -> dict[str, list[dict]]:
        """Framework → command groups (``{"title", "lines"}``)."""
        data = _load_json("catalogs/commands.json")
        logger.debug("Loaded command lists for %d frameworks", len(data))
        return data
