"""
Adapter registry — how the orchestrator reaches its collaborators.

The orchestrator builds an Action naming a collaborator (``git``,
``scaffold``, ``installer``) and hands it here. The registry finds the
adapter, validates the call, runs it and always returns a Receipt:

    Action ──► resolve ──► validate ──► execute ──► Receipt (timed)

With ``mock_mode`` on, nothing external runs: either a supplied mock
adapter answers, or every call succeeds with an empty receipt.
"""

from __future__ import annotations

import logging
import time

from ignite.adapters.base import Adapter, ExecutionContext
from ignite.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Name → adapter lookup plus the single dispatch entry point."""

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode
        self._mock_adapter: Adapter | None = None

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool, mock_adapter: Adapter | None = None) -> None:
        """Route every call to ``mock_adapter`` (or to a blanket success)."""
        self._mock_mode = enabled
        self._mock_adapter = mock_adapter

    # ── Registration ────────────────────────────────────────────

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter %s", adapter.name)
        self._adapters[adapter.name] = adapter
        logger.debug("Registered adapter %s (%s)", adapter.name, type(adapter).__name__)

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._adapters)

    def missing_tools(self) -> list[str]:
        """Adapters whose external tool is not installed.

        Always empty in mock mode, where no tool is ever run.
        """
        if self._mock_mode:
            return []
        missing = []
        for name, adapter in self._adapters.items():
            try:
                if not adapter.is_available():
                    missing.append(name)
            except Exception as e:
                logger.debug("Availability check for %s raised: %s", name, e)
                missing.append(name)
        return missing

    # ── Dispatch ────────────────────────────────────────────────

    def execute_action(self, action: Action, cwd: str = ".") -> Receipt:
        """Run ``action`` through its adapter. Never raises."""
        started = time.monotonic()
        context = ExecutionContext(action=action, cwd=cwd, params=action.params)

        if self._mock_mode and self._mock_adapter is None:
            logger.info("[mock] %s:%s in %s", action.adapter, action.id, cwd)
            return Receipt.success(
                adapter=action.adapter,
                action_id=action.id,
                output=f"[mock] {action.adapter}:{action.id}",
                metadata={"mock": True},
            )

        adapter = self._mock_adapter if self._mock_mode else self._adapters.get(action.adapter)
        if adapter is None:
            return _refuse(action, f"No adapter registered for '{action.adapter}'")

        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            return _refuse(action, f"Validation error: {e}")
        if not valid:
            return _refuse(action, f"Validation failed: {reason}")

        logger.debug("%s:%s in %s", action.adapter, action.id, cwd)
        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.exception("Adapter %s raised on %s", action.adapter, action.id)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        if receipt.failed:
            logger.warning("%s:%s failed: %s", action.adapter, action.id, receipt.error)
        else:
            logger.info("%s:%s %s (%d ms)", action.adapter, action.id, receipt.status, receipt.duration_ms)
        return receipt


def _refuse(action: Action, error: str) -> Receipt:
    logger.warning("%s:%s refused: %s", action.adapter, action.id, error)
    return Receipt.failure(adapter=action.adapter, action_id=action.id, error=error)
