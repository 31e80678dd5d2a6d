"""
Mock adapter — stand-in for git, the template generator or the installer.

``ignite start --mock`` and the tests use it so no external tool runs.
Every operation succeeds unless a test has scripted a failure, a canned
receipt, or a side effect that reproduces what the real tool leaves on
disk (a cloned tree, a scaffolded project).
"""

from __future__ import annotations

from typing import Callable

from ignite.adapters.base import Adapter, ExecutionContext
from ignite.core.models.action import Receipt

SideEffect = Callable[[ExecutionContext], None]


class MockAdapter(Adapter):
    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._canned: dict[str, Receipt] = {}
        self._effects: dict[str, SideEffect] = {}
        self._seen: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self._seen)

    def calls(self, action_id: str) -> list[ExecutionContext]:
        """Contexts received for one operation, oldest first."""
        return [c for c in self._seen if c.action.id == action_id]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        self._canned[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        self.set_response(action_id, Receipt.failure(self._name, action_id, error))

    def set_side_effect(self, action_id: str, effect: SideEffect) -> None:
        """Call ``effect(context)`` before answering ``action_id``."""
        self._effects[action_id] = effect

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        op = context.action.id
        self._seen.append(context)
        if op in self._effects:
            self._effects[op](context)
        canned = self._canned.get(op)
        if canned is not None:
            return canned
        return Receipt.success(self._name, op, output=self._default_output, metadata={"mock": True})

    def reset(self) -> None:
        self._seen.clear()
        self._canned.clear()
        self._effects.clear()
