"""
Error taxonomy for the wizard core.

Components raise these (or return typed results); only the orchestrator
decides whether a failure halts the run or is logged and skipped.
"""

from __future__ import annotations

from pathlib import Path


class IgniteError(Exception):
    """Base class for all wizard errors."""


class EntropyUnavailable(IgniteError):
    """The operating system's secure random source cannot be used."""


class MergeFailed(IgniteError):
    """The env merger could not produce or commit a new file.

    The target file is left exactly as it was before the call.
    """

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot merge {path}: {cause}")


class NormalizeFailed(IgniteError):
    """Nested-directory repair could not complete safely.

    ``remaining`` lists entries that could not be moved out of the nested
    directory. ``holding_dir`` is set when entries are still parked in the
    temporary holding directory and need manual recovery.
    """

    def __init__(
        self,
        directory: Path,
        remaining: list[str],
        holding_dir: Path | None = None,
    ):
        self.directory = directory
        self.remaining = remaining
        self.holding_dir = holding_dir
        detail = ", ".join(remaining) or "unknown entries"
        msg = f"Cannot flatten {directory}: could not move {detail}"
        if holding_dir is not None:
            msg += f" (entries parked in {holding_dir})"
        super().__init__(msg)


class StepFatal(IgniteError):
    """A step's prerequisite cannot be satisfied; the run halts."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class StepNonFatal(IgniteError):
    """An optional sub-action failed; the run continues."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class StepTransitionError(IgniteError):
    """A step was moved through an invalid status transition."""
