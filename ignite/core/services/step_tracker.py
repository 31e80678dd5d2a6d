"""
Step tracker — per-run step state plus an append-only marker trail.

Each status transition writes an empty marker file under the run's
marker directory::

    ~/.ignite-markers-<run_id>/
        step3_start
        step3_failed
        step3_start.2       ← second attempt after a failure
        step3_complete.2

Markers are never overwritten or rewritten. ``summary()`` rebuilds the
per-step status from the files alone, so a later process (``ignite logs``)
can read the trail of an earlier run.
"""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path

from ignite.core.errors import StepTransitionError
from ignite.core.models.step import WIZARD_STEPS, Step, StepStatus, StepSummary

logger = logging.getLogger(__name__)

MARKER_PREFIX = ".ignite-markers-"

_TOKENS = {
    StepStatus.STARTED: "start",
    StepStatus.COMPLETE: "complete",
    StepStatus.FAILED: "failed",
}
_STATUS_BY_TOKEN = {token: status for status, token in _TOKENS.items()}

_MARKER_RE = re.compile(r"^step(\d+)_(start|complete|failed)(?:\.(\d+))?$")


def new_run_id() -> str:
    """Run identifier: the current Unix timestamp in seconds."""
    return str(int(time.time()))


def marker_name(ordinal: int, status: StepStatus, attempt: int = 1) -> str:
    """File name of the marker for one transition."""
    name = f"step{ordinal}_{_TOKENS[status]}"
    if attempt > 1:
        name += f".{attempt}"
    return name


def run_id_of(marker_dir: Path) -> str:
    return marker_dir.name[len(MARKER_PREFIX):]


def find_marker_dirs(root: Path | None = None) -> list[Path]:
    """Marker directories under ``root`` (default: home), newest first."""
    root = Path(root) if root else Path.home()
    if not root.is_dir():
        return []
    dirs = [p for p in root.glob(f"{MARKER_PREFIX}*") if p.is_dir()]
    return sorted(dirs, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)


def load_summary(
    marker_dir: Path,
    steps: tuple[tuple[int, str], ...] = WIZARD_STEPS,
) -> list[StepSummary]:
    """Fold a marker directory into one summary per step.

    For each ordinal the latest attempt wins; within an attempt a terminal
    marker outranks the start marker. Steps without markers are Pending.
    Ordinals found on disk but not in ``steps`` are reported too.
    """
    names = dict(steps)
    best: dict[int, tuple[tuple[int, int], StepStatus]] = {}

    if Path(marker_dir).is_dir():
        for entry in Path(marker_dir).iterdir():
            m = _MARKER_RE.match(entry.name)
            if not m:
                continue
            ordinal = int(m.group(1))
            status = _STATUS_BY_TOKEN[m.group(2)]
            attempt = int(m.group(3) or 1)
            key = (attempt, status.rank)
            if ordinal not in best or key > best[ordinal][0]:
                best[ordinal] = (key, status)
    else:
        logger.debug("Marker directory %s does not exist", marker_dir)

    summaries = []
    for ordinal in sorted(set(names) | set(best)):
        if ordinal in best:
            (attempt, _), status = best[ordinal]
        else:
            attempt, status = 0, StepStatus.PENDING
        summaries.append(StepSummary(
            ordinal=ordinal,
            name=names.get(ordinal, ""),
            status=status,
            attempts=attempt,
        ))
    return summaries


class StepTracker:
    """Tracks the wizard's steps for one run."""

    def __init__(
        self,
        run_id: str | None = None,
        marker_root: Path | None = None,
        steps: tuple[tuple[int, str], ...] = WIZARD_STEPS,
    ):
        self._root = Path(marker_root) if marker_root else Path.home()
        self._steps = {ordinal: Step(ordinal=ordinal, name=name) for ordinal, name in steps}
        self._current: int | None = None
        self.degraded = False
        self.run_id, self.marker_dir = self._claim(run_id or new_run_id())

    # ── Transitions ─────────────────────────────────────────────

    def track(self, ordinal: int, name: str | None = None) -> Step:
        """Start (or re-enter after failure) a step."""
        step = self._get(ordinal)
        if step.status not in (StepStatus.PENDING, StepStatus.FAILED):
            raise StepTransitionError(
                f"Step {ordinal} cannot start from {step.status.value}"
            )
        if name:
            step.name = name
        step.attempts += 1
        step.status = StepStatus.STARTED
        self._current = ordinal
        self._mark(ordinal, StepStatus.STARTED, step.attempts)
        logger.info("Step %d started: %s (attempt %d)", ordinal, step.name, step.attempts)
        return step

    def finish(self, ordinal: int, status: StepStatus = StepStatus.COMPLETE) -> Step:
        """Move a started step to Complete or Failed."""
        step = self._get(ordinal)
        if not status.terminal:
            raise StepTransitionError(f"Step {ordinal} cannot finish as {status.value}")
        if step.status != StepStatus.STARTED:
            raise StepTransitionError(
                f"Step {ordinal} cannot finish from {step.status.value}"
            )
        step.status = status
        if self._current == ordinal:
            self._current = None
        self._mark(ordinal, status, step.attempts)
        log = logger.info if status == StepStatus.COMPLETE else logger.warning
        log("Step %d %s: %s", ordinal, status.value, step.name)
        return step

    # ── Queries ─────────────────────────────────────────────────

    def status(self, ordinal: int) -> StepStatus:
        return self._get(ordinal).status

    @property
    def steps(self) -> list[Step]:
        return [self._steps[o].model_copy() for o in sorted(self._steps)]

    @property
    def current(self) -> Step | None:
        """The step currently Started, if any."""
        if self._current is None:
            return None
        return self._steps[self._current].model_copy()

    def summary(self) -> list[StepSummary]:
        """Re-read this run's markers and fold them per step.

        When markers could not be written, the in-memory state is reported.
        """
        if self.degraded:
            return [
                StepSummary(ordinal=s.ordinal, name=s.name, status=s.status, attempts=s.attempts)
                for s in self.steps
            ]
        steps = tuple((s.ordinal, s.name) for s in self.steps)
        return load_summary(self.marker_dir, steps)

    # ── Cleanup ─────────────────────────────────────────────────

    def cleanup(self) -> bool:
        """Best-effort removal of this run's markers. True if fully removed."""
        if not self.marker_dir.is_dir():
            return True
        for entry in self.marker_dir.iterdir():
            if not _MARKER_RE.match(entry.name):
                continue
            try:
                entry.unlink()
            except OSError as e:
                logger.warning("Cannot remove marker %s: %s", entry, e)
        try:
            self.marker_dir.rmdir()
        except OSError as e:
            logger.warning("Marker directory %s kept: %s", self.marker_dir, e)
            return False
        logger.debug("Removed marker directory %s", self.marker_dir)
        return True

    # ── Internals ───────────────────────────────────────────────

    def _get(self, ordinal: int) -> Step:
        try:
            return self._steps[ordinal]
        except KeyError:
            raise StepTransitionError(f"Unknown step {ordinal}") from None

    def _claim(self, run_id: str) -> tuple[str, Path]:
        """Create a fresh marker directory, suffixing the run id on collision."""
        candidate = run_id
        n = 1
        while True:
            path = self._root / f"{MARKER_PREFIX}{candidate}"
            try:
                path.mkdir(mode=0o700, parents=True)
                logger.debug("Marker directory %s", path)
                return candidate, path
            except FileExistsError:
                n += 1
                candidate = f"{run_id}-{n}"
            except OSError as e:
                logger.error("Cannot create marker directory %s: %s", path, e)
                self.degraded = True
                return candidate, path

    def _mark(self, ordinal: int, status: StepStatus, attempt: int) -> None:
        if self.degraded:
            return
        path = self.marker_dir / marker_name(ordinal, status, attempt)
        try:
            with open(path, "x", encoding="utf-8"):
                pass
        except OSError as e:
            logger.error("Cannot write marker %s: %s", path, e)
            self.degraded = True
