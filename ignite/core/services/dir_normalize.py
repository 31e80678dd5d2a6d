"""
Directory normalizer — flattens an accidental ``project/project/`` layout.

Cloning or scaffolding into a directory whose name matches the source
repository's root can leave everything one level too deep. The normalizer
moves the nested tree up in two phases through a holding directory on the
same filesystem:

    phase 1:  current/base/*   →  current/.ignite-normalize-XXXX/*
              rmdir current/base   (rolled back if it is not empty)
    phase 2:  holding/*        →  current/*   (existing entries never overwritten)

Nothing is ever deleted except empty directories. Entries that cannot be
moved are reported, never dropped.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ignite.core.engine.resources import ResourceScope
from ignite.core.errors import NormalizeFailed
from ignite.core.models.settings import DEFAULT_PROJECT_MARKERS

logger = logging.getLogger(__name__)

# Entries that make a nested directory look like a duplicated project root
DEFAULT_MARKERS: tuple[str, ...] = tuple(DEFAULT_PROJECT_MARKERS)

_HOLDING_PREFIX = ".ignite-normalize-"


@dataclass
class NormalizeResult:
    """What a normalization pass did."""

    changed: bool = False
    moved: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    holding_dir: Path | None = None

    @property
    def complete(self) -> bool:
        return not self.failed


def snapshot(root: Path) -> set[str]:
    """Relative POSIX paths of every entry under ``root`` (dotfiles included).

    Symlinked directories are recorded but not followed.
    """
    paths: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root):
        rel = Path(dirpath).relative_to(root)
        for name in (*dirnames, *filenames):
            paths.add((rel / name).as_posix())
    return paths


def _exists(path: Path) -> bool:
    return path.exists() or path.is_symlink()


class DirectoryNormalizer:
    """Detects and repairs a nested duplicate of the project directory."""

    def __init__(
        self,
        markers: Iterable[str] = DEFAULT_MARKERS,
        scope: ResourceScope | None = None,
    ):
        self.markers = tuple(markers)
        self._scope = scope

    def looks_like_project(self, directory: Path) -> bool:
        """True when ``directory`` holds at least one marker entry."""
        return any(_exists(directory / marker) for marker in self.markers)

    def normalize(self, current_dir: Path) -> NormalizeResult:
        """Flatten ``current_dir/<basename>`` into ``current_dir``.

        Returns ``changed=False`` when there is nothing to repair. Raises
        NormalizeFailed when the nested directory cannot be emptied; in that
        case moved entries are put back so the original layout stays usable.
        """
        current_dir = Path(current_dir)
        nested = current_dir / current_dir.name

        try:
            if nested.is_symlink() or not nested.is_dir():
                logger.debug("No nested directory at %s", nested)
                return NormalizeResult()

            if not self.looks_like_project(nested):
                logger.info(
                    "Nested %s has none of %s, leaving it alone",
                    nested, ", ".join(self.markers),
                )
                return NormalizeResult()

            before = snapshot(nested)
            entries = sorted(os.listdir(nested))
        except OSError as e:
            logger.error("Cannot inspect %s: %s", nested, e)
            raise NormalizeFailed(current_dir, [nested.name]) from e
        logger.info("Flattening %s (%d entries)", nested, len(entries))

        try:
            holding = Path(tempfile.mkdtemp(prefix=_HOLDING_PREFIX, dir=current_dir))
        except OSError as e:
            logger.error("Cannot create holding directory in %s: %s", current_dir, e)
            raise NormalizeFailed(current_dir, entries) from e
        if self._scope is not None:
            self._scope.register_dir(holding)

        # ── Phase 1: nested → holding ──────────────────────────────
        parked: list[str] = []
        stuck: list[str] = []
        for name in entries:
            try:
                os.rename(nested / name, holding / name)
                parked.append(name)
            except OSError as e:
                logger.warning("Cannot move %s out of %s: %s", name, nested, e)
                stuck.append(name)

        try:
            nested.rmdir()
        except OSError as e:
            logger.error("Cannot remove %s: %s — rolling back", nested, e)
            self._rollback(current_dir, nested, holding, parked, stuck)

        # ── Phase 2: holding → current ─────────────────────────────
        moved: list[str] = []
        failed: list[str] = []
        for name in parked:
            dest = current_dir / name
            if _exists(dest):
                logger.error("Not overwriting existing %s — left in %s", dest, holding)
                failed.append(name)
                continue
            try:
                os.rename(holding / name, dest)
                moved.append(name)
            except OSError as e:
                logger.error("Cannot move %s into %s: %s", name, current_dir, e)
                failed.append(name)

        holding_left = self._release_holding(holding)

        # ── Verify conservation ────────────────────────────────────
        unaccounted = set(failed)
        for rel in sorted(before):
            if rel.split("/", 1)[0] in unaccounted:
                continue
            if not _exists(current_dir / rel):
                logger.error("Path missing after normalization: %s", rel)
                failed.append(rel)

        result = NormalizeResult(
            changed=True, moved=moved, failed=failed, holding_dir=holding_left,
        )
        if failed:
            logger.warning("Normalized %s with %d unmoved entries", current_dir, len(failed))
        else:
            logger.info("Normalized %s (%d entries moved)", current_dir, len(moved))
        return result

    # ── Internals ───────────────────────────────────────────────

    def _rollback(
        self,
        current_dir: Path,
        nested: Path,
        holding: Path,
        parked: list[str],
        stuck: list[str],
    ) -> None:
        """Put parked entries back into ``nested`` and raise NormalizeFailed."""
        stranded: list[str] = []
        for name in parked:
            try:
                os.rename(holding / name, nested / name)
            except OSError as e:
                logger.error("Rollback of %s failed: %s", name, e)
                stranded.append(name)

        remaining = stuck
        if not remaining:
            try:
                remaining = sorted(os.listdir(nested))
            except OSError as e:
                logger.error("Cannot list %s: %s", nested, e)
                remaining = [nested.name]
        holding_left = self._release_holding(holding)
        raise NormalizeFailed(current_dir, remaining + stranded, holding_dir=holding_left)

    def _release_holding(self, holding: Path) -> Path | None:
        """Remove the holding dir if empty; return it when it must be kept."""
        if self._scope is not None:
            self._scope.forget(holding)
        try:
            holding.rmdir()
        except OSError as e:
            logger.warning("Holding directory %s kept: %s", holding, e)
            return holding
        return None
