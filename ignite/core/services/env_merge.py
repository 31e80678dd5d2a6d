"""
Env merger — idempotent, atomic section upserts for .env files.

A merge targets one managed section (addressed by its header line):

    1. Missing file → start from the caller's base template text.
    2. Split at the header; everything before it is kept verbatim.
    3. Build the section body from the caller's ordered entries, generating
       secrets where the entry's policy asks for it.
    4. Add derived keys (e.g. a connection URI) computed from the resolved
       values by a pure function.
    5. Write before + blank line + section to a temp file in the target's
       directory and ``os.replace`` it over the target.

The visible file is either the old content or the new content, never a
partial write. Every failure surfaces as MergeFailed.

Because the section is always fully replaced and the prefix is recomputed
from the current file, merging twice with the same values (and a stubbed
secret generator) produces byte-identical output.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from ignite.core.engine.resources import ResourceScope
from ignite.core.errors import MergeFailed
from ignite.core.models.env_file import EnvFile, EnvLine, LineKind
from ignite.core.services.secret_gen import (
    POLICIES,
    POLICY_LITERAL,
    SecretGenerator,
)

logger = logging.getLogger(__name__)

DeriveFn = Callable[[dict[str, str]], dict[str, str]]


@dataclass(frozen=True)
class EnvEntry:
    """One key of a managed section.

    ``value`` is used when supplied. Otherwise a non-literal ``policy``
    generates a fresh secret; a literal entry without a value is omitted.
    """

    key: str
    value: str | None = None
    policy: str = POLICY_LITERAL

    def __post_init__(self) -> None:
        if self.policy not in POLICIES:
            raise ValueError(f"Unknown generation policy '{self.policy}' for {self.key}")


@dataclass
class MergeResult:
    """Outcome of a merge or key update."""

    path: Path
    created: bool = False
    changed: bool = False
    values: dict[str, str] = field(default_factory=dict)
    generated: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        return list(self.values)


def connection_uri(
    scheme: str,
    host: str,
    port: str | int | None = None,
    name: str | None = None,
    user: str | None = None,
    password: str | None = None,
) -> str:
    """Assemble ``scheme://[user[:pass]@]host[:port][/name]``.

    Absent parts are omitted in that fixed order. A password without a
    user is dropped.
    """
    uri = f"{scheme}://"
    if user:
        uri += user
        if password:
            uri += f":{password}"
        uri += "@"
    uri += host
    if port not in (None, ""):
        uri += f":{port}"
    if name:
        uri += f"/{name}"
    return uri


class EnvMerger:
    """Upserts managed sections into env files atomically."""

    def __init__(
        self,
        secrets: SecretGenerator | None = None,
        scope: ResourceScope | None = None,
    ):
        self._secrets = secrets or SecretGenerator()
        self._scope = scope

    # ── Public API ──────────────────────────────────────────────

    def merge(
        self,
        path: Path,
        header: str,
        entries: Iterable[EnvEntry],
        base_template: str = "",
        derive: DeriveFn | None = None,
    ) -> MergeResult:
        """Replace (or append) the section ``header`` in ``path``."""
        path = Path(path)
        current = self._read(path, header)
        created = not current.exists
        if created:
            current = EnvFile.from_text(base_template, (header,))
            logger.info("Creating %s from base template (%d lines)", path, len(current.lines))

        before, section = current.find_section(header)
        if section is not None:
            logger.debug("Replacing existing section %r in %s", header, path)

        values, generated = self._resolve(entries)
        if derive is not None:
            values.update(derive(dict(values)))

        lines = _strip_trailing_blanks(before)
        if lines:
            lines.append(EnvLine.blank())
        lines.append(EnvLine.header(header))
        lines.extend(EnvLine.key_value(k, v) for k, v in values.items())

        merged = EnvFile(lines=lines)
        changed = self._commit(path, merged.serialize(), previous=None if created else current)

        logger.info(
            "Merged section %r into %s (keys=%s, generated=%s, changed=%s)",
            header, path, ",".join(values), ",".join(generated) or "-", changed,
        )
        return MergeResult(
            path=path,
            created=created,
            changed=changed,
            values=values,
            generated=generated,
        )

    def update_keys(self, path: Path, values: dict[str, str]) -> MergeResult:
        """Rewrite existing ``KEY=`` lines in place; absent keys are reported."""
        path = Path(path)
        current = self._read(path)
        if not current.exists:
            raise MergeFailed(path, FileNotFoundError(f"No such file: {path}"))

        seen: set[str] = set()
        lines: list[EnvLine] = []
        for line in current.lines:
            if line.kind == LineKind.KEY_VALUE and line.key in values:
                seen.add(line.key)  # type: ignore[arg-type]
                updated = EnvLine.key_value(line.key, values[line.key])  # type: ignore[arg-type,index]
                if line.text.endswith("\r"):
                    updated = updated.model_copy(update={"text": updated.text + "\r"})
                lines.append(updated)
            else:
                lines.append(line)

        missing = [k for k in values if k not in seen]
        changed = self._commit(path, EnvFile(lines=lines).serialize(), previous=current)
        logger.info("Updated keys in %s: %s (missing=%s)", path, ",".join(sorted(seen)) or "-", missing)
        return MergeResult(
            path=path,
            changed=changed,
            values={k: v for k, v in values.items() if k in seen},
            missing=missing,
        )

    # ── Internals ───────────────────────────────────────────────

    def _read(self, path: Path, *headers: str) -> EnvFile:
        try:
            return EnvFile.parse(path, headers)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", path, e)
            raise MergeFailed(path, e) from e

    def _resolve(self, entries: Iterable[EnvEntry]) -> tuple[dict[str, str], list[str]]:
        values: dict[str, str] = {}
        generated: list[str] = []
        for entry in entries:
            if entry.value is not None:
                values[entry.key] = entry.value
            elif entry.policy != POLICY_LITERAL:
                values[entry.key] = self._secrets.generate(entry.policy)
                generated.append(entry.key)
        return values, generated

    def _commit(self, path: Path, content: bytes, previous: EnvFile | None) -> bool:
        """Atomically replace ``path`` with ``content``. Returns False if unchanged."""
        if previous is not None and previous.serialize() == content:
            logger.debug("No change for %s — skipping write", path)
            return False

        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        except OSError as e:
            logger.error("Cannot create temp file next to %s: %s", path, e)
            raise MergeFailed(path, e) from e

        tmp = Path(tmp_name)
        if self._scope is not None:
            self._scope.register_file(tmp)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            if previous is not None:
                shutil.copymode(path, tmp)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            logger.error("Failed to write %s: %s", path, e)
            raise MergeFailed(path, e) from e
        finally:
            if self._scope is not None:
                self._scope.forget(tmp)

        logger.debug("Wrote %s (%d bytes)", path, len(content))
        return True


def _strip_trailing_blanks(lines: list[EnvLine]) -> list[EnvLine]:
    out = list(lines)
    while out and out[-1].kind == LineKind.BLANK:
        out.pop()
    return out
