"""
EnvFile — structured model of a line-oriented KEY=VALUE file.

Lines are split on LF only and each keeps its raw text (a CRLF line keeps
its carriage return), so a file that is parsed and serialized
without changes comes back byte-identical (modulo a single trailing
newline). Managed sections are addressed by their exact header line and
always run from the header to the end of the file.

Grammar (no quoting or escaping):

    blank        → whitespace only
    header       → a line equal to one of the managed section headers
    comment      → starts with '#'
    key/value    → KEY=VALUE, KEY non-empty
    text         → anything else, kept verbatim
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Section headers the wizard manages in generated .env files
DATABASE_SECTION = "# Database Configuration"
ADDITIONAL_SECTION = "# Additional Settings"
MONGODB_SECTION = "# MongoDB Configuration"

MANAGED_HEADERS: tuple[str, ...] = (
    DATABASE_SECTION,
    ADDITIONAL_SECTION,
    MONGODB_SECTION,
)


class LineKind(str, Enum):
    BLANK = "blank"
    COMMENT = "comment"
    KEY_VALUE = "key_value"
    SECTION_HEADER = "section_header"
    TEXT = "text"


class EnvLine(BaseModel):
    """One physical line of an env file."""

    model_config = ConfigDict(frozen=True)

    kind: LineKind
    text: str
    key: str | None = None
    value: str | None = None

    @classmethod
    def key_value(cls, key: str, value: str) -> EnvLine:
        return cls(kind=LineKind.KEY_VALUE, text=f"{key}={value}", key=key, value=value)

    @classmethod
    def header(cls, name: str) -> EnvLine:
        return cls(kind=LineKind.SECTION_HEADER, text=name)

    @classmethod
    def blank(cls) -> EnvLine:
        return cls(kind=LineKind.BLANK, text="")


def classify_line(text: str, headers: frozenset[str]) -> EnvLine:
    """Classify a raw line (without its newline).

    The carriage return of a CRLF line stays in ``text`` but is ignored
    when matching headers and reading the value.
    """
    body = text.removesuffix("\r")
    if not text.strip():
        return EnvLine(kind=LineKind.BLANK, text=text)
    if body in headers:
        return EnvLine(kind=LineKind.SECTION_HEADER, text=text)
    if text.lstrip().startswith("#"):
        return EnvLine(kind=LineKind.COMMENT, text=text)
    key, sep, value = body.partition("=")
    if sep and key.strip():
        return EnvLine(kind=LineKind.KEY_VALUE, text=text, key=key.strip(), value=value)
    return EnvLine(kind=LineKind.TEXT, text=text)


def split_lines(text: str) -> list[str]:
    """Split on LF only; other line-break characters belong to the value."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return parts


class Section(BaseModel):
    """A managed section: its header line plus everything up to EOF."""

    header: str
    lines: list[EnvLine] = Field(default_factory=list)

    @property
    def entries(self) -> list[EnvLine]:
        return [line for line in self.lines if line.kind == LineKind.KEY_VALUE]

    def as_dict(self) -> dict[str, str]:
        return {line.key: line.value for line in self.entries}  # type: ignore[misc]


class EnvFile(BaseModel):
    """Ordered lines of an env file plus whether it exists on disk."""

    lines: list[EnvLine] = Field(default_factory=list)
    exists: bool = True

    # ── Parsing ─────────────────────────────────────────────────

    @classmethod
    def from_text(cls, text: str, headers: tuple[str, ...] | list[str] = ()) -> EnvFile:
        known = frozenset(MANAGED_HEADERS) | frozenset(headers)
        return cls(lines=[classify_line(raw, known) for raw in split_lines(text)])

    @classmethod
    def parse(cls, path: Path, headers: tuple[str, ...] | list[str] = ()) -> EnvFile:
        """Read an env file.

        A missing file yields an empty EnvFile with ``exists=False``. Any
        other read error propagates as ``OSError``.
        """
        try:
            raw = path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            logger.debug("No env file at %s", path)
            return cls(lines=[], exists=False)
        env = cls.from_text(raw, headers)
        logger.debug("Parsed %s (%d lines)", path, len(env.lines))
        return env

    # ── Queries ─────────────────────────────────────────────────

    def find_section(self, header: str) -> tuple[list[EnvLine], Section | None]:
        """Split at the first line equal to ``header``.

        Returns the untouched lines before the header and the section
        (header to EOF), or ``None`` when the header is absent.
        """
        for idx, line in enumerate(self.lines):
            if line.text.removesuffix("\r") == header:
                return list(self.lines[:idx]), Section(
                    header=header, lines=list(self.lines[idx + 1:])
                )
        return list(self.lines), None

    def get(self, key: str) -> str | None:
        """Last value assigned to ``key``, or None."""
        value = None
        for line in self.lines:
            if line.kind == LineKind.KEY_VALUE and line.key == key:
                value = line.value
        return value

    def keys(self) -> list[str]:
        return [line.key for line in self.lines if line.kind == LineKind.KEY_VALUE]  # type: ignore[misc]

    # ── Rendering ───────────────────────────────────────────────

    def render(self) -> str:
        if not self.lines:
            return ""
        return "\n".join(line.text for line in self.lines) + "\n"

    def serialize(self) -> bytes:
        return self.render().encode("utf-8")
