"""
Input validators for wizard answers.

Pure predicates; the orchestrator decides whether a failed check is a
warning or a reason to stop.
"""

from __future__ import annotations

import re

_GIT_URL_RE = re.compile(
    r"^(?:(?:https?|git|ssh)://[\w.-]+(?::\d+)?/[\w.-]+/[\w.-]+(?:\.git)?"
    r"|git@[\w.-]+:[\w.-]+/[\w.-]+(?:\.git)?)$"
)
_ENV_NAME_RE = re.compile(r"^[A-Z][A-Z0-9_]*$")
_HTTP_URL_RE = re.compile(r"^https?://")


def is_git_url(url: str) -> bool:
    """``scheme://host/owner/repo[.git]`` or ``git@host:owner/repo[.git]``."""
    return bool(url) and _GIT_URL_RE.match(url) is not None


def repo_basename(url: str) -> str:
    """Directory name git would pick for ``url`` (``…/shop.git`` → ``shop``)."""
    name = url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    return name[:-4] if name.endswith(".git") else name


def is_env_name(name: str) -> bool:
    """Conventional env variable name: uppercase letters, digits, underscores."""
    return _ENV_NAME_RE.match(name) is not None


def is_http_url(url: str) -> bool:
    return _HTTP_URL_RE.match(url) is not None


def parse_port(value: str) -> int | None:
    """TCP port in 1..65535, or None."""
    if not value.isdigit():
        return None
    port = int(value)
    return port if 1 <= port <= 65535 else None


def is_project_name(name: str) -> bool:
    """A single, non-special path component."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name
