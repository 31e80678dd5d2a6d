"""
Settings loader — reads and writes ~/.ignite/config.yml.

Reads YAML, validates against the WizardSettings schema, and returns a
typed model. A missing file means "all defaults". Writes are atomic
(temp file in the same directory, then rename).

``IGNITE_HOME`` overrides the settings directory (used by tests).
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ignite.core.models.settings import WizardSettings

logger = logging.getLogger(__name__)

ENV_HOME = "IGNITE_HOME"
SETTINGS_FILE = "config.yml"


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


def settings_dir() -> Path:
    """Directory holding the settings file."""
    override = os.environ.get(ENV_HOME)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".ignite"


def settings_path() -> Path:
    return settings_dir() / SETTINGS_FILE


def load_settings(path: Path | None = None) -> WizardSettings:
    """Load and validate user settings.

    Args:
        path: Explicit settings file. Defaults to ``settings_path()``.

    Returns:
        Validated WizardSettings (defaults when the file does not exist).

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    path = path or settings_path()
    if not path.is_file():
        logger.debug("No settings file at %s — using defaults", path)
        return WizardSettings()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = WizardSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.debug("Loaded settings from %s", path)
    return settings


def save_settings(settings: WizardSettings, path: Path | None = None) -> Path:
    """Write settings as YAML (atomic write). Returns the path written."""
    path = path or settings_path()
    content = yaml.safe_dump(
        settings.model_dump(mode="json"),
        default_flow_style=False,
        sort_keys=False,
    )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".config_", suffix=".tmp")
        os.close(fd)
        tmp = Path(tmp_path)
        try:
            tmp.write_text(content, encoding="utf-8")
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save settings to %s: %s", path, e)
        raise ConfigError(f"Cannot write {path}: {e}") from e

    logger.debug("Settings saved to %s", path)
    return path


def update_setting(settings: WizardSettings, key: str, value: str) -> WizardSettings:
    """Return a copy of ``settings`` with ``key`` set from a CLI string.

    The value is parsed as YAML so ``true``, ``[src, app]`` and numbers get
    their natural types; the result is re-validated.
    """
    if key not in WizardSettings.model_fields:
        known = ", ".join(WizardSettings.model_fields)
        raise ConfigError(f"Unknown setting '{key}'. Known settings: {known}")

    try:
        parsed: Any = yaml.safe_load(value) if value != "" else None
    except yaml.YAMLError:
        parsed = value

    # Free-text fields stay strings even when they look like YAML scalars
    if isinstance(parsed, (int, float, bool)) and key in _STRING_FIELDS:
        parsed = value

    data = settings.model_dump()
    data[key] = parsed
    try:
        return WizardSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for '{key}': {e}") from e


_STRING_FIELDS = frozenset({
    "developer_role",
    "selected_framework",
    "last_project_dir",
    "git_default_branch",
    "marker_root",
    "node_boilerplate_repo",
    "flutter_org",
})
