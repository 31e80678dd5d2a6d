"""
WizardSettings — the user's persisted preferences.

Stored as YAML in ``~/.ignite/config.yml``. Remembers the last role,
framework and project directory so the next run can offer them as
defaults, plus a few knobs for the engine.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_NODE_BOILERPLATE = "https://github.com/hagopj13/node-express-boilerplate.git"

DEFAULT_PROJECT_MARKERS = [
    "src",
    "package.json",
    ".env.example",
    "composer.json",
    "app",
    "public",
]


class WizardSettings(BaseModel):
    """User-level settings for the wizard."""

    developer_role: str | None = None
    selected_framework: str | None = None
    last_project_dir: str | None = None
    git_default_branch: str = "main"

    # Keep ~/.ignite-markers-<run> after the run so `ignite logs` can read it
    keep_markers: bool = False
    # Where marker directories are created (default: home directory)
    marker_root: str | None = None

    nested_project_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROJECT_MARKERS)
    )
    node_boilerplate_repo: str = DEFAULT_NODE_BOILERPLATE
    # Reverse-domain organization passed to `flutter create --org`
    flutter_org: str = Field(
        default="com.example",
        pattern=r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+$",
    )
