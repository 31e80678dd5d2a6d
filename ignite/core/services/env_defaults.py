"""
Default .env templates — the base text a new .env file starts from.

When a project has no .env yet, the merger is seeded with either the
project's own ``.env.example`` or a per-framework default from here.
Managed sections (``# Database Configuration``) are placed last because
a merge replaces everything from its header to the end of the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ignite.core.models.env_file import DATABASE_SECTION
from ignite.core.services.secret_gen import SecretGenerator

logger = logging.getLogger(__name__)

ENV_EXAMPLE = ".env.example"

_FRONTEND = ("react", "vue", "angular")


def default_env_template(
    framework: str,
    is_production: bool = False,
    secrets: SecretGenerator | None = None,
) -> str:
    """Render the default .env text for a framework.

    Secrets (JWT secret, production DB password, Django secret key) come
    from ``secrets``; this may raise EntropyUnavailable.
    """
    secrets = secrets or SecretGenerator()
    lines = [
        "# Environment Configuration",
        f"NODE_ENV={'production' if is_production else 'development'}",
    ]

    if framework == "nodejs":
        lines += [
            "PORT=3000",
            "API_PREFIX=/api/v1",
            "",
            "# JWT Configuration",
            f"JWT_SECRET={secrets.random_hex(32)}",
            "JWT_EXPIRES_IN=24h",
            "",
            "# Application Settings",
            f"APP_NAME={framework}-api",
            f"LOG_LEVEL={'info' if is_production else 'debug'}",
            "",
            DATABASE_SECTION,
            "DB_HOST=localhost",
            "DB_PORT=5432",
            f"DB_NAME={framework}_db",
            "DB_USER=dbuser",
            f"DB_PASSWORD={secrets.random_base64(12) if is_production else 'dev_password'}",
        ]
    elif framework in _FRONTEND:
        lines += [
            "REACT_APP_API_URL=http://localhost:3000/api",
            "VUE_APP_API_URL=http://localhost:3000/api",
            "NG_APP_API_URL=http://localhost:3000/api",
        ]
    elif framework == "laravel":
        lines += [
            "",
            "# Application Settings",
            "APP_NAME=Laravel",
            f"APP_ENV={'production' if is_production else 'local'}",
            "APP_KEY=",
            f"APP_DEBUG={'false' if is_production else 'true'}",
            "APP_URL=http://localhost",
        ]
    elif framework == "django":
        lines += [
            "",
            "# Application Settings",
            f"DEBUG={'False' if is_production else 'True'}",
            f"SECRET_KEY={secrets.random_hex(32)}",
            "ALLOWED_HOSTS=localhost,127.0.0.1",
        ]

    return "\n".join(lines) + "\n"


def base_template_for(
    project_dir: Path,
    framework: str,
    is_production: bool = False,
    secrets: SecretGenerator | None = None,
) -> tuple[str, str]:
    """Pick the seed text for a new .env in ``project_dir``.

    Returns ``(text, source)`` where source is ``".env.example"`` or
    ``"default"``. An unreadable example file falls back to the default.
    """
    example = Path(project_dir) / ENV_EXAMPLE
    if example.is_file():
        try:
            text = example.read_text(encoding="utf-8")
            logger.info("Seeding .env from %s", example)
            return text, ENV_EXAMPLE
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s — using default template", example, e)

    logger.info("Seeding .env from the default %s template", framework)
    return default_env_template(framework, is_production, secrets), "default"
