"""
Dependency installer adapter — installs a project's dependencies.

Picks the package manager from the framework's ecosystem and the lock
files present in the project:

    node     yarn.lock → yarn, pnpm-lock.yaml → pnpm, else npm
             (yarn/pnpm fall back to npm when they fail or are missing)
    php      composer install
    dart     flutter pub get
    python   pip install -r requirements.txt, or pipenv install

Unknown ecosystems are detected from manifest files alone.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ignite.adapters.base import Adapter, ExecutionContext
from ignite.adapters.shell.command import run_command, tool_available
from ignite.core.models.action import Receipt

logger = logging.getLogger(__name__)

_INSTALL_ARGS: dict[str, list[str]] = {
    "npm": ["npm", "install"],
    "yarn": ["yarn", "install"],
    "pnpm": ["pnpm", "install"],
    "composer": ["composer", "install"],
    "flutter": ["flutter", "pub", "get"],
    "pip": ["pip", "install", "-r", "requirements.txt"],
    "pipenv": ["pipenv", "install"],
}


def detect_package_manager(cwd: str | Path) -> str | None:
    """Package manager implied by the files in ``cwd``, or None."""
    root = Path(cwd)
    if (root / "package.json").is_file():
        if (root / "yarn.lock").is_file():
            return "yarn"
        if (root / "pnpm-lock.yaml").is_file():
            return "pnpm"
        return "npm"
    if (root / "composer.json").is_file():
        return "composer"
    if (root / "pubspec.yaml").is_file():
        return "flutter"
    if (root / "requirements.txt").is_file():
        return "pip"
    if (root / "Pipfile").is_file():
        return "pipenv"
    return None


def install_candidates(ecosystem: str | None, cwd: str | Path) -> list[str]:
    """Ordered package managers to try; empty when there is nothing to install."""
    detected = detect_package_manager(cwd)

    if ecosystem == "node":
        if detected not in ("npm", "yarn", "pnpm"):
            return []
        return [detected] if detected == "npm" else [detected, "npm"]
    if ecosystem == "php":
        return ["composer"] if detected == "composer" else []
    if ecosystem == "dart":
        return ["flutter"] if detected == "flutter" else []
    if ecosystem == "python":
        return [detected] if detected in ("pip", "pipenv") else []

    if detected in ("yarn", "pnpm"):
        return [detected, "npm"]
    return [detected] if detected else []


class InstallerAdapter(Adapter):
    """Runs the right ``install`` command for a project.

    Action id ``install``; params:
        framework (str): Framework key (for logging).
        ecosystem (str): node, php, dart, python (optional).
        timeout (int): Timeout in seconds per attempt (default: 600).
    """

    @property
    def name(self) -> str:
        return "installer"

    def is_available(self) -> bool:
        return any(tool_available(args[0]) for args in _INSTALL_ARGS.values())

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if context.action.id != "install":
            return False, f"Unknown operation '{context.action.id}'"
        if not Path(context.cwd).is_dir():
            return False, f"Working directory does not exist: {context.cwd}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        framework = context.param("framework", "")
        candidates = install_candidates(context.param("ecosystem"), context.cwd)
        if not candidates:
            logger.info("No dependency manifest for %s in %s", framework, context.cwd)
            return Receipt.skip(
                adapter=self.name,
                action_id=context.action.id,
                reason="No dependency manifest found — nothing to install",
            )

        errors: list[str] = []
        for attempt, manager in enumerate(candidates):
            if not tool_available(manager):
                logger.warning("%s is not installed", manager)
                errors.append(f"{manager}: not installed")
                continue

            if attempt > 0:
                logger.warning("Falling back to %s", manager)
            receipt = run_command(
                self.name, context.action.id, _INSTALL_ARGS[manager],
                cwd=context.cwd, timeout=context.param("timeout", 600),
            )
            if receipt.ok:
                receipt.metadata.update({
                    "package_manager": manager,
                    "fallback": attempt > 0,
                    "errors": errors,
                })
                return receipt
            logger.warning("%s install failed: %s", manager, receipt.error)
            errors.append(f"{manager}: {receipt.error}")

        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error="; ".join(errors),
            metadata={"tried": candidates},
        )
