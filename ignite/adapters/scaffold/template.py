"""
Template adapter — creates a brand-new project for a framework.

    laravel   composer create-project laravel/laravel <name>
    nodejs    git clone <boilerplate> <name>, drop its history, git init
    flutter   flutter create --org <org> --project-name <dart_name> <name>
    others    empty project directory

The receipt's ``final_dir`` metadata tells the orchestrator where the
project actually ended up.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from ignite.adapters.base import Adapter, ExecutionContext
from ignite.adapters.shell.command import run_command, tool_available
from ignite.core.models.action import Receipt
from ignite.core.models.settings import DEFAULT_NODE_BOILERPLATE

logger = logging.getLogger(__name__)

# framework → external tool the scaffold needs
_REQUIRED_TOOL = {
    "laravel": "composer",
    "nodejs": "git",
    "flutter": "flutter",
}

DEFAULT_FLUTTER_ORG = "com.example"


class TemplateAdapter(Adapter):
    """Scaffolds new projects.

    Action id ``scaffold``; params:
        framework (str): Framework key from the catalog.
        name (str): Project directory name.
        parent_dir (str): Directory the project is created in.
        boilerplate_repo (str): Node.js boilerplate URL (optional).
        org (str): Flutter organization, reverse domain (optional).
        branch (str): Initial branch for ``git init`` (optional).
    """

    @property
    def name(self) -> str:
        return "scaffold"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if context.action.id != "scaffold":
            return False, f"Unknown operation '{context.action.id}'"
        for key in ("framework", "name", "parent_dir"):
            if not context.param(key):
                return False, f"Missing required param: '{key}'"

        parent = Path(context.param("parent_dir"))
        if not parent.is_dir():
            return False, f"Parent directory does not exist: {parent}"

        tool = _REQUIRED_TOOL.get(context.param("framework"))
        if tool and not tool_available(tool):
            return False, f"{tool} is not installed"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        framework = context.param("framework")
        if framework == "laravel":
            return self._laravel(context)
        if framework == "nodejs":
            return self._nodejs(context)
        if framework == "flutter":
            return self._flutter(context)
        return self._empty(context)

    # ── Frameworks ──────────────────────────────────────────────

    def _laravel(self, ctx: ExecutionContext) -> Receipt:
        parent = Path(ctx.param("parent_dir"))
        name = ctx.param("name")
        logger.info("Scaffolding Laravel project %s in %s", name, parent)
        receipt = run_command(
            self.name, ctx.action.id,
            ["composer", "create-project", "laravel/laravel", name],
            cwd=parent,
        )
        receipt.metadata["final_dir"] = str(parent / name)
        return receipt

    def _nodejs(self, ctx: ExecutionContext) -> Receipt:
        parent = Path(ctx.param("parent_dir"))
        name = ctx.param("name")
        repo = ctx.param("boilerplate_repo") or DEFAULT_NODE_BOILERPLATE
        final_dir = parent / name

        logger.info("Cloning Node.js boilerplate %s into %s", repo, final_dir)
        cloned = run_command(self.name, ctx.action.id, ["git", "clone", repo, name], cwd=parent)
        if cloned.failed:
            return cloned

        # Fresh history: the boilerplate's commits are not the user's project
        try:
            shutil.rmtree(final_dir / ".git")
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"Cannot remove boilerplate history: {e}",
                metadata={"final_dir": str(final_dir)},
            )

        args = ["git", "init"]
        if ctx.param("branch"):
            args += ["--initial-branch", ctx.param("branch")]
        init = run_command(self.name, ctx.action.id, args, cwd=final_dir)
        if init.failed:
            logger.warning("git init in %s failed: %s", final_dir, init.error)

        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=cloned.output,
            metadata={"final_dir": str(final_dir), "git_init": init.ok, "source": repo},
        )

    def _flutter(self, ctx: ExecutionContext) -> Receipt:
        parent = Path(ctx.param("parent_dir"))
        name = ctx.param("name")
        org = ctx.param("org") or DEFAULT_FLUTTER_ORG
        logger.info("Creating Flutter project %s (org %s) in %s", name, org, parent)
        receipt = run_command(
            self.name, ctx.action.id,
            ["flutter", "create", "--org", org, "--project-name", dart_package_name(name), name],
            cwd=parent,
        )
        receipt.metadata["final_dir"] = str(parent / name)
        return receipt

    def _empty(self, ctx: ExecutionContext) -> Receipt:
        final_dir = Path(ctx.param("parent_dir")) / ctx.param("name")
        try:
            final_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"Cannot create {final_dir}: {e}",
            )
        logger.info("Created empty project directory %s", final_dir)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Created {final_dir}",
            metadata={"final_dir": str(final_dir)},
        )


def dart_package_name(name: str) -> str:
    """Directory name → valid Dart package name (lowercase, underscores)."""
    package = re.sub(r"[^a-z0-9_]", "_", name.lower())
    if not package or not package[0].isalpha():
        package = f"app_{package}"
    return package
