"""
Git adapter — the wizard's cloner.

Clones an existing repository into the project directory and initializes
a fresh repository when a project has none. Uses the git CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ignite.adapters.base import Adapter, ExecutionContext
from ignite.adapters.shell.command import run_command, tool_available
from ignite.core.models.action import Receipt

logger = logging.getLogger(__name__)


class GitAdapter(Adapter):
    """Git operations used by the wizard.

    Action ids:
        clone: params ``url`` (str), ``target_dir`` (str), optional
               ``branch`` (str). Clones into ``target_dir``.
        init:  optional ``branch`` (initial branch name). Runs in the
               context's cwd.

    Action params:
        timeout (int): Timeout in seconds (default: 600).
    """

    OPERATIONS = ("clone", "init")

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return tool_available("git")

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.action.id
        if operation not in self.OPERATIONS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(self.OPERATIONS)}"

        if operation == "clone":
            if not context.param("url"):
                return False, "Missing required param: 'url'"
            if not context.param("target_dir"):
                return False, "Missing required param: 'target_dir'"
        elif not Path(context.cwd).is_dir():
            return False, f"Working directory does not exist: {context.cwd}"

        if not self.is_available():
            return False, "git is not installed"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        if context.action.id == "clone":
            return self._clone(context)
        return self._init(context)

    # ── Operations ──────────────────────────────────────────────

    def _clone(self, ctx: ExecutionContext) -> Receipt:
        url = ctx.param("url")
        target = ctx.param("target_dir")
        args = ["git", "clone"]
        if ctx.param("branch"):
            args += ["--branch", ctx.param("branch")]
        args += [url, str(target)]

        logger.info("Cloning %s into %s", url, target)
        receipt = run_command(
            self.name, ctx.action.id, args,
            cwd=Path(target).parent, timeout=ctx.param("timeout", 600),
        )
        receipt.metadata["target_dir"] = str(target)
        return receipt

    def _init(self, ctx: ExecutionContext) -> Receipt:
        args = ["git", "init"]
        if ctx.param("branch"):
            args += ["--initial-branch", ctx.param("branch")]
        logger.info("Initializing git repository in %s", ctx.cwd)
        return run_command(
            self.name, ctx.action.id, args,
            cwd=ctx.cwd, timeout=ctx.param("timeout", 60),
        )
