"""
Orchestrator — the wizard's step loop.

Drives the nine fixed steps in order. For each step:

    tracker.track → step work → tracker.finish(Complete | Failed)

Failure policy lives here and nowhere else:

    StepFatal, EntropyUnavailable          → step Failed, run halts, exit 1
    StepNonFatal, MergeFailed,
    NormalizeFailed                        → step Failed, run continues
    optional sub-action failed             → step Complete, warning reported
    unexpected OSError                     → step Failed, run halts, exit 1

Components raise typed errors or return typed results; the orchestrator
turns them into Reporter messages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from ignite.adapters.registry import AdapterRegistry
from ignite.core.context import SOURCE_EXISTING, SOURCE_NEW, RunContext
from ignite.core.data import DataRegistry
from ignite.core.engine.interaction import Prompter, Reporter
from ignite.core.engine.resources import ResourceScope, ScopeInterrupted
from ignite.core.errors import (
    EntropyUnavailable,
    MergeFailed,
    NormalizeFailed,
    StepFatal,
    StepNonFatal,
)
from ignite.core.models.action import Action, Receipt
from ignite.core.models.env_file import (
    ADDITIONAL_SECTION,
    DATABASE_SECTION,
    MONGODB_SECTION,
    EnvFile,
)
from ignite.core.models.settings import WizardSettings
from ignite.core.models.step import WIZARD_STEPS, StepStatus, StepSummary
from ignite.core.services.command_list import CommandLister
from ignite.core.services.dir_normalize import DirectoryNormalizer
from ignite.core.services.env_defaults import base_template_for
from ignite.core.services.env_merge import EnvEntry, EnvMerger, connection_uri
from ignite.core.services.secret_gen import POLICY_BASE64_12, SecretGenerator
from ignite.core.services.step_tracker import StepTracker
from ignite.core.services.validators import (
    is_env_name,
    is_git_url,
    is_http_url,
    is_project_name,
    parse_port,
    repo_basename,
)

logger = logging.getLogger(__name__)

DEFAULT_GITIGNORE = """\
# Dependencies
node_modules/
vendor/
.env

# Build outputs
build/
dist/
*.pyc
__pycache__/

# IDE files
.idea/
.vscode/
*.sublime-*

# Logs
logs/
*.log
npm-debug.log*

# OS files
.DS_Store
Thumbs.db
"""

PRODUCTION_TIPS = (
    "Use a strong, unique JWT_SECRET (at least 32 characters)",
    "Store sensitive credentials in a secure vault service",
    "Set up proper access controls for database users",
    "Enable HTTPS and set secure headers",
)

MIN_JWT_SECRET = 32

# Development values rewritten in an existing .env for production
PRODUCTION_OVERRIDES: dict[str, tuple[frozenset[str], str]] = {
    "NODE_ENV": (frozenset({"development"}), "production"),
    "APP_ENV": (frozenset({"local", "development"}), "production"),
    "APP_DEBUG": (frozenset({"true"}), "false"),
    "DEBUG": (frozenset({"true", "1"}), "False"),
    "LOG_LEVEL": (frozenset({"debug"}), "info"),
}

SettingsSaver = Callable[[WizardSettings], Any]


@dataclass
class RunOutcome:
    """Result of one wizard run."""

    run_id: str
    exit_code: int = 0
    halted_at: int | None = None
    summary: list[StepSummary] = field(default_factory=list)
    context: RunContext | None = None
    marker_dir: Path | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "exit_code": self.exit_code,
            "halted_at": self.halted_at,
            "summary": [s.to_dict() for s in self.summary],
            "context": self.context.to_dict() if self.context else None,
            "marker_dir": str(self.marker_dir) if self.marker_dir else None,
        }


class Orchestrator:
    """Runs the wizard from role selection to completion."""

    def __init__(
        self,
        prompter: Prompter,
        reporter: Reporter,
        registry: AdapterRegistry,
        settings: WizardSettings | None = None,
        save_settings: SettingsSaver | None = None,
        data: DataRegistry | None = None,
        secrets: SecretGenerator | None = None,
        keep_markers: bool | None = None,
        handle_signals: bool = False,
        cwd: Path | None = None,
    ):
        self.prompter = prompter
        self.reporter = reporter
        self.registry = registry
        self.settings = settings or WizardSettings()
        self._save_settings = save_settings
        self.data = data or DataRegistry()
        self.secrets = secrets or SecretGenerator()
        self.keep_markers = self.settings.keep_markers if keep_markers is None else keep_markers
        self._handle_signals = handle_signals
        self._cwd = Path(cwd) if cwd else Path.cwd()
        self.tracker: StepTracker | None = None

        self._handlers: dict[int, Callable[[RunContext, ResourceScope], StepStatus]] = {
            1: self._select_role,
            2: self._select_framework,
            3: self._project_source,
            4: self._project_structure,
            5: self._database_config,
            6: self._additional_settings,
            7: self._install_dependencies,
            8: self._useful_commands,
            9: self._completion,
        }

    # ── Run loop ────────────────────────────────────────────────

    def run(self) -> RunOutcome:
        marker_root = Path(self.settings.marker_root).expanduser() if self.settings.marker_root else None
        self.tracker = StepTracker(marker_root=marker_root)
        ctx = RunContext(run_id=self.tracker.run_id)
        outcome = RunOutcome(run_id=ctx.run_id, context=ctx, marker_dir=self.tracker.marker_dir)
        logger.info("Run %s started (markers in %s)", ctx.run_id, self.tracker.marker_dir)

        try:
            with ResourceScope(handle_signals=self._handle_signals) as scope:
                outcome.halted_at = self._run_steps(ctx, scope)
            outcome.exit_code = 1 if outcome.halted_at is not None else 0
            outcome.summary = self.tracker.summary()
            self._report_summary(outcome)
        finally:
            if self.keep_markers:
                logger.info("Markers kept in %s", self.tracker.marker_dir)
            else:
                self.tracker.cleanup()
                outcome.marker_dir = None

        logger.info("Run %s finished (exit=%d)", ctx.run_id, outcome.exit_code)
        return outcome

    def _run_steps(self, ctx: RunContext, scope: ResourceScope) -> int | None:
        """Run every step; return the ordinal that halted the run, if any."""
        total = len(WIZARD_STEPS)
        for ordinal, name in WIZARD_STEPS:
            self.tracker.track(ordinal, name)
            self.reporter.section(f"Step {ordinal}/{total}: {name}")
            try:
                status = self._handlers[ordinal](ctx, scope)
            except (StepFatal, EntropyUnavailable) as e:
                logger.error("Step %d fatal: %s", ordinal, e)
                self.reporter.error(str(e))
                self.tracker.finish(ordinal, StepStatus.FAILED)
                return ordinal
            except (StepNonFatal, MergeFailed, NormalizeFailed) as e:
                logger.warning("Step %d failed, continuing: %s", ordinal, e)
                self.reporter.warning(str(e))
                ctx.warn(f"Step {ordinal} ({name}): {e}")
                status = StepStatus.FAILED
            except ScopeInterrupted:
                self.tracker.finish(ordinal, StepStatus.FAILED)
                self.reporter.error("Interrupted — temporary files cleaned up")
                raise
            except OSError as e:
                # Filesystem error no component turned into a typed failure
                logger.exception("Step %d aborted by unexpected I/O error", ordinal)
                self.reporter.error(f"{name}: {e}")
                self.tracker.finish(ordinal, StepStatus.FAILED)
                return ordinal
            self.tracker.finish(ordinal, status)
        return None

    # ── Step 1: role ────────────────────────────────────────────

    def _select_role(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        roles = self.data.roles
        default = self.settings.developer_role if self.settings.developer_role in roles else None
        role = self.prompter.choose("role", "Select your developer role", roles, default)
        if role not in roles:
            raise StepFatal(f"Unknown developer role '{role}'. Valid: {', '.join(roles)}")

        ctx.role = role
        self.settings.developer_role = role
        self._persist_settings()
        self.reporter.success(f"Developer role: {self.data.role_label(role)}")
        return StepStatus.COMPLETE

    # ── Step 2: framework ───────────────────────────────────────

    def _select_framework(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        choices = self.data.frameworks_for(ctx.role or "")
        if not choices:
            raise StepFatal(f"No frameworks available for role '{ctx.role}'")

        saved = self.settings.selected_framework
        default = saved if saved in choices else choices[0]
        framework = self.prompter.choose("framework", "Select a framework", choices, default)
        if framework not in choices:
            raise StepFatal(
                f"Framework '{framework}' is not available for {ctx.role}. "
                f"Valid: {', '.join(choices)}"
            )

        ctx.framework = framework
        self.settings.selected_framework = framework
        self._persist_settings()
        entry = self.data.framework(framework) or {}
        self.reporter.success(f"Framework: {entry.get('label', framework)}")
        return StepStatus.COMPLETE

    # ── Step 3: project source ──────────────────────────────────

    def _project_source(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        source = self.prompter.choose(
            "source", "Create a new project or clone an existing repository?",
            [SOURCE_NEW, SOURCE_EXISTING], SOURCE_NEW,
        )
        if source not in (SOURCE_NEW, SOURCE_EXISTING):
            raise StepFatal(f"Unknown project source '{source}'")
        ctx.source = source

        default_name = None
        if source == SOURCE_EXISTING:
            url = self.prompter.ask("repo_url", "Git repository URL").strip()
            if not url:
                raise StepFatal("Repository URL cannot be empty")
            if not is_git_url(url):
                self._warn(ctx, f"'{url}' does not look like a git URL — trying anyway")
            ctx.repo_url = url
            default_name = repo_basename(url)

        name = self.prompter.ask("project_name", "Project directory name", default_name).strip()
        if not is_project_name(name):
            raise StepFatal(f"Invalid project name '{name}'")
        ctx.project_name = name

        parent_default = self.settings.last_project_dir or str(self._cwd)
        parent = Path(self.prompter.ask("parent_dir", "Parent directory", parent_default)).expanduser()
        parent = parent.resolve()
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StepFatal(f"Cannot create parent directory {parent}: {e}") from e
        ctx.parent_dir = parent

        target = parent / name
        try:
            non_empty = target.is_dir() and any(target.iterdir())
        except OSError as e:
            raise StepFatal(f"Cannot read target directory {target}: {e}") from e
        if non_empty:
            self._warn(ctx, f"{target} is not empty — continuing")

        if source == SOURCE_NEW:
            ctx.target_dir = self._scaffold(ctx, parent, name)
        else:
            ctx.target_dir = self._clone(ctx, target)

        self.reporter.success(f"Project directory: {ctx.target_dir}")
        self._ensure_git_repo(ctx)
        self._ensure_gitignore(ctx)

        self.settings.last_project_dir = str(parent)
        self._persist_settings()
        return StepStatus.COMPLETE

    def _scaffold(self, ctx: RunContext, parent: Path, name: str) -> Path:
        receipt = self.registry.execute_action(
            Action(
                id="scaffold",
                adapter="scaffold",
                name=f"Scaffold {ctx.framework} project",
                params={
                    "framework": ctx.framework,
                    "name": name,
                    "parent_dir": str(parent),
                    "boilerplate_repo": self.settings.node_boilerplate_repo,
                    "org": self.settings.flutter_org,
                    "branch": self.settings.git_default_branch,
                },
            ),
            cwd=str(parent),
        )
        if receipt.failed:
            raise StepFatal(f"Scaffolding failed: {receipt.error}")

        final_dir = Path(receipt.metadata.get("final_dir") or parent / name)
        try:
            final_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StepFatal(f"Cannot create project directory {final_dir}: {e}") from e
        return final_dir

    def _clone(self, ctx: RunContext, target: Path) -> Path:
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StepFatal(f"Cannot create project directory {target}: {e}") from e

        self.reporter.info(f"Cloning {ctx.repo_url} into {target}...")
        receipt = self.registry.execute_action(
            Action(
                id="clone",
                adapter="git",
                name="Clone repository",
                params={"url": ctx.repo_url, "target_dir": str(target)},
            ),
            cwd=str(target.parent),
        )
        if receipt.failed:
            raise StepFatal(f"Failed to clone repository: {receipt.error}")
        return target

    def _ensure_git_repo(self, ctx: RunContext) -> None:
        target = ctx.target_dir
        if target is None or (target / ".git").exists():
            return
        receipt = self.registry.execute_action(
            Action(
                id="init",
                adapter="git",
                name="Initialize git repository",
                params={"branch": self.settings.git_default_branch},
            ),
            cwd=str(target),
        )
        if receipt.failed:
            self._warn(ctx, f"git init failed: {receipt.error} — continuing without version control")
        else:
            self.reporter.info("Initialized a new git repository")

    def _ensure_gitignore(self, ctx: RunContext) -> None:
        path = (ctx.target_dir or self._cwd) / ".gitignore"
        if path.exists():
            return
        try:
            path.write_text(DEFAULT_GITIGNORE, encoding="utf-8")
        except OSError as e:
            self._warn(ctx, f"Cannot write {path}: {e}")
            return
        self.reporter.info("Created default .gitignore")

    # ── Step 4: structure ───────────────────────────────────────

    def _project_structure(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        target = self._require_target(ctx)
        normalizer = DirectoryNormalizer(self.settings.nested_project_markers, scope=scope)
        result = normalizer.normalize(target)

        if not result.changed:
            self.reporter.info("Directory structure looks fine")
            return StepStatus.COMPLETE

        if result.failed:
            detail = ", ".join(result.failed)
            if result.holding_dir is not None:
                detail += f" (left in {result.holding_dir})"
            self._warn(ctx, f"Some entries could not be moved: {detail}")
            return StepStatus.FAILED

        self.reporter.success(f"Flattened nested {target.name}/{target.name} directory")
        return StepStatus.COMPLETE

    # ── Step 5: database ────────────────────────────────────────

    def _database_config(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        target = self._require_target(ctx)
        framework = ctx.framework or ""
        # Decided before any .env is seeded so the template matches it
        production = self._production(ctx)

        if self.data.requires_database(framework):
            self.reporter.info(f"Database configuration is required for {framework} projects")
        elif not self.prompter.confirm("db_configure", "Configure a database connection now?", True):
            self.reporter.info("Skipping database configuration")
            return StepStatus.COMPLETE

        db = self._ask_database(framework)
        env_path = target / ".env"
        merger = EnvMerger(self.secrets, scope=scope)
        base = self._base_template(target, framework, production, env_path)

        entries = [
            EnvEntry("DB_HOST", db["host"]),
            EnvEntry("DB_PORT", db["port"]),
            EnvEntry("DB_NAME", db["name"]),
            EnvEntry("DB_USER", db["user"]),
            EnvEntry("DB_PASSWORD", db["password"] or None, POLICY_BASE64_12),
        ]
        derive = None
        if framework == "laravel":
            entries += [
                EnvEntry("DB_CONNECTION", "mysql"),
                EnvEntry("DB_DATABASE", db["name"]),
                EnvEntry("DB_USERNAME", db["user"]),
            ]
        elif framework == "django":
            derive = _derive_database_url

        result = merger.merge(env_path, DATABASE_SECTION, entries, base_template=base, derive=derive)
        if "DB_PASSWORD" in result.generated:
            self.reporter.info("Generated a secure database password (stored as DB_PASSWORD in .env)")

        if framework == "nodejs" and self.prompter.confirm("use_mongodb", "Are you using MongoDB?", False):
            values = result.values
            merger.merge(
                env_path,
                MONGODB_SECTION,
                [EnvEntry("MONGODB_DB_NAME", values["DB_NAME"])],
                derive=lambda _: {"MONGODB_URI": connection_uri(
                    "mongodb", values["DB_HOST"], values["DB_PORT"], values["DB_NAME"],
                    values["DB_USER"], values["DB_PASSWORD"],
                )},
            )
            self.reporter.info("MongoDB configuration added")

        ctx.env_path = env_path
        ctx.db_config_done = True
        self.reporter.success(f"Database configuration written to {env_path}")
        self.reporter.lines(
            [f"{k}=********" if _is_secret(k, v) else f"{k}={v}" for k, v in result.values.items()],
            title="Database settings",
        )
        return StepStatus.COMPLETE

    def _ask_database(self, framework: str) -> dict[str, str]:
        host = self.prompter.ask("db_host", "Database host", "localhost").strip() or "localhost"

        port = parse_port(self.prompter.ask("db_port", "Database port", "5432").strip())
        if port is None:
            self.reporter.warning("Invalid port number. Port must be between 1 and 65535.")
            port = parse_port(self.prompter.ask("db_port", "Port (1-65535)", "5432").strip())
            if port is None:
                self.reporter.warning("Using default port 5432")
                port = 5432

        name = self.prompter.ask("db_name", "Database name", f"{framework}_db").strip() or f"{framework}_db"
        user = self.prompter.ask("db_user", "Database user", "dbuser").strip() or "dbuser"
        password = self.prompter.ask(
            "db_password", "Database password (leave empty to generate one)", "", secret=True,
        )
        return {"host": host, "port": str(port), "name": name, "user": user, "password": password}

    def _base_template(self, target: Path, framework: str, production: bool, env_path: Path) -> str:
        if env_path.exists():
            return ""
        text, source = base_template_for(target, framework, production, self.secrets)
        self.reporter.info(f"Creating .env from {source} template")
        return text

    # ── Step 6: additional settings ─────────────────────────────

    def _additional_settings(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        target = self._require_target(ctx)
        framework = ctx.framework or ""
        env_path = ctx.env_path or target / ".env"

        production = self._production(ctx)
        if production:
            self.reporter.warning("Production environment — keep these in mind:")
            self.reporter.lines([f"{i}. {tip}" for i, tip in enumerate(PRODUCTION_TIPS, 1)])

        entries: list[EnvEntry] = []
        api_url = self.prompter.ask("api_url", "API endpoint URL (leave empty to skip)", "").strip()
        if api_url:
            if is_http_url(api_url) or self.prompter.confirm(
                "api_url_anyway", "URL should start with http:// or https://. Use it anyway?", False,
            ):
                entries.append(EnvEntry("API_URL", api_url))

        if self.prompter.confirm("add_vars", "Add additional environment variables?", False):
            entries += self._ask_variables()

        merger = EnvMerger(self.secrets, scope=scope)
        if entries:
            base = self._base_template(target, framework, production, env_path)
            merger.merge(env_path, ADDITIONAL_SECTION, entries, base_template=base)
            ctx.env_path = env_path
            self.reporter.success(f"Added {len(entries)} setting(s) to {env_path.name}")

        if production and env_path.exists():
            self._harden_for_production(ctx, merger, env_path)
        return StepStatus.COMPLETE

    def _production(self, ctx: RunContext) -> bool:
        if ctx.is_production is None:
            ctx.is_production = self.prompter.confirm(
                "production", "Is this a production environment?", False,
            )
        return ctx.is_production

    def _ask_variables(self) -> list[EnvEntry]:
        entries: list[EnvEntry] = []
        while True:
            name = self.prompter.ask("var_name", "Variable name (empty to stop)", "").strip()
            if not name:
                break
            if is_env_name(name) or self.prompter.confirm(
                "var_name_anyway",
                f"'{name}' is not UPPER_SNAKE_CASE (e.g. DATABASE_URL). Use it anyway?",
                False,
            ):
                value = self.prompter.ask("var_value", f"Value for {name}", "")
                entries.append(EnvEntry(name, value))
            if not self.prompter.confirm("add_another", "Add another variable?", False):
                break
        return entries

    def _harden_for_production(self, ctx: RunContext, merger: EnvMerger, env_path: Path) -> None:
        try:
            env = EnvFile.parse(env_path)
        except (OSError, UnicodeDecodeError) as e:
            raise MergeFailed(env_path, e) from e

        updates: dict[str, str] = {}
        jwt = env.get("JWT_SECRET")
        if jwt is not None and len(jwt) < MIN_JWT_SECRET:
            updates["JWT_SECRET"] = self.secrets.random_hex(32)
        for key, (development, production) in PRODUCTION_OVERRIDES.items():
            current = env.get(key)
            if current is not None and current.lower() in development:
                updates[key] = production

        if not updates:
            return
        merger.update_keys(env_path, updates)
        for key in updates:
            self.reporter.info(f"Hardened {key} for production")

    # ── Step 7: dependencies ────────────────────────────────────

    def _install_dependencies(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        target = self._require_target(ctx)
        entry = self.data.framework(ctx.framework or "") or {}
        self.reporter.info(f"Installing dependencies for {ctx.framework}...")

        receipt: Receipt = self.registry.execute_action(
            Action(
                id="install",
                adapter="installer",
                name="Install dependencies",
                params={"framework": ctx.framework, "ecosystem": entry.get("ecosystem")},
            ),
            cwd=str(target),
        )
        if receipt.status == "skipped":
            self.reporter.info(receipt.output or "Nothing to install")
            return StepStatus.COMPLETE
        if receipt.failed:
            self._warn(ctx, f"Dependency installation failed: {receipt.error}")
            return StepStatus.FAILED

        manager = receipt.metadata.get("package_manager")
        if receipt.metadata.get("fallback"):
            self._warn(ctx, f"Preferred package manager failed; installed with {manager}")
        self.reporter.success(f"Dependencies installed{f' with {manager}' if manager else ''}")
        return StepStatus.COMPLETE

    # ── Step 8: commands ────────────────────────────────────────

    def _useful_commands(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        lister = CommandLister(self.data)
        for group in lister.groups(ctx.framework or ""):
            self.reporter.lines(group.lines, title=group.title)
        return StepStatus.COMPLETE

    # ── Step 9: completion ──────────────────────────────────────

    def _completion(self, ctx: RunContext, scope: ResourceScope) -> StepStatus:
        self.reporter.success(f"Project {ctx.project_name} is ready at {ctx.target_dir}")
        steps = [f"cd {ctx.target_dir}"]
        if ctx.env_path is not None:
            steps.append(f"Review {ctx.env_path.name} before starting the app")
        commands = CommandLister(self.data).list_commands(ctx.framework or "")
        if commands:
            steps.append(commands[0])
        self.reporter.lines(steps, title="Next steps")

        if ctx.warnings:
            self.reporter.lines(ctx.warnings, title="Warnings during this run")
        return StepStatus.COMPLETE

    # ── Helpers ─────────────────────────────────────────────────

    def _require_target(self, ctx: RunContext) -> Path:
        if ctx.target_dir is None:
            raise StepFatal("No project directory — project source step did not complete")
        return ctx.target_dir

    def _warn(self, ctx: RunContext, message: str) -> None:
        logger.warning(message)
        ctx.warn(message)
        self.reporter.warning(message)

    def _persist_settings(self) -> None:
        if self._save_settings is None:
            return
        try:
            self._save_settings(self.settings)
        except Exception as e:
            logger.warning("Cannot save settings: %s", e)
            self.reporter.warning(f"Cannot save settings: {e}")

    def _report_summary(self, outcome: RunOutcome) -> None:
        lines = [
            f"{s.ordinal}. {s.name:<40} {s.status.value}"
            + (f" (attempt {s.attempts})" if s.attempts > 1 else "")
            for s in outcome.summary
        ]
        self.reporter.lines(lines, title=f"Run {outcome.run_id} summary")
        if outcome.halted_at is not None:
            self.reporter.error(f"Run halted at step {outcome.halted_at}")


def _derive_database_url(values: dict[str, str]) -> dict[str, str]:
    return {
        "DATABASE_URL": connection_uri(
            "postgres",
            values["DB_HOST"],
            values.get("DB_PORT"),
            values.get("DB_NAME"),
            values.get("DB_USER"),
            values.get("DB_PASSWORD"),
        )
    }


_SECRET_WORDS = ("PASSWORD", "SECRET", "TOKEN")
_CREDENTIAL_URIS = frozenset({"DATABASE_URL", "MONGODB_URI"})


def _is_secret(key: str, value: str = "") -> bool:
    """Keys whose value must not be shown: credentials and URIs embedding them."""
    if key in _CREDENTIAL_URIS or any(word in key for word in _SECRET_WORDS):
        return True
    _, sep, rest = value.partition("://")
    return bool(sep) and "@" in rest.split("/", 1)[0]
