"""
Ignite — CLI entrypoint.

Usage:
    ignite --help
    ignite start
    ignite start --role backend --framework django --name shop --non-interactive
    ignite logs --json
    ignite commands --framework laravel
"""

from __future__ import annotations

import json
import sys
from collections import deque
from pathlib import Path

import click

from ignite import __version__
from ignite.core.observability.logging_config import (
    log_file_from_env,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="ignite")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """Ignite — scaffold and configure a new development project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        quiet_third_party=not debug,
    )


def _load_settings_or_exit():
    from ignite.core.config.loader import ConfigError, load_settings

    try:
        return load_settings()
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


# ── start ───────────────────────────────────────────────────────


@cli.command()
@click.option("--role", default=None, help="Developer role (frontend, backend, mobile).")
@click.option("--framework", default=None, help="Framework for the role.")
@click.option("--name", "project_name", default=None, help="Project directory name.")
@click.option("--repo", "repo_url", default=None, help="Clone this repository instead of scaffolding.")
@click.option(
    "--dir", "parent_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Parent directory for the project (default: last used, or cwd).",
)
@click.option("--production/--development", default=None, help="Target environment.")
@click.option("--non-interactive", is_flag=True, help="Never prompt; use options and defaults.")
@click.option("--keep-markers", is_flag=True, help="Keep step markers for `ignite logs`.")
@click.option("--mock", is_flag=True, help="Don't run git/composer/npm; pretend they succeed.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the run outcome as JSON.")
@click.pass_context
def start(
    ctx: click.Context,
    role: str | None,
    framework: str | None,
    project_name: str | None,
    repo_url: str | None,
    parent_dir: str | None,
    production: bool | None,
    non_interactive: bool,
    keep_markers: bool,
    mock: bool,
    as_json: bool,
) -> None:
    """Run the project setup wizard."""
    from ignite.adapters import default_registry
    from ignite.core.config.loader import save_settings
    from ignite.core.engine.interaction import RecordingReporter, ScriptedPrompter
    from ignite.core.engine.orchestrator import Orchestrator
    from ignite.ui.cli.wizard import ClickPrompter, ClickReporter

    settings = _load_settings_or_exit()

    preset = {
        "role": role,
        "framework": framework,
        "project_name": project_name,
        "repo_url": repo_url,
        "source": "existing" if repo_url else None,
        "parent_dir": parent_dir,
        "production": production,
    }
    prompter = ScriptedPrompter(preset) if non_interactive else ClickPrompter(preset)
    reporter = RecordingReporter() if as_json else ClickReporter(quiet=ctx.obj.get("quiet", False))

    registry = default_registry(mock_mode=mock)
    if not as_json:
        if mock:
            click.secho("🧪 Mock mode — external tools are not run", fg="yellow")
        missing = registry.missing_tools()
        if missing:
            click.secho(f"⚠️  Not installed: {', '.join(missing)} — related steps may fail", fg="yellow")

    orchestrator = Orchestrator(
        prompter=prompter,
        reporter=reporter,
        registry=registry,
        settings=settings,
        save_settings=save_settings,
        keep_markers=True if keep_markers else None,
        handle_signals=True,
    )
    outcome = orchestrator.run()

    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
    elif outcome.ok:
        click.secho("\n🎉 Setup complete", fg="green", bold=True)
    else:
        click.secho(f"\n❌ Setup failed at step {outcome.halted_at}", fg="red", bold=True, err=True)

    sys.exit(outcome.exit_code)


# ── logs ────────────────────────────────────────────────────────


_STATUS_STYLE = {
    "complete": ("✅", "green"),
    "failed": ("❌", "red"),
    "started": ("⏳", "yellow"),
    "pending": ("·", "white"),
}


@cli.command()
@click.option("--run", "run_id", default=None, help="Run id (default: most recent).")
@click.option("--tail", type=int, default=0, help="Also show the last N lines of the log file.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def logs(run_id: str | None, tail: int, as_json: bool) -> None:
    """Show the step summary of a previous run."""
    from ignite.core.services.step_tracker import find_marker_dirs, load_summary, run_id_of

    settings = _load_settings_or_exit()
    root = Path(settings.marker_root).expanduser() if settings.marker_root else None
    dirs = find_marker_dirs(root)
    if run_id:
        dirs = [d for d in dirs if run_id_of(d) == run_id]

    if not dirs:
        what = f"run {run_id}" if run_id else "any run"
        click.secho(f"❌ No markers found for {what}", fg="red", err=True)
        click.echo("   Markers are kept only with `ignite start --keep-markers` "
                   "or `ignite config set keep_markers true`.")
        sys.exit(1)

    marker_dir = dirs[0]
    summary = load_summary(marker_dir)
    log_lines = _tail_log(tail) if tail > 0 else []

    if as_json:
        click.echo(json.dumps({
            "run_id": run_id_of(marker_dir),
            "marker_dir": str(marker_dir),
            "steps": [s.to_dict() for s in summary],
            "log": log_lines,
        }, indent=2))
        return

    click.secho(f"\n📋 Run {run_id_of(marker_dir)}", fg="cyan", bold=True)
    click.echo(f"   {marker_dir}")
    click.echo()
    for step in summary:
        icon, color = _STATUS_STYLE[step.status.value]
        attempts = f"  (attempt {step.attempts})" if step.attempts > 1 else ""
        click.secho(f"   {icon} {step.ordinal}. {step.name:<40} {step.status.value}{attempts}", fg=color)

    if tail > 0:
        click.echo()
        if not log_lines:
            click.secho("   No log file (set IGNITE_LOG_FILE to record one)", fg="yellow")
        for line in log_lines:
            click.echo(f"   {line}")
    click.echo()


def _tail_log(count: int) -> list[str]:
    path = log_file_from_env()
    if not path or not Path(path).is_file():
        return []
    with open(path, encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in deque(f, maxlen=count)]


# ── commands / frameworks ───────────────────────────────────────


@cli.command()
@click.option("--framework", default=None, help="Framework (default: last selected).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def commands(framework: str | None, as_json: bool) -> None:
    """Show useful commands for a framework."""
    from ignite.core.services.command_list import CommandLister

    framework = framework or _load_settings_or_exit().selected_framework
    if not framework:
        click.secho("❌ No framework selected. Use --framework or run `ignite start`.", fg="red", err=True)
        sys.exit(1)

    lister = CommandLister()
    known = lister.has_commands(framework)
    groups = lister.groups(framework)

    if as_json:
        click.echo(json.dumps({
            "framework": framework,
            "known": known,
            "groups": [{"title": g.title, "lines": g.lines} for g in groups],
        }, indent=2))
        sys.exit(0 if known else 1)

    if not known:
        click.secho(f"⚠️  No specific commands available for {framework}", fg="yellow")
    click.secho(f"\n🛠  Useful commands for {framework}", fg="cyan", bold=True)
    for group in groups:
        click.echo()
        click.secho(f"   >> {group.title}", fg="white", bold=True)
        for line in group.lines:
            click.echo(f"     {line}")
    click.echo()
    if not known:
        sys.exit(1)


@cli.command()
@click.option("--role", default=None, help="Only this developer role.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def frameworks(role: str | None, as_json: bool) -> None:
    """List developer roles and their frameworks."""
    from ignite.core.data import DataRegistry

    registry = DataRegistry()
    roles = registry.roles
    if role:
        if role not in roles:
            click.secho(f"❌ Unknown role '{role}'. Valid: {', '.join(roles)}", fg="red", err=True)
            sys.exit(1)
        roles = [role]

    listing = {
        r: [{"name": f, **(registry.framework(f) or {})} for f in registry.frameworks_for(r)]
        for r in roles
    }

    if as_json:
        click.echo(json.dumps(listing, indent=2))
        return

    for r, items in listing.items():
        click.secho(f"\n{registry.role_label(r)} ({r})", fg="cyan", bold=True)
        for item in items:
            click.echo(f"   • {item['name']:<14} {item.get('description', '')}")
    click.echo()


# ── Register subgroups ──────────────────────────────────────────

from ignite.ui.cli.config import config  # noqa: E402

cli.add_command(config)


if __name__ == "__main__":
    cli()
