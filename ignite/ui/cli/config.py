"""
CLI commands for user settings (~/.ignite/config.yml).

Thin wrappers over ``ignite.core.config.loader``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def config() -> None:
    """User settings — show, set, reset."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def config_show(as_json: bool) -> None:
    """Show current settings."""
    from ignite.core.config.loader import ConfigError, load_settings, settings_path

    try:
        settings = load_settings()
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    data = settings.model_dump(mode="json")
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.secho(f"\n⚙️  {settings_path()}", fg="cyan", bold=True)
    for key, value in data.items():
        if isinstance(value, list):
            value = ", ".join(value)
        click.echo(f"   {key:<24} {value if value is not None else '-'}")
    click.echo()


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Set one setting (VALUE is parsed as YAML: true, [a, b], ...)."""
    from ignite.core.config.loader import (
        ConfigError,
        load_settings,
        save_settings,
        update_setting,
    )

    try:
        settings = update_setting(load_settings(), key, value)
        path = save_settings(settings)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✅ {key} = {getattr(settings, key)!r}", fg="green")
    click.echo(f"   Saved to {path}")


@config.command("reset")
@click.confirmation_option(prompt="Reset all settings to defaults?")
def config_reset() -> None:
    """Restore default settings."""
    from ignite.core.config.loader import ConfigError, save_settings
    from ignite.core.models.settings import WizardSettings

    try:
        path = save_settings(WizardSettings())
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    click.secho("✅ Settings reset to defaults", fg="green")
    click.echo(f"   Saved to {path}")
