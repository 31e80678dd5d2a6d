"""
Click-backed prompter and reporter for the interactive wizard.

Thin wrappers: all decisions are made by the orchestrator.
"""

from __future__ import annotations

from typing import Any, Iterable

import click

from ignite.core.engine.interaction import Prompter, Reporter


class ClickPrompter(Prompter):
    """Prompts on the terminal unless an answer was given up front.

    ``preset`` holds answers from command-line options (``--role``,
    ``--framework``, ...); those questions are not asked.
    """

    def __init__(self, preset: dict[str, Any] | None = None):
        self._preset = {k: v for k, v in (preset or {}).items() if v is not None}

    def choose(self, key: str, message: str, choices: list[str], default: str | None = None) -> str:
        if key in self._preset:
            return str(self._preset[key])
        return click.prompt(
            message,
            type=click.Choice(choices),
            default=default,
            show_choices=True,
        )

    def ask(self, key: str, message: str, default: str | None = None, secret: bool = False) -> str:
        if key in self._preset:
            return str(self._preset[key])
        return click.prompt(
            message,
            default=default if default is not None else "",
            show_default=bool(default),
            hide_input=secret,
        )

    def confirm(self, key: str, message: str, default: bool = False) -> bool:
        if key in self._preset:
            return bool(self._preset[key])
        return click.confirm(message, default=default)


class ClickReporter(Reporter):
    """Prints wizard progress with click styling."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def section(self, title: str) -> None:
        if not self.quiet:
            click.echo()
            click.secho(f"▶ {title}", fg="cyan", bold=True)

    def info(self, message: str) -> None:
        if not self.quiet:
            click.echo(f"   {message}")

    def success(self, message: str) -> None:
        click.secho(f"✅ {message}", fg="green")

    def warning(self, message: str) -> None:
        click.secho(f"⚠️  {message}", fg="yellow")

    def error(self, message: str) -> None:
        click.secho(f"❌ {message}", fg="red", err=True)

    def lines(self, lines: Iterable[str], title: str | None = None) -> None:
        if title:
            click.secho(f"   {title}", fg="white", bold=True)
        for line in lines:
            click.echo(f"     {line}")
