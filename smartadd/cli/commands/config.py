# smartadd/cli/commands/config.py
# `smartadd config`: show, read, change & reset the JSON settings file

from __future__ import annotations

import json
from dataclasses import fields

import typer
from rich.table import Table

from ...config.settings import settings_manager, SmartAddSettings
from ...core.exceptions import SettingsValidationError
from ...smartadd_io.console import console
from ...ui.theme import theme_names
from ..app import app
from ..helpers import coerce_value

config_app = typer.Typer(
    rich_markup_mode="rich", help="[smartadd.accent2]Manage smartadd settings[/]"
)
app.add_typer(config_app, name="config")


def _require_known(key: str) -> None:
    known = {f.name for f in fields(SmartAddSettings)}
    if key not in known:
        raise typer.BadParameter(f"Unknown setting: {key}. Known: {', '.join(sorted(known))}")


# * Table of every setting; values that differ from the defaults are marked
def _settings_table() -> Table:
    defaults = {f.name: f.default for f in fields(SmartAddSettings)}
    table = Table(
        title=f"Settings ({settings_manager.config_path})",
        title_justify="left",
        header_style="bold smartadd.accent",
    )
    table.add_column("Key", style="smartadd.accent2", no_wrap=True)
    table.add_column("Value", overflow="fold")
    table.add_column("", style="dim")
    for key, value in settings_manager.list_settings().items():
        table.add_row(key, json.dumps(value), "" if value == defaults[key] else "changed")
    return table


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        console.print(_settings_table())


@config_app.command()
def get(key: str) -> None:
    """Print one setting as JSON."""
    _require_known(key)
    console.print(json.dumps(settings_manager.get(key)), markup=False)


@config_app.command(name="set")
def set_cmd(key: str, value: str) -> None:
    """Change one setting; VALUE is parsed as JSON when it can be (1.5, true, null)."""
    _require_known(key)
    if key == "theme" and value not in theme_names():
        raise typer.BadParameter(
            f"Invalid theme '{value}'. Valid themes: {', '.join(theme_names())}"
        )

    coerced = coerce_value(value)
    try:
        settings_manager.set(key, coerced)
    except (SettingsValidationError, ValueError) as e:
        raise typer.BadParameter(str(e))
    console.print(f"[success]✓[/] {key} = [smartadd.accent2]{json.dumps(coerced)}[/]")


@config_app.command()
def reset() -> None:
    """Restore every setting to its default."""
    settings_manager.reset()
    console.print("[success]✓[/] Settings reset to defaults")


@config_app.command()
def path() -> None:
    """Print where the settings file lives."""
    console.print(str(settings_manager.config_path), markup=False, soft_wrap=True)


@config_app.command(name="list")
def list_cmd() -> None:
    """Show every setting."""
    console.print(_settings_table())
