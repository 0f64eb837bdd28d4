# ABOUTME: The `bookstock config` command group for importer settings.
# ABOUTME: Shows and sets stored settings and checks a Google Books API key.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookstock.cli.context import open_context
from bookstock.cli.options import db_option
from bookstock.core.settings import ImporterSettings

console = Console()


def _mask(secret: str) -> str:
    if not secret:
        return ""
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}{'*' * (len(secret) - 8)}{secret[-4:]}"


@click.group("config")
def config() -> None:
    """Show or change importer settings."""


@config.command("show")
@db_option
def show(db_path: Path | None) -> None:
    """Display all settings."""
    ctx = open_context(db_path)
    try:
        values = ctx.settings_store.load().to_mapping()
    finally:
        ctx.close()

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Key", style="bold", width=22)
    table.add_column("Value")
    for key, value in values.items():
        display = _mask(value) if key == "api_key" else value
        table.add_row(key, display or "[dim]—[/dim]")
    console.print(table)


@config.command("set")
@click.argument("key", type=click.Choice(ImporterSettings.keys()))
@click.argument("value")
@db_option
def set_value(key: str, value: str, db_path: Path | None) -> None:
    """Store a setting. Invalid values fall back to the setting's default."""
    ctx = open_context(db_path)
    try:
        settings = ctx.settings_store.set(key, value)
    finally:
        ctx.close()

    stored = settings.to_mapping()[key]
    display = _mask(stored) if key == "api_key" else stored
    console.print(f"[green]{key}[/green] = {display}")


@config.command("test-key")
@click.argument("key", required=False)
@db_option
def test_key(key: str | None, db_path: Path | None) -> None:
    """Check that an API key (default: the stored one) is accepted by Google Books."""
    ctx = open_context(db_path)
    try:
        candidate = key or ctx.settings.api_key
        if not candidate:
            console.print("[red]API key is required.[/red]")
            raise SystemExit(1)
        valid = ctx.provider.test_key(candidate)
    finally:
        ctx.close()

    if valid:
        console.print("[green]API key is valid![/green]")
        return
    console.print("[red]API key is invalid or connection failed.[/red]")
    raise SystemExit(1)
