# ABOUTME: The `bookstock validate` command for checking import text before submitting.
# ABOUTME: Reports malformed lines by number without contacting any remote service.

from typing import TextIO

import click
from rich.console import Console

from bookstock.core.batch import sample_format, validate_batch

console = Console()


@click.command("validate")
@click.argument("source", type=click.File("r", encoding="utf-8"), required=False)
@click.option(
    "--sample",
    is_flag=True,
    default=False,
    help="Print an example of the expected format and exit.",
)
def validate(source: TextIO | None, sample: bool) -> None:
    """Check a "Title | Quantity | Price" file and report malformed lines."""
    if sample:
        click.echo(sample_format())
        return

    if source is None:
        raise click.UsageError("SOURCE is required unless --sample is given.")

    result = validate_batch(source.read())

    for message in result.errors:
        console.print(f"[yellow]{message}[/yellow]")

    if not result.valid:
        console.print("[red]Import data is not valid.[/red]")
        raise SystemExit(1)

    console.print("[green]Import data is valid.[/green]")
