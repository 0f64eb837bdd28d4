# ABOUTME: The `bookstock import` command for "Title | Quantity | Price" text batches.
# ABOUTME: Looks each line up on Google Books and creates or updates catalog products.

from pathlib import Path
from typing import TextIO

import click
from rich.console import Console

from bookstock.cli.context import open_context
from bookstock.cli.options import api_key_option, db_option, delay_option
from bookstock.cli.reporting import print_results, run_with_progress
from bookstock.core.batch import parse_batch
from bookstock.core.importer import ImportRunner, import_text

console = Console()


@click.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@db_option
@api_key_option
@delay_option
@click.option(
    "-c", "--category",
    default=None,
    help="Category for every imported book (default: the configured default category).",
)
def import_command(
    source: TextIO,
    db_path: Path | None,
    api_key: str | None,
    delay: float,
    category: str | None,
) -> None:
    """Import books listed one per line as "Title | Quantity | Price".

    SOURCE is a text file, or - to read from standard input.
    """
    text = source.read()
    if not text.strip():
        console.print("[red]No data provided.[/red]")
        raise SystemExit(1)

    lines = parse_batch(text)
    if not lines:
        console.print("[red]No valid books found in import data.[/red]")
        raise SystemExit(1)

    ctx = open_context(db_path, api_key=api_key)
    try:
        if not ctx.provider.has_api_key:
            console.print(
                "[red]Google Books API key is not configured.[/red] "
                "Use `bookstock config set api_key KEY` or --api-key."
            )
            raise SystemExit(1)

        console.print(f"Found [bold]{len(lines)}[/bold] book(s) to import\n")
        runner = ImportRunner(delay=delay)
        results = run_with_progress(
            console,
            len(lines),
            lambda on_result: import_text(
                text,
                ctx.provider,
                ctx.reconciler,
                ctx.settings,
                category=category,
                runner=runner,
                on_result=on_result,
            ),
        )
    finally:
        ctx.close()

    print_results(console, results)
