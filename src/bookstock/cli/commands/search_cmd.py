# ABOUTME: The `bookstock search` command for querying Google Books.
# ABOUTME: Lists matching volumes and, with --select, imports the books the operator picks.

from pathlib import Path

import click
from rich.console import Console

from bookstock.cli.context import open_context
from bookstock.cli.options import api_key_option, db_option, delay_option
from bookstock.cli.reporting import print_results, run_with_progress
from bookstock.cli.selection import SelectionSession
from bookstock.core.importer import ImportRunner, import_selected
from bookstock.metadata.googlebooks import MAX_RESULTS
from bookstock.metadata.provider import SearchFilter

console = Console()


@click.command("search")
@click.argument("query")
@click.option(
    "-f", "--filter",
    "filter_name",
    type=click.Choice([f.value for f in SearchFilter if f.value]),
    default=None,
    help="Restrict the query to the author or subject field.",
)
@click.option(
    "-n", "--max",
    "max_results",
    type=click.IntRange(1, MAX_RESULTS),
    default=MAX_RESULTS,
    show_default=True,
    help="Maximum number of results.",
)
@click.option(
    "--select",
    is_flag=True,
    default=False,
    help="Pick results to import and enter their price and quantity.",
)
@db_option
@api_key_option
@delay_option
def search(
    query: str,
    filter_name: str | None,
    max_results: int,
    select: bool,
    db_path: Path | None,
    api_key: str | None,
    delay: float,
) -> None:
    """Search Google Books for QUERY."""
    if not query.strip():
        console.print("[red]Search query is required.[/red]")
        raise SystemExit(1)

    ctx = open_context(db_path, api_key=api_key)
    try:
        if not ctx.provider.has_api_key:
            console.print(
                "[red]Google Books API key is not configured.[/red] "
                "Use `bookstock config set api_key KEY` or --api-key."
            )
            raise SystemExit(1)

        search_filter = SearchFilter(filter_name or "")
        books = ctx.provider.search(query, search_filter, max_results)
        if not books:
            console.print("[yellow]No books found.[/yellow]")
            return

        session = SelectionSession(
            console=console, default_category=ctx.settings.default_category
        )
        session.show(books)
        console.print(f"\n[dim]{len(books)} result(s)[/dim]")

        if not select:
            return

        chosen = session.select(books)
        if not chosen:
            console.print("[yellow]No books selected.[/yellow]")
            return

        requests = session.collect_requests(chosen)
        runner = ImportRunner(delay=delay)
        results = run_with_progress(
            console,
            len(requests),
            lambda on_result: import_selected(
                requests, ctx.reconciler, runner=runner, on_result=on_result
            ),
        )
    finally:
        ctx.close()

    print_results(console, results)
