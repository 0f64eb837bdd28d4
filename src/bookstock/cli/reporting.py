# ABOUTME: Rich rendering shared by the import and search commands.
# ABOUTME: Progress bar around the sequential runner, per-row result table, and summary line.

from collections.abc import Callable

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from bookstock.core.importer import ImportProgress, ResultCallback
from bookstock.core.reconciler import ImportResult


def run_with_progress(
    console: Console,
    total: int,
    run: Callable[[ResultCallback], list[ImportResult]],
) -> list[ImportResult]:
    """Drive run(on_result) while showing a processed/total progress bar."""
    with Progress(
        TextColumn("[bold]Importing[/bold]"),
        BarColumn(),
        TaskProgressColumn(),
        MofNCompleteColumn(),
        TextColumn("{task.description}", style="dim"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("", total=total)

        def on_result(result: ImportResult, state: ImportProgress) -> None:
            progress.update(task, completed=state.processed, description=result.title)

        return run(on_result)


def print_results(console: Console, results: list[ImportResult]) -> None:
    """Render one row per result followed by success/failure counts."""
    if not results:
        console.print("[yellow]Nothing was imported.[/yellow]")
        return

    table = Table()
    table.add_column("Status", width=8)
    table.add_column("Title", style="bold")
    table.add_column("Message")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Link", style="dim")

    for result in results:
        status = "[green]✓ OK[/green]" if result.success else "[red]✗ Failed[/red]"
        table.add_row(
            status,
            result.title or "—",
            result.message,
            str(result.catalog_id) if result.catalog_id is not None else "",
            result.product_url or "",
        )

    console.print(table)

    succeeded = sum(1 for r in results if r.success)
    failed = len(results) - succeeded
    parts = []
    if succeeded:
        parts.append(f"[green]{succeeded} succeeded[/green]")
    if failed:
        parts.append(f"[red]{failed} failed[/red]")
    console.print(", ".join(parts))
