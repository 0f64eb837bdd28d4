# ABOUTME: The `bookstock ls` command for listing catalog products.
# ABOUTME: Displays a Rich table of products with price, stock and category.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookstock.cli.options import db_option
from bookstock.db.catalog import ProductCatalog
from bookstock.db.connection import DEFAULT_DB_PATH, open_store

console = Console()


@click.command("ls")
@db_option
@click.option(
    "--category",
    "category_filter",
    default=None,
    help="Only show products in this category.",
)
def ls(db_path: Path | None, category_filter: str | None) -> None:
    """List all products in the catalog."""
    conn = open_store(db_path or DEFAULT_DB_PATH)
    try:
        records = ProductCatalog(conn).list_all()
    finally:
        conn.close()

    if category_filter:
        records = [r for r in records if r.category == category_filter]

    if not records:
        console.print("[yellow]No products in the catalog.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("Stock", justify="right")
    table.add_column("Category")

    for record in records:
        price = f"{record.price:g}" if record.price is not None else "—"
        stock = str(record.stock_quantity)
        if record.stock_status != "instock":
            stock = f"[red]{stock}[/red]"
        table.add_row(
            str(record.id),
            record.name,
            price,
            stock,
            record.category or "[dim]none[/dim]",
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} product(s)[/dim]")
