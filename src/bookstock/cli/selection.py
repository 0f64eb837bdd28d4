# ABOUTME: Interactive selection of search results for import.
# ABOUTME: Displays books in a Rich table, prompts for a selection, then price/quantity/category.

import re

import click
from rich.console import Console
from rich.table import Table

from bookstock.core.prices import parse_price, parse_quantity
from bookstock.metadata.types import CanonicalBook, ImportRequest

_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$")


def parse_selection(choice: str, count: int) -> list[int] | None:
    """Turn input like "1,3-5" into zero-based indices.

    "a" selects everything. Returns None if any part is malformed or out of
    range. Duplicates are dropped while keeping the first-seen order.
    """
    choice = choice.strip().lower()
    if choice in ("a", "all"):
        return list(range(count))

    indices: list[int] = []
    for part in choice.split(","):
        part = part.strip()
        if not part:
            continue
        match = _RANGE_RE.match(part)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                return None
            numbers = range(start, end + 1)
        elif part.isdigit():
            numbers = range(int(part), int(part) + 1)
        else:
            return None

        for number in numbers:
            if not 1 <= number <= count:
                return None
            if number - 1 not in indices:
                indices.append(number - 1)

    return indices or None


class SelectionSession:
    """Interactive pick-and-price flow for search results."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        default_category: str = "",
    ) -> None:
        self._console = console or Console()
        self._default_category = default_category

    def show(self, books: list[CanonicalBook]) -> None:
        """Render search results as a numbered table."""
        table = Table(title="Search Results")
        table.add_column("#", style="bold", width=3)
        table.add_column("Title")
        table.add_column("Authors")
        table.add_column("ISBN")
        table.add_column("Published")
        table.add_column("List price", justify="right")

        for i, book in enumerate(books, start=1):
            title = f"{book.title}: {book.subtitle}" if book.subtitle else book.title
            table.add_row(
                str(i),
                title or "—",
                book.authors or "—",
                book.isbn or "—",
                book.published_date or "—",
                f"{book.list_price:g}" if book.list_price else "—",
            )

        self._console.print(table)

    def select(self, books: list[CanonicalBook]) -> list[CanonicalBook]:
        """Prompt until the operator picks books or skips. Empty list means skip."""
        if not books:
            return []

        while True:
            choice = click.prompt(
                "[1-N, e.g. 1,3-5] Select  [a] All  [v1-vN] View details  [s] Skip",
                type=str,
                default="s",
            )
            lowered = choice.strip().lower()

            if lowered == "s":
                return []

            if lowered.startswith("v"):
                try:
                    idx = int(lowered[1:]) - 1
                except ValueError:
                    continue
                if 0 <= idx < len(books):
                    self._show_detail(books[idx])
                continue

            indices = parse_selection(choice, len(books))
            if indices is None:
                self._console.print("[red]Invalid selection.[/red]")
                continue
            return [books[i] for i in indices]

    def collect_requests(self, books: list[CanonicalBook]) -> list[ImportRequest]:
        """Ask for price, quantity and category for each selected book."""
        requests = []
        for book in books:
            self._console.print(f"\n[bold]{book.title}[/bold]")
            price = parse_price(click.prompt("  Price", type=str))
            quantity = parse_quantity(click.prompt("  Quantity", type=str, default="1"))
            category = click.prompt(
                "  Category", type=str, default=self._default_category or "Uncategorized"
            )
            requests.append(
                ImportRequest.build(
                    book,
                    price=price,
                    quantity=quantity,
                    category=category,
                    default_category=self._default_category,
                )
            )
        return requests

    def _show_detail(self, book: CanonicalBook) -> None:
        detail = Table(title="Book Details", show_header=False)
        detail.add_column("Field", style="bold")
        detail.add_column("Value")

        fields = [
            ("Title", book.title),
            ("Subtitle", book.subtitle),
            ("Authors", book.authors),
            ("Publisher", book.publisher),
            ("Published", book.published_date),
            ("ISBN-13", book.isbn_13),
            ("ISBN-10", book.isbn_10),
            ("Pages", str(book.page_count) if book.page_count else ""),
            ("Categories", book.categories),
            ("Language", book.language),
            ("Description", book.description),
        ]
        for label, value in fields:
            detail.add_row(label, value or "—")

        self._console.print(detail)
