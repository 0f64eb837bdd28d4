# ABOUTME: Converts between product dataclasses and SQLite rows.
# ABOUTME: ProductDraft is what gets written; ProductRecord is what gets read back.

from dataclasses import dataclass
from typing import Any

IN_STOCK = "instock"
OUT_OF_STOCK = "outofstock"


def stock_status_for(quantity: int) -> str:
    return IN_STOCK if quantity > 0 else OUT_OF_STOCK


@dataclass
class ProductDraft:
    """Fields for a new catalog entry."""

    name: str
    description: str = ""
    short_description: str = ""
    price: float | None = None
    stock_quantity: int = 1
    status: str = "publish"

    @property
    def stock_status(self) -> str:
        return stock_status_for(self.stock_quantity)


@dataclass
class ProductRecord:
    """A stored catalog entry with its resolved category name."""

    id: int
    name: str
    status: str
    description: str
    short_description: str
    regular_price: float | None
    price: float | None
    manage_stock: bool
    stock_quantity: int
    stock_status: str
    category_id: int | None
    category: str | None
    cover_media_id: int | None
    date_created: str
    date_modified: str


def draft_to_row(draft: ProductDraft) -> dict[str, Any]:
    """Convert a ProductDraft to a dict suitable for INSERT.

    The price is written to both regular_price and price.
    """
    return {
        "name": draft.name,
        "status": draft.status,
        "description": draft.description,
        "short_description": draft.short_description,
        "regular_price": draft.price,
        "price": draft.price,
        "manage_stock": 1,
        "stock_quantity": draft.stock_quantity,
        "stock_status": draft.stock_status,
    }


def row_to_record(row: Any) -> ProductRecord:
    """Convert a products row joined with its category name to a ProductRecord."""
    return ProductRecord(
        id=row["id"],
        name=row["name"],
        status=row["status"],
        description=row["description"],
        short_description=row["short_description"],
        regular_price=row["regular_price"],
        price=row["price"],
        manage_stock=bool(row["manage_stock"]),
        stock_quantity=row["stock_quantity"],
        stock_status=row["stock_status"],
        category_id=row["category_id"],
        category=row["category_name"],
        cover_media_id=row["cover_media_id"],
        date_created=row["date_created"],
        date_modified=row["date_modified"],
    )
