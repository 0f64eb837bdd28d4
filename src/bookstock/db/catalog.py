# ABOUTME: CRUD operations for the Bookstock product catalog.
# ABOUTME: Create/update products, title lookup, on-demand categories, metadata and covers.

import logging
import sqlite3

from bookstock.core.text import slugify
from bookstock.db.mapping import (
    ProductDraft,
    ProductRecord,
    draft_to_row,
    row_to_record,
    stock_status_for,
)

logger = logging.getLogger(__name__)

_SELECT_PRODUCTS = (
    "SELECT p.*, c.name AS category_name FROM products p "
    "LEFT JOIN categories c ON p.category_id = c.id"
)

_UPDATABLE_COLUMNS = frozenset(
    {
        "name",
        "status",
        "description",
        "short_description",
        "regular_price",
        "price",
        "stock_quantity",
        "stock_status",
    }
)


class CatalogError(Exception):
    """Raised when a catalog write cannot be completed."""


class ProductCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for catalog products."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def create_product(self, draft: ProductDraft) -> int:
        """Insert a new product.

        Returns:
            The new product's ID.

        Raises:
            CatalogError: If the row could not be written.
        """
        row = draft_to_row(draft)
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)

        try:
            cursor = self._conn.execute(
                f"INSERT INTO products ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise CatalogError(f"Could not create product '{draft.name}': {exc}") from exc

        return cursor.lastrowid  # type: ignore[return-value]

    def update_product(self, product_id: int, **fields: str | float | int | None) -> None:
        """Update one or more columns on an existing product.

        Setting stock_quantity also recomputes stock_status.

        Raises:
            CatalogError: If the product does not exist or the write fails.
            ValueError: If a field is not an updatable column.
        """
        if not fields:
            return

        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Not updatable: {', '.join(sorted(unknown))}")

        if "stock_quantity" in fields and fields["stock_quantity"] is not None:
            fields["stock_status"] = stock_status_for(int(fields["stock_quantity"]))

        set_clause = ", ".join(f"{k} = ?" for k in fields)
        set_clause += ", date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now')"
        values = [*fields.values(), product_id]

        try:
            cursor = self._conn.execute(
                f"UPDATE products SET {set_clause} WHERE id = ?",
                values,
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise CatalogError(f"Could not update product {product_id}: {exc}") from exc

        if cursor.rowcount == 0:
            raise CatalogError(f"Product with id {product_id} not found")

    def delete_product(self, product_id: int) -> None:
        """Remove a product; its metadata rows go with it.

        Raises:
            CatalogError: If the row could not be deleted.
        """
        try:
            self._conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            self._conn.commit()
        except sqlite3.Error as exc:
            raise CatalogError(f"Could not delete product {product_id}: {exc}") from exc

    def get_by_id(self, product_id: int) -> ProductRecord | None:
        """Retrieve a product by its row ID."""
        cursor = self._conn.execute(f"{_SELECT_PRODUCTS} WHERE p.id = ?", (product_id,))
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def find_by_title(self, title: str) -> int | None:
        """ID of the oldest product whose name equals title exactly (case-sensitive)."""
        cursor = self._conn.execute(
            "SELECT id FROM products WHERE name = ? ORDER BY id LIMIT 1", (title,)
        )
        row = cursor.fetchone()
        return row[0] if row else None

    def find_by_meta(self, key: str, value: str) -> int | None:
        """ID of the oldest product carrying the given metadata value."""
        cursor = self._conn.execute(
            "SELECT product_id FROM product_meta WHERE key = ? AND value = ? "
            "ORDER BY product_id LIMIT 1",
            (key, value),
        )
        row = cursor.fetchone()
        return row[0] if row else None

    def list_all(self) -> list[ProductRecord]:
        """Return all products ordered by name."""
        cursor = self._conn.execute(f"{_SELECT_PRODUCTS} ORDER BY p.name, p.id")
        return [row_to_record(row) for row in cursor.fetchall()]

    # --- Category operations ---

    def find_category(self, name: str) -> int | None:
        cursor = self._conn.execute("SELECT id FROM categories WHERE name = ?", (name,))
        row = cursor.fetchone()
        return row[0] if row else None

    def find_category_by_slug(self, slug: str) -> int | None:
        cursor = self._conn.execute("SELECT id FROM categories WHERE slug = ?", (slug,))
        row = cursor.fetchone()
        return row[0] if row else None

    def get_or_create_category(self, name: str) -> int | None:
        """Return the category ID for name, creating the category if needed.

        If creation collides (another category already owns the slug), the
        existing category with that slug is used. Returns None when neither
        works.
        """
        existing = self.find_category(name)
        if existing is not None:
            return existing

        slug = slugify(name)
        try:
            cursor = self._conn.execute(
                "INSERT INTO categories (name, slug) VALUES (?, ?)", (name, slug)
            )
            self._conn.commit()
            return cursor.lastrowid
        except sqlite3.IntegrityError as exc:
            self._conn.rollback()
            logger.warning("Could not create category %r (%s); falling back to slug %r",
                           name, exc, slug)
            return self.find_category_by_slug(slug)

    def set_category(self, product_id: int, category_id: int) -> None:
        self._conn.execute(
            "UPDATE products SET category_id = ? WHERE id = ?", (category_id, product_id)
        )
        self._conn.commit()

    # --- Metadata and cover ---

    def set_meta(self, product_id: int, fields: dict[str, str]) -> None:
        """Upsert string metadata fields on a product."""
        if not fields:
            return
        try:
            self._conn.executemany(
                "INSERT INTO product_meta (product_id, key, value) VALUES (?, ?, ?) "
                "ON CONFLICT(product_id, key) DO UPDATE SET value = excluded.value",
                [(product_id, key, value) for key, value in fields.items()],
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise CatalogError(f"Could not store metadata for product {product_id}: {exc}") from exc

    def get_meta(self, product_id: int) -> dict[str, str]:
        cursor = self._conn.execute(
            "SELECT key, value FROM product_meta WHERE product_id = ? ORDER BY key",
            (product_id,),
        )
        return {row[0]: row[1] for row in cursor.fetchall()}

    def set_cover(self, product_id: int, media_id: int) -> None:
        self._conn.execute(
            "UPDATE products SET cover_media_id = ? WHERE id = ?", (media_id, product_id)
        )
        self._conn.commit()
