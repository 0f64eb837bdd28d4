# ABOUTME: Import reconciliation: create, update, or skip a catalog product for a book.
# ABOUTME: Matches existing products by exact title and applies the duplicate policy.

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from bookstock.core.images import ImagePipeline
from bookstock.core.settings import DuplicateAction, ImporterSettings
from bookstock.core.text import short_description
from bookstock.db.catalog import CatalogError, ProductCatalog
from bookstock.db.mapping import ProductDraft
from bookstock.metadata.types import UNCATEGORIZED, ImportRequest

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = 1


@dataclass(frozen=True)
class ImportResult:
    """Outcome of importing one item, shown to the operator as one row."""

    success: bool
    title: str
    message: str
    catalog_id: int | None = None
    product_url: str | None = None


def _now() -> str:
    return datetime.now().isoformat(sep=" ", timespec="seconds")


class ImportReconciler:
    """Decides per ImportRequest whether to create, update, or skip a product.

    Duplicate detection is by exact, case-sensitive title. With
    settings.match_isbn, an ISBN match on stored metadata is tried first.
    """

    def __init__(
        self,
        catalog: ProductCatalog,
        images: ImagePipeline,
        settings: ImporterSettings,
        *,
        clock: Callable[[], str] = _now,
    ) -> None:
        self._catalog = catalog
        self._images = images
        self._settings = settings
        self._clock = clock

    def reconcile(self, request: ImportRequest) -> ImportResult:
        """Import one request according to the configured duplicate policy."""
        title = request.title.strip()
        if not title:
            return ImportResult(success=False, title="", message="Book title is required")

        existing_id = self.find_existing(request)
        if existing_id is None:
            return self._create(request)

        if self._settings.duplicate_action is DuplicateAction.UPDATE:
            return self._update(existing_id, request)

        logger.info("Skipping %r: product %d already exists", request.title, existing_id)
        return ImportResult(
            success=False,
            title=request.title,
            message="Book already exists (skipped)",
            catalog_id=existing_id,
        )

    def find_existing(self, request: ImportRequest) -> int | None:
        """ID of the product this request duplicates, if any."""
        if self._settings.match_isbn and request.book.isbn:
            product_id = self._catalog.find_by_meta("isbn", request.book.isbn)
            if product_id is not None:
                return product_id
        return self._catalog.find_by_title(request.title)

    def product_url(self, product_id: int) -> str:
        return f"{self._settings.admin_url}/products/{product_id}/edit"

    def _create(self, request: ImportRequest) -> ImportResult:
        book = request.book
        quantity = request.quantity if request.quantity is not None else DEFAULT_QUANTITY
        draft = ProductDraft(
            name=book.title,
            description=book.description,
            short_description=short_description(book.description) if book.description else "",
            price=request.price,
            stock_quantity=quantity,
        )

        product_id: int | None = None
        try:
            product_id = self._catalog.create_product(draft)
            self._assign_category(product_id, request.category or UNCATEGORIZED)
            self._write_metadata(product_id, request)
        except CatalogError as exc:
            logger.warning("Creating product for %r failed: %s", book.title, exc)
            # A failed create leaves no product behind.
            if product_id is not None:
                self._catalog.delete_product(product_id)
            return ImportResult(
                success=False,
                title=book.title,
                message=f"Failed to create product: {exc}",
            )

        media_id = self._images.cover_or_placeholder(book.image_url, book.title)
        if media_id is not None:
            self._catalog.set_cover(product_id, media_id)

        logger.info("Created product %d for %r", product_id, book.title)
        return ImportResult(
            success=True,
            title=book.title,
            message="Product created successfully",
            catalog_id=product_id,
            product_url=self.product_url(product_id),
        )

    def _update(self, product_id: int, request: ImportRequest) -> ImportResult:
        book = request.book
        if self._catalog.get_by_id(product_id) is None:
            return ImportResult(success=False, title=book.title, message="Product not found")

        fields: dict[str, str | float | int | None] = {}
        if book.description:
            fields["description"] = book.description
            fields["short_description"] = short_description(book.description)
        if request.price is not None:
            fields["regular_price"] = request.price
            fields["price"] = request.price
        if request.quantity is not None:
            fields["stock_quantity"] = request.quantity

        try:
            self._catalog.update_product(product_id, **fields)
            if request.category:
                self._assign_category(product_id, request.category)
            self._write_metadata(product_id, request)
        except CatalogError as exc:
            logger.warning("Updating product %d for %r failed: %s", product_id, book.title, exc)
            return ImportResult(
                success=False,
                title=book.title,
                message=f"Failed to update product: {exc}",
                catalog_id=product_id,
            )

        # A missing or unfetchable cover leaves the current one in place.
        if book.image_url:
            media_id = self._images.fetch_cover(book.image_url, book.title)
            if media_id is not None:
                self._catalog.set_cover(product_id, media_id)

        logger.info("Updated product %d for %r", product_id, book.title)
        return ImportResult(
            success=True,
            title=book.title,
            message="Product updated successfully",
            catalog_id=product_id,
            product_url=self.product_url(product_id),
        )

    def _assign_category(self, product_id: int, category: str) -> None:
        category_id = self._catalog.get_or_create_category(category)
        if category_id is None:
            logger.warning("No category assigned to product %d (%r)", product_id, category)
            return
        self._catalog.set_category(product_id, category_id)

    def _write_metadata(self, product_id: int, request: ImportRequest) -> None:
        fields = request.book.metadata_fields()
        fields["imported_at"] = self._clock()
        self._catalog.set_meta(product_id, fields)
