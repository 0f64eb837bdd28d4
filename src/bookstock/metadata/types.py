# ABOUTME: Typed records exchanged between the search provider and the reconciler.
# ABOUTME: CanonicalBook is the schema-stable book; ImportRequest adds price, stock and category.

from dataclasses import dataclass

UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class CanonicalBook:
    """A book as returned by the search provider, flattened and normalized.

    Absent source fields are empty strings or zero, never None, so callers
    never have to tell "missing" from "empty".
    """

    title: str = ""
    source_id: str = ""
    isbn_10: str = ""
    isbn_13: str = ""
    subtitle: str = ""
    authors: str = ""
    publisher: str = ""
    published_date: str = ""
    description: str = ""
    page_count: int = 0
    categories: str = ""
    language: str = ""
    image_url: str = ""
    preview_link: str = ""
    info_link: str = ""
    list_price: float = 0.0

    @property
    def isbn(self) -> str:
        """Best available ISBN: ISBN-13 when present, else ISBN-10."""
        return self.isbn_13 or self.isbn_10

    def metadata_fields(self) -> dict[str, str]:
        """Non-empty descriptive fields stored alongside a catalog entry."""
        fields = {
            "source_id": self.source_id,
            "isbn": self.isbn,
            "isbn_10": self.isbn_10,
            "isbn_13": self.isbn_13,
            "authors": self.authors,
            "publisher": self.publisher,
            "published_date": self.published_date,
            "page_count": str(self.page_count) if self.page_count else "",
            "categories": self.categories,
            "language": self.language,
            "preview_link": self.preview_link,
            "info_link": self.info_link,
        }
        return {key: value for key, value in fields.items() if value}


@dataclass(frozen=True)
class ImportRequest:
    """A CanonicalBook plus the price, quantity and category chosen by the operator.

    price and quantity may be None; the reconciler then leaves those fields
    alone on update and uses defaults on create.
    """

    book: CanonicalBook
    category: str = UNCATEGORIZED
    price: float | None = None
    quantity: int | None = None

    @classmethod
    def build(
        cls,
        book: CanonicalBook,
        *,
        price: float | None,
        quantity: int | None,
        category: str | None = None,
        default_category: str = "",
    ) -> "ImportRequest":
        """Merge operator input into a request, resolving the category default."""
        resolved = (category or "").strip() or default_category.strip() or UNCATEGORIZED
        return cls(book=book, category=resolved, price=price, quantity=quantity)

    @property
    def title(self) -> str:
        return self.book.title
