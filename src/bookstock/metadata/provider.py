# ABOUTME: BookSearchProvider protocol defining the contract for book search services.
# ABOUTME: The Google Books provider implements it; tests substitute in-memory fakes.

from enum import Enum
from typing import Protocol, runtime_checkable

from bookstock.metadata.types import CanonicalBook


class SearchFilter(str, Enum):
    """Optional scope for a multi-result search."""

    NONE = ""
    AUTHOR = "author"
    SUBJECT = "subject"


@runtime_checkable
class BookSearchProvider(Protocol):
    """Protocol for remote book lookup services.

    Lookups never raise for remote failures: single lookups return None and
    multi-result searches return an empty list.
    """

    @property
    def name(self) -> str: ...

    @property
    def has_api_key(self) -> bool: ...

    def search_book(self, title: str) -> CanonicalBook | None: ...

    def search(
        self, query: str, search_filter: SearchFilter = SearchFilter.NONE, max_results: int = 40
    ) -> list[CanonicalBook]: ...

    def get_by_isbn(self, isbn: str) -> CanonicalBook | None: ...

    def test_key(self, key: str) -> bool: ...
