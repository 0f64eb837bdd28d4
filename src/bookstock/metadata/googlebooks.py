# ABOUTME: Google Books metadata provider implementation.
# ABOUTME: Looks up volumes by title, free-text query or ISBN and maps them to CanonicalBook.

import logging
import re

from bookstock.metadata.googlebooks_parser import parse_volumes
from bookstock.metadata.http import KEY_CHECK_TIMEOUT, HttpClient, MetadataFetchError
from bookstock.metadata.provider import SearchFilter
from bookstock.metadata.types import CanonicalBook

logger = logging.getLogger(__name__)

_GB_BASE = "https://www.googleapis.com/books/v1"
_VOLUMES_URL = f"{_GB_BASE}/volumes"

# Hard ceiling imposed by the volumes endpoint.
MAX_RESULTS = 40


def scoped_query(query: str, search_filter: SearchFilter) -> str:
    """Restrict a query to the author or subject field when a filter is set."""
    if search_filter is SearchFilter.NONE:
        return query
    return f"in{search_filter.value}:{query}"


def clamp_max_results(max_results: int) -> int:
    return max(1, min(max_results, MAX_RESULTS))


class GoogleBooksProvider:
    """Book search backed by the Google Books volumes API.

    Every public lookup degrades to None or [] on a missing API key, a
    remote failure, or an empty result, logging the cause.
    """

    def __init__(self, http_client: HttpClient, api_key: str) -> None:
        self._http = http_client
        self._api_key = api_key.strip()

    @property
    def name(self) -> str:
        return "googlebooks"

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def search_book(self, title: str) -> CanonicalBook | None:
        """Return the single most relevant volume for a title, or None."""
        books = self._volumes(title.strip(), max_results=1)
        return books[0] if books else None

    def search(
        self,
        query: str,
        search_filter: SearchFilter = SearchFilter.NONE,
        max_results: int = MAX_RESULTS,
    ) -> list[CanonicalBook]:
        """Search volumes by free text, optionally scoped to author or subject.

        Results are ordered by relevance; max_results is clamped to 1..40.
        """
        return self._volumes(
            scoped_query(query.strip(), search_filter),
            max_results=clamp_max_results(max_results),
            order_by="relevance",
        )

    def get_by_isbn(self, isbn: str) -> CanonicalBook | None:
        """Look up a volume by ISBN-10 or ISBN-13."""
        clean_isbn = re.sub(r"[\s-]", "", isbn)
        if not clean_isbn:
            return None
        books = self._volumes(f"isbn:{clean_isbn}")
        return books[0] if books else None

    def test_key(self, key: str) -> bool:
        """Check a key against the API; valid means an HTTP 200, whatever the results."""
        key = key.strip() or self._api_key
        if not key:
            return False

        params = {"q": "test", "key": key, "maxResults": "1"}
        try:
            status = self._http.get_status(_VOLUMES_URL, params=params, timeout=KEY_CHECK_TIMEOUT)
        except MetadataFetchError as exc:
            logger.warning("API key check failed: %s", exc)
            return False
        return status == 200

    def _volumes(
        self, query: str, *, max_results: int | None = None, order_by: str | None = None
    ) -> list[CanonicalBook]:
        if not self._api_key:
            logger.warning("Google Books API key is not configured; skipping search for %r", query)
            return []
        if not query:
            return []

        params: dict[str, str] = {"q": query, "key": self._api_key}
        if max_results is not None:
            params["maxResults"] = str(max_results)
        if order_by:
            params["orderBy"] = order_by

        try:
            data = self._http.get(_VOLUMES_URL, params=params)
        except MetadataFetchError as exc:
            logger.warning("Google Books search failed for %r: %s", query, exc)
            return []

        books = parse_volumes(data)
        logger.debug("Google Books returned %d volume(s) for %r", len(books), query)
        return books
