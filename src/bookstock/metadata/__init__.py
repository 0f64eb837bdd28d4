# ABOUTME: Metadata package for remote book lookup and the records it produces.
# ABOUTME: Exports CanonicalBook, ImportRequest, the provider protocol and Google Books provider.

from bookstock.metadata.googlebooks import GoogleBooksProvider
from bookstock.metadata.http import BookstockHttpClient, HttpClient, MetadataFetchError
from bookstock.metadata.provider import BookSearchProvider, SearchFilter
from bookstock.metadata.types import CanonicalBook, ImportRequest

__all__ = [
    "BookSearchProvider",
    "BookstockHttpClient",
    "CanonicalBook",
    "GoogleBooksProvider",
    "HttpClient",
    "ImportRequest",
    "MetadataFetchError",
    "SearchFilter",
]
