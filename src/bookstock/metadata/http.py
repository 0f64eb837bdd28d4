# ABOUTME: HTTP client abstraction for the remote book-search API and cover downloads.
# ABOUTME: Provides rate limiting, per-call timeouts, and an injectable transport for testing.

import time
from typing import Any, Protocol, runtime_checkable

import httpx

CONTENT_TIMEOUT = 30.0
KEY_CHECK_TIMEOUT = 15.0


class MetadataFetchError(Exception):
    """Raised when an HTTP request to the search provider or an image host fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the HTTP operations the importer needs."""

    def get(
        self, url: str, params: dict[str, str] | None = None, timeout: float = CONTENT_TIMEOUT
    ) -> dict[str, Any]: ...

    def get_status(
        self, url: str, params: dict[str, str] | None = None, timeout: float = KEY_CHECK_TIMEOUT
    ) -> int: ...

    def get_bytes(self, url: str, timeout: float = CONTENT_TIMEOUT) -> tuple[bytes, str]: ...


class BookstockHttpClient:
    """HTTP client with rate limiting for search and image requests.

    Wraps httpx.Client. Each call is a single request/response exchange:
    a timeout, transport error or non-200 status fails that call.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "bookstock/0.1.0"},
            "timeout": CONTENT_TIMEOUT,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._last_request_time: float = 0.0

    def get(
        self, url: str, params: dict[str, str] | None = None, timeout: float = CONTENT_TIMEOUT
    ) -> dict[str, Any]:
        """Send a GET request and decode the JSON body.

        Raises:
            MetadataFetchError: On transport errors, non-200 status, or a
                body that is not a JSON object.
        """
        response = self._send(url, params, timeout)
        if response.status_code != 200:
            raise MetadataFetchError(f"HTTP {response.status_code} from {url}")

        try:
            data = response.json()
        except ValueError as exc:
            raise MetadataFetchError(f"Malformed JSON from {url}: {exc}") from exc

        if not isinstance(data, dict):
            raise MetadataFetchError(f"Unexpected JSON payload from {url}")
        return data

    def get_status(
        self, url: str, params: dict[str, str] | None = None, timeout: float = KEY_CHECK_TIMEOUT
    ) -> int:
        """Send a GET request and return only the status code."""
        return self._send(url, params, timeout).status_code

    def get_bytes(self, url: str, timeout: float = CONTENT_TIMEOUT) -> tuple[bytes, str]:
        """Download a binary body.

        Returns:
            (body, content_type) with content_type lowercased and stripped
            of parameters.

        Raises:
            MetadataFetchError: On transport errors, non-200 status or an
                empty body.
        """
        response = self._send(url, None, timeout)
        if response.status_code != 200:
            raise MetadataFetchError(f"HTTP {response.status_code} from {url}")
        if not response.content:
            raise MetadataFetchError(f"Empty body from {url}")

        content_type = response.headers.get("content-type", "")
        return response.content, content_type.split(";", 1)[0].strip().lower()

    def close(self) -> None:
        self._client.close()

    def _send(
        self, url: str, params: dict[str, str] | None, timeout: float
    ) -> httpx.Response:
        self._rate_limit()
        try:
            return self._client.get(url, params=params, timeout=timeout)
        except httpx.HTTPError as exc:
            raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
