# ABOUTME: Sequential import orchestration for text batches and selected search results.
# ABOUTME: A single worker drains a queue one item at a time with a fixed inter-item delay.

import logging
import sqlite3
import time
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from bookstock.core.batch import BookQueryLine, parse_batch
from bookstock.core.reconciler import ImportReconciler, ImportResult
from bookstock.core.settings import ImporterSettings
from bookstock.db.catalog import CatalogError
from bookstock.metadata.http import MetadataFetchError
from bookstock.metadata.provider import BookSearchProvider
from bookstock.metadata.types import ImportRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DELAY = 0.5

MISSING_KEY_MESSAGE = "Google Books API key is not configured"
NOT_FOUND_MESSAGE = "Book not found in Google Books API"


@dataclass(frozen=True)
class ImportProgress:
    """Items processed so far out of the batch total."""

    processed: int
    total: int

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 100
        return round(self.processed / self.total * 100)


# Called after every item with its result and the updated progress.
ResultCallback = Callable[[ImportResult, ImportProgress], None]


class ImportRunner:
    """Processes queued items strictly one after another.

    Each item yields exactly one ImportResult. Failed items are not retried
    and never stop the batch. Between items the runner pauses for `delay`
    seconds to stay under the remote API's rate limits.
    """

    def __init__(
        self,
        *,
        delay: float = DEFAULT_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._delay = max(delay, 0.0)
        self._sleep = sleep

    def iter_results(
        self,
        items: Iterable[T],
        handler: Callable[[T], ImportResult],
        describe: Callable[[T], str],
    ) -> Iterator[tuple[ImportResult, ImportProgress]]:
        """Yield (result, progress) as each queued item completes."""
        queue = deque(items)
        total = len(queue)
        processed = 0

        while queue:
            item = queue.popleft()
            try:
                result = handler(item)
            except (MetadataFetchError, CatalogError, sqlite3.Error) as exc:
                logger.warning("Import of %r failed: %s", describe(item), exc)
                result = ImportResult(
                    success=False, title=describe(item), message=f"Import failed: {exc}"
                )

            processed += 1
            yield result, ImportProgress(processed=processed, total=total)

            if queue and self._delay:
                self._sleep(self._delay)

    def run(
        self,
        items: Iterable[T],
        handler: Callable[[T], ImportResult],
        describe: Callable[[T], str],
        *,
        on_result: ResultCallback | None = None,
    ) -> list[ImportResult]:
        """Process every item and return the results in input order."""
        results = []
        for result, progress in self.iter_results(items, handler, describe):
            results.append(result)
            if on_result is not None:
                on_result(result, progress)
        return results


def import_line(
    line: BookQueryLine,
    provider: BookSearchProvider,
    reconciler: ImportReconciler,
    settings: ImporterSettings,
    *,
    category: str | None = None,
) -> ImportResult:
    """Search for one parsed line and reconcile the best match."""
    if not provider.has_api_key:
        return ImportResult(success=False, title=line.title, message=MISSING_KEY_MESSAGE)

    book = provider.search_book(line.title)
    if book is None:
        return ImportResult(success=False, title=line.title, message=NOT_FOUND_MESSAGE)

    request = ImportRequest.build(
        book,
        price=line.price,
        quantity=line.quantity,
        category=category,
        default_category=settings.default_category,
    )
    return reconciler.reconcile(request)


def import_text(
    text: str,
    provider: BookSearchProvider,
    reconciler: ImportReconciler,
    settings: ImporterSettings,
    *,
    category: str | None = None,
    runner: ImportRunner | None = None,
    on_result: ResultCallback | None = None,
) -> list[ImportResult]:
    """Import every valid line of a text batch; malformed lines are dropped."""
    lines = parse_batch(text)
    runner = runner or ImportRunner()
    return runner.run(
        lines,
        lambda line: import_line(line, provider, reconciler, settings, category=category),
        lambda line: line.title,
        on_result=on_result,
    )


def import_selected(
    requests: list[ImportRequest],
    reconciler: ImportReconciler,
    *,
    runner: ImportRunner | None = None,
    on_result: ResultCallback | None = None,
) -> list[ImportResult]:
    """Reconcile already-selected books one-for-one, in input order."""
    runner = runner or ImportRunner()
    return runner.run(
        requests,
        reconciler.reconcile,
        lambda request: request.title,
        on_result=on_result,
    )
