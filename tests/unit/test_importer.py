# ABOUTME: Unit tests for ImportRunner and the line/batch import helpers.
# ABOUTME: Injects a recording sleep and in-memory providers, no network.

import pytest

from bookstock.core.batch import BookQueryLine
from bookstock.core.importer import (
    MISSING_KEY_MESSAGE,
    NOT_FOUND_MESSAGE,
    ImportProgress,
    ImportRunner,
    import_line,
    import_selected,
)
from bookstock.core.reconciler import ImportResult
from bookstock.core.settings import ImporterSettings
from bookstock.db.catalog import CatalogError
from bookstock.metadata.http import MetadataFetchError
from bookstock.metadata.provider import SearchFilter
from bookstock.metadata.types import CanonicalBook, ImportRequest


class FakeProvider:
    """In-memory BookSearchProvider keyed by exact title."""

    def __init__(self, books: dict[str, CanonicalBook], has_key: bool = True) -> None:
        self._books = books
        self._has_key = has_key
        self.searched: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def has_api_key(self) -> bool:
        return self._has_key

    def search_book(self, title: str) -> CanonicalBook | None:
        self.searched.append(title)
        return self._books.get(title)

    def search(self, query, search_filter=SearchFilter.NONE, max_results=40):
        return list(self._books.values())

    def get_by_isbn(self, isbn: str) -> CanonicalBook | None:
        return None

    def test_key(self, key: str) -> bool:
        return True


class RecordingReconciler:
    """Stands in for ImportReconciler and remembers what it was asked."""

    def __init__(self) -> None:
        self.requests: list[ImportRequest] = []

    def reconcile(self, request: ImportRequest) -> ImportResult:
        self.requests.append(request)
        return ImportResult(success=True, title=request.title, message="ok", catalog_id=1)


def _line(title: str, quantity: int = 2, price: float = 45.0) -> BookQueryLine:
    return BookQueryLine(
        title=title, quantity=quantity, price=price, line_number=1, raw_text=title
    )


def _ok(item: str) -> ImportResult:
    return ImportResult(success=True, title=item, message="ok")


class TestImportProgress:
    """Tests for progress percentages."""

    def test_percent(self) -> None:
        assert ImportProgress(1, 3).percent == 33
        assert ImportProgress(2, 3).percent == 67
        assert ImportProgress(0, 0).percent == 100


class TestImportRunner:
    """Tests for sequential processing."""

    def test_sleeps_only_between_items(self) -> None:
        sleeps: list[float] = []
        runner = ImportRunner(delay=0.5, sleep=sleeps.append)
        results = runner.run(["a", "b", "c"], _ok, str)
        assert [r.title for r in results] == ["a", "b", "c"]
        assert sleeps == [0.5, 0.5]

    def test_zero_delay_never_sleeps(self) -> None:
        sleeps: list[float] = []
        ImportRunner(delay=0, sleep=sleeps.append).run(["a", "b"], _ok, str)
        assert sleeps == []

    def test_progress_reported_per_item(self) -> None:
        seen: list[tuple[str, int, int]] = []
        ImportRunner(delay=0).run(
            ["a", "b"], _ok, str,
            on_result=lambda result, progress: seen.append(
                (result.title, progress.processed, progress.total)
            ),
        )
        assert seen == [("a", 1, 2), ("b", 2, 2)]

    @pytest.mark.parametrize(
        "error", [MetadataFetchError("timeout"), CatalogError("disk full")]
    )
    def test_failure_becomes_result(self, error: Exception) -> None:
        """A failing item yields a failed result and the batch continues."""

        def handler(item: str) -> ImportResult:
            if item == "bad":
                raise error
            return _ok(item)

        results = ImportRunner(delay=0).run(["bad", "good"], handler, str)
        assert len(results) == 2
        assert not results[0].success
        assert results[0].message == f"Import failed: {error}"
        assert results[1].success

    def test_unexpected_errors_propagate(self) -> None:
        def handler(item: str) -> ImportResult:
            raise KeyError(item)

        with pytest.raises(KeyError):
            ImportRunner(delay=0).run(["a"], handler, str)

    def test_empty_batch(self) -> None:
        assert ImportRunner(delay=0).run([], _ok, str) == []


class TestImportLine:
    """Tests for import_line."""

    def test_found_book_is_reconciled(self) -> None:
        provider = FakeProvider({"Dune": CanonicalBook(title="Dune")})
        reconciler = RecordingReconciler()
        result = import_line(
            _line("Dune"), provider, reconciler, ImporterSettings(default_category="books")
        )
        assert result.success
        request = reconciler.requests[0]
        assert request.price == 45.0
        assert request.quantity == 2
        assert request.category == "books"

    def test_category_override(self) -> None:
        provider = FakeProvider({"Dune": CanonicalBook(title="Dune")})
        reconciler = RecordingReconciler()
        import_line(_line("Dune"), provider, reconciler, ImporterSettings(), category="Sci-Fi")
        assert reconciler.requests[0].category == "Sci-Fi"

    def test_not_found(self) -> None:
        reconciler = RecordingReconciler()
        result = import_line(_line("Nope"), FakeProvider({}), reconciler, ImporterSettings())
        assert not result.success
        assert result.title == "Nope"
        assert result.message == NOT_FOUND_MESSAGE
        assert reconciler.requests == []

    def test_missing_key(self) -> None:
        provider = FakeProvider({"Dune": CanonicalBook(title="Dune")}, has_key=False)
        result = import_line(_line("Dune"), provider, RecordingReconciler(), ImporterSettings())
        assert result.message == MISSING_KEY_MESSAGE
        assert provider.searched == []


class TestImportSelected:
    """Tests for import_selected."""

    def test_one_result_per_request_in_order(self) -> None:
        reconciler = RecordingReconciler()
        requests = [ImportRequest(book=CanonicalBook(title=t)) for t in ("B", "A")]
        results = import_selected(
            requests, reconciler, runner=ImportRunner(delay=0)
        )
        assert [r.title for r in results] == ["B", "A"]
        assert reconciler.requests == requests
