# ABOUTME: Shared pytest fixtures for Bookstock tests.
# ABOUTME: Provides a temporary catalog database, stores, settings, and a cover image.

import sqlite3
from pathlib import Path

import pytest

from bookstock.core.images import ImagePipeline
from bookstock.core.reconciler import ImportReconciler
from bookstock.core.settings import ImporterSettings
from bookstock.db.catalog import ProductCatalog
from bookstock.db.connection import open_store
from bookstock.db.media import MediaStore
from tests.fixtures.fakes import FakeHttpClient, make_image_bytes
from tests.fixtures.googlebooks_responses import DUNE_COVER_URL


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a temporary catalog database."""
    return tmp_path / "catalog.db"


@pytest.fixture
def conn(db_path: Path) -> sqlite3.Connection:
    """An open catalog database, closed after the test."""
    connection = open_store(db_path)
    yield connection
    connection.close()


@pytest.fixture
def catalog(conn: sqlite3.Connection) -> ProductCatalog:
    return ProductCatalog(conn)


@pytest.fixture
def media(conn: sqlite3.Connection, tmp_path: Path) -> MediaStore:
    return MediaStore(conn, tmp_path / "media")


@pytest.fixture
def settings() -> ImporterSettings:
    """Settings with small cover dimensions to keep image work cheap."""
    return ImporterSettings(api_key="test-key", image_width=40, image_height=60)


@pytest.fixture
def cover_bytes() -> bytes:
    """A JPEG cover at a size that needs resizing."""
    return make_image_bytes((80, 120), "JPEG")


@pytest.fixture
def http_client(cover_bytes: bytes) -> FakeHttpClient:
    """Fake HTTP client that serves the Dune cover and nothing else."""
    return FakeHttpClient(images={DUNE_COVER_URL: (cover_bytes, "image/jpeg")})


@pytest.fixture
def images(
    http_client: FakeHttpClient, media: MediaStore, settings: ImporterSettings
) -> ImagePipeline:
    return ImagePipeline(http_client, media, settings)


@pytest.fixture
def reconciler(
    catalog: ProductCatalog, images: ImagePipeline, settings: ImporterSettings
) -> ImportReconciler:
    return ImportReconciler(catalog, images, settings, clock=lambda: "2026-01-01 00:00:00")
