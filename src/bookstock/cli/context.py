# ABOUTME: Wires settings, stores, provider, image pipeline and reconciler for a command.
# ABOUTME: One ImporterContext per CLI invocation; close() releases HTTP and DB resources.

import sqlite3
from dataclasses import dataclass
from pathlib import Path

from bookstock.core.images import ImagePipeline
from bookstock.core.reconciler import ImportReconciler
from bookstock.core.settings import ImporterSettings
from bookstock.db.catalog import ProductCatalog
from bookstock.db.connection import DEFAULT_DB_PATH, media_dir_for, open_store
from bookstock.db.media import MediaStore
from bookstock.db.settings_store import SettingsStore
from bookstock.metadata.googlebooks import GoogleBooksProvider
from bookstock.metadata.http import BookstockHttpClient


@dataclass
class ImporterContext:
    """Everything a command needs, built from one database and its settings."""

    conn: sqlite3.Connection
    http: BookstockHttpClient
    settings: ImporterSettings
    settings_store: SettingsStore
    catalog: ProductCatalog
    media: MediaStore
    provider: GoogleBooksProvider
    images: ImagePipeline
    reconciler: ImportReconciler

    def close(self) -> None:
        self.http.close()
        self.conn.close()


def open_context(db_path: Path | None = None, *, api_key: str | None = None) -> ImporterContext:
    """Open the catalog database and build the import services.

    api_key, when given, overrides the stored key for this invocation only.
    """
    path = db_path or DEFAULT_DB_PATH
    conn = open_store(path)
    settings_store = SettingsStore(conn)
    settings = settings_store.load().with_overrides(api_key=api_key or None)

    http = BookstockHttpClient()
    catalog = ProductCatalog(conn)
    media = MediaStore(conn, media_dir_for(path))
    provider = GoogleBooksProvider(http, settings.api_key)
    images = ImagePipeline(
        http,
        media,
        settings,
        on_placeholder_created=lambda media_id: settings_store.set(
            "placeholder_image_id", str(media_id)
        ),
    )
    reconciler = ImportReconciler(catalog, images, settings)

    return ImporterContext(
        conn=conn,
        http=http,
        settings=settings,
        settings_store=settings_store,
        catalog=catalog,
        media=media,
        provider=provider,
        images=images,
        reconciler=reconciler,
    )
