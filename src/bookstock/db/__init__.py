# ABOUTME: Public API for the Bookstock catalog database layer.
# ABOUTME: Exports connection management, catalog, media and settings stores.

from bookstock.db.catalog import CatalogError, ProductCatalog
from bookstock.db.connection import DEFAULT_DB_PATH, media_dir_for, open_store
from bookstock.db.mapping import ProductDraft, ProductRecord
from bookstock.db.media import MediaRecord, MediaStore
from bookstock.db.settings_store import SettingsStore

__all__ = [
    "DEFAULT_DB_PATH",
    "CatalogError",
    "MediaRecord",
    "MediaStore",
    "ProductCatalog",
    "ProductDraft",
    "ProductRecord",
    "SettingsStore",
    "media_dir_for",
    "open_store",
]
