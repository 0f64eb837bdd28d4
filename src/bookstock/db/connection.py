# ABOUTME: SQLite database connection management for the Bookstock catalog.
# ABOUTME: Opens or creates the database, applies schema, and locates the media directory.

import sqlite3
from pathlib import Path

from bookstock.db.schema import SCHEMA_V1

DEFAULT_DB_PATH = Path.home() / ".bookstock" / "catalog.db"

CURRENT_SCHEMA_VERSION = 1


def schema_version(conn: sqlite3.Connection) -> int:
    """Highest applied schema version, 0 for a fresh database."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    ).fetchone()
    if not has_table:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def media_dir_for(db_path: Path) -> Path:
    """Directory holding stored cover images, next to the database file."""
    return db_path.parent / "media"


def open_store(path: Path | None = None) -> sqlite3.Connection:
    """Open the catalog database at path (default ~/.bookstock/catalog.db).

    Missing parent directories are created and a fresh file gets the schema.
    Rows come back as sqlite3.Row; WAL journaling and foreign keys are on.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    conn.execute("PRAGMA journal_mode=WAL")

    if schema_version(conn) < CURRENT_SCHEMA_VERSION:
        conn.executescript(SCHEMA_V1)

    return conn
