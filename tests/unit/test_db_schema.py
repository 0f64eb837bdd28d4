# ABOUTME: Unit tests for database creation and schema application.
# ABOUTME: Verifies tables, pragmas, idempotent reopen, and the media directory location.

import sqlite3
from pathlib import Path

from bookstock.db.connection import (
    CURRENT_SCHEMA_VERSION,
    media_dir_for,
    open_store,
    schema_version,
)


def _tables(conn: sqlite3.Connection) -> set[str]:
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    return {row[0] for row in cursor.fetchall()}


class TestOpenStore:
    """Tests for open_store."""

    def test_creates_all_tables(self, tmp_path: Path) -> None:
        conn = open_store(tmp_path / "nested" / "catalog.db")
        assert {
            "categories",
            "media",
            "products",
            "product_meta",
            "settings",
            "schema_version",
        } <= _tables(conn)
        conn.close()

    def test_pragmas(self, conn: sqlite3.Connection) -> None:
        """WAL journaling and foreign keys are enabled, rows are dict-like."""
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        assert isinstance(conn.execute("SELECT 1 AS one").fetchone(), sqlite3.Row)

    def test_reopen_keeps_data(self, db_path: Path) -> None:
        """Opening an existing database does not reapply the schema."""
        conn = open_store(db_path)
        conn.execute("INSERT INTO settings (key, value) VALUES ('api_key', 'k')")
        conn.commit()
        conn.close()

        conn = open_store(db_path)
        assert conn.execute("SELECT value FROM settings").fetchone()[0] == "k"
        assert conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0] == 1
        conn.close()

    def test_schema_version(self, conn: sqlite3.Connection) -> None:
        assert schema_version(conn) == CURRENT_SCHEMA_VERSION

    def test_fresh_connection_has_no_version(self) -> None:
        memory = sqlite3.connect(":memory:")
        assert schema_version(memory) == 0
        memory.close()


class TestMediaDir:
    """Tests for media_dir_for."""

    def test_sits_next_to_database(self, tmp_path: Path) -> None:
        assert media_dir_for(tmp_path / "catalog.db") == tmp_path / "media"
