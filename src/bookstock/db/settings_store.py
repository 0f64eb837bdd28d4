# ABOUTME: Key/value persistence of ImporterSettings in the catalog database.
# ABOUTME: Loads sanitized settings and saves individual keys or whole objects.

import sqlite3

from bookstock.core.settings import ImporterSettings


class SettingsStore:
    """Reads and writes the settings table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def load(self) -> ImporterSettings:
        """Return stored settings, with defaults for anything never saved."""
        cursor = self._conn.execute("SELECT key, value FROM settings")
        raw = {row[0]: row[1] for row in cursor.fetchall()}
        return ImporterSettings.from_mapping(raw)

    def save(self, settings: ImporterSettings) -> None:
        self._conn.executemany(
            "INSERT INTO settings (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            list(settings.to_mapping().items()),
        )
        self._conn.commit()

    def set(self, key: str, value: str) -> ImporterSettings:
        """Set one key, sanitize, persist, and return the resulting settings.

        Raises:
            ValueError: If key is not a recognized setting.
        """
        if key not in ImporterSettings.keys():
            raise ValueError(f"Unknown setting '{key}'")

        raw = self.load().to_mapping()
        raw[key] = value
        settings = ImporterSettings.from_mapping(raw)
        self.save(settings)
        return settings
