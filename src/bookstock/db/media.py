# ABOUTME: File-backed media store for cover images, indexed in the catalog database.
# ABOUTME: Writes image bytes under the media directory and returns a stable integer reference.

import sqlite3
from dataclasses import dataclass
from pathlib import Path

_MAX_COLLISION_ATTEMPTS = 10_000


@dataclass
class MediaRecord:
    """A stored image file."""

    id: int
    title: str
    filename: str
    path: Path
    mime_type: str
    width: int | None
    height: int | None
    is_placeholder: bool


def _row_to_media(row: sqlite3.Row) -> MediaRecord:
    return MediaRecord(
        id=row["id"],
        title=row["title"],
        filename=row["filename"],
        path=Path(row["path"]),
        mime_type=row["mime_type"],
        width=row["width"],
        height=row["height"],
        is_placeholder=bool(row["is_placeholder"]),
    )


def _resolve_collision(path: Path) -> Path:
    """Find a non-colliding filename by appending -1, -2, etc."""
    if not path.exists():
        return path
    for counter in range(1, _MAX_COLLISION_ATTEMPTS + 1):
        candidate = path.parent / f"{path.stem}-{counter}{path.suffix}"
        if not candidate.exists():
            return candidate
    raise OSError(
        f"Could not find a non-colliding filename after "
        f"{_MAX_COLLISION_ATTEMPTS} attempts: {path}"
    )


class MediaStore:
    """Persists image blobs to disk and records them in the media table."""

    def __init__(self, conn: sqlite3.Connection, media_dir: Path) -> None:
        self._conn = conn
        self._media_dir = media_dir

    def add(
        self,
        data: bytes,
        *,
        filename: str,
        mime_type: str,
        title: str = "",
        size: tuple[int, int] | None = None,
        is_placeholder: bool = False,
    ) -> int:
        """Write data to the media directory and index it.

        Raises:
            OSError: If the file cannot be written.
        """
        self._media_dir.mkdir(parents=True, exist_ok=True)
        dest = _resolve_collision(self._media_dir / filename)
        dest.write_bytes(data)

        width, height = size if size else (None, None)
        try:
            cursor = self._conn.execute(
                "INSERT INTO media (title, filename, path, mime_type, width, height, "
                "is_placeholder) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (title, dest.name, str(dest), mime_type, width, height, int(is_placeholder)),
            )
            self._conn.commit()
        except sqlite3.Error:
            dest.unlink(missing_ok=True)
            raise
        return cursor.lastrowid  # type: ignore[return-value]

    def get(self, media_id: int) -> MediaRecord | None:
        cursor = self._conn.execute("SELECT * FROM media WHERE id = ?", (media_id,))
        row = cursor.fetchone()
        return _row_to_media(row) if row else None

    def is_image(self, media_id: int) -> bool:
        """Whether media_id refers to a stored image whose file still exists."""
        record = self.get(media_id)
        return (
            record is not None
            and record.mime_type.startswith("image/")
            and record.path.exists()
        )

    def find_placeholder(self) -> int | None:
        """ID of the most recently generated default placeholder, if any."""
        cursor = self._conn.execute(
            "SELECT id FROM media WHERE is_placeholder = 1 ORDER BY id DESC LIMIT 1"
        )
        row = cursor.fetchone()
        return row[0] if row else None
