# ABOUTME: Unit tests for the file-backed MediaStore.
# ABOUTME: Verifies file writes, filename collision handling, and placeholder lookup.

from pathlib import Path

from bookstock.db.media import MediaStore


class TestAdd:
    """Tests for MediaStore.add and get."""

    def test_writes_file_and_indexes(self, media: MediaStore, tmp_path: Path) -> None:
        media_id = media.add(
            b"bytes", filename="dune-cover.jpg", mime_type="image/jpeg",
            title="Dune", size=(40, 60),
        )
        record = media.get(media_id)
        assert record is not None
        assert record.path == tmp_path / "media" / "dune-cover.jpg"
        assert record.path.read_bytes() == b"bytes"
        assert (record.width, record.height) == (40, 60)
        assert record.is_placeholder is False

    def test_collision_gets_suffix(self, media: MediaStore) -> None:
        """A second file with the same name is stored alongside, not over, the first."""
        first = media.get(media.add(b"a", filename="c.jpg", mime_type="image/jpeg"))
        second = media.get(media.add(b"b", filename="c.jpg", mime_type="image/jpeg"))
        assert first.filename == "c.jpg"
        assert second.filename == "c-1.jpg"
        assert first.path.read_bytes() == b"a"


class TestIsImage:
    """Tests for MediaStore.is_image."""

    def test_image_with_file(self, media: MediaStore) -> None:
        media_id = media.add(b"x", filename="p.png", mime_type="image/png")
        assert media.is_image(media_id)

    def test_deleted_file(self, media: MediaStore) -> None:
        media_id = media.add(b"x", filename="p.png", mime_type="image/png")
        media.get(media_id).path.unlink()
        assert not media.is_image(media_id)

    def test_not_an_image(self, media: MediaStore) -> None:
        media_id = media.add(b"x", filename="notes.txt", mime_type="text/plain")
        assert not media.is_image(media_id)

    def test_unknown_id(self, media: MediaStore) -> None:
        assert not media.is_image(77)


class TestFindPlaceholder:
    """Tests for MediaStore.find_placeholder."""

    def test_none_until_stored(self, media: MediaStore) -> None:
        media.add(b"x", filename="c.jpg", mime_type="image/jpeg")
        assert media.find_placeholder() is None
        placeholder = media.add(
            b"p", filename="book-placeholder.png", mime_type="image/png", is_placeholder=True
        )
        assert media.find_placeholder() == placeholder
