# ABOUTME: Cover image pipeline: download, resize with Pillow, store in the media store.
# ABOUTME: Falls back to a configured or generated placeholder when no cover can be obtained.

import io
import logging
import sqlite3
from collections.abc import Callable

from PIL import Image, UnidentifiedImageError

from bookstock.core.settings import ImporterSettings
from bookstock.core.text import slugify
from bookstock.db.media import MediaStore
from bookstock.metadata.http import HttpClient, MetadataFetchError

logger = logging.getLogger(__name__)

# Pillow format name -> (extension, mime type)
_FORMATS: dict[str, tuple[str, str]] = {
    "JPEG": ("jpg", "image/jpeg"),
    "PNG": ("png", "image/png"),
    "GIF": ("gif", "image/gif"),
    "WEBP": ("webp", "image/webp"),
}
_ALPHA_FORMATS = frozenset({"PNG", "GIF", "WEBP"})

_PLACEHOLDER_COLOR = (224, 224, 224)


class ImageError(Exception):
    """Raised when a cover image cannot be decoded, resized, or stored."""


def resize_image(data: bytes, width: int, height: int) -> tuple[bytes, str, str]:
    """Resize encoded image bytes to exactly width x height.

    Keeps the source format and, for formats that support it, the alpha
    channel. Images already at the target size are returned unchanged.

    Returns:
        (encoded_bytes, extension, mime_type)

    Raises:
        ImageError: If the data is not a supported image.
    """
    try:
        source = Image.open(io.BytesIO(data))
        source.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ImageError(f"Unreadable image: {exc}") from exc

    fmt = source.format or ""
    if fmt not in _FORMATS:
        raise ImageError(f"Unsupported image format: {fmt or 'unknown'}")
    extension, mime_type = _FORMATS[fmt]

    if source.size == (width, height):
        return data, extension, mime_type

    keep_alpha = fmt in _ALPHA_FORMATS and (
        source.mode in ("RGBA", "LA", "PA") or "transparency" in source.info
    )
    converted = source.convert("RGBA" if keep_alpha else "RGB")
    resized = converted.resize((width, height), Image.Resampling.LANCZOS)

    out = io.BytesIO()
    try:
        if fmt == "JPEG":
            resized.save(out, format="JPEG", quality=90)
        elif fmt == "PNG":
            resized.save(out, format="PNG", optimize=True)
        elif fmt == "WEBP":
            resized.save(out, format="WEBP", quality=90)
        else:
            resized.save(out, format="GIF")
    except OSError as exc:
        raise ImageError(f"Could not encode {fmt}: {exc}") from exc
    return out.getvalue(), extension, mime_type


def render_placeholder(width: int, height: int) -> bytes:
    """A flat grey PNG used as the default cover."""
    out = io.BytesIO()
    Image.new("RGB", (width, height), _PLACEHOLDER_COLOR).save(out, format="PNG")
    return out.getvalue()


class ImagePipeline:
    """Turns a remote cover URL into a stored media reference.

    Args:
        http_client: Used to download covers.
        media: Where resized covers and the default placeholder are stored.
        settings: Supplies target dimensions and the configured placeholder.
        on_placeholder_created: Called with the media ID when a default
            placeholder had to be generated, so it can be persisted.
    """

    def __init__(
        self,
        http_client: HttpClient,
        media: MediaStore,
        settings: ImporterSettings,
        *,
        on_placeholder_created: Callable[[int], None] | None = None,
    ) -> None:
        self._http = http_client
        self._media = media
        self._settings = settings
        self._on_placeholder_created = on_placeholder_created
        self._placeholder_id: int | None = None

    def fetch_cover(self, image_url: str, title: str) -> int | None:
        """Download, resize and store a cover. Returns None on any failure."""
        if not image_url:
            return None

        try:
            data, _ = self._http.get_bytes(image_url)
            resized, extension, mime_type = resize_image(
                data, self._settings.image_width, self._settings.image_height
            )
            return self._media.add(
                resized,
                filename=f"{slugify(title)}-cover.{extension}",
                mime_type=mime_type,
                title=title,
                size=(self._settings.image_width, self._settings.image_height),
            )
        except (MetadataFetchError, ImageError, OSError, sqlite3.Error) as exc:
            logger.warning("Cover for %r not stored (%s): %s", title, image_url, exc)
            return None

    def cover_or_placeholder(self, image_url: str, title: str) -> int | None:
        """Stored cover for image_url, or the placeholder when that fails."""
        media_id = self.fetch_cover(image_url, title)
        if media_id is not None:
            return media_id
        return self.placeholder_id()

    def placeholder_id(self) -> int | None:
        """Configured placeholder if it still exists, else the generated default."""
        configured = self._settings.placeholder_image_id
        if configured and self._media.is_image(configured):
            return configured

        if self._placeholder_id is not None and self._media.is_image(self._placeholder_id):
            return self._placeholder_id

        existing = self._media.find_placeholder()
        if existing is not None and self._media.is_image(existing):
            self._placeholder_id = existing
            return existing

        width, height = self._settings.image_width, self._settings.image_height
        try:
            media_id = self._media.add(
                render_placeholder(width, height),
                filename="book-placeholder.png",
                mime_type="image/png",
                title="Book placeholder",
                size=(width, height),
                is_placeholder=True,
            )
        except (OSError, sqlite3.Error) as exc:
            logger.warning("Could not store default placeholder: %s", exc)
            return None

        self._placeholder_id = media_id
        if self._on_placeholder_created is not None:
            self._on_placeholder_created(media_id)
        return media_id
