# ABOUTME: Parsing functions for Google Books API volume responses.
# ABOUTME: Projects volumeInfo/saleInfo JSON onto the flat CanonicalBook record.

from typing import Any

from bookstock.metadata.types import CanonicalBook

# Highest fidelity first.
IMAGE_PREFERENCE = ("large", "medium", "thumbnail", "smallThumbnail")


def _text(value: Any) -> str:
    """Coerce a JSON scalar to a string, mapping None to ""."""
    if value is None:
        return ""
    return str(value)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _join(values: Any) -> str:
    if not isinstance(values, list):
        return ""
    return ", ".join(str(v) for v in values if v)


def secure_url(url: str) -> str:
    """Upgrade an http:// URL to https://."""
    return url.replace("http://", "https://")


def select_image_url(image_links: dict[str, Any]) -> str:
    """Pick the best available cover URL, upgraded to https."""
    for size in IMAGE_PREFERENCE:
        url = image_links.get(size)
        if url:
            return secure_url(str(url))
    return ""


def parse_identifiers(identifiers: Any) -> tuple[str, str]:
    """Extract (isbn_10, isbn_13) from industryIdentifiers."""
    isbn_10 = ""
    isbn_13 = ""
    if not isinstance(identifiers, list):
        return isbn_10, isbn_13

    for entry in identifiers:
        if not isinstance(entry, dict):
            continue
        kind = entry.get("type")
        value = _text(entry.get("identifier"))
        if kind == "ISBN_10":
            isbn_10 = value
        elif kind == "ISBN_13":
            isbn_13 = value
    return isbn_10, isbn_13


def parse_volume(item: dict[str, Any]) -> CanonicalBook:
    """Parse a single entry of the volumes `items` array into a CanonicalBook."""
    volume_info = item.get("volumeInfo") or {}
    sale_info = item.get("saleInfo") or {}

    isbn_10, isbn_13 = parse_identifiers(volume_info.get("industryIdentifiers"))

    image_links = volume_info.get("imageLinks")
    image_url = select_image_url(image_links) if isinstance(image_links, dict) else ""

    list_price = sale_info.get("listPrice") or {}
    amount = list_price.get("amount") if isinstance(list_price, dict) else None

    return CanonicalBook(
        title=_text(volume_info.get("title")),
        source_id=_text(item.get("id")),
        isbn_10=isbn_10,
        isbn_13=isbn_13,
        subtitle=_text(volume_info.get("subtitle")),
        authors=_join(volume_info.get("authors")),
        publisher=_text(volume_info.get("publisher")),
        published_date=_text(volume_info.get("publishedDate")),
        description=_text(volume_info.get("description")),
        page_count=_int(volume_info.get("pageCount")),
        categories=_join(volume_info.get("categories")),
        language=_text(volume_info.get("language")),
        image_url=image_url,
        preview_link=_text(volume_info.get("previewLink")),
        info_link=_text(volume_info.get("infoLink")),
        list_price=_float(amount),
    )


def parse_volumes(data: dict[str, Any]) -> list[CanonicalBook]:
    """Parse a volumes search response, skipping entries that are not objects."""
    items = data.get("items")
    if not isinstance(items, list):
        return []
    return [parse_volume(item) for item in items if isinstance(item, dict)]
