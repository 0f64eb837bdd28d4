# ABOUTME: Unit tests for Google Books response parsing.
# ABOUTME: Verifies identifier extraction, image selection, and defaults for missing fields.

from bookstock.metadata.googlebooks_parser import (
    parse_identifiers,
    parse_volume,
    parse_volumes,
    secure_url,
    select_image_url,
)
from tests.fixtures.googlebooks_responses import (
    BARE_VOLUME,
    DUNE_VOLUME,
    EMMA_VOLUME,
    EMPTY_RESPONSE,
    SEARCH_RESPONSE,
)


class TestParseVolume:
    """Tests for parse_volume."""

    def test_full_volume(self) -> None:
        """Every mapped field is populated from a complete volume."""
        book = parse_volume(DUNE_VOLUME)
        assert book.title == "Dune"
        assert book.source_id == "B1hSG45JCX4C"
        assert book.subtitle == "Deluxe Edition"
        assert book.authors == "Frank Herbert"
        assert book.publisher == "Penguin"
        assert book.published_date == "2005-08-02"
        assert book.page_count == 528
        assert book.categories == "Fiction, Science Fiction"
        assert book.language == "en"
        assert book.isbn_10 == "0441013597"
        assert book.isbn_13 == "9780441013593"
        assert book.isbn == "9780441013593"
        assert book.list_price == 10.99
        assert book.image_url.startswith("https://")
        assert "zoom=1" in book.image_url
        assert book.description.startswith("<p>")

    def test_bare_volume_defaults(self) -> None:
        """Missing fields become empty strings and zeros."""
        book = parse_volume(BARE_VOLUME)
        assert book.title == "The Bare Book"
        assert book.authors == ""
        assert book.isbn == ""
        assert book.image_url == ""
        assert book.page_count == 0
        assert book.list_price == 0.0

    def test_isbn_falls_back_to_isbn_10(self) -> None:
        book = parse_volume(EMMA_VOLUME)
        assert book.isbn_13 == ""
        assert book.isbn == "0141439580"


class TestImageSelection:
    """Tests for cover URL selection."""

    def test_prefers_largest(self) -> None:
        """large beats medium and thumbnail regardless of key order."""
        assert parse_volume(EMMA_VOLUME).image_url == "https://books.google.com/emma-large"

    def test_falls_back_to_small_thumbnail(self) -> None:
        assert select_image_url({"smallThumbnail": "http://x/s"}) == "https://x/s"

    def test_empty_links(self) -> None:
        assert select_image_url({}) == ""

    def test_secure_url_leaves_https_alone(self) -> None:
        assert secure_url("https://x/y") == "https://x/y"


class TestParseIdentifiers:
    """Tests for industryIdentifiers extraction."""

    def test_ignores_other_types(self) -> None:
        identifiers = [{"type": "OTHER", "identifier": "UOM:39015"}]
        assert parse_identifiers(identifiers) == ("", "")

    def test_non_list(self) -> None:
        assert parse_identifiers(None) == ("", "")


class TestParseVolumes:
    """Tests for parse_volumes."""

    def test_search_response(self) -> None:
        books = parse_volumes(SEARCH_RESPONSE)
        assert [b.title for b in books] == ["Dune", "Emma"]

    def test_no_items(self) -> None:
        assert parse_volumes(EMPTY_RESPONSE) == []

    def test_skips_non_objects(self) -> None:
        assert len(parse_volumes({"items": ["junk", DUNE_VOLUME]})) == 1
