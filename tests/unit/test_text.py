# ABOUTME: Unit tests for the slug, HTML stripping, and short-description helpers.
# ABOUTME: Pure functions, no fixtures.

from bookstock.core.text import short_description, slugify, strip_tags


class TestStripTags:
    """Tests for strip_tags."""

    def test_removes_tags_and_unescapes(self) -> None:
        assert strip_tags("<p>Fish &amp; <b>Chips</b></p>") == "Fish & Chips"

    def test_drops_script_bodies(self) -> None:
        assert strip_tags("a<script>alert(1)</script>b") == "ab"

    def test_collapses_whitespace(self) -> None:
        assert strip_tags("one\n\n  two\tthree") == "one two three"


class TestShortDescription:
    """Tests for short_description."""

    def test_short_text_unchanged(self) -> None:
        assert short_description("<p>A short one.</p>") == "A short one."

    def test_long_text_truncated(self) -> None:
        """Text past 160 characters is cut to 157 plus an ellipsis."""
        summary = short_description("x" * 200)
        assert len(summary) == 160
        assert summary.endswith("...")

    def test_exactly_limit_kept(self) -> None:
        assert short_description("y" * 160) == "y" * 160


class TestSlugify:
    """Tests for slugify."""

    def test_basic(self) -> None:
        assert slugify("The Left Hand of Darkness!") == "the-left-hand-of-darkness"

    def test_keeps_non_latin_letters(self) -> None:
        assert slugify("كتب عربية") == "كتب-عربية"

    def test_empty_falls_back(self) -> None:
        assert slugify("!!!") == "item"
