# ABOUTME: Small text helpers shared by the catalog and reconciler.
# ABOUTME: Slug generation, HTML stripping, and short-description truncation.

import html
import re
import unicodedata

SHORT_DESCRIPTION_LIMIT = 160
_TRUNCATE_AT = SHORT_DESCRIPTION_LIMIT - 3

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_DASH_RE = re.compile(r"[\s_-]+")


def strip_tags(text: str) -> str:
    """Remove HTML tags (and script/style bodies), unescape entities, collapse whitespace."""
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def short_description(description: str) -> str:
    """Plain-text summary: HTML stripped, cut to 157 chars + "..." past 160."""
    text = strip_tags(description)
    if len(text) > SHORT_DESCRIPTION_LIMIT:
        text = text[:_TRUNCATE_AT] + "..."
    return text


def slugify(text: str) -> str:
    """Lowercase, dash-separated slug. Non-Latin letters are kept.

    Returns "item" when nothing usable is left.
    """
    text = unicodedata.normalize("NFKC", text).lower()
    text = _SLUG_STRIP_RE.sub("", text)
    slug = _SLUG_DASH_RE.sub("-", text).strip("-")
    return slug or "item"
