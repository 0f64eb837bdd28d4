# ABOUTME: Importer configuration passed explicitly into every component.
# ABOUTME: ImporterSettings sanitizes raw key/value input and round-trips to strings.

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any


class DuplicateAction(str, Enum):
    """What to do when an import matches an existing catalog entry by title."""

    SKIP = "skip"
    UPDATE = "update"


DEFAULT_IMAGE_WIDTH = 400
DEFAULT_IMAGE_HEIGHT = 600
DEFAULT_CATEGORY = "books"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _dimension(value: Any, default: int) -> int:
    try:
        size = abs(int(str(value).strip()))
    except ValueError:
        return default
    return size or default


def _placeholder_id(value: Any) -> int | None:
    if value is None:
        return None
    try:
        media_id = abs(int(str(value).strip()))
    except ValueError:
        return None
    return media_id or None


def _duplicate_action(value: Any) -> DuplicateAction:
    try:
        return DuplicateAction(str(value).strip().lower())
    except ValueError:
        return DuplicateAction.SKIP


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class ImporterSettings:
    """Flat importer configuration.

    Attributes:
        api_key: Google Books API key. Searches are skipped when empty.
        image_width: Target cover width in pixels.
        image_height: Target cover height in pixels.
        duplicate_action: Policy for imports whose title already exists.
        default_category: Category used when an import names none.
        placeholder_image_id: Media ID used when no cover is available.
        admin_url: Base URL for product edit links.
        match_isbn: Also match existing products by ISBN before title.
    """

    api_key: str = ""
    image_width: int = DEFAULT_IMAGE_WIDTH
    image_height: int = DEFAULT_IMAGE_HEIGHT
    duplicate_action: DuplicateAction = DuplicateAction.SKIP
    default_category: str = DEFAULT_CATEGORY
    placeholder_image_id: int | None = None
    admin_url: str = ""
    match_isbn: bool = False

    @classmethod
    def keys(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "ImporterSettings":
        """Build settings from loosely-typed values, sanitizing each recognized key.

        Unknown keys are ignored; missing keys take their defaults.
        """
        defaults = cls()
        return cls(
            api_key=str(raw.get("api_key", defaults.api_key)).strip(),
            image_width=_dimension(raw.get("image_width", defaults.image_width),
                                   DEFAULT_IMAGE_WIDTH),
            image_height=_dimension(raw.get("image_height", defaults.image_height),
                                    DEFAULT_IMAGE_HEIGHT),
            duplicate_action=_duplicate_action(
                raw.get("duplicate_action", defaults.duplicate_action.value)
            ),
            default_category=str(raw.get("default_category", defaults.default_category)).strip(),
            placeholder_image_id=_placeholder_id(raw.get("placeholder_image_id")),
            admin_url=str(raw.get("admin_url", defaults.admin_url)).strip().rstrip("/"),
            match_isbn=_flag(raw.get("match_isbn", defaults.match_isbn)),
        )

    def to_mapping(self) -> dict[str, str]:
        """String form of every key, suitable for key/value persistence."""
        return {
            "api_key": self.api_key,
            "image_width": str(self.image_width),
            "image_height": str(self.image_height),
            "duplicate_action": self.duplicate_action.value,
            "default_category": self.default_category,
            "placeholder_image_id": (
                str(self.placeholder_image_id) if self.placeholder_image_id else ""
            ),
            "admin_url": self.admin_url,
            "match_isbn": "true" if self.match_isbn else "false",
        }

    def with_overrides(self, **overrides: Any) -> "ImporterSettings":
        """Copy with the given keys replaced, ignoring None values."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
