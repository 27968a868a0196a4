from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from dateutil import parser as dt_parser

_TEXT_FIELDS = ("title", "notes", "content", "url", "description")
_CREATED_AT_KEYS = ("created_at", "createdAt")


@dataclass(frozen=True, slots=True)
class SavedItem:
    """Canonical saved item (note, article, video, image, social post).

    The search core only reads the text fields, `tags` and `created_at`; any
    other object exposing the same attributes (or a mapping with the same
    keys) can be searched as well.

    Attributes:
        id: Store-specific identifier.
        title: Display title.
        notes: User-written notes.
        content: Free-text body (note text, extracted article text).
        url: Source URL; notes use the ``note://`` scheme or none at all.
        description: Page description or image caption.
        tags: Tag names.
        created_at: Timezone-aware creation instant.
        type: Explicit item type hint from the store (e.g. "note", "image").
        category: Category hint from the store (e.g. "Image").
        extra: Extension point for store-specific fields.
    """

    id: str = ""
    title: Optional[str] = None
    notes: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    tags: Sequence[str] = ()
    created_at: Optional[datetime] = None
    type: Optional[str] = None
    category: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> SavedItem:
        """Build an item from a store row in camelCase or snake_case.

        Unrecognized keys are kept in `extra`. Text fields that are not
        strings are dropped rather than coerced.
        """
        known = set(_TEXT_FIELDS) | set(_CREATED_AT_KEYS) | {"id", "tags", "type", "category"}
        texts = {name: _opt_str(raw.get(name)) for name in _TEXT_FIELDS}
        return cls(
            id=str(raw.get("id") or ""),
            tags=tuple(record_tags(raw)),
            created_at=record_created_at(raw),
            type=_opt_str(raw.get("type")),
            category=_opt_str(raw.get("category")),
            extra={k: v for k, v in raw.items() if k not in known},
            **texts,
        )


def record_field(record: Any, name: str) -> str:
    """Read one text field from any record shape.

    Args:
        record: Mapping, `SavedItem`, or any object with attributes.
        name: Field name.

    Returns:
        The string value, or "" when missing or not a string.
    """
    value = _lookup(record, name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def record_tags(record: Any) -> list[str]:
    """Read the tag list, ignoring anything that is not a list of strings."""
    value = _lookup(record, "tags")
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


def record_created_at(record: Any) -> datetime | None:
    """Read the creation instant as a timezone-aware datetime.

    Naive datetimes and date strings without offset are taken as local time.
    Numbers are epoch milliseconds.

    Returns:
        Aware datetime, or None when absent or unparseable.
    """
    value = None
    for key in _CREATED_AT_KEYS:
        value = _lookup(record, key)
        if value is not None:
            break
    return to_instant(value)


def to_instant(value: Any) -> datetime | None:
    """Normalize a timestamp value into an aware datetime (or None)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.astimezone()
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            parsed = dt_parser.parse(value)
        except (ValueError, OverflowError):
            return None
        return parsed if parsed.tzinfo is not None else parsed.astimezone()
    return None


def _lookup(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
