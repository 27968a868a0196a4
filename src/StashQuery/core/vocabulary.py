"""Keyword tables shared by the compiler and the evaluator.

A `Vocabulary` maps `date:` preset words to day offsets and `type:` keywords
to the type tags produced by the classifier. Instances are immutable; build a
new one with `Vocabulary.merged` to add localized or custom words.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence


@dataclass(frozen=True, slots=True)
class Vocabulary:
    """Read-only keyword tables.

    Attributes:
        date_presets: Preset word -> day offset (0 means "since local midnight today").
        type_mappings: `type:` keyword -> type tags it expands to.
    """

    date_presets: Mapping[str, int]
    type_mappings: Mapping[str, tuple[str, ...]]

    def __post_init__(self) -> None:
        presets = {str(k).lower(): int(v) for k, v in self.date_presets.items()}
        mappings = {str(k).lower(): tuple(str(t).lower() for t in v) for k, v in self.type_mappings.items()}
        object.__setattr__(self, "date_presets", MappingProxyType(presets))
        object.__setattr__(self, "type_mappings", MappingProxyType(mappings))

    def day_offset(self, preset: str) -> int | None:
        return self.date_presets.get(preset.lower())

    def resolve_type(self, keyword: str) -> tuple[str, ...]:
        """Return the type tags for a keyword, or () when unknown."""
        return self.type_mappings.get(keyword.lower(), ())

    def merged(
        self,
        *,
        date_presets: Mapping[str, int] | None = None,
        type_mappings: Mapping[str, Sequence[str]] | None = None,
    ) -> Vocabulary:
        """Return a copy with extra entries; new keys win over existing ones."""
        presets = dict(self.date_presets)
        presets.update(date_presets or {})
        mappings: dict[str, Sequence[str]] = dict(self.type_mappings)
        mappings.update(type_mappings or {})
        return Vocabulary(date_presets=presets, type_mappings=mappings)


DEFAULT_VOCABULARY = Vocabulary(
    date_presets={
        "today": 0,
        "yesterday": 1,
        "lastweek": 7,
        "last week": 7,
        "thisweek": 7,
        "this week": 7,
        "week": 7,
        "lastmonth": 30,
        "last month": 30,
        "thismonth": 30,
        "this month": 30,
        "month": 30,
        "quarter": 90,
        "lastquarter": 90,
        "year": 365,
        "lastyear": 365,
    },
    type_mappings={
        "article": ("article", "website", "link"),
        "articles": ("article", "website", "link"),
        "website": ("article",),
        "websites": ("article",),
        "note": ("note",),
        "notes": ("note",),
        "snippet": ("note",),
        "snippets": ("note",),
        "video": ("youtube",),
        "videos": ("youtube",),
        "youtube": ("youtube",),
        "image": ("image",),
        "images": ("image",),
        "tweet": ("tweet",),
        "tweets": ("tweet",),
        "post": ("tweet", "reddit"),
        "posts": ("tweet", "reddit"),
        "reddit": ("reddit",),
        "wiki": ("wikipedia",),
        "wikipedia": ("wikipedia",),
    },
)
