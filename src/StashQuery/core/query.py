from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Mapping, Sequence

from dateutil import parser as dt_parser

_END_OF_DAY = time(23, 59, 59, 999000)


def local_midnight(day: date) -> datetime:
    """Return 00:00:00.000 local time of ``day`` as an aware datetime."""
    return datetime.combine(day, time.min).astimezone()


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive instant range covering one calendar day.

    Attributes:
        start: Local midnight (00:00:00.000) of the day, timezone-aware.
        end: Last millisecond (23:59:59.999) of the same day, timezone-aware.
    """

    start: datetime
    end: datetime

    @classmethod
    def for_day(cls, day: date) -> DateRange:
        return cls(start=local_midnight(day), end=datetime.combine(day, _END_OF_DAY).astimezone())

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


@dataclass(frozen=True, slots=True)
class FilterSpec:
    """Compiled search intent passed from the compiler to the evaluator.

    Every string value is lower-cased at compile time. Multi-value fields are
    tuples; apart from ``terms`` they carry set semantics (no duplicates,
    first-seen order kept for stable output).

    Gate semantics:

    - `terms`, `exact_phrases`: all must appear in the haystack
    - `or_groups`: each pair needs at least one member in the haystack
    - `exclude_terms`, `exclude_phrases`: any hit rejects the record
    - `types`, `sites`, `formats`, `object_search`, `text_search`: any-of
    - `tags`: all-of, unlike the other multi-value filters
    - `date_filter`: preset key, open-ended "since" cutoff
    - `date_range`: explicit single calendar day

    `raw_query` is the space-joined `terms` + `exact_phrases`, kept for an
    external fuzzy ranking step and never consulted by the evaluator.
    """

    terms: tuple[str, ...] = ()
    or_groups: tuple[tuple[str, str], ...] = ()
    exact_phrases: tuple[str, ...] = ()
    exclude_terms: tuple[str, ...] = ()
    exclude_phrases: tuple[str, ...] = ()
    object_search: tuple[str, ...] = ()
    text_search: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    formats: tuple[str, ...] = ()
    date_filter: str | None = None
    date_range: DateRange | None = None
    sites: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    raw_query: str = ""

    @property
    def is_empty(self) -> bool:
        """True when no gate has a value, i.e. every record matches."""
        return not any(
            (
                self.terms,
                self.or_groups,
                self.exact_phrases,
                self.exclude_terms,
                self.exclude_phrases,
                self.object_search,
                self.text_search,
                self.types,
                self.formats,
                self.date_filter,
                self.date_range,
                self.sites,
                self.tags,
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the stable camelCase field names."""
        date_range = None
        if self.date_range is not None:
            date_range = {
                "start": self.date_range.start.isoformat(timespec="milliseconds"),
                "end": self.date_range.end.isoformat(timespec="milliseconds"),
            }
        return {
            "terms": list(self.terms),
            "orGroups": [list(pair) for pair in self.or_groups],
            "exactPhrases": list(self.exact_phrases),
            "excludeTerms": list(self.exclude_terms),
            "excludePhrases": list(self.exclude_phrases),
            "objectSearch": list(self.object_search),
            "textSearch": list(self.text_search),
            "types": list(self.types),
            "formats": list(self.formats),
            "dateFilter": self.date_filter,
            "dateRange": date_range,
            "sites": list(self.sites),
            "tags": list(self.tags),
            "rawQuery": self.raw_query,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> FilterSpec:
        """Rebuild a spec from `to_dict` output.

        Unknown keys are ignored and missing keys fall back to empty values,
        so specs written by older or newer versions still load. Naive
        ``dateRange`` timestamps are read as local time.

        Raises:
            TypeError: If a field has the wrong shape.
            ValueError: If ``dateRange`` timestamps cannot be parsed.
        """
        date_range = None
        raw_range = raw.get("dateRange")
        if raw_range is not None:
            if not isinstance(raw_range, Mapping) or "start" not in raw_range or "end" not in raw_range:
                raise TypeError("dateRange must be an object with start and end")
            date_range = DateRange(
                start=_aware(dt_parser.isoparse(str(raw_range["start"]))),
                end=_aware(dt_parser.isoparse(str(raw_range["end"]))),
            )

        or_groups: list[tuple[str, str]] = []
        for idx, pair in enumerate(raw.get("orGroups") or ()):
            if not isinstance(pair, Sequence) or isinstance(pair, str) or len(pair) != 2:
                raise TypeError(f"orGroups[{idx}] must be a pair of strings")
            or_groups.append((str(pair[0]).lower(), str(pair[1]).lower()))

        date_filter = raw.get("dateFilter")
        return cls(
            terms=_str_tuple(raw.get("terms"), "terms"),
            or_groups=tuple(or_groups),
            exact_phrases=_str_tuple(raw.get("exactPhrases"), "exactPhrases"),
            exclude_terms=_str_tuple(raw.get("excludeTerms"), "excludeTerms"),
            exclude_phrases=_str_tuple(raw.get("excludePhrases"), "excludePhrases"),
            object_search=_str_tuple(raw.get("objectSearch"), "objectSearch"),
            text_search=_str_tuple(raw.get("textSearch"), "textSearch"),
            types=_str_tuple(raw.get("types"), "types"),
            formats=_str_tuple(raw.get("formats"), "formats"),
            date_filter=str(date_filter).lower() if date_filter else None,
            date_range=date_range,
            sites=_str_tuple(raw.get("sites"), "sites"),
            tags=_str_tuple(raw.get("tags"), "tags"),
            raw_query=str(raw.get("rawQuery") or ""),
        )


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.astimezone()


def _str_tuple(value: Any, key: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise TypeError(f"{key} must be a list of strings")
    return tuple(str(item).lower() for item in value)
