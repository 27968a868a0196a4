"""Predicate evaluator.

Applies a compiled `FilterSpec` to one record. Each filter kind is an
independent gate; gates run in a fixed order and the first failing gate
rejects the record. Gates without values pass.

Gate order
1. exclude      exclude_terms / exclude_phrases (any hit rejects)
2. phrase       exact_phrases (all)
3. or           or_groups (one member per pair)
4. term         terms (all)
5. type         classifier result in types
6. site         url contains any site
7. tag          record tags contain every tag
8. format       url extension equals, or url contains ".<format>"
9. date         created_at >= preset cutoff
10. date_range  created_at within the literal day
11. object      description / notes contain any object term
12. text        notes / content / description contain any text term

Records without a usable created_at (missing, unparseable, ill-typed) fail
both date gates.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Iterable

from StashQuery.core.models import record_created_at, record_field, record_tags
from StashQuery.core.query import FilterSpec, local_midnight
from StashQuery.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary

Classifier = Callable[[Any], str]
Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now().astimezone()


def build_haystack(record: Any) -> str:
    """Return the lower-cased searchable text of a record."""
    parts = [record_field(record, name) for name in ("title", "notes", "content", "url", "description")]
    parts.append(" ".join(record_tags(record)))
    return " ".join(parts).lower()


class PredicateEvaluator:
    """Decide whether records satisfy a FilterSpec.

    Args:
        classify: Type classifier, called only when the spec has `types`.
        vocabulary: Keyword tables used to resolve `date_filter` presets.
        clock: Returns the current instant; injectable for tests.
    """

    def __init__(
        self,
        classify: Classifier,
        *,
        vocabulary: Vocabulary | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.classify = classify
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self.clock = clock or _local_now

    def matches(self, record: Any, spec: FilterSpec) -> bool:
        return self.explain(record, spec) is None

    def filter(self, records: Iterable[Any], spec: FilterSpec) -> list[Any]:
        """Return matching records in input order."""
        if spec.is_empty:
            return list(records)
        return [record for record in records if self.explain(record, spec) is None]

    def explain(self, record: Any, spec: FilterSpec) -> str | None:
        """Return the name of the first failing gate, or None on a match."""
        haystack = build_haystack(record)

        if any(term in haystack for term in spec.exclude_terms):
            return "exclude"
        if any(phrase in haystack for phrase in spec.exclude_phrases):
            return "exclude"
        if not all(phrase in haystack for phrase in spec.exact_phrases):
            return "phrase"
        if not all(left in haystack or right in haystack for left, right in spec.or_groups):
            return "or"
        if not all(term in haystack for term in spec.terms):
            return "term"

        if spec.types and self.classify(record) not in spec.types:
            return "type"

        url = record_field(record, "url").lower()
        if spec.sites and not any(site in url for site in spec.sites):
            return "site"

        if spec.tags:
            tags = {tag.lower() for tag in record_tags(record)}
            if not all(tag in tags for tag in spec.tags):
                return "tag"

        if spec.formats and not _matches_format(url, spec.formats):
            return "format"

        if spec.date_filter and not self._after_cutoff(record, spec.date_filter):
            return "date"
        if spec.date_range is not None:
            created_at = record_created_at(record)
            if created_at is None or not spec.date_range.contains(created_at):
                return "date_range"

        notes = record_field(record, "notes").lower()
        description = record_field(record, "description").lower()
        if spec.object_search and not any(obj in description or obj in notes for obj in spec.object_search):
            return "object"
        if spec.text_search:
            content = record_field(record, "content").lower()
            if not any(text in notes or text in content or text in description for text in spec.text_search):
                return "text"

        return None

    def cutoff(self, preset: str) -> datetime | None:
        """Return the earliest accepted instant for a date preset."""
        days = self.vocabulary.day_offset(preset)
        if days is None:
            return None
        today = self.clock().astimezone().date()
        return local_midnight(today - timedelta(days=days))

    def _after_cutoff(self, record: Any, preset: str) -> bool:
        cutoff = self.cutoff(preset)
        if cutoff is None:
            return True
        created_at = record_created_at(record)
        return created_at is not None and created_at >= cutoff


def _matches_format(url: str, formats: Iterable[str]) -> bool:
    extension = url.rsplit(".", 1)[-1]
    return any(extension == fmt or f".{fmt}" in url for fmt in formats)


def matches(
    record: Any,
    spec: FilterSpec,
    classify: Classifier,
    *,
    vocabulary: Vocabulary | None = None,
    now: datetime | None = None,
) -> bool:
    """One-shot evaluation; see `PredicateEvaluator` for repeated use.

    Args:
        record: Candidate record (mapping or object).
        spec: Compiled filters.
        classify: Type classifier.
        vocabulary: Keyword tables for date presets.
        now: Fixed "current" instant; defaults to the wall clock.
    """
    clock = (lambda: now) if now is not None else None
    return PredicateEvaluator(classify, vocabulary=vocabulary, clock=clock).matches(record, spec)
