"""Query compiler.

Builds a `FilterSpec` from the token stream produced by the lexer. The
compiler is total: malformed or unknown filter values (``type:gadget``,
``date:someday``) are dropped so search-as-you-type never fails on a partial
keystroke.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable

from dateutil import parser as dt_parser

from StashQuery.compiler.lexer import LexRule, Token, TokenKind, build_rules, tokenize
from StashQuery.core.query import DateRange, FilterSpec
from StashQuery.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from StashQuery.utils.log import log

_SET_FIELDS: dict[TokenKind, str] = {
    TokenKind.EXCLUDE_PHRASE: "exclude_phrases",
    TokenKind.PHRASE: "exact_phrases",
    TokenKind.EXCLUDE: "exclude_terms",
    TokenKind.OBJECT: "object_search",
    TokenKind.TEXT: "text_search",
    TokenKind.FORMAT: "formats",
    TokenKind.SITE: "sites",
    TokenKind.TAG: "tags",
    TokenKind.HASHTAG: "tags",
}


class QueryCompiler:
    """Compile raw search box strings into `FilterSpec` values.

    Compilers are immutable once built; two compilers with different
    vocabularies can be used side by side.
    """

    def __init__(self, vocabulary: Vocabulary | None = None) -> None:
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._rules: tuple[LexRule, ...] = build_rules(self.vocabulary)

    def compile(self, raw_query: object) -> FilterSpec:
        """Compile a raw query.

        Args:
            raw_query: Search box text. Non-strings and blank strings yield
                the empty spec.

        Returns:
            Fully populated (possibly empty) FilterSpec.
        """
        if not isinstance(raw_query, str) or not raw_query.strip():
            return FilterSpec()
        tokens = tokenize(raw_query.strip(), rules=self._rules)
        spec = self.build(tokens)
        log.debug("Compiled query %r -> %r", raw_query, spec)
        return spec

    def build(self, tokens: Iterable[Token]) -> FilterSpec:
        """Fold tokens into a FilterSpec.

        Tokens are consumed in the order given; for `date:` the last preset
        and the last literal date win.
        """
        sets: dict[str, dict[str, None]] = {name: {} for name in set(_SET_FIELDS.values())}
        types: dict[str, None] = {}
        terms: list[str] = []
        or_groups: list[tuple[str, str]] = []
        date_filter: str | None = None
        date_range: DateRange | None = None

        for token in tokens:
            if token.kind is TokenKind.TERM:
                terms.append(token.value)
            elif token.kind is TokenKind.OR:
                or_groups.append((token.values[0], token.values[1]))
            elif token.kind is TokenKind.TYPE:
                for tag in self.vocabulary.resolve_type(token.value):
                    types.setdefault(tag, None)
            elif token.kind is TokenKind.DATE:
                value = " ".join(token.value.split())
                if self.vocabulary.day_offset(value) is not None:
                    date_filter = value
                    continue
                parsed = parse_literal_day(value)
                if parsed is not None:
                    date_range = parsed
            else:
                value = token.value
                if token.kind in (TokenKind.PHRASE, TokenKind.EXCLUDE_PHRASE) and not value.strip():
                    continue
                sets[_SET_FIELDS[token.kind]].setdefault(value, None)

        exact_phrases = tuple(sets["exact_phrases"])
        return FilterSpec(
            terms=tuple(terms),
            or_groups=tuple(or_groups),
            exact_phrases=exact_phrases,
            exclude_terms=tuple(sets["exclude_terms"]),
            exclude_phrases=tuple(sets["exclude_phrases"]),
            object_search=tuple(sets["object_search"]),
            text_search=tuple(sets["text_search"]),
            types=tuple(types),
            formats=tuple(sets["formats"]),
            date_filter=date_filter,
            date_range=date_range,
            sites=tuple(sets["sites"]),
            tags=tuple(sets["tags"]),
            raw_query=" ".join([*terms, *exact_phrases]),
        )


def parse_literal_day(value: str, *, today: date | None = None) -> DateRange | None:
    """Parse a literal date into the range covering that calendar day.

    Missing components default to today's (``date:15`` is the 15th of the
    current month). Any time or offset in the input is ignored; only the
    calendar day as written counts.

    Returns:
        DateRange, or None when ``value`` is not a date.
    """
    default = datetime.combine(today or date.today(), time.min)
    try:
        parsed = dt_parser.parse(value, default=default)
        return DateRange.for_day(parsed.date())
    except (ValueError, OverflowError, OSError):
        return None


_DEFAULT_COMPILER = QueryCompiler()


def compile_query(raw_query: object, *, vocabulary: Vocabulary | None = None) -> FilterSpec:
    """Compile with the default vocabulary, or a one-off compiler for ``vocabulary``."""
    if vocabulary is not None:
        return QueryCompiler(vocabulary).compile(raw_query)
    return _DEFAULT_COMPILER.compile(raw_query)
