"""Search box lexer.

Turns a raw query string into a flat token stream. Rules run in a fixed
order; each rule claims every match in what is left of the string and the
claimed spans are blanked (replaced by spaces of the same length) before the
next rule runs, so later rules never re-read text already taken and token
spans keep pointing into the original string.

Extraction order
- EXCLUDE_PHRASE  -"red shoes"
- PHRASE          "red shoes"
- OR              cats || dogs   (single-word operands only)
- OBJECT          object:car
- TEXT            text:invoice
- TYPE            type:video
- FORMAT          format:pdf
- DATE            date:yesterday, date:last week, date:2024-01-15
- SITE            site:youtube
- TAG             tag:cooking
- HASHTAG         #recipe, #to-read
- EXCLUDE         -blue
- TERM            anything left, split on whitespace

Field keys are case-insensitive and must start a word. An exclusion is a word
starting with exactly one hyphen followed by a non-hyphen character; the rest
of the word is the excluded term, so ``-red-shirt`` excludes ``red-shirt`` and
``well-known`` stays a plain term.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from StashQuery.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary


class TokenKind(str, Enum):
    EXCLUDE_PHRASE = "exclude_phrase"
    PHRASE = "phrase"
    OR = "or"
    OBJECT = "object"
    TEXT = "text"
    TYPE = "type"
    FORMAT = "format"
    DATE = "date"
    SITE = "site"
    TAG = "tag"
    HASHTAG = "hashtag"
    EXCLUDE = "exclude"
    TERM = "term"


@dataclass(frozen=True, slots=True)
class Token:
    """One lexed unit.

    Attributes:
        kind: Token kind.
        values: Lower-cased captured values; two entries for OR, one otherwise.
        start: Start offset in the original string.
        end: End offset (exclusive) in the original string.
    """

    kind: TokenKind
    values: tuple[str, ...]
    start: int
    end: int

    @property
    def value(self) -> str:
        return self.values[0]


@dataclass(frozen=True, slots=True)
class LexRule:
    kind: TokenKind
    pattern: re.Pattern[str]


_FIELD_KEYS: tuple[tuple[TokenKind, str], ...] = (
    (TokenKind.OBJECT, "object"),
    (TokenKind.TEXT, "text"),
    (TokenKind.TYPE, "type"),
    (TokenKind.FORMAT, "format"),
    (TokenKind.DATE, "date"),
    (TokenKind.SITE, "site"),
    (TokenKind.TAG, "tag"),
)

_RE_WORD = re.compile(r"\S+")
# Leftovers with no searchable content: operator debris and bare field keys.
_RE_DEBRIS = re.compile(r"^(?:[-|]+|#|(?:object|text|type|format|date|site|tag):)$", re.IGNORECASE)


def _field_pattern(key: str, value: str = r"\S+") -> re.Pattern[str]:
    return re.compile(rf"(?<!\S){key}:({value})", re.IGNORECASE)


def _date_value_pattern(vocabulary: Vocabulary) -> str:
    # Multi-word presets ("last week") have to be tried before the single-word fallback.
    spaced = sorted((p for p in vocabulary.date_presets if " " in p), key=len, reverse=True)
    alternatives = [r"\s+".join(re.escape(part) for part in preset.split()) + r"(?!\S)" for preset in spaced]
    alternatives.append(r"\S+")
    return "|".join(alternatives)


def build_rules(vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> tuple[LexRule, ...]:
    """Return the ordered extraction rules for a vocabulary.

    Args:
        vocabulary: Keyword tables; only multi-word date presets affect lexing.

    Returns:
        Rules in extraction order (TERM is implicit and always last).
    """
    rules = [
        LexRule(TokenKind.EXCLUDE_PHRASE, re.compile(r'-"([^"]+)"')),
        LexRule(TokenKind.PHRASE, re.compile(r'"([^"]+)"')),
        LexRule(TokenKind.OR, re.compile(r"([^\s|]+)\s*\|\|\s*([^\s|]+)")),
    ]
    for kind, key in _FIELD_KEYS:
        if kind is TokenKind.DATE:
            rules.append(LexRule(kind, _field_pattern(key, _date_value_pattern(vocabulary))))
        else:
            rules.append(LexRule(kind, _field_pattern(key)))
    rules.append(LexRule(TokenKind.HASHTAG, re.compile(r"(?<!\S)#(\w[\w-]*)")))
    rules.append(LexRule(TokenKind.EXCLUDE, re.compile(r"(?<!\S)-([^\s-]\S*)")))
    return tuple(rules)


def tokenize(
    text: str,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    *,
    rules: Sequence[LexRule] | None = None,
) -> list[Token]:
    """Lex a raw query into tokens in extraction order.

    Args:
        text: Raw query string.
        vocabulary: Keyword tables used to build the default rules.
        rules: Pre-built rules (see `build_rules`); overrides ``vocabulary``.

    Returns:
        Tokens grouped by rule in extraction order, then TERM tokens in
        reading order.
    """
    active_rules = rules if rules is not None else build_rules(vocabulary)
    remaining = text
    tokens: list[Token] = []

    for rule in active_rules:
        spans: list[tuple[int, int]] = []
        for match in rule.pattern.finditer(remaining):
            values = tuple(group.lower() for group in match.groups())
            tokens.append(Token(rule.kind, values, match.start(), match.end()))
            spans.append(match.span())
        remaining = _blank(remaining, spans)

    for match in _RE_WORD.finditer(remaining):
        word = match.group(0).replace('"', "")
        if not word or _RE_DEBRIS.match(word):
            continue
        tokens.append(Token(TokenKind.TERM, (word.lower(),), match.start(), match.end()))

    return tokens


def _blank(text: str, spans: Sequence[tuple[int, int]]) -> str:
    if not spans:
        return text
    chars = list(text)
    for start, end in spans:
        chars[start:end] = " " * (end - start)
    return "".join(chars)
