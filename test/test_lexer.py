"""Tests for the search box lexer: extraction order and spans."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from StashQuery.compiler.lexer import TokenKind, build_rules, tokenize


class TestLexerOrder(unittest.TestCase):
    def test_rule_order(self) -> None:
        kinds = [rule.kind for rule in build_rules()]

        self.assertEqual(
            kinds,
            [
                TokenKind.EXCLUDE_PHRASE,
                TokenKind.PHRASE,
                TokenKind.OR,
                TokenKind.OBJECT,
                TokenKind.TEXT,
                TokenKind.TYPE,
                TokenKind.FORMAT,
                TokenKind.DATE,
                TokenKind.SITE,
                TokenKind.TAG,
                TokenKind.HASHTAG,
                TokenKind.EXCLUDE,
            ],
        )

    def test_tokens_follow_extraction_order(self) -> None:
        tokens = tokenize('w -z type:note x || y "c d" -"a b"')

        self.assertEqual(
            [token.kind for token in tokens],
            [
                TokenKind.EXCLUDE_PHRASE,
                TokenKind.PHRASE,
                TokenKind.OR,
                TokenKind.TYPE,
                TokenKind.EXCLUDE,
                TokenKind.TERM,
            ],
        )
        self.assertEqual(tokens[2].values, ("x", "y"))
        self.assertEqual(tokens[-1].value, "w")

    def test_claimed_text_is_not_matched_again(self) -> None:
        tokens = tokenize('"type:note" -"site:x"')

        self.assertEqual([token.kind for token in tokens], [TokenKind.EXCLUDE_PHRASE, TokenKind.PHRASE])
        self.assertEqual(tokens[0].value, "site:x")
        self.assertEqual(tokens[1].value, "type:note")


class TestLexerSpans(unittest.TestCase):
    def test_spans_point_into_original_text(self) -> None:
        text = 'shoe "Red Shoes" type:note'
        tokens = tokenize(text)

        by_kind = {token.kind: token for token in tokens}
        phrase = by_kind[TokenKind.PHRASE]
        type_token = by_kind[TokenKind.TYPE]
        term = by_kind[TokenKind.TERM]

        self.assertEqual(text[phrase.start:phrase.end], '"Red Shoes"')
        self.assertEqual(text[type_token.start:type_token.end], "type:note")
        self.assertEqual(text[term.start:term.end], "shoe")

    def test_terms_in_reading_order(self) -> None:
        tokens = tokenize("alpha site:x beta gamma")

        terms = [token.value for token in tokens if token.kind is TokenKind.TERM]
        self.assertEqual(terms, ["alpha", "beta", "gamma"])


class TestLexerExclusions(unittest.TestCase):
    def test_exclusion_requires_word_start(self) -> None:
        tokens = tokenize("well-known -known")

        self.assertEqual([(t.kind, t.value) for t in tokens], [
            (TokenKind.EXCLUDE, "known"),
            (TokenKind.TERM, "well-known"),
        ])

    def test_hashtag_requires_word_start(self) -> None:
        tokens = tokenize("c#sharp #dotnet")

        self.assertEqual([(t.kind, t.value) for t in tokens], [
            (TokenKind.HASHTAG, "dotnet"),
            (TokenKind.TERM, "c#sharp"),
        ])


if __name__ == "__main__":
    unittest.main()
