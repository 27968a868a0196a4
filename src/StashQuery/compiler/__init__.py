"""Query compiler for the search box mini language.

Exposes the lexer (token stream in extraction order) and the compiler that
folds tokens into a `FilterSpec`.
"""

from __future__ import annotations

from StashQuery.compiler.compile import QueryCompiler, compile_query, parse_literal_day
from StashQuery.compiler.lexer import LexRule, Token, TokenKind, build_rules, tokenize

__all__ = [
    "LexRule",
    "QueryCompiler",
    "Token",
    "TokenKind",
    "build_rules",
    "compile_query",
    "parse_literal_day",
    "tokenize",
]
