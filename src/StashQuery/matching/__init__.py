"""Predicate evaluation of compiled filters against saved items."""

from __future__ import annotations

from StashQuery.matching.classify import classify_record
from StashQuery.matching.evaluator import Classifier, PredicateEvaluator, build_haystack, matches

__all__ = [
    "Classifier",
    "PredicateEvaluator",
    "build_haystack",
    "classify_record",
    "matches",
]
