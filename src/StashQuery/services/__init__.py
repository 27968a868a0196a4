"""Search service layer for StashQuery.

Wires the compiler and the evaluator together and provides the factory used
by the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from StashQuery.compiler.compile import QueryCompiler
from StashQuery.matching.classify import classify_record
from StashQuery.matching.evaluator import Classifier, PredicateEvaluator
from StashQuery.services.search import RecordSearchService, RecordStore, SearchResult, sort_records

if TYPE_CHECKING:
    from StashQuery.config import AppConfig


def create_search_service(
    config: AppConfig,
    classify: Classifier | None = None,
) -> RecordSearchService:
    """Create a search service from configuration.

    Args:
        config: Application configuration (vocabulary and scan settings).
        classify: Type classifier; defaults to `classify_record`.

    Returns:
        Configured RecordSearchService instance.
    """
    return RecordSearchService(
        compiler=QueryCompiler(config.vocabulary),
        evaluator=PredicateEvaluator(classify or classify_record, vocabulary=config.vocabulary),
        workers=config.search.workers,
    )


__all__ = [
    "RecordSearchService",
    "RecordStore",
    "SearchResult",
    "create_search_service",
    "sort_records",
]
