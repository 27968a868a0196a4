"""Search service: compile once, scan the record store."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Protocol, Sequence

from StashQuery.compiler.compile import QueryCompiler
from StashQuery.core.models import record_created_at
from StashQuery.core.query import FilterSpec
from StashQuery.matching.evaluator import PredicateEvaluator
from StashQuery.utils.log import log

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class RecordStore(Protocol):
    """Protocol for a source of candidate records."""

    def all(self) -> Sequence[Any]:
        """Return every candidate record."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Outcome of one search.

    Attributes:
        query: Raw query text.
        spec: Compiled filters.
        items: Matching records after sorting and limiting.
        scanned: Number of candidate records evaluated.
        matched: Number of matches before the limit was applied.
    """

    query: str
    spec: FilterSpec
    items: tuple[Any, ...]
    scanned: int
    matched: int


@dataclass(slots=True)
class RecordSearchService:
    """Application service that filters saved items with the search box syntax."""

    compiler: QueryCompiler
    evaluator: PredicateEvaluator
    workers: int = 1
    shard_size: int = 2000

    def search(
        self,
        raw_query: str,
        records: Iterable[Any],
        *,
        sort: str = "store",
        limit: int = -1,
    ) -> SearchResult:
        """Compile ``raw_query`` and return the matching records.

        Args:
            raw_query: Search box text.
            records: Candidate records.
            sort: "store" keeps input order, "newest"/"oldest" order by creation time.
            limit: Maximum number of results, -1 for all.

        Returns:
            SearchResult with the compiled spec and the matches.
        """
        spec = self.compiler.compile(raw_query)
        candidates = list(records)
        found = self.filter(candidates, spec)
        log.info("Matched %d of %d records", len(found), len(candidates))

        ordered = sort_records(found, sort)
        if limit != -1:
            ordered = ordered[:limit]
        return SearchResult(
            query=raw_query,
            spec=spec,
            items=tuple(ordered),
            scanned=len(candidates),
            matched=len(found),
        )

    def filter(self, records: Sequence[Any], spec: FilterSpec) -> list[Any]:
        """Return records matching ``spec`` in input order.

        With ``workers > 1`` and enough records, the scan is split into
        contiguous shards evaluated on a thread pool; results are joined in
        shard order so the output order does not depend on the pool.
        """
        if self.workers <= 1 or len(records) <= self.shard_size or spec.is_empty:
            return self.evaluator.filter(records, spec)

        shards = [records[i : i + self.shard_size] for i in range(0, len(records), self.shard_size)]
        log.debug("Scanning %d records in %d shards (workers=%d)", len(records), len(shards), self.workers)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            parts = list(executor.map(lambda shard: self.evaluator.filter(shard, spec), shards))
        return [record for part in parts for record in part]


def sort_records(records: Sequence[Any], order: str) -> list[Any]:
    """Order records; undated records go last for both time orders.

    Raises:
        ValueError: If ``order`` is unknown.
    """
    if order == "store":
        return list(records)
    if order not in ("newest", "oldest"):
        raise ValueError(f"Unsupported sort order: {order}")

    dated = [(record_created_at(record), record) for record in records]
    with_time = [entry for entry in dated if entry[0] is not None]
    without_time = [record for created_at, record in dated if created_at is None]
    # list.sort is stable for reverse=True as well, so ties keep store order.
    with_time.sort(key=lambda entry: entry[0] or _EPOCH, reverse=order == "newest")
    return [record for _, record in with_time] + without_time
