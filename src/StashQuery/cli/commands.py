"""Command implementations for StashQuery CLI.

Encapsulates business logic for commands, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass

from StashQuery.renderers import OutputWriter
from StashQuery.services.search import RecordSearchService, RecordStore
from StashQuery.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Run one query against the record store and hand the result to the writer."""

    query: str
    store: RecordStore
    search_service: RecordSearchService
    output_writer: OutputWriter
    sort: str = "store"
    limit: int = -1

    def execute(self) -> None:
        records = self.store.all()
        log.debug("Searching %d records for %r (sort=%s limit=%d)", len(records), self.query, self.sort, self.limit)
        result = self.search_service.search(self.query, records, sort=self.sort, limit=self.limit)
        self.output_writer.write_result(result)
