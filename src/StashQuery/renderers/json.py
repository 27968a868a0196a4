"""JSON output renderers.

Renders search results into JSON-serializable objects; `JsonOutputWriter`
prints one document per run on stdout.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

import click

from StashQuery.core.models import record_created_at, record_field, record_tags
from StashQuery.renderers.base import OutputWriter
from StashQuery.services.search import SearchResult


def render_item(item: Any) -> dict[str, Any]:
    """Render one record into a JSON-friendly dict."""
    created_at = record_created_at(item)
    data: dict[str, Any] = {
        "id": record_field(item, "id"),
        "title": record_field(item, "title"),
        "url": record_field(item, "url"),
        "notes": record_field(item, "notes"),
        "description": record_field(item, "description"),
        "tags": record_tags(item),
        "createdAt": created_at.isoformat() if created_at else None,
    }
    return data


def render_json(items: Iterable[Any]) -> list[dict[str, Any]]:
    return [render_item(item) for item in items]


def render_result(result: SearchResult) -> dict[str, Any]:
    return {
        "query": result.query,
        "filters": result.spec.to_dict(),
        "scanned": result.scanned,
        "matched": result.matched,
        "items": render_json(result.items),
    }


class JsonOutputWriter(OutputWriter):
    """Accumulate results and print them as JSON on finalize."""

    def __init__(self, *, indent: int | None = 2) -> None:
        self.indent = indent
        self.results: list[dict[str, Any]] = []

    def write_result(self, result: SearchResult) -> None:
        self.results.append(render_result(result))

    def finalize(self, action: str) -> None:
        if not self.results:
            return
        payload: Any = self.results[0] if len(self.results) == 1 else self.results
        click.echo(json.dumps(payload, ensure_ascii=False, indent=self.indent))
        self.results.clear()
