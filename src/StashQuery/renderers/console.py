"""Console text output renderers.

Renders matched items into human-friendly text and provides the search
syntax cheat sheet.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from StashQuery.core.models import record_created_at, record_field, record_tags
from StashQuery.renderers.base import OutputWriter
from StashQuery.services.search import SearchResult
from StashQuery.utils.log import log

SYNTAX_HELP: tuple[tuple[str, str], ...] = (
    ("shoe red", "All keywords must match"),
    ("cats || dogs", "Either keyword matches"),
    ('"red shoes"', "Exact phrase"),
    ('-red  -"red shoes"', "Exclude a keyword or phrase"),
    ("object:car", "Object inside images (captions and notes)"),
    ("text:invoice", "Text inside images or notes"),
    ("type:article  type:note  type:video", "Card type (articles, websites, notes, snippets, images, tweets, posts)"),
    ("format:pdf", "File format by URL extension"),
    ("date:yesterday  date:last week  date:2024-05-19", "Saved since a preset, or on a given day"),
    ("site:youtube", "URL contains the site"),
    ("tag:recipe  #recipe", "Item has every listed tag"),
)


def _fmt_dt(dt: datetime | None) -> str:
    if not dt:
        return "-"
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def render_text(items: Iterable[Any]) -> str:
    """Render items into a numbered text block.

    Args:
        items: Records (mappings or objects).

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    for idx, item in enumerate(items, start=1):
        title = record_field(item, "title") or record_field(item, "url") or "(untitled)"
        lines.append(f"{idx}. {title}")
        url = record_field(item, "url")
        if url:
            lines.append(f"   URL: {url}")
        tags = record_tags(item)
        if tags:
            lines.append(f"   Tags: {', '.join(tags)}")
        lines.append(f"   Saved: {_fmt_dt(record_created_at(item))}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_syntax_help() -> str:
    """Render the search syntax cheat sheet."""
    width = max(len(example) for example, _ in SYNTAX_HELP)
    return "\n".join(f"{example.ljust(width)}  {meaning}" for example, meaning in SYNTAX_HELP) + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def __init__(self, *, explain: bool = False) -> None:
        self.explain = explain

    def write_result(self, result: SearchResult) -> None:
        log.info("query=%r", result.query)
        if result.spec.is_empty:
            log.info("No filters: every item matches")
        if self.explain:
            for key, value in result.spec.to_dict().items():
                if value:
                    log.info("  %s=%s", key, value)
        log.info("Showing %d of %d matches (%d scanned)", len(result.items), result.matched, result.scanned)
        if not result.items:
            return
        for line in render_text(result.items).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
