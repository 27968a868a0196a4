"""JSON file record store.

Reads saved items exported by the bookmarking app. Accepted layouts:

- a JSON array of item objects
- an object wrapping the array under ``items`` or ``bookmarks``
- JSON Lines, one item object per line
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from StashQuery.core.models import SavedItem
from StashQuery.utils.log import log

_WRAPPER_KEYS = ("items", "bookmarks")


class JsonRecordStore:
    """Load saved items from a JSON or JSON Lines file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def all(self) -> list[SavedItem]:
        """Read every item in the file.

        Returns:
            Items in file order. Entries that are not objects are skipped.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is neither JSON nor JSON Lines, or has an
                unsupported top-level shape.
        """
        text = self.path.read_text(encoding="utf-8")
        rows = parse_records(text, source=str(self.path))
        items: list[SavedItem] = []
        for idx, row in enumerate(rows):
            if not isinstance(row, Mapping):
                log.warning("Skipping non-object record: source=%s index=%d", self.path, idx)
                continue
            items.append(SavedItem.from_mapping(row))
        log.debug("Loaded %d records from %s", len(items), self.path)
        return items


def parse_records(text: str, *, source: str = "<string>") -> list[Any]:
    """Parse raw file text into a list of record rows."""
    stripped = text.strip()
    if not stripped:
        return []
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return _parse_json_lines(stripped, source)

    if isinstance(data, list):
        return data
    if isinstance(data, Mapping):
        for key in _WRAPPER_KEYS:
            wrapped = data.get(key)
            if isinstance(wrapped, list):
                return wrapped
        raise ValueError(f"{source}: object root must hold an 'items' or 'bookmarks' list")
    raise ValueError(f"{source}: root must be a list or an object")


def _parse_json_lines(text: str, source: str) -> list[Any]:
    rows: list[Any] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            rows.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise ValueError(f"{source}:{lineno}: invalid JSON ({exc.msg})") from exc
    return rows
