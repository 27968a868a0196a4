"""Record store adapters for StashQuery.

The search core only needs an iterable of records; this package supplies a
file-backed store for the CLI.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from StashQuery.storage.json_store import JsonRecordStore, parse_records
from StashQuery.utils.log import log

if TYPE_CHECKING:
    from StashQuery.config import AppConfig


def create_record_store(config: AppConfig, path: Path | None = None) -> JsonRecordStore:
    """Create the record store for a run.

    Args:
        config: Application configuration holding the default store path.
        path: Explicit path overriding ``store.path``.

    Returns:
        JsonRecordStore reading the resolved path.
    """
    resolved = Path(path) if path is not None else Path(config.store.path)
    log.debug("Record store: %s", resolved)
    return JsonRecordStore(resolved)


__all__ = [
    "JsonRecordStore",
    "create_record_store",
    "parse_records",
]
