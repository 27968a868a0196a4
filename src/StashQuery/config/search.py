"""Search domain configuration: result ordering, limits, scan sharding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from StashQuery.config.common import ConfigSection

SORT_ORDERS = ("store", "newest", "oldest")


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search behavior settings.

    Attributes:
        sort: Result order, one of `SORT_ORDERS`.
        limit: Maximum number of results, -1 for no limit.
        workers: Threads used to scan records; 1 scans inline.
    """

    sort: str = "store"
    limit: int = -1
    workers: int = 1


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the optional ``search`` section.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed search configuration; missing keys use defaults.

    Raises:
        TypeError: If config types are invalid.
    """
    section = ConfigSection.of(raw, "search", required=False)
    defaults = SearchConfig()
    return SearchConfig(
        sort=section.text("sort", defaults.sort).strip().lower(),
        limit=section.integer("limit", defaults.limit),
        workers=section.integer("workers", defaults.workers),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.sort not in SORT_ORDERS:
        raise ValueError(f"search.sort must be one of {list(SORT_ORDERS)}")
    if config.limit == 0 or config.limit < -1:
        raise ValueError("search.limit must be -1 or positive")
    if config.workers <= 0:
        raise ValueError("search.workers must be positive")
