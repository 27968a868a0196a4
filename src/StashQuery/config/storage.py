"""Record store configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from StashQuery.config.common import ConfigSection


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Location of the saved-items export searched by the CLI."""

    path: str


def load_store(raw: Mapping[str, Any]) -> StoreConfig:
    section = ConfigSection.of(raw, "store", required=True)
    return StoreConfig(path=section.text("path"))


def check_store(config: StoreConfig) -> None:
    if not config.path.strip():
        raise ValueError("store.path must not be empty")
