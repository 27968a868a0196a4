from __future__ import annotations

"""Public configuration API for StashQuery."""

from StashQuery.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from StashQuery.config.output import OutputConfig
from StashQuery.config.runtime import RuntimeConfig
from StashQuery.config.search import SearchConfig
from StashQuery.config.storage import StoreConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "SearchConfig",
    "StoreConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
