from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from StashQuery.config.output import OutputConfig, check_output, load_output
from StashQuery.config.runtime import RuntimeConfig, check_runtime, load_runtime
from StashQuery.config.search import SearchConfig, check_search, load_search
from StashQuery.config.storage import StoreConfig, check_store, load_store
from StashQuery.config.vocabulary import check_vocabulary, load_vocabulary
from StashQuery.core.vocabulary import Vocabulary

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    search: SearchConfig
    store: StoreConfig
    output: OutputConfig
    vocabulary: Vocabulary


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    search = load_search(raw)
    store = load_store(raw)
    output = load_output(raw)
    vocabulary = load_vocabulary(raw)

    check_runtime(runtime)
    check_search(search)
    check_store(store)
    check_output(output)
    check_vocabulary(vocabulary)

    return AppConfig(
        runtime=runtime,
        search=search,
        store=store,
        output=output,
        vocabulary=vocabulary,
    )


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return parse_config_dict(parse_yaml(Path(path).read_text(encoding="utf-8")))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    _defaults_text: str | None = None,
) -> AppConfig:
    """Load config by deep-merging an override file onto the defaults.

    Args:
        config_path: Override YAML file.
        default_path: Defaults YAML file.
        _defaults_text: Defaults YAML content, used instead of reading
            ``default_path`` (tests).
    """
    if _defaults_text is None:
        base = parse_yaml(Path(default_path).read_text(encoding="utf-8"))
    else:
        base = parse_yaml(_defaults_text)
    if _defaults_text is None and Path(config_path).resolve() == Path(default_path).resolve():
        return parse_config_dict(base)
    override = parse_yaml(Path(config_path).read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
