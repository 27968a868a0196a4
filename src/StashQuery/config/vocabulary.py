"""Vocabulary configuration: extra `date:` presets and `type:` keywords."""

from __future__ import annotations

from typing import Any, Mapping

from StashQuery.config.common import ConfigSection
from StashQuery.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary


def load_vocabulary(raw: Mapping[str, Any]) -> Vocabulary:
    """Build the vocabulary from the optional ``vocabulary`` section.

    Configured entries are added on top of `DEFAULT_VOCABULARY`; an entry
    with an existing key replaces the built-in one.

    Raises:
        TypeError: If entries have the wrong types.
    """
    section = ConfigSection.of(raw, "vocabulary", required=False)

    preset_table = section.table("date_presets")
    presets = {" ".join(key.split()).lower(): preset_table.integer(key) for key in preset_table}

    type_table = section.table("type_mappings")
    mappings = {
        key.strip().lower(): tuple(tag.strip().lower() for tag in type_table.words(key))
        for key in type_table
    }

    if not presets and not mappings:
        return DEFAULT_VOCABULARY
    return DEFAULT_VOCABULARY.merged(date_presets=presets, type_mappings=mappings)


def check_vocabulary(vocabulary: Vocabulary) -> None:
    """Validate vocabulary constraints.

    Raises:
        ValueError: If a preset is negative or empty, or a type keyword maps to nothing.
    """
    for preset, days in vocabulary.date_presets.items():
        if not preset:
            raise ValueError("vocabulary.date_presets keys must not be empty")
        if days < 0:
            raise ValueError(f"vocabulary.date_presets.{preset} must be >= 0")
    for keyword, tags in vocabulary.type_mappings.items():
        if not keyword or ":" in keyword or any(ch.isspace() for ch in keyword):
            raise ValueError(f"vocabulary.type_mappings key is not a single word: {keyword!r}")
        if not tags or not all(tags):
            raise ValueError(f"vocabulary.type_mappings.{keyword} must list at least one type")
