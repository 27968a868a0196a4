"""Output domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from StashQuery.config.common import ConfigSection

_ALLOWED_FORMATS = frozenset({"console", "json"})


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Store validated output settings.

    Attributes:
        formats: Enabled writers in configured order.
    """

    formats: tuple[str, ...] = ("console",)


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load the optional ``output`` section.

    Raises:
        TypeError: If ``output.formats`` is not a string list.
    """
    section = ConfigSection.of(raw, "output", required=False)
    formats = section.words("formats", OutputConfig().formats)
    normalized: list[str] = []
    for item in formats:
        fmt = item.strip().lower()
        if fmt and fmt not in normalized:
            normalized.append(fmt)
    return OutputConfig(formats=tuple(normalized))


def check_output(config: OutputConfig) -> None:
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = [fmt for fmt in config.formats if fmt not in _ALLOWED_FORMATS]
    if unknown:
        raise ValueError(f"output.formats has unknown format(s): {unknown}")
