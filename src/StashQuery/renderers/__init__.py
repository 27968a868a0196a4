"""Output renderers for command results.

Provides the OutputWriter abstraction, console and JSON implementations, and
a factory that builds writers from configuration.
"""

from __future__ import annotations

from StashQuery.config import AppConfig
from StashQuery.renderers.base import MultiOutputWriter, OutputWriter
from StashQuery.renderers.console import ConsoleOutputWriter, render_syntax_help, render_text
from StashQuery.renderers.json import JsonOutputWriter, render_json, render_result


def create_output_writer(config: AppConfig, *, explain: bool = False) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Application configuration.
        explain: Log the compiled filters before the console results.

    Returns:
        Writer delegating to every configured format.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter(explain=explain))
    if "json" in config.output.formats:
        writers.append(JsonOutputWriter())

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonOutputWriter",
    "MultiOutputWriter",
    "render_json",
    "render_result",
    "render_syntax_help",
    "render_text",
    "create_output_writer",
]
