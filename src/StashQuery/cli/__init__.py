"""CLI package for StashQuery command orchestration.

Contains the click interface, the command runner and the command
implementations.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from StashQuery.cli.runner import CommandRunner
from StashQuery.cli.ui import cli


def main() -> None:
    """Run StashQuery CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
