"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

from pathlib import Path

import click

from StashQuery.cli.commands import SearchCommand
from StashQuery.config import AppConfig
from StashQuery.renderers import create_output_writer
from StashQuery.services import create_search_service
from StashQuery.storage import create_record_store
from StashQuery.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, component creation and error handling
    for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def configure(self, action: str) -> None:
        log_path = configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        if log_path is not None:
            log.debug("Log file: %s", log_path)

    def run_search(
        self,
        action: str,
        query: str,
        *,
        records_path: Path | None = None,
        sort: str | None = None,
        limit: int | None = None,
        explain: bool = False,
    ) -> None:
        """Execute the search command.

        Args:
            action: The CLI command name (e.g., 'search').
            query: Raw search box text.
            records_path: Store file overriding ``store.path``.
            sort: Sort order overriding ``search.sort``.
            limit: Result limit overriding ``search.limit``.
            explain: Log the compiled filters.

        Raises:
            click.Abort: When the search fails.
        """
        self.configure(action)
        try:
            output_writer = create_output_writer(self.config, explain=explain)
            command = SearchCommand(
                query=query,
                store=create_record_store(self.config, records_path),
                search_service=create_search_service(self.config),
                output_writer=output_writer,
                sort=sort or self.config.search.sort,
                limit=limit if limit is not None else self.config.search.limit,
            )
            command.execute()
            output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e
