"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to their
runners.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from dotenv import load_dotenv

from StashQuery.cli.runner import CommandRunner
from StashQuery.compiler.compile import QueryCompiler
from StashQuery.config import DEFAULT_CONFIG_PATH, AppConfig, load_config, load_config_with_defaults
from StashQuery.config.search import SORT_ORDERS
from StashQuery.renderers import render_syntax_help


def _load(config_path: Path) -> AppConfig:
    try:
        if config_path != DEFAULT_CONFIG_PATH and DEFAULT_CONFIG_PATH.is_file():
            return load_config_with_defaults(config_path, DEFAULT_CONFIG_PATH)
        return load_config(config_path)
    except (OSError, TypeError, ValueError) as e:
        raise click.ClickException(f"Cannot load config {config_path}: {e}") from e


@click.group(help="StashQuery: filter saved items with search box syntax.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged onto the default config).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from a .env file, then the YAML config.
    """
    load_dotenv()
    ctx.obj = _load(config_path)


@cli.command("search")
@click.argument("query")
@click.option(
    "--records",
    "records_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Saved items file (JSON or JSON Lines); defaults to store.path.",
)
@click.option("--sort", type=click.Choice(SORT_ORDERS), default=None, help="Result order.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum number of results.")
@click.option("--explain", is_flag=True, help="Show the compiled filters.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    query: str,
    records_path: Path | None,
    sort: str | None,
    limit: int | None,
    explain: bool,
) -> None:
    """Search saved items with QUERY.

    Raises:
        click.Abort: When the search fails.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_search(
        ctx.command.name,
        query,
        records_path=records_path,
        sort=sort,
        limit=limit,
        explain=explain,
    )


@cli.command("parse")
@click.argument("query")
@click.pass_context
def parse_cmd(ctx: click.Context, query: str) -> None:
    """Print the filters compiled from QUERY as JSON."""
    cfg: AppConfig = ctx.obj
    CommandRunner(cfg).configure(ctx.command.name)
    spec = QueryCompiler(cfg.vocabulary).compile(query)
    click.echo(json.dumps(spec.to_dict(), ensure_ascii=False, indent=2))


@cli.command("syntax")
def syntax_cmd() -> None:
    """Print the search syntax cheat sheet."""
    click.echo(render_syntax_help(), nl=False)
