"""CLI entry point for gh-discussions.

Commands:
  list     — list discussions in a repository
  show     — show a discussion with its comments
  comment  — reply to a discussion
  create   — open a new discussion
  search   — filter recent discussions by title, author or category
  stats    — summarize recent discussion activity
  config   — manage token, default repository and output format
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys

import click

from discussions_cli.commands.comment import comment_cmd
from discussions_cli.commands.config import config_cmd
from discussions_cli.commands.create import create_cmd
from discussions_cli.commands.list import list_cmd
from discussions_cli.commands.search import search_cmd
from discussions_cli.commands.show import show_cmd
from discussions_cli.commands.stats import stats_cmd

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _build_stores(no_persist: bool, config: dict, config_path: str | None = None):
    """Instantiate the credential and config stores.

    --no-persist → in-memory stores seeded from the loaded config, so nothing
                   is written under the home directory
    --config     → preferences are read from and saved to that file
    (default)    → files under ~/.github-discussions/
    """
    if no_persist:
        from discussions_store.memory import MemoryConfigStore, MemoryCredentialStore

        return MemoryCredentialStore(), MemoryConfigStore(config)

    from discussions_store.file import FileConfigStore, FileCredentialStore

    config_store = FileConfigStore(config_path) if config_path else FileConfigStore()
    return FileCredentialStore(), config_store


def _setup_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if verbose or debug else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)
    # httpx logs every request at INFO; only show it when debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("gh-discussions"),
    prog_name="gh-discussions",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Path to the configuration file. [default: ~/.github-discussions/config.yml]",
    envvar="GH_DISCUSSIONS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log retries and API requests to stderr.")
@click.option(
    "--max-retries",
    type=click.IntRange(min=1),
    default=None,
    help="Attempts per API call before giving up. Overrides config.",
)
@click.option(
    "--no-persist",
    is_flag=True,
    help="Do not read or write the token and preferences under ~/.github-discussions.",
)
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool, max_retries: int | None, no_persist: bool):
    """Browse and take part in GitHub Discussions from the terminal."""
    from discussions_core.config import load_config
    from discussions_core.errors import ConfigurationError
    from discussions_core.executor import ErrorContext, ResilientExecutor

    ctx.ensure_object(dict)

    try:
        config = load_config(config_path, cli_overrides={"max_retries": max_retries})
    except ConfigurationError as e:
        ResilientExecutor().fail(e, ErrorContext(operation="load configuration"))

    _setup_logging(verbose, config.get("debug", False))

    credentials, config_store = _build_stores(no_persist, config, config_path)
    ctx.obj["config"] = config
    ctx.obj["credentials"] = credentials
    ctx.obj["config_store"] = config_store


main.add_command(list_cmd)
main.add_command(show_cmd)
main.add_command(comment_cmd)
main.add_command(create_cmd)
main.add_command(search_cmd)
main.add_command(stats_cmd)
main.add_command(config_cmd)
