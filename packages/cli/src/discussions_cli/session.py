"""Per-command wiring shared by every subcommand.

Commands never construct the client, stores or executor themselves; they ask
for them here so the token/repo resolution rules and the retry settings are
identical everywhere.
"""

from __future__ import annotations

from pathlib import Path

import click

from discussions_cli.auth import resolve_github_token
from discussions_core.diagnostics import DiagnosticLog
from discussions_core.executor import ErrorContext, ResilientExecutor
from discussions_core.gh.discussions import DiscussionsClient


def _obj(ctx: click.Context) -> dict:
    return ctx.find_root().obj or {}


def require_token(ctx: click.Context) -> str:
    token = resolve_github_token(_obj(ctx).get("credentials"))
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN, run `gh-discussions config --token <token>`, "
            "or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    return token


def require_repo(ctx: click.Context, repo: str | None) -> str:
    """Return ``repo`` or the configured default repository."""
    if repo:
        return repo
    obj = _obj(ctx)
    store = obj.get("config_store")
    default = executor(ctx).run(store.get_default_repo, ErrorContext("read configuration")) if store else None
    default = default or obj.get("config", {}).get("default_repo")
    if not default:
        raise click.UsageError(
            "No repository specified. Provide a repo argument or set a default repo with "
            "`gh-discussions config --repo owner/name`."
        )
    return default


def output_format(ctx: click.Context, explicit: str | None) -> str:
    if explicit:
        return explicit
    obj = _obj(ctx)
    store = obj.get("config_store")
    if store is not None:
        stored = executor(ctx).run(store.get_config, ErrorContext("read configuration")).get("output_format")
        if stored:
            return stored
    return obj.get("config", {}).get("output_format", "table")


def client(ctx: click.Context) -> DiscussionsClient:
    token = require_token(ctx)
    config = _obj(ctx).get("config", {})
    api = DiscussionsClient(
        token,
        api_url=config.get("api_url", "https://api.github.com/graphql"),
        comment_limit=int(config.get("comment_limit", 100)),
    )
    ctx.call_on_close(api.close)
    return api


def executor(ctx: click.Context) -> ResilientExecutor:
    config = _obj(ctx).get("config", {})
    diagnostics = DiagnosticLog(Path(config["log_dir"])) if config.get("log_dir") else DiagnosticLog()
    return ResilientExecutor(max_retries=int(config.get("max_retries", 3)), diagnostics=diagnostics)
