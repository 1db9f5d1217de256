"""show command: a discussion with its comments."""

from __future__ import annotations

import click

from discussions_cli import display, session
from discussions_cli.commands.list import FORMAT_CHOICE
from discussions_core.executor import ErrorContext


@click.command("show")
@click.argument("number")
@click.argument("repo", required=False)
@click.option("--format", "fmt", type=FORMAT_CHOICE, default=None, help="Output format. Overrides config.")
@click.pass_context
def show_cmd(ctx, number: str, repo: str | None, fmt: str | None):
    """Show discussion NUMBER in REPO, including up to 100 comments."""
    target = session.require_repo(ctx, repo)
    api = session.client(ctx)

    discussion = session.executor(ctx).run(
        lambda: api.get_discussion(target, number),
        ErrorContext(operation="show discussion", repository=target, discussion_id=number),
    )
    display.print_discussion(discussion, session.output_format(ctx, fmt))
