"""comment command: reply to a discussion."""

from __future__ import annotations

import click

from discussions_cli import display, session
from discussions_core.executor import ErrorContext


@click.command("comment")
@click.argument("number")
@click.argument("message", required=False)
@click.argument("repo", required=False)
@click.option("--editor", "-e", is_flag=True, help="Write the comment in $EDITOR.")
@click.pass_context
def comment_cmd(ctx, number: str, message: str | None, repo: str | None, editor: bool):
    """Add a comment to discussion NUMBER.

    The discussion is fetched first to turn its number into the node id the
    mutation needs.
    """
    target = session.require_repo(ctx, repo)

    body = message
    if not body or editor:
        body = click.edit(body or "")
    if not body or not body.strip():
        raise click.UsageError("Comment cannot be empty.")

    api = session.client(ctx)
    executor = session.executor(ctx)
    context = ErrorContext(operation="add comment", repository=target, discussion_id=number)

    discussion = executor.run(lambda: api.get_discussion(target, number), context)
    comment = executor.run(lambda: api.create_comment(target, discussion.id, body.strip()), context)

    display.console.print("[green]✓ Comment posted successfully![/green]")
    display.console.print(f"[dim]URL: {comment.url}[/dim]\n")
    display.console.print("[bold]Your comment:[/bold]")
    display.console.print(comment.body, markup=False, highlight=False)
