"""list command: one page of discussions for a repository."""

from __future__ import annotations

import click

from discussions_cli import display, session
from discussions_core.executor import ErrorContext
from discussions_core.models import DiscussionOrder, ListOptions

FORMAT_CHOICE = click.Choice(["table", "json", "markdown"])


@click.command("list")
@click.argument("repo", required=False)
@click.option(
    "--first",
    "-f",
    default=20,
    show_default=True,
    type=click.IntRange(1, 100),
    help="Number of discussions to fetch.",
)
@click.option("--after", default=None, help="Cursor to start after (from a previous page).")
@click.option("--sort", type=click.Choice(["created", "updated"]), default="updated", show_default=True)
@click.option("--order", type=click.Choice(["asc", "desc"]), default="desc", show_default=True)
@click.option("--format", "fmt", type=FORMAT_CHOICE, default=None, help="Output format. Overrides config.")
@click.pass_context
def list_cmd(ctx, repo: str | None, first: int, after: str | None, sort: str, order: str, fmt: str | None):
    """List discussions in REPO (owner/name), most recently updated first."""
    target = session.require_repo(ctx, repo)
    api = session.client(ctx)
    options = ListOptions(
        first=first,
        after=after,
        order_by=DiscussionOrder(field=f"{sort.upper()}_AT", direction=order.upper()),
    )

    discussions = session.executor(ctx).run(
        lambda: api.list_discussions(target, options),
        ErrorContext(operation="list discussions", repository=target),
    )

    if not discussions:
        display.console.print("[yellow]No discussions found in this repository.[/yellow]")
        return
    display.print_discussions(discussions, session.output_format(ctx, fmt), title=f"GitHub Discussions — {target}")
