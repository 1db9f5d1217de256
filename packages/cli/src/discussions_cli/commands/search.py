"""search command: filter recent discussions.

GitHub has no discussion search endpoint on this API, so the filter runs
locally over a single page of the most recently updated discussions.
"""

from __future__ import annotations

from operator import attrgetter

import click

from discussions_cli import display, session
from discussions_cli.commands.list import FORMAT_CHOICE
from discussions_core.executor import ErrorContext
from discussions_core.models import Discussion, ListOptions

SEARCH_WINDOW = 100

_SORT_KEYS = {
    "created": attrgetter("created_at"),
    "updated": attrgetter("updated_at"),
    "comments": attrgetter("comment_count"),
}


def matches(discussion: Discussion, query: str, author: str | None = None, category: str | None = None) -> bool:
    """Case-insensitive title match plus optional exact author/category filters."""
    if query.lower() not in discussion.title.lower():
        return False
    if author and discussion.author.login.lower() != author.lower():
        return False
    if category:
        if discussion.category is None or discussion.category.name.lower() != category.lower():
            return False
    return True


def sort_discussions(discussions: list[Discussion], field: str = "updated", order: str = "desc") -> list[Discussion]:
    return sorted(discussions, key=_SORT_KEYS[field], reverse=order == "desc")


@click.command("search")
@click.argument("query")
@click.argument("repo", required=False)
@click.option("--author", default=None, help="Only discussions started by this login.")
@click.option("--category", default=None, help="Only discussions in this category (by name).")
@click.option("--sort", type=click.Choice(list(_SORT_KEYS)), default="updated", show_default=True)
@click.option("--order", type=click.Choice(["asc", "desc"]), default="desc", show_default=True)
@click.option("--limit", default=20, show_default=True, type=click.IntRange(1, SEARCH_WINDOW))
@click.option("--format", "fmt", type=FORMAT_CHOICE, default=None, help="Output format. Overrides config.")
@click.pass_context
def search_cmd(
    ctx,
    query: str,
    repo: str | None,
    author: str | None,
    category: str | None,
    sort: str,
    order: str,
    limit: int,
    fmt: str | None,
):
    """Search the last 100 updated discussions in REPO for QUERY in the title."""
    target = session.require_repo(ctx, repo)
    api = session.client(ctx)

    discussions = session.executor(ctx).run(
        lambda: api.list_discussions(target, ListOptions(first=SEARCH_WINDOW)),
        ErrorContext(operation="search discussions", repository=target),
    )

    results = [d for d in discussions if matches(d, query, author, category)]
    results = sort_discussions(results, sort, order)[:limit]
    if not results:
        display.console.print(f"[yellow]No discussions matching {query!r} found.[/yellow]", highlight=False)
        return
    display.print_discussions(results, session.output_format(ctx, fmt), title=f"Search results — {query}")
