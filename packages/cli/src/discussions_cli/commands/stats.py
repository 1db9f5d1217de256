"""stats command: activity summary over recent discussions."""

from __future__ import annotations

import logging
from collections import Counter

import click
from rich.markup import escape
from rich.table import Table

from discussions_cli import display, session
from discussions_core.errors import AppError
from discussions_core.executor import ErrorContext
from discussions_core.models import Discussion, ListOptions

logger = logging.getLogger(__name__)

STATS_WINDOW = 100
RECENT_ACTIVITY = 5


@click.command("stats")
@click.argument("repo", required=False)
@click.option("--top", default=5, show_default=True, help="Number of top entries to show per table.")
@click.option("--detailed", is_flag=True, help="Also fetch the most recently updated discussions for recent activity.")
@click.pass_context
def stats_cmd(ctx, repo: str | None, top: int, detailed: bool):
    """Show discussion statistics for the last 100 updated discussions in REPO.

    Reports totals, the category breakdown, the most active authors and the
    most commented discussions.
    """
    target = session.require_repo(ctx, repo)
    api = session.client(ctx)
    executor = session.executor(ctx)

    discussions = executor.run(
        lambda: api.list_discussions(target, ListOptions(first=STATS_WINDOW)),
        ErrorContext(operation="analyze statistics", repository=target),
    )
    if not discussions:
        display.console.print("[yellow]No discussions found to analyze.[/yellow]")
        return

    total = len(discussions)
    total_comments = sum(d.comment_count for d in discussions)
    unanswered = sum(1 for d in discussions if d.comment_count == 0)
    locked = sum(1 for d in discussions if d.locked)
    category_counter: Counter[str] = Counter(d.category.name if d.category else "Uncategorized" for d in discussions)
    author_counter: Counter[str] = Counter(d.author.login for d in discussions)
    most_commented = sorted(
        (d for d in discussions if d.comment_count > 0), key=lambda d: d.comment_count, reverse=True
    )[:top]

    console = display.console
    console.print(f"\n[bold]Discussion stats for [cyan]{escape(target)}[/cyan][/bold]")
    console.print(f"  Discussions:     {total}")
    console.print(f"  Total comments:  {total_comments}")
    console.print(f"  Avg comments:    {total_comments / total:.1f}")
    console.print(f"  Unanswered:      {unanswered}")
    console.print(f"  Locked:          {locked}")

    cat_table = Table(title="By Category", show_header=True)
    cat_table.add_column("Category", style="bold")
    cat_table.add_column("Discussions", justify="right")
    cat_table.add_column("% of total", justify="right")
    for name, count in category_counter.most_common(top):
        cat_table.add_row(escape(name), str(count), f"{count / total * 100:.1f}%")
    console.print(cat_table)

    author_table = Table(title=f"Top {top} Authors", show_header=True)
    author_table.add_column("Author")
    author_table.add_column("Discussions", justify="right")
    for login, count in author_counter.most_common(top):
        author_table.add_row(escape(login), str(count))
    console.print(author_table)

    if most_commented:
        top_table = Table(title="Most Commented Discussions", show_header=True)
        top_table.add_column("#", justify="right")
        top_table.add_column("Title", max_width=50)
        top_table.add_column("Comments", justify="right")
        top_table.add_column("Author")
        for d in most_commented:
            top_table.add_row(str(d.number), escape(d.title), str(d.comment_count), escape(d.author.login))
        console.print(top_table)

    if detailed:
        _print_recent_activity(api, executor, target, discussions)


def _print_recent_activity(api, executor, target: str, discussions: list[Discussion]) -> None:
    """Fetch the most recently updated discussions and show their last reply.

    A discussion that cannot be fetched is skipped; the summary above has
    already been printed.
    """
    console = display.console
    console.print("\n[bold]Recent Activity[/bold]")
    recent = sorted(discussions, key=lambda d: d.updated_at, reverse=True)[:RECENT_ACTIVITY]
    for discussion in recent:
        context = ErrorContext(
            operation="fetch recent activity", repository=target, discussion_id=str(discussion.number)
        )
        try:
            detail = executor.retry(lambda: api.get_discussion(target, discussion.number), context)
        except AppError as e:
            logger.warning("Skipping discussion #%d: %s", discussion.number, e.message)
            continue

        console.print(f"  • {escape(detail.title)}", highlight=False)
        console.print(
            f"    [dim]Author:[/dim] {escape(detail.author.login)}  "
            f"[dim]Comments:[/dim] {detail.comment_count}  "
            f"[dim]Updated:[/dim] {display.format_date(detail.updated_at)}",
            highlight=False,
        )
        if detail.comments:
            last = detail.comments[-1].author.login
            console.print(f"    [dim]Last comment by:[/dim] {escape(last)}", highlight=False)
