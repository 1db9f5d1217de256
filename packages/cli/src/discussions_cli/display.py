"""Rendering of normalized entities as tables, markdown or JSON."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from discussions_core.models import Discussion, DiscussionDetail

console = Console()

_TITLE_WIDTH = 50


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


def _short(title: str) -> str:
    return title if len(title) <= _TITLE_WIDTH else title[: _TITLE_WIDTH - 3] + "..."


def to_json(value) -> str:
    """Serialize dataclass entities with ISO-8601 timestamps."""

    def _default(obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        raise TypeError(f"{type(obj).__name__} is not JSON serializable")

    if isinstance(value, list):
        payload = [asdict(v) for v in value]
    else:
        payload = asdict(value)
    return json.dumps(payload, indent=2, default=_default)


def print_discussions(discussions: list[Discussion], fmt: str = "table", title: str = "GitHub Discussions") -> None:
    if fmt == "json":
        console.print_json(to_json(discussions))
        return
    if fmt == "markdown":
        console.print("| # | Title | Author | Comments | Updated | Category |", markup=False, highlight=False)
        console.print("|---|-------|--------|----------|---------|----------|", markup=False, highlight=False)
        for d in discussions:
            category = d.category.name if d.category else "N/A"
            console.print(
                f"| {d.number} | {_short(d.title)} | {d.author.login} | {d.comment_count} "
                f"| {format_date(d.updated_at)} | {category} |",
                markup=False,
                highlight=False,
            )
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="bold", justify="right")
    table.add_column("Title", max_width=_TITLE_WIDTH)
    table.add_column("Author", max_width=15)
    table.add_column("Comments", justify="right", width=8)
    table.add_column("Updated", width=16)
    table.add_column("Category", max_width=15)
    for d in discussions:
        title_cell = escape(_short(d.title))
        if d.locked:
            title_cell = f"[dim]{title_cell} (locked)[/dim]"
        table.add_row(
            str(d.number),
            title_cell,
            escape(d.author.login),
            str(d.comment_count),
            format_date(d.updated_at),
            escape(d.category.name) if d.category else "[dim]N/A[/dim]",
        )
    console.print(table)


def print_discussion(discussion: DiscussionDetail, fmt: str = "table") -> None:
    if fmt == "json":
        console.print_json(to_json(discussion))
        return

    console.print(f"[bold blue]# {escape(discussion.title)}[/bold blue]\n")
    console.print(f"[dim]By: {escape(discussion.author.login)}[/dim]")
    console.print(f"[dim]Created: {format_date(discussion.created_at)}[/dim]")
    console.print(f"[dim]Updated: {format_date(discussion.updated_at)}[/dim]")
    console.print(f"[dim]Comments: {discussion.comment_count}[/dim]")
    console.print(f"[dim]Category: {escape(discussion.category.name) if discussion.category else 'N/A'}[/dim]")
    console.print(f"[dim]URL: {discussion.url}[/dim]")
    if discussion.locked:
        console.print("[yellow]This discussion is locked[/yellow]")

    console.print("\n[bold]Description:[/bold]")
    console.print(discussion.body, markup=False, highlight=False)

    comments = discussion.comments
    if not comments:
        return

    heading = f"Comments ({len(comments)})"
    if discussion.truncated:
        heading = f"Comments (showing {len(comments)} of {discussion.comment_count})"
    console.print(f"\n[bold]{heading}:[/bold]")
    console.rule()
    for index, comment in enumerate(comments, start=1):
        console.print(f"\n[bold]Comment {index}[/bold]")
        console.print(f"[dim]By: {escape(comment.author.login)} • {format_date(comment.created_at)}[/dim]")
        console.print(f"[dim]URL: {comment.url}[/dim]\n")
        console.print(comment.body, markup=False, highlight=False)
        if index < len(comments):
            console.print("─" * 40)
