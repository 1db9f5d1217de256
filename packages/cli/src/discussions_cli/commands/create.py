"""create command: open a new discussion."""

from __future__ import annotations

import click
from rich.markup import escape
from rich.table import Table

from discussions_cli import display, session
from discussions_core.executor import ErrorContext


@click.command("create")
@click.argument("title", required=False)
@click.argument("body", required=False)
@click.argument("repo", required=False)
@click.option("--category", "-c", "category_id", default=None, help="Category id. Defaults to General.")
@click.option("--editor", "-e", is_flag=True, help="Write the body in $EDITOR.")
@click.option("--list-categories", is_flag=True, help="List the repository's categories and exit.")
@click.pass_context
def create_cmd(
    ctx,
    title: str | None,
    body: str | None,
    repo: str | None,
    category_id: str | None,
    editor: bool,
    list_categories: bool,
):
    """Create a discussion titled TITLE in REPO.

    Without --category the "General" category is used, or the first category
    when the repository has no "General".
    """
    target = session.require_repo(ctx, repo)
    api = session.client(ctx)
    executor = session.executor(ctx)

    if list_categories:
        categories = executor.run(
            lambda: api.list_categories(target),
            ErrorContext(operation="list categories", repository=target),
        )
        table = Table(title=f"Discussion categories — {target}", header_style="bold cyan")
        table.add_column("Name")
        table.add_column("ID", style="dim")
        for category in categories:
            table.add_row(category.name, category.id)
        display.console.print(table)
        return

    if not title:
        title = click.prompt("Discussion title")
    if not title.strip():
        raise click.UsageError("Title cannot be empty.")

    if not body or editor:
        body = click.edit(body or "")
    if not body or not body.strip():
        raise click.UsageError("Discussion body cannot be empty.")

    discussion = executor.run(
        lambda: api.create_discussion(target, title.strip(), body.strip(), category_id),
        ErrorContext(operation="create discussion", repository=target),
    )

    display.console.print("[green]✓ Discussion created successfully![/green]")
    display.console.print(f"[dim]URL: {discussion.url}[/dim]\n")
    display.console.print(f"[bold]Title:[/bold] {escape(discussion.title)}", highlight=False)
    display.console.print(f"[dim]Category: {escape(discussion.category.name) if discussion.category else 'N/A'}[/dim]")
