"""Human-readable failure report written to stderr."""

from __future__ import annotations

import json
import os

from rich.console import Console
from rich.markup import escape

from discussions_core.errors import AppError, ErrorKind, error_label

_stderr = Console(stderr=True)


def debug_enabled() -> bool:
    return bool(os.environ.get("DEBUG"))


def render_error(error: AppError, console: Console | None = None, debug: bool | None = None) -> None:
    """Print label, message, context and suggestions for ``error``.

    Internal details are only shown when debug output is enabled, either
    explicitly or through the DEBUG environment variable.
    """
    console = console or _stderr
    if debug is None:
        debug = debug_enabled()

    console.print()
    console.rule(f"[bold red]✗ {error_label(error.kind)}[/bold red]", style="red")
    console.print(f"[bold]Error:[/bold] [red]{escape(error.message)}[/red]", highlight=False)

    ctx = error.context or {}
    if ctx:
        console.print("\n[bold]Context:[/bold]")
        if ctx.get("operation"):
            console.print(f"  [dim]Operation: {escape(str(ctx['operation']))}[/dim]", highlight=False)
        if ctx.get("repository"):
            console.print(f"  [dim]Repository: {escape(str(ctx['repository']))}[/dim]", highlight=False)
        if ctx.get("discussion_id"):
            console.print(f"  [dim]Discussion: #{escape(str(ctx['discussion_id']))}[/dim]", highlight=False)

    if error.suggestions:
        console.print("\n[bold yellow]Suggestions:[/bold yellow]")
        for suggestion in error.suggestions:
            console.print(f"  [yellow]• {escape(suggestion)}[/yellow]", highlight=False)

    if debug:
        console.print("\n[bold dim]Debug Information:[/bold dim]")
        console.print(json.dumps(error.to_dict(), indent=2, default=str), markup=False, highlight=False)
    else:
        console.print("\n[dim]Run with DEBUG=1 for detailed error information[/dim]")

    if error.kind is ErrorKind.NETWORK_ERROR:
        console.print("\n[cyan]Tip: Network errors are often temporary.[/cyan]")

    console.rule(style="red")
