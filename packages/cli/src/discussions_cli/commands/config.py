"""config command: manage token, default repository and output format."""

from __future__ import annotations

import click

from discussions_cli import display, session
from discussions_core.executor import ErrorContext
from discussions_store.base import OUTPUT_FORMATS, is_valid_repo


@click.command("config")
@click.option("--token", default=None, help="Set the GitHub Personal Access Token (validated first).")
@click.option("--repo", default=None, help="Set the default repository (owner/name).")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Set the default output format.",
)
@click.option("--show", is_flag=True, help="Show the current configuration.")
@click.option("--clear", is_flag=True, help="Remove the stored token and preferences.")
@click.pass_context
def config_cmd(ctx, token: str | None, repo: str | None, fmt: str | None, show: bool, clear: bool):
    """Manage gh-discussions configuration.

    Without options, prompts for each setting interactively.
    """
    obj = ctx.find_root().obj
    credentials = obj["credentials"]
    store = obj["config_store"]
    executor = session.executor(ctx)
    context = ErrorContext(operation="update configuration")
    console = display.console

    if clear:
        executor.run(credentials.clear_token, context)
        executor.run(lambda: store.update_config({"default_repo": None, "output_format": "table"}), context)
        console.print("[green]✓ Configuration cleared successfully.[/green]")
        return

    if show:
        config = executor.run(store.get_config, ErrorContext(operation="read configuration"))
        stored_token = executor.run(credentials.get_token, ErrorContext(operation="read configuration"))
        console.print("[bold]Current Configuration:[/bold]")
        console.print(f"Token: {'[green]✓ Set[/green]' if stored_token else '[red]✗ Not set[/red]'}")
        console.print(f"Default Repository: {config.get('default_repo') or '[dim]Not set[/dim]'}")
        console.print(f"Output Format: {config.get('output_format', 'table')}")
        return

    interactive = token is None and repo is None and fmt is None
    if interactive:
        current = executor.run(store.get_config, ErrorContext(operation="read configuration"))
        console.print("[bold]GitHub Discussions CLI Configuration[/bold]\n")
        if not executor.run(credentials.get_token, context):
            token = click.prompt("GitHub Personal Access Token", hide_input=True)
        repo = click.prompt("Default repository (owner/name)", default=current.get("default_repo") or "") or None
        fmt = click.prompt(
            "Default output format",
            type=click.Choice(OUTPUT_FORMATS),
            default=current.get("output_format", "table"),
        )

    if token:
        console.print("Validating token...")
        valid = executor.run(lambda: credentials.validate_token(token.strip()), context)
        if not valid:
            raise click.BadParameter(
                "Invalid token. Please check your GitHub Personal Access Token.", param_hint="--token"
            )
        executor.run(lambda: credentials.set_token(token.strip()), context)
        console.print("[green]✓ Token set successfully.[/green]")

    if repo:
        if not is_valid_repo(repo):
            raise click.BadParameter("Invalid repository format. Use: owner/repository", param_hint="--repo")
        executor.run(lambda: store.set_default_repo(repo), context)
        console.print(f"[green]✓ Default repository set to: {repo}[/green]")

    if fmt:
        executor.run(lambda: store.update_config({"output_format": fmt}), context)
        console.print(f"[green]✓ Output format set to: {fmt}[/green]")
