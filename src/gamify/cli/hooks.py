"""
Hook management commands for Claude Code integration.

Installs, removes and validates the bindings in ~/.claude/settings.json
that make Claude Code run the gamify dispatcher for each hook event.
"""

import typer
from rich.console import Console

from gamify.cli.common import get_services, handle_errors
from gamify.cli.errors import ExitCode

app = typer.Typer(
    name="hooks",
    help="Manage Claude Code hook bindings",
    no_args_is_help=True,
)

console = Console()


@app.command(name="install")
def install(ctx: typer.Context) -> None:
    """
    Bind every hook event to the gamify dispatcher.

    Existing bindings under the same event names are replaced; other
    settings are preserved.
    """
    services = get_services(ctx)
    with handle_errors():
        services.hooks.setup()
    console.print(f"[green]✓[/green] Installed {len(services.hooks.hook_names)} hooks")
    console.print(f"  Settings file: {services.hooks.settings_path}")


@app.command(name="remove")
def remove(ctx: typer.Context) -> None:
    """Remove gamify's hook bindings, keeping everything else."""
    services = get_services(ctx)
    with handle_errors():
        removed = services.hooks.remove()
    if removed:
        console.print(f"[green]✓[/green] Removed {removed} hook bindings")
    else:
        console.print("[dim]No gamify hooks found[/dim]")


@app.command(name="check")
def check(ctx: typer.Context) -> None:
    """
    Validate hook installation.

    Exits non-zero if any error-level issue is found.
    """
    services = get_services(ctx)
    issues = services.hooks.validate()
    if not issues:
        console.print("[green]✓[/green] All hooks installed")
        raise typer.Exit(ExitCode.SUCCESS)

    has_errors = False
    for issue in issues:
        if issue.severity == "error":
            has_errors = True
            console.print(f"[red]Error:[/red] {issue.message}")
        elif issue.severity == "warning":
            console.print(f"[yellow]Warning:[/yellow] {issue.message}")
        else:
            console.print(f"[blue]Info:[/blue] {issue.message}")

    raise typer.Exit(ExitCode.GENERAL_ERROR if has_errors else ExitCode.SUCCESS)
