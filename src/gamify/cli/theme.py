"""
Theme management commands.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gamify.cli.common import get_services, handle_errors
from gamify.cli.errors import ExitCode, print_warning
from gamify.core.exceptions import ExternalDocumentError

app = typer.Typer(
    name="theme",
    help="List, switch, install and remove sound themes",
    no_args_is_help=True,
)

console = Console()


@app.command(name="list")
def list_themes(ctx: typer.Context) -> None:
    """List installed themes."""
    services = get_services(ctx)
    themes = services.themes.list()
    if not themes:
        console.print("[yellow]No themes installed.[/yellow] Run 'gamify init' first.")
        raise typer.Exit(ExitCode.SUCCESS)

    active = services.config.load_or_defaults().theme if services.is_initialized() else None

    table = Table(title="Themes")
    table.add_column("", width=1)
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Sounds", justify="right")
    table.add_column("Style")
    for info in themes:
        table.add_row(
            "*" if info.name == active else "",
            info.name,
            info.description,
            str(len(info.sound_files)),
            "yes" if info.has_style else "",
        )
    console.print(table)


@app.command(name="use")
def use(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Theme to activate"),
) -> None:
    """
    Activate a theme and its Claude Code output style.

    Examples:
        gamify theme use zelda
        gamify theme use system     # Back to Claude Code's default style
    """
    services = get_services(ctx)
    with handle_errors():
        services.config.load()
        try:
            info = services.themes.set_active(name)
        except ExternalDocumentError as e:
            console.print(f"[green]✓[/green] Theme set to {name}")
            print_warning(f"Output style not updated: {e}")
            raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print(f"[green]✓[/green] Theme set to {info.name}")
    if info.has_style:
        console.print(f"  Output style: {info.name}")


@app.command(name="remove")
def remove(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Theme to delete"),
) -> None:
    """Delete an installed theme. The active theme falls back to the default."""
    services = get_services(ctx)
    with handle_errors():
        services.themes.remove(name)
    console.print(f"[green]✓[/green] Removed theme {name}")


@app.command(name="install")
def install(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Directory containing the theme's sound files"),
    name: str | None = typer.Option(
        None,
        "--name",
        "-n",
        help="Install under this name (default: directory name)",
    ),
) -> None:
    """
    Install a theme from a local directory.

    Sound files must be named after hook events, e.g. Stop.wav or
    Notification.mp3.
    """
    services = get_services(ctx)
    source = path.expanduser().resolve()
    for warning in services.themes.validate_theme(source).warnings:
        print_warning(warning)
    with handle_errors():
        info = services.themes.install(source, name)
    console.print(
        f"[green]✓[/green] Installed theme {info.name} ({len(info.sound_files)} sounds)"
    )
