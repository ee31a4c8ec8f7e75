"""
Gamify CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging

import typer
from rich.console import Console
from rich.table import Table

from gamify import __version__
from gamify.cli import hooks, sound, theme
from gamify.cli.common import get_services, handle_errors
from gamify.cli.errors import ExitCode, print_warning
from gamify.core.context import GamifyContext
from gamify.core.env import load_layered_env
from gamify.core.services.gamify import GamifyServices

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gamify",
    help="Themed sound notifications for Claude Code hooks",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Claude Gamify - sound themes for Claude Code.

    Quick Start:
        1. gamify init               # Install themes, hooks and config
        2. gamify theme list         # See installed themes
        3. gamify sound test Stop    # Preview a sound
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    # Precedence: OS env > project .env > user .env
    load_layered_env()

    services = GamifyServices.build(GamifyContext.from_environment())
    upgraded = services.sync.silent_upgrade_on_startup()
    if upgraded:
        logger.debug("Upgraded installation to %s", upgraded)

    ctx.obj = {"debug": debug, "services": services}


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Reinitialize even if already installed (resets preferences)",
    ),
) -> None:
    """
    Install bundled themes, register Claude Code hooks and write defaults.

    Examples:
        gamify init              # First-time setup
        gamify init --force      # Start over with default preferences
    """
    services = get_services(ctx)
    if services.is_initialized() and not force:
        console.print("[green]✓[/green] Claude Gamify is already initialized")
        console.print("[dim]Use --force to reinitialize[/dim]")
        raise typer.Exit(ExitCode.SUCCESS)

    with handle_errors():
        result = services.init()

    console.print("[green]✓[/green] Claude Gamify initialized")
    console.print(f"  Installed to: {services.ctx.install_root}")
    console.print(f"  Hooks: {', '.join(result.hooks_installed)}")
    if result.active_style:
        console.print(f"  Output style: {result.active_style}")


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the active theme, sound settings and hook installation."""
    services = get_services(ctx)
    with handle_errors():
        config = services.config.get_config()

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Theme", config.theme)
    table.add_row("Sound", "[green]on[/green]" if config.sound_enabled else "[red]off[/red]")
    table.add_row("Volume", f"{round(config.sound_volume * 100)}%")
    table.add_row(
        "Active hooks",
        f"{services.config.get_active_hooks_count()}/{len(services.hooks.hook_names)}",
    )
    table.add_row(
        "Hooks installed",
        "[green]yes[/green]" if services.hooks.are_hooks_installed() else "[red]no[/red]",
    )
    table.add_row("Output style", services.styles.get_active_style() or "default")
    table.add_row("Players", ", ".join(services.player.available_players()) or "none")
    table.add_row("Version", config.version or "unknown")
    console.print(table)

    health = services.player.health_check()
    for issue in health.issues:
        console.print(f"[red]✗[/red] {issue}")
    for warning in health.warnings:
        console.print(f"[yellow]⚠[/yellow] {warning}")


@app.command()
def uninstall(
    ctx: typer.Context,
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt",
    ),
) -> None:
    """
    Remove hooks, output styles and the ~/.claude-gamify directory.

    Other Claude Code settings and third-party hooks are preserved.
    """
    services = get_services(ctx)
    if not yes:
        confirm = typer.confirm("Completely uninstall Claude Gamify?")
        if not confirm:
            console.print("[yellow]Uninstall cancelled[/yellow]")
            raise typer.Exit(ExitCode.SUCCESS)

    result = services.uninstall()
    console.print(f"  Hook bindings removed: {result.removed_hooks}")
    console.print(f"  Output styles removed: {len(result.removed_styles)}")

    if result.success:
        console.print("[green]✓[/green] Claude Gamify has been uninstalled")
        raise typer.Exit(ExitCode.SUCCESS)

    for error in result.errors:
        print_warning(error)
    console.print("[yellow]Uninstall completed with some errors[/yellow]")
    raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.command()
def version() -> None:
    """Show gamify version and exit."""
    console.print(f"gamify version {__version__}")
    raise typer.Exit(0)


app.add_typer(theme.app, name="theme")
app.add_typer(sound.app, name="sound")
app.add_typer(hooks.app, name="hooks")


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
