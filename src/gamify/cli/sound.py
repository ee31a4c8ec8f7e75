"""
Sound preference commands.
"""

import typer
from rich.console import Console
from rich.table import Table

from gamify.cli.common import get_services, handle_errors, normalize_hook_name
from gamify.cli.errors import ExitCode, print_error
from gamify.core.config.store import config_key_to_event

app = typer.Typer(
    name="sound",
    help="Toggle sound, set volume, preview sounds and choose which hooks play",
    no_args_is_help=True,
)

console = Console()


@app.command(name="toggle")
def toggle(ctx: typer.Context) -> None:
    """Turn all sounds on or off."""
    services = get_services(ctx)
    with handle_errors():
        enabled = services.config.toggle_sound()
    console.print(f"Sound {'[green]enabled[/green]' if enabled else '[red]disabled[/red]'}")


@app.command(name="volume")
def volume(
    ctx: typer.Context,
    level: str = typer.Argument(..., help="Volume percentage, 0-100"),
) -> None:
    """Set playback volume as an integer percentage."""
    services = get_services(ctx)
    with handle_errors():
        fraction = services.config.set_volume(level)
    console.print(f"Volume set to {round(fraction * 100)}%")


@app.command(name="test")
def test(
    ctx: typer.Context,
    hook: str = typer.Argument(..., help="Hook event to preview, e.g. Stop"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Play even if sound or this hook is disabled",
    ),
) -> None:
    """Preview the active theme's sound for one hook."""
    services = get_services(ctx)
    hook_name = normalize_hook_name(hook)
    with handle_errors():
        services.config.load()

    if force:
        played = services.player.test_single_forced(hook_name)
    else:
        played = services.player.test_single(hook_name)

    if played:
        console.print(f"[green]♪[/green] Playing {hook_name}")
        return
    if not force and not services.player.should_play(hook_name):
        console.print(f"[yellow]Sound for {hook_name} is disabled[/yellow] (use --force)")
        return
    if not services.player.is_sound_available(hook_name):
        console.print(f"[yellow]No sound for {hook_name} in the active theme[/yellow]")
        return
    print_error("No audio player available", reason="Install paplay, aplay, mpg123 or sox")
    raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.command(name="hooks")
def hook_states(ctx: typer.Context) -> None:
    """Show which hooks play a sound."""
    services = get_services(ctx)
    with handle_errors():
        states = services.config.get_all_hook_states()

    table = Table(title="Hook sounds")
    table.add_column("Hook", style="cyan")
    table.add_column("Enabled")
    table.add_column("Sound file")
    for key, enabled in states.items():
        event = config_key_to_event(key)
        table.add_row(
            event,
            "[green]on[/green]" if enabled else "[red]off[/red]",
            "yes" if services.player.is_sound_available(event) else "-",
        )
    console.print(table)
    console.print(f"{services.config.get_active_hooks_count()}/{len(states)} hooks active")


@app.command(name="enable")
def enable(
    ctx: typer.Context,
    hook: str = typer.Argument(..., help="Hook event, e.g. PreToolUse"),
) -> None:
    """Enable the sound for one hook."""
    services = get_services(ctx)
    hook_name = normalize_hook_name(hook)
    with handle_errors():
        services.config.set_hook_state(hook_name, True)
    console.print(f"[green]✓[/green] {hook_name} enabled")


@app.command(name="disable")
def disable(
    ctx: typer.Context,
    hook: str = typer.Argument(..., help="Hook event, e.g. PreToolUse"),
) -> None:
    """Disable the sound for one hook."""
    services = get_services(ctx)
    hook_name = normalize_hook_name(hook)
    with handle_errors():
        services.config.set_hook_state(hook_name, False)
    console.print(f"[green]✓[/green] {hook_name} disabled")


@app.command(name="all")
def set_all(
    ctx: typer.Context,
    state: str = typer.Argument(..., help="on or off"),
) -> None:
    """Enable or disable every hook at once."""
    services = get_services(ctx)
    normalized = state.strip().lower()
    if normalized not in ("on", "off"):
        print_error(f"Expected 'on' or 'off', got {state!r}")
        raise typer.Exit(ExitCode.USER_ERROR)
    with handle_errors():
        services.config.set_all_hook_states(normalized == "on")
    console.print(f"[green]✓[/green] All hooks {normalized}")


@app.command(name="invert")
def invert(ctx: typer.Context) -> None:
    """Flip every hook's enabled flag."""
    services = get_services(ctx)
    with handle_errors():
        services.config.invert_hook_states()
        count = services.config.get_active_hooks_count()
    console.print(f"[green]✓[/green] Hooks inverted ({count} active)")


@app.command(name="reset")
def reset(ctx: typer.Context) -> None:
    """Enable every hook again."""
    services = get_services(ctx)
    with handle_errors():
        services.config.reset_hook_states()
    console.print("[green]✓[/green] Hook sounds reset to defaults")
