"""
Standardized error handling and exit codes for the gamify CLI.
"""

from enum import IntEnum

from rich.console import Console

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for gamify CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error, or gamify is not initialized."""

    USER_ERROR = 2
    """Invalid input (volume, hook name, theme name)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Example:
        >>> print_error(
        ...     'Theme "mario" not found',
        ...     solution="gamify theme list",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_not_initialized_error() -> None:
    """Onboarding prompt shown when config.json is missing or corrupt."""
    print_error(
        "Claude Gamify is not initialized",
        reason="No usable configuration was found in ~/.claude-gamify",
        solution="gamify init",
    )


def print_warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {message}")
