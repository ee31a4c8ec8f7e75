"""Shared helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer

from gamify.core.config.models import CONFIG_TO_EVENT, HOOK_EVENTS
from gamify.core.context import GamifyContext
from gamify.core.exceptions import (
    ExternalDocumentError,
    InvalidInputError,
    NotInitializedError,
    ReservedThemeError,
    ThemeExistsError,
    ThemeNotFoundError,
)
from gamify.core.services.gamify import GamifyServices

from .errors import ExitCode, print_error, print_not_initialized_error


def get_services(ctx: typer.Context) -> GamifyServices:
    """Services built by the root callback, or a fresh set."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    services = obj.get("services")
    if services is None:
        services = GamifyServices.build(GamifyContext.from_environment())
    return services


def normalize_hook_name(name: str) -> str:
    """
    Accept either an event name (Stop) or a config key (stop).

    Raises:
        typer.Exit: With USER_ERROR for unknown hooks
    """
    if name in HOOK_EVENTS:
        return name
    if name in CONFIG_TO_EVENT:
        return CONFIG_TO_EVENT[name]
    print_error(
        f"Unknown hook: {name}",
        reason=f"Known hooks: {', '.join(HOOK_EVENTS)}",
    )
    raise typer.Exit(ExitCode.USER_ERROR)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Translate domain errors into messages and exit codes."""
    try:
        yield
    except NotInitializedError:
        print_not_initialized_error()
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except InvalidInputError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except ThemeNotFoundError as e:
        print_error(str(e), solution="gamify theme list")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except (ReservedThemeError, ThemeExistsError) as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except ExternalDocumentError as e:
        print_error(str(e), reason="Claude Code settings were left unchanged")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
