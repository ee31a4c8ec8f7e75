"""
Notification entry points invoked by Claude Code hooks.

Claude Code runs the installed dispatcher (`index.py <HookName>`) for every
hook event. The dispatcher re-launches the standalone player detached and
exits at once; the player reads the config, maybe starts a detached audio
process, and exits. Neither ever reports failure for anything past argument
parsing, so a broken install can never stall the host.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

from gamify.core.context import GamifyContext
from gamify.core.env import load_layered_env
from gamify.core.player.launcher import Launcher, launch_detached
from gamify.core.services.gamify import GamifyServices

logger = logging.getLogger(__name__)

USAGE = "Usage: gamify-notify <HookName>"


def play_main(
    argv: Sequence[str] | None = None,
    *,
    ctx: GamifyContext | None = None,
    launcher: Launcher = launch_detached,
) -> int:
    """
    Play the sound for one hook event.

    Returns:
        1 if the hook name is missing, otherwise 0
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE, file=sys.stderr)
        return 1

    hook_name = args[0]
    try:
        if ctx is None:
            load_layered_env()
            ctx = GamifyContext.from_environment()
        services = GamifyServices.build(ctx, launcher=launcher)
        services.config.load_or_defaults()
        services.player.play(hook_name)
    except Exception as e:
        logger.debug("Notification for %s failed: %s", hook_name, e)
    return 0


def dispatch_main(
    argv: Sequence[str] | None = None,
    *,
    player_script: Path | None = None,
    python_executable: str | None = None,
    launcher: Launcher = launch_detached,
) -> int:
    """Re-launch the standalone player detached with the same arguments."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if player_script is None:
            load_layered_env()
            player_script = GamifyContext.from_environment().player_path
        launcher([python_executable or sys.executable, str(player_script), *args])
    except Exception as e:
        logger.debug("Dispatch failed: %s", e)
    return 0


def main() -> None:
    """Console script entry point for `gamify-notify`."""
    sys.exit(play_main())
