"""
Platform audio player selection.

We never decode audio ourselves; playback shells out to a player already
installed on the machine. macOS always has `afplay`. On Linux the first
available of paplay, aplay, mpg123 and play is used, each with its own
volume unit.
"""

from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

Which = Callable[[str], "str | None"]

# paplay takes an integer where 65536 is 100%
PAPLAY_FULL_VOLUME = 65536


@dataclass(frozen=True)
class PlayerBackend:
    """A command-line audio player and how to pass it a volume."""

    name: str
    build: Callable[[Path, float], list[str]]

    def argv(self, sound_path: Path, volume: float) -> list[str]:
        return self.build(sound_path, volume)


MACOS_PLAYER = PlayerBackend(
    "afplay", lambda path, volume: ["afplay", "-v", str(volume), str(path)]
)

LINUX_PLAYERS: tuple[PlayerBackend, ...] = (
    PlayerBackend(
        "paplay",
        lambda path, volume: [
            "paplay",
            "--volume",
            str(round(volume * PAPLAY_FULL_VOLUME)),
            str(path),
        ],
    ),
    # no volume control
    PlayerBackend("aplay", lambda path, volume: ["aplay", str(path)]),
    PlayerBackend("mpg123", lambda path, volume: ["mpg123", "-q", str(path)]),
    PlayerBackend("play", lambda path, volume: ["play", "-q", "-v", str(volume), str(path)]),
)


def candidate_players(platform: str | None = None) -> tuple[PlayerBackend, ...]:
    platform = platform or sys.platform
    if platform == "darwin":
        return (MACOS_PLAYER,)
    if platform.startswith("linux"):
        return LINUX_PLAYERS
    return ()


def available_players(platform: str | None = None, which: Which = shutil.which) -> list[str]:
    """Names of the candidate players found on PATH, in preference order."""
    platform = platform or sys.platform
    if platform == "darwin":
        # afplay ships with the OS
        return [MACOS_PLAYER.name]
    return [p.name for p in candidate_players(platform) if which(p.name)]


def select_player(platform: str | None = None, which: Which = shutil.which) -> PlayerBackend | None:
    """
    Pick the player to use on this platform.

    Returns:
        The first available backend, or None if nothing usable is installed
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return MACOS_PLAYER
    for player in candidate_players(platform):
        if which(player.name):
            return player
    return None


def build_play_command(
    sound_path: Path,
    volume: float,
    platform: str | None = None,
    which: Which = shutil.which,
) -> list[str] | None:
    """Full argv for playing `sound_path` at `volume` (0.0-1.0), or None."""
    player = select_player(platform, which)
    if player is None:
        return None
    return player.argv(sound_path, volume)
