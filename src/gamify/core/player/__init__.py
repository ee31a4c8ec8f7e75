"""Sound resolution and detached playback."""

from .backends import available_players, build_play_command, select_player
from .launcher import launch_detached
from .player import HealthReport, SoundPlayer

__all__ = [
    "HealthReport",
    "SoundPlayer",
    "available_players",
    "build_play_command",
    "launch_detached",
    "select_player",
]
