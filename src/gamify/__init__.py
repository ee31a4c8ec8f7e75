"""
Claude Gamify - themed sound notifications for Claude Code hooks.

Plays a short sound for each Claude Code lifecycle event using a
user-selectable theme, and keeps the local installation in sync with the
assets bundled in this package.
"""

__version__ = "0.4.0"

from gamify.core.config.models import HOOK_EVENTS, SoundConfig
from gamify.core.context import GamifyContext

__all__ = ["GamifyContext", "HOOK_EVENTS", "SoundConfig", "__version__"]
