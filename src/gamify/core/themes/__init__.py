"""Sound themes and Claude Code output styles."""

from .models import SOUND_EXTENSIONS, Theme, ThemeValidation
from .registry import ThemeRegistry
from .styles import StyleManager

__all__ = ["SOUND_EXTENSIONS", "StyleManager", "Theme", "ThemeRegistry", "ThemeValidation"]
