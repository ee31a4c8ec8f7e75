"""
Theme registry.

Enumerates installed themes, resolves sound and style paths inside them, and
switches the active theme in both the gamify config and the host's
output-style setting.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from gamify.core.config.models import DEFAULT_THEME, RESERVED_THEME
from gamify.core.config.store import ConfigStore
from gamify.core.exceptions import (
    InvalidInputError,
    ReservedThemeError,
    ThemeExistsError,
    ThemeNotFoundError,
)

from .models import (
    NO_DESCRIPTION,
    README_FILENAME,
    SOUND_EXTENSIONS,
    STYLE_FILENAME,
    Theme,
    ThemeValidation,
)
from .styles import StyleManager

logger = logging.getLogger(__name__)


def read_description(theme_path: Path) -> str:
    """First non-empty README line with leading '#' stripped."""
    try:
        content = (theme_path / README_FILENAME).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return NO_DESCRIPTION
    for line in content.splitlines():
        text = line.lstrip("#").strip()
        if text:
            return text
    return NO_DESCRIPTION


def list_sound_files(theme_path: Path) -> list[str]:
    """Hook names that have a sound asset in `theme_path`."""
    try:
        entries = list(theme_path.iterdir())
    except OSError:
        return []
    return sorted({p.stem for p in entries if p.is_file() and p.suffix.lower() in SOUND_EXTENSIONS})


def _check_theme_name(theme_name: str) -> None:
    if not theme_name or theme_name.startswith(".") or "/" in theme_name or "\\" in theme_name:
        raise InvalidInputError(f"Invalid theme name: {theme_name!r}")


class ThemeRegistry:
    """
    Installed sound themes.

    Example:
        >>> registry = ThemeRegistry(themes_dir, config_store, style_manager)
        >>> [t.name for t in registry.list()]
        ['system', 'zelda']
        >>> registry.resolve_sound_path("zelda", "Stop")
        PosixPath('.../themes/zelda/Stop.wav')
    """

    def __init__(
        self,
        themes_dir: Path,
        config_store: ConfigStore,
        style_manager: StyleManager,
    ) -> None:
        self.themes_dir = themes_dir
        self.config_store = config_store
        self.style_manager = style_manager

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def list(self) -> list[Theme]:
        """All installed themes, sorted by name. Empty if the root is absent."""
        if not self.themes_dir.is_dir():
            return []
        try:
            entries = sorted(self.themes_dir.iterdir())
        except OSError as e:
            logger.debug("Could not list themes in %s: %s", self.themes_dir, e)
            return []
        return [self.get_theme_info(entry) for entry in entries if entry.is_dir()]

    def get_theme_info(self, theme_path: Path) -> Theme:
        return Theme(
            name=theme_path.name,
            description=read_description(theme_path),
            path=theme_path,
            sound_files=list_sound_files(theme_path),
            has_style=(theme_path / STYLE_FILENAME).is_file(),
        )

    def exists(self, theme_name: str) -> bool:
        return bool(theme_name) and self.get_theme_path(theme_name).is_dir()

    def get_theme_path(self, theme_name: str) -> Path:
        return self.themes_dir / theme_name

    def get_removable_themes(self) -> list[str]:
        return [t.name for t in self.list() if t.name != RESERVED_THEME]

    def get_active(self) -> str:
        return self.config_store.get_theme()

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve_sound_path(self, theme_name: str, hook_name: str) -> Path | None:
        """
        Find the sound for a hook inside one theme.

        Extensions are tried in SOUND_EXTENSIONS order. There is no
        fallback to other themes or to system sounds.
        """
        if not theme_name or not hook_name:
            return None
        theme_path = self.get_theme_path(theme_name)
        for ext in SOUND_EXTENSIONS:
            candidate = theme_path / f"{hook_name}{ext}"
            if candidate.is_file():
                return candidate
        return None

    def get_style_path(self, theme_name: str) -> Path | None:
        path = self.get_theme_path(theme_name) / STYLE_FILENAME
        return path if path.is_file() else None

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_active(self, theme_name: str) -> Theme:
        """
        Activate a theme.

        Persists the theme to the config, then points the host's output
        style at it, or clears the host setting if the theme has no style.

        Raises:
            ThemeNotFoundError: If the theme is not installed
            ExternalDocumentError: If the host settings cannot be updated
                (the config change is kept)
        """
        if not self.exists(theme_name):
            raise ThemeNotFoundError(theme_name)

        theme = self.get_theme_info(self.get_theme_path(theme_name))
        self.config_store.set_theme(theme_name)
        self.style_manager.set_active_style(theme_name)

        logger.info("Activated theme %s", theme_name)
        return theme

    def remove(self, theme_name: str) -> None:
        """
        Delete an installed theme.

        The installed copy of its output style is deleted too. If it was the active
        theme, the config and the host output style fall back to the
        default theme.

        Raises:
            ReservedThemeError: For the built-in "system" theme
            ThemeNotFoundError: If the theme is not installed
            ExternalDocumentError: If the host settings cannot be updated
                (the theme is already gone)
        """
        if theme_name == RESERVED_THEME:
            raise ReservedThemeError(theme_name)
        if not self.exists(theme_name):
            raise ThemeNotFoundError(theme_name)

        had_style = self.style_manager.theme_has_style(theme_name)
        shutil.rmtree(self.get_theme_path(theme_name))
        if had_style:
            self.style_manager.remove_style(theme_name)
        logger.info("Removed theme %s", theme_name)

        if self.config_store.exists() and self.config_store.get_theme() == theme_name:
            self.config_store.set_theme(DEFAULT_THEME)
            self.style_manager.set_active_style(DEFAULT_THEME)
            logger.info("Active theme removed, falling back to %s", DEFAULT_THEME)

    def install(self, source_dir: Path, theme_name: str | None = None) -> Theme:
        """
        Copy a theme directory into the themes root.

        Raises:
            InvalidInputError: If the source is not a valid theme directory
            ThemeExistsError: If a theme with that name is already installed
        """
        name = theme_name or source_dir.name
        _check_theme_name(name)

        validation = self.validate_theme(source_dir)
        if not validation.valid:
            raise InvalidInputError("; ".join(validation.errors), path=str(source_dir))
        if self.get_theme_path(name).exists():
            raise ThemeExistsError(name)

        self.themes_dir.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source_dir, self.get_theme_path(name))
        return self.get_theme_info(self.get_theme_path(name))

    def copy_theme(self, source_name: str, dest_name: str) -> Theme:
        """
        Raises:
            ThemeNotFoundError: If the source theme is not installed
            ThemeExistsError: If the destination name is taken
        """
        _check_theme_name(dest_name)
        if not self.exists(source_name):
            raise ThemeNotFoundError(source_name, f'Source theme "{source_name}" not found')
        if self.get_theme_path(dest_name).exists():
            raise ThemeExistsError(dest_name)
        shutil.copytree(self.get_theme_path(source_name), self.get_theme_path(dest_name))
        return self.get_theme_info(self.get_theme_path(dest_name))

    @staticmethod
    def validate_theme(theme_path: Path) -> ThemeValidation:
        """Check a candidate theme directory for sounds and a README."""
        result = ThemeValidation()
        if not theme_path.is_dir():
            result.valid = False
            result.errors.append("Theme path is not a directory")
            return result
        if not list_sound_files(theme_path):
            result.warnings.append("No sound files found in theme")
        if not (theme_path / README_FILENAME).is_file():
            result.warnings.append(f"No {README_FILENAME} file found")
        return result
