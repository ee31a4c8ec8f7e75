"""
Output-style management for Claude Code.

Themes may carry an `output-style.md`. It is installed as
~/.claude/output-styles/<theme>.md and activated through the `outputStyle`
key of ~/.claude/settings.json. Whether a theme has a style is decided by
its own `output-style.md`, never by what sits in the output-styles directory. Removing that key restores the host's
default presentation.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Iterable

from gamify.core.config.models import DEFAULT_THEME, RESERVED_THEME
from gamify.core.exceptions import ExternalDocumentError, ThemeExistsError, ThemeNotFoundError
from gamify.core.jsonfile import read_json_document, write_json_document

from .models import STYLE_FILENAME

logger = logging.getLogger(__name__)

OUTPUT_STYLE_KEY = "outputStyle"


class StyleManager:
    """
    Install, activate and clean up output styles.

    Example:
        >>> styles = StyleManager(settings_path, output_styles_dir, themes_dir)
        >>> styles.set_active_style("zelda")
        >>> styles.get_active_style()
        'zelda'
    """

    def __init__(self, settings_path: Path, output_styles_dir: Path, themes_dir: Path) -> None:
        self.settings_path = settings_path
        self.output_styles_dir = output_styles_dir
        self.themes_dir = themes_dir

    def style_path(self, style_name: str) -> Path:
        return self.output_styles_dir / f"{style_name}.md"

    # ------------------------------------------------------------------
    # Style files
    # ------------------------------------------------------------------

    def theme_style_source(self, theme_name: str) -> Path:
        return self.themes_dir / theme_name / STYLE_FILENAME

    def theme_has_style(self, theme_name: str) -> bool:
        """True if the installed theme ships its own output-style.md."""
        return bool(theme_name) and self.theme_style_source(theme_name).is_file()

    def install_theme_style(self, theme_name: str) -> bool:
        """
        Copy a theme's output-style.md into the output-styles directory.

        Returns:
            True if the theme had a style document and it was installed
        """
        if not self.theme_has_style(theme_name):
            return False
        self.output_styles_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.theme_style_source(theme_name), self.style_path(theme_name))
        logger.debug("Installed output style for %s", theme_name)
        return True

    def setup_from_themes(self) -> list[str]:
        """
        Install the style of every installed theme that has one, then
        activate the default theme's style.

        Returns:
            Names of the themes whose style was installed
        """
        installed = []
        if self.themes_dir.is_dir():
            for theme_dir in sorted(self.themes_dir.iterdir()):
                if theme_dir.is_dir() and self.install_theme_style(theme_dir.name):
                    installed.append(theme_dir.name)
        self.set_active_style(DEFAULT_THEME)
        return installed

    def style_exists(self, style_name: str) -> bool:
        return self.style_path(style_name).is_file()

    def remove_style(self, style_name: str) -> bool:
        path = self.style_path(style_name)
        if not path.is_file():
            return False
        path.unlink()
        return True

    def list_styles(self) -> list[str]:
        if not self.output_styles_dir.is_dir():
            return []
        return sorted(p.stem for p in self.output_styles_dir.glob("*.md") if p.is_file())

    def clean_styles(self, theme_names: Iterable[str]) -> list[str]:
        """
        Delete the installed styles of the given themes.

        Returns:
            File names that were removed
        """
        removed = []
        for theme_name in theme_names:
            if self.remove_style(theme_name):
                removed.append(f"{theme_name}.md")
        return removed

    def get_style_content(self, style_name: str) -> str | None:
        try:
            return self.style_path(style_name).read_text(encoding="utf-8")
        except OSError:
            return None

    def create_style(self, style_name: str, content: str) -> Path:
        self.output_styles_dir.mkdir(parents=True, exist_ok=True)
        path = self.style_path(style_name)
        path.write_text(content, encoding="utf-8")
        return path

    def copy_style(self, source_name: str, dest_name: str) -> Path:
        """
        Raises:
            ThemeNotFoundError: If the source style is not installed
            ThemeExistsError: If the destination style already exists
        """
        if not self.style_exists(source_name):
            raise ThemeNotFoundError(source_name, f'Source style "{source_name}" not found')
        if self.style_exists(dest_name):
            raise ThemeExistsError(dest_name)
        dest = self.style_path(dest_name)
        shutil.copyfile(self.style_path(source_name), dest)
        return dest

    def backup_styles(self) -> dict[str, str]:
        backup = {}
        for style_name in self.list_styles():
            content = self.get_style_content(style_name)
            if content:
                backup[style_name] = content
        return backup

    def restore_styles(self, backup: dict[str, str]) -> None:
        for style_name, content in backup.items():
            self.create_style(style_name, content)

    # ------------------------------------------------------------------
    # Host setting
    # ------------------------------------------------------------------

    def set_active_style(self, theme_name: str) -> str | None:
        """
        Point the host's `outputStyle` at a theme, or clear it.

        The key is set only when the theme ships its own output-style.md,
        which is installed first if its copy is missing. The reserved theme
        and style-less themes clear it, even if a file of that name sits in
        the output-styles directory.

        Returns:
            The style now active, or None when cleared

        Raises:
            ExternalDocumentError: If settings.json is unparseable or unwritable
        """
        settings = read_json_document(self.settings_path)
        before = dict(settings)

        active: str | None = None
        if theme_name != RESERVED_THEME and self.theme_has_style(theme_name):
            if not self.style_exists(theme_name):
                self.install_theme_style(theme_name)
            settings[OUTPUT_STYLE_KEY] = theme_name
            active = theme_name
        else:
            settings.pop(OUTPUT_STYLE_KEY, None)

        if settings != before:
            write_json_document(self.settings_path, settings)
            logger.debug("Set %s to %s", OUTPUT_STYLE_KEY, active)
        return active

    def get_active_style(self) -> str | None:
        try:
            value = read_json_document(self.settings_path).get(OUTPUT_STYLE_KEY)
        except ExternalDocumentError as e:
            logger.debug("Could not read active style: %s", e)
            return None
        return value if isinstance(value, str) and value else None

    def reset_if_theme(self, theme_names: Iterable[str]) -> bool:
        """
        Clear `outputStyle` if it names one of the given themes.

        Returns:
            True if the setting was cleared
        """
        names = set(theme_names)
        settings = read_json_document(self.settings_path)
        current = settings.get(OUTPUT_STYLE_KEY)
        if not isinstance(current, str) or current not in names:
            return False
        del settings[OUTPUT_STYLE_KEY]
        write_json_document(self.settings_path, settings)
        return True

    def get_style_stats(self) -> dict[str, Any]:
        styles = self.list_styles()
        active = self.get_active_style()
        return {
            "total_styles": len(styles),
            "active_style": active,
            "available_styles": styles,
            "has_active_style": active is not None,
        }
