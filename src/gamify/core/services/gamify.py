"""
Service facade wiring every gamify component from one context.

The CLI and the notification entry point build a GamifyServices once per
process and never construct components themselves.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass

from gamify.core.config.store import ConfigStore
from gamify.core.context import GamifyContext
from gamify.core.exceptions import GamifyError
from gamify.core.hooks.registrar import HookRegistrar
from gamify.core.player.launcher import Launcher, launch_detached
from gamify.core.player.player import SoundPlayer
from gamify.core.themes.registry import ThemeRegistry
from gamify.core.themes.styles import StyleManager
from gamify.core.upgrade.sync import AssetSynchronizer

from .models import InitResult, UninstallResult

logger = logging.getLogger(__name__)


@dataclass
class GamifyServices:
    """All components for one process, sharing one ConfigStore."""

    ctx: GamifyContext
    config: ConfigStore
    styles: StyleManager
    themes: ThemeRegistry
    hooks: HookRegistrar
    player: SoundPlayer
    sync: AssetSynchronizer

    @classmethod
    def build(cls, ctx: GamifyContext, *, launcher: Launcher = launch_detached) -> GamifyServices:
        config = ConfigStore(ctx.config_file, ctx.version)
        styles = StyleManager(ctx.claude_settings_path, ctx.output_styles_dir, ctx.themes_dir)
        themes = ThemeRegistry(ctx.themes_dir, config, styles)
        hooks = HookRegistrar(ctx.claude_settings_path, ctx.dispatcher_path, ctx.python_executable)
        player = SoundPlayer(config, themes, ctx.player_path, launcher=launcher)
        sync = AssetSynchronizer(ctx, config, styles)
        return cls(
            ctx=ctx,
            config=config,
            styles=styles,
            themes=themes,
            hooks=hooks,
            player=player,
            sync=sync,
        )

    def is_initialized(self) -> bool:
        return self.config.exists()

    def init(self) -> InitResult:
        """
        Deploy a fresh installation.

        Creates the directories, copies the bundled themes, styles and
        runtime scripts, binds every hook, writes the default config, then
        installs every theme style and activates the default theme's style.
        Errors propagate.
        """
        self.ctx.install_root.mkdir(parents=True, exist_ok=True)
        self.ctx.themes_dir.mkdir(parents=True, exist_ok=True)
        self.ctx.claude_dir.mkdir(parents=True, exist_ok=True)

        copied = self.sync.sync_themes() + self.sync.sync_runtime_scripts()
        self.hooks.setup()
        self.config.initialize()
        styles_installed = self.styles.setup_from_themes()
        active = self.styles.get_active_style()

        logger.info("Initialized gamify in %s", self.ctx.install_root)
        return InitResult(
            copied_files=copied,
            hooks_installed=list(self.hooks.hook_names),
            styles_installed=styles_installed,
            active_style=active,
        )

    def _gamify_theme_names(self) -> list[str]:
        names = {theme.name for theme in self.themes.list()}
        if self.ctx.template_themes_dir.is_dir():
            names.update(p.name for p in self.ctx.template_themes_dir.iterdir() if p.is_dir())
        return sorted(names)

    def uninstall(self) -> UninstallResult:
        """
        Remove everything gamify installed.

        Each step runs even if an earlier one failed.
        """
        result = UninstallResult()
        theme_names = self._gamify_theme_names()

        try:
            result.removed_hooks = self.hooks.remove()
        except GamifyError as e:
            logger.warning("Could not remove hooks: %s", e)
            result.errors.append(f"Failed to remove hooks: {e}")

        try:
            result.removed_styles = self.styles.clean_styles(theme_names)
        except OSError as e:
            logger.warning("Could not remove output styles: %s", e)
            result.errors.append(f"Failed to remove output styles: {e}")

        try:
            self.styles.reset_if_theme(theme_names)
        except GamifyError as e:
            logger.warning("Could not reset output style: %s", e)
            result.errors.append(f"Failed to reset output style: {e}")

        try:
            if self.ctx.install_root.exists():
                shutil.rmtree(self.ctx.install_root)
        except OSError as e:
            logger.warning("Could not remove %s: %s", self.ctx.install_root, e)
            result.errors.append(f"Failed to remove installation directory: {e}")

        result.success = not result.errors
        return result
