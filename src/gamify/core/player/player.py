"""
Sound player.

Turns a hook event into a detached playback process. Nothing on this path
raises. A missing sound, a missing player and a failed spawn all end in a
silent no-op.
"""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import Callable, Iterable

from pydantic import BaseModel, Field

from gamify.core.config.models import HOOK_EVENTS
from gamify.core.config.store import ConfigStore
from gamify.core.exceptions import GamifyError, PlaybackUnavailableError
from gamify.core.themes.registry import ThemeRegistry

from .backends import Which, available_players, build_play_command
from .launcher import Launcher, launch_detached

logger = logging.getLogger(__name__)


class HealthReport(BaseModel):
    """Result of a sound system health check."""

    healthy: bool = True
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    players: list[str] = Field(default_factory=list, description="Audio players found")


class SoundPlayer:
    """
    Decide whether to play, resolve the file and launch playback.

    The launcher, platform and PATH probe are injectable so tests never
    start a real audio process.

    Example:
        >>> player = SoundPlayer(store, registry, ctx.player_path)
        >>> player.play("Stop")
        True
    """

    def __init__(
        self,
        config_store: ConfigStore,
        theme_registry: ThemeRegistry,
        player_path: Path,
        *,
        launcher: Launcher = launch_detached,
        platform: str | None = None,
        which: Which = shutil.which,
    ) -> None:
        self.config_store = config_store
        self.theme_registry = theme_registry
        self.player_path = player_path
        self.launcher = launcher
        self.platform = platform
        self.which = which

    def should_play(self, hook_name: str) -> bool:
        """Sound enabled, volume above zero and the hook's own flag set."""
        try:
            if not self.config_store.is_sound_enabled():
                return False
            if self.config_store.get_volume() <= 0:
                return False
            return self.config_store.get_hook_state(hook_name)
        except GamifyError as e:
            logger.debug("Cannot decide playback for %s: %s", hook_name, e)
            return False

    def get_sound_path(self, hook_name: str) -> Path | None:
        """Sound file for `hook_name` in the active theme."""
        try:
            theme = self.config_store.get_theme()
        except GamifyError:
            return None
        return self.theme_registry.resolve_sound_path(theme, hook_name)

    def is_sound_available(self, hook_name: str) -> bool:
        return self.get_sound_path(hook_name) is not None

    def get_available_sounds(self) -> list[str]:
        try:
            theme = self.config_store.get_theme()
        except GamifyError:
            return []
        for info in self.theme_registry.list():
            if info.name == theme:
                return info.sound_files
        return []

    def _launch(self, hook_name: str) -> None:
        sound_path = self.get_sound_path(hook_name)
        if sound_path is None:
            raise PlaybackUnavailableError(f"No sound for {hook_name}", hook_name=hook_name)

        argv = build_play_command(
            sound_path, self.config_store.get_volume(), self.platform, self.which
        )
        if argv is None:
            raise PlaybackUnavailableError("No audio player available")

        if not self.launcher(argv):
            raise PlaybackUnavailableError(f"Could not start {argv[0]}")
        logger.debug("Playing %s via %s", sound_path, argv[0])

    def _play(self, hook_name: str, *, forced: bool) -> bool:
        try:
            if not forced and not self.should_play(hook_name):
                return False
            self._launch(hook_name)
            return True
        except GamifyError as e:
            logger.debug("Playback skipped for %s: %s", hook_name, e)
        except Exception as e:
            logger.debug("Playback failed for %s: %s", hook_name, e)
        return False

    def play(self, hook_name: str) -> bool:
        """
        Play the sound for a hook if preferences allow.

        Returns:
            True if a playback process was launched
        """
        return self._play(hook_name, forced=False)

    def test_single(self, hook_name: str) -> bool:
        return self._play(hook_name, forced=False)

    def test_single_forced(self, hook_name: str) -> bool:
        """Preview a sound regardless of the enable flags."""
        return self._play(hook_name, forced=True)

    def test_all(
        self,
        hook_names: Iterable[str] | None = None,
        delay: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> list[str]:
        """
        Preview several hooks in sequence.

        Returns:
            Hook names for which playback was launched
        """
        played = []
        for hook_name in hook_names if hook_names is not None else HOOK_EVENTS:
            if self.test_single_forced(hook_name):
                played.append(hook_name)
                sleep(delay)
        return played

    def available_players(self) -> list[str]:
        return available_players(self.platform, self.which)

    def health_check(self) -> HealthReport:
        report = HealthReport(players=self.available_players())

        if not self.player_path.exists():
            report.healthy = False
            report.issues.append("Sound player script not found")

        if not report.players:
            report.healthy = False
            report.issues.append("No audio player found")

        if not self.get_available_sounds():
            report.warnings.append("No sound files found for current theme")

        try:
            if not self.config_store.is_sound_enabled():
                report.warnings.append("Sound is currently disabled")
            if self.config_store.get_volume() == 0:
                report.warnings.append("Volume is set to 0%")
        except GamifyError as e:
            report.healthy = False
            report.issues.append(str(e))

        return report
