"""
Asset synchronization and silent upgrade.

On every process start the installed copy under ~/.claude-gamify is
brought in line with the assets bundled in this package:

1. Merge the bundled config.json with the local config (local wins for
   keys the bundled schema knows), stamp the running version, persist.
2. Mirror each bundled theme (sounds, README, output style) into the
   install root, and each theme's style into ~/.claude/output-styles.
3. Re-activate the output style of the configured theme.
4. Refresh the runtime scripts (dispatcher, standalone player).

Every copy is gated on a content digest, so an unchanged bundle writes
nothing. Each step is isolated: one failing step is recorded and the next
one still runs.
"""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from pathlib import Path
from typing import Any, Callable

from gamify.core.config.migration import merge_configurations
from gamify.core.config.store import ConfigStore
from gamify.core.context import GamifyContext
from gamify.core.exceptions import NotInitializedError
from gamify.core.themes.models import README_FILENAME, SOUND_EXTENSIONS, STYLE_FILENAME
from gamify.core.themes.styles import StyleManager

from .models import StepResult, UpgradeReport

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def file_hash(path: Path) -> str | None:
    """SHA-1 of a file's content, or None if it cannot be read."""
    try:
        return hashlib.sha1(path.read_bytes()).hexdigest()
    except OSError:
        return None


def files_differ(source: Path, dest: Path) -> bool:
    """True if `dest` is absent or its content differs from `source`."""
    dest_hash = file_hash(dest)
    return dest_hash is None or dest_hash != file_hash(source)


def copy_if_changed(source: Path, dest: Path, mode: int | None = None) -> bool:
    """
    Copy `source` over `dest` only when their digests differ.

    Args:
        source: Bundled file
        dest: Installed counterpart
        mode: Permission bits applied after a copy

    Returns:
        True if the file was copied
    """
    if not files_differ(source, dest):
        if mode is not None and (dest.stat().st_mode & 0o777) != mode:
            dest.chmod(mode)
        return False
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
    if mode is not None:
        dest.chmod(mode)
    logger.debug("Synced %s -> %s", source, dest)
    return True


def _is_theme_asset(path: Path) -> bool:
    return path.suffix.lower() in SOUND_EXTENSIONS or path.name in (
        README_FILENAME,
        STYLE_FILENAME,
    )


class AssetSynchronizer:
    """
    Version-gated, digest-diffed sync of bundled assets into the install root.

    Example:
        >>> sync = AssetSynchronizer(ctx, config_store, style_manager)
        >>> sync.silent_upgrade_on_startup()
        '0.4.0'
    """

    def __init__(
        self,
        ctx: GamifyContext,
        config_store: ConfigStore,
        style_manager: StyleManager,
    ) -> None:
        self.ctx = ctx
        self.config_store = config_store
        self.style_manager = style_manager

    def needs_upgrade(self) -> bool:
        """
        True when the installed config is stale or a runtime script is missing.

        An installation without a config document is not upgraded here;
        `gamify init` handles it.
        """
        try:
            config = self.config_store.load()
        except NotInitializedError:
            return False
        if config.version != self.ctx.version:
            return True
        return not (self.ctx.player_path.exists() and self.ctx.dispatcher_path.exists())

    def _run_step(self, name: str, action: Callable[[], list[str]]) -> StepResult:
        try:
            copied = action()
        except Exception as e:
            logger.debug("Upgrade step %s failed: %s", name, e)
            return StepResult(name=name, success=False, error=str(e))
        return StepResult(name=name, copied=copied)

    def run_upgrade(self) -> UpgradeReport:
        """Run all four steps unconditionally and report what happened."""
        from_version: str | None = None
        if self.config_store.exists():
            try:
                from_version = self.config_store.load().version
            except NotInitializedError:
                from_version = None

        steps = [
            self._run_step("config", self.merge_config),
            self._run_step("themes", self.sync_themes),
            self._run_step("style", self.activate_style),
            self._run_step("runtime", self.sync_runtime_scripts),
        ]
        report = UpgradeReport(from_version=from_version, version=self.ctx.version, steps=steps)
        logger.debug(
            "Upgrade to %s copied %d files (%d failed steps)",
            report.version,
            len(report.copied_files),
            len(report.errors),
        )
        return report

    def silent_upgrade_on_startup(self) -> str | None:
        """
        Upgrade if needed; never raises.

        Returns:
            The version upgraded to, or None if nothing ran
        """
        try:
            if not self.needs_upgrade():
                return None
            return self.run_upgrade().version
        except Exception as e:
            logger.debug("Silent upgrade failed: %s", e)
            return None

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def merge_config(self) -> list[str]:
        """Step 1: overlay local values on the bundled config and stamp the version."""
        template: dict[str, Any] = json.loads(
            self.ctx.template_config_path.read_text(encoding="utf-8")
        )
        try:
            local = self.config_store.export()
        except NotInitializedError:
            local = {}
        merged = merge_configurations(local, template)
        merged["version"] = self.ctx.version
        self.config_store.import_config(merged)
        return []

    def sync_themes(self) -> list[str]:
        """Step 2: mirror bundled themes and their output styles."""
        copied: list[str] = []
        source_root = self.ctx.template_themes_dir
        if not source_root.is_dir():
            return copied

        for source_theme in sorted(source_root.iterdir()):
            if not source_theme.is_dir():
                continue
            dest_theme = self.ctx.themes_dir / source_theme.name
            dest_theme.mkdir(parents=True, exist_ok=True)

            for source in sorted(source_theme.iterdir()):
                if not source.is_file() or not _is_theme_asset(source):
                    continue
                dest = dest_theme / source.name
                if copy_if_changed(source, dest):
                    copied.append(str(dest))
                if source.name == STYLE_FILENAME:
                    style_dest = self.style_manager.style_path(source_theme.name)
                    if copy_if_changed(source, style_dest):
                        copied.append(str(style_dest))
        return copied

    def activate_style(self) -> list[str]:
        """Step 3: point the host output style at the configured theme."""
        self.style_manager.set_active_style(self.config_store.get_theme())
        return []

    def sync_runtime_scripts(self) -> list[str]:
        """Step 4: refresh the dispatcher and the standalone player."""
        copied: list[str] = []
        for dest in (self.ctx.player_path, self.ctx.dispatcher_path):
            source = self.ctx.template_dir / dest.name
            if copy_if_changed(source, dest, EXECUTABLE_MODE):
                copied.append(str(dest))
        return copied
