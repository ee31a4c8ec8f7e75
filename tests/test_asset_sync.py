"""
Tests for asset synchronization and the silent startup upgrade.

Tests cover:
- Trigger conditions (version mismatch, missing runtime scripts)
- Digest-gated copying: second run copies nothing
- Config merge and version stamping
- Step isolation: one failing step does not stop the others
"""

import json
import stat
from pathlib import Path

from gamify.core.upgrade import copy_if_changed, file_hash, files_differ


def stale(services, version: str = "0.1.0") -> None:
    """Mark the installed config as written by an older release."""
    services.config.set("version", version)


class TestCopyHelpers:
    """Tests for the digest helpers."""

    def test_file_hash(self, tmp_path: Path) -> None:
        a = tmp_path / "a"
        a.write_bytes(b"same")
        b = tmp_path / "b"
        b.write_bytes(b"same")
        assert file_hash(a) == file_hash(b)
        assert file_hash(tmp_path / "missing") is None

    def test_files_differ(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        src.write_text("one")
        dest = tmp_path / "dest"
        assert files_differ(src, dest) is True
        dest.write_text("one")
        assert files_differ(src, dest) is False
        dest.write_text("two")
        assert files_differ(src, dest) is True

    def test_copy_if_changed(self, tmp_path: Path) -> None:
        src = tmp_path / "src.py"
        src.write_text("print('hi')\n")
        dest = tmp_path / "nested" / "dest.py"

        assert copy_if_changed(src, dest, 0o755) is True
        assert dest.read_text() == "print('hi')\n"
        assert stat.S_IMODE(dest.stat().st_mode) == 0o755
        assert copy_if_changed(src, dest, 0o755) is False


class TestNeedsUpgrade:
    """Tests for AssetSynchronizer.needs_upgrade."""

    def test_not_initialized(self, services) -> None:
        assert services.sync.needs_upgrade() is False
        assert services.sync.silent_upgrade_on_startup() is None

    def test_current_install(self, initialized) -> None:
        assert initialized.sync.needs_upgrade() is False
        assert initialized.sync.silent_upgrade_on_startup() is None

    def test_version_mismatch(self, initialized) -> None:
        stale(initialized)
        assert initialized.sync.needs_upgrade() is True

    def test_missing_runtime_script(self, initialized) -> None:
        initialized.ctx.dispatcher_path.unlink()
        assert initialized.sync.needs_upgrade() is True


class TestRunUpgrade:
    """Tests for AssetSynchronizer.run_upgrade."""

    def test_second_run_copies_nothing(self, services) -> None:
        services.config.initialize()

        first = services.sync.run_upgrade()
        assert first.success
        assert len(first.copied_files) > 0
        assert services.config.load().version == services.ctx.version

        stale(services)
        second = services.sync.run_upgrade()
        assert second.success
        assert second.copied_files == []
        assert second.from_version == "0.1.0"
        assert services.config.load().version == services.ctx.version

    def test_first_run_deploys_everything(self, services) -> None:
        services.config.initialize()
        services.sync.run_upgrade()
        ctx = services.ctx

        assert (ctx.themes_dir / "zelda" / "Stop.wav").exists()
        assert (ctx.themes_dir / "zelda" / "README.md").exists()
        assert (ctx.themes_dir / "zelda" / "output-style.md").exists()
        assert (ctx.output_styles_dir / "zelda.md").exists()
        assert ctx.dispatcher_path.exists()
        assert stat.S_IMODE(ctx.player_path.stat().st_mode) == 0o755

    def test_only_changed_files_copied(self, initialized, template_dir: Path) -> None:
        (template_dir / "themes" / "zelda" / "Stop.wav").write_bytes(b"new fanfare")
        (template_dir / "play_sound.py").write_text("# player v2\n")

        report = initialized.sync.run_upgrade()

        ctx = initialized.ctx
        assert sorted(report.copied_files) == sorted(
            [str(ctx.themes_dir / "zelda" / "Stop.wav"), str(ctx.player_path)]
        )
        assert (ctx.themes_dir / "zelda" / "Stop.wav").read_bytes() == b"new fanfare"

    def test_bundled_theme_overrides_local_edits(self, initialized) -> None:
        installed = initialized.ctx.themes_dir / "zelda" / "Stop.wav"
        installed.write_bytes(b"my edit")

        report = initialized.sync.run_upgrade()

        assert str(installed) in report.copied_files
        assert installed.read_bytes() != b"my edit"

    def test_user_theme_untouched(self, initialized, make_theme) -> None:
        theme = make_theme(initialized.ctx.themes_dir, "mario", sounds=("Stop",))
        initialized.sync.run_upgrade()
        assert (theme / "Stop.wav").exists()

    def test_config_merge_keeps_local_values(self, initialized) -> None:
        initialized.config.set_volume(80)
        initialized.config.set_hook_state("Stop", False)
        stale(initialized)

        initialized.sync.run_upgrade()

        doc = json.loads(initialized.ctx.config_file.read_text())
        assert doc["sound_volume"] == 0.8
        assert doc["sound_hooks"]["stop"] is False
        assert doc["version"] == initialized.ctx.version

    def test_style_step_tracks_configured_theme(
        self, initialized, make_theme, read_settings
    ) -> None:
        make_theme(initialized.ctx.themes_dir, "mario")
        initialized.config.set_theme("mario")

        initialized.sync.run_upgrade()
        assert "outputStyle" not in read_settings()

    def test_failing_step_does_not_stop_others(
        self, initialized, template_dir: Path
    ) -> None:
        (template_dir / "config.json").write_text("{not json")
        initialized.ctx.player_path.unlink()

        report = initialized.sync.run_upgrade()

        assert report.success is False
        assert [e.split(":")[0] for e in report.errors] == ["config"]
        assert initialized.ctx.player_path.exists()

    def test_unparseable_host_settings_reported(self, initialized) -> None:
        initialized.ctx.claude_settings_path.write_text("{oops")

        report = initialized.sync.run_upgrade()

        assert [e.split(":")[0] for e in report.errors] == ["style"]
        assert initialized.ctx.claude_settings_path.read_text() == "{oops"


class TestSilentUpgrade:
    """Tests for silent_upgrade_on_startup."""

    def test_returns_version_when_upgraded(self, initialized) -> None:
        stale(initialized)
        assert initialized.sync.silent_upgrade_on_startup() == initialized.ctx.version
        assert initialized.sync.silent_upgrade_on_startup() is None

    def test_never_raises(self, initialized, tmp_path: Path) -> None:
        stale(initialized)
        broken = initialized.ctx.model_copy(update={"template_dir": tmp_path / "gone"})
        initialized.sync.ctx = broken

        assert initialized.sync.silent_upgrade_on_startup() == broken.version
