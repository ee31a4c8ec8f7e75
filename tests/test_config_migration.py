"""
Tests for config schema migration.
"""

import pytest

from gamify.core.config import HOOK_CONFIG_KEYS, merge_configurations, migrate_config
from gamify.core.config.migration import filter_valid_keys, merge_with_defaults

ALL_ENABLED = {key: True for key in HOOK_CONFIG_KEYS}


class TestMigrateConfig:
    """Tests for migrate_config."""

    def test_legacy_document(self) -> None:
        assert migrate_config({"enabled": True, "volume": 0.3}) == {
            "sound_enabled": True,
            "sound_volume": 0.3,
            "sound_hooks": ALL_ENABLED,
        }

    def test_current_name_wins_over_legacy(self) -> None:
        migrated = migrate_config({"enabled": False, "sound_enabled": True})
        assert migrated["sound_enabled"] is True

    def test_does_not_mutate_input(self) -> None:
        original = {"volume": 0.3, "sound_hooks": {"stop": False}}
        migrate_config(original)
        assert original == {"volume": 0.3, "sound_hooks": {"stop": False}}

    def test_preserves_present_hook_values(self) -> None:
        migrated = migrate_config({"sound_hooks": {"stop": False, "notification": False}})
        assert migrated["sound_hooks"]["stop"] is False
        assert migrated["sound_hooks"]["notification"] is False
        assert migrated["sound_hooks"]["session_start"] is True
        assert set(migrated["sound_hooks"]) == set(HOOK_CONFIG_KEYS)

    @pytest.mark.parametrize(
        "doc",
        [
            {},
            {"enabled": True, "volume": 0.3},
            {"enabled": False, "sound_enabled": True},
            {"sound_hooks": {}},
            {"sound_hooks": "yes"},
            {"sound_hooks": {"stop": False}},
            {"theme": "mario", "sound_volume": 0.9, "extra": [1, 2]},
        ],
    )
    def test_idempotent(self, doc) -> None:
        once = migrate_config(doc)
        assert migrate_config(once) == once


class TestMerging:
    """Tests for whitelist filtering and template merging."""

    def test_filter_valid_keys(self) -> None:
        assert filter_valid_keys({"theme": "x", "foo": 1, "version": "1"}) == {
            "theme": "x",
            "version": "1",
        }

    def test_merge_with_defaults(self) -> None:
        merged = merge_with_defaults({"theme": "mario", "foo": 1})
        assert merged["theme"] == "mario"
        assert merged["sound_volume"] == 0.5
        assert "foo" not in merged

    def test_local_wins_for_template_keys_only(self) -> None:
        template = {"theme": "zelda", "sound_volume": 0.5, "version": "2.0.0"}
        local = {"theme": "mario", "legacy_flag": True}
        assert merge_configurations(local, template) == {
            "theme": "mario",
            "sound_volume": 0.5,
            "version": "2.0.0",
        }
