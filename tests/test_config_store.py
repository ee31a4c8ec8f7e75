"""
Tests for the config store.

Tests cover:
- Load/save: round trip, missing/corrupt documents, unknown keys, legacy fields
- Volume validation
- Setters: implicit load, persistence, hook flags
- Import/export and whitelist enforcement
"""

import json
import logging
from pathlib import Path

import pytest

from gamify.core.config import (
    HOOK_CONFIG_KEYS,
    ConfigStore,
    config_key_to_event,
    event_to_config_key,
    validate_volume,
)
from gamify.core.config.models import default_config_dict
from gamify.core.exceptions import InvalidInputError, NotInitializedError

VERSION = "0.4.0"


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / ".claude-gamify" / "config.json"


@pytest.fixture
def store(config_path: Path) -> ConfigStore:
    return ConfigStore(config_path, VERSION)


def write_doc(path: Path, doc) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(doc))


def read_doc(path: Path) -> dict:
    return json.loads(path.read_text())


class TestLoadSave:
    """Tests for reading and writing config.json."""

    def test_round_trip(self, store: ConfigStore, config_path: Path) -> None:
        doc = {
            "theme": "mario",
            "sound_enabled": False,
            "sound_volume": 0.3,
            "sound_hooks": {key: key != "stop" for key in HOOK_CONFIG_KEYS},
            "version": "0.3.1",
        }
        write_doc(config_path, doc)

        store.load()
        store.save()

        assert read_doc(config_path) == doc

    def test_save_writes_indented_json_with_newline(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        store.initialize()
        text = config_path.read_text()
        assert text.endswith("\n")
        assert '\n  "theme": "zelda"' in text

    def test_missing_file_raises_not_initialized(self, store: ConfigStore) -> None:
        with pytest.raises(NotInitializedError):
            store.load()

    def test_corrupt_json_raises_not_initialized(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{not json")
        with pytest.raises(NotInitializedError):
            store.load()

    def test_non_object_raises_not_initialized(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        write_doc(config_path, ["zelda"])
        with pytest.raises(NotInitializedError):
            store.load()

    def test_out_of_range_volume_raises_not_initialized(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        write_doc(config_path, {"sound_volume": 5})
        with pytest.raises(NotInitializedError):
            store.load()

    def test_missing_keys_filled_from_defaults(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        write_doc(config_path, {"theme": "mario"})
        config = store.load()
        assert config.theme == "mario"
        assert config.sound_enabled is True
        assert config.sound_volume == 0.5
        assert set(config.sound_hooks) == set(HOOK_CONFIG_KEYS)

    def test_unknown_keys_dropped_and_logged(
        self, store: ConfigStore, config_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_doc(config_path, {"theme": "zelda", "colour": "green"})
        caplog.set_level(logging.DEBUG, logger="gamify.core.config.migration")

        store.load()
        store.save()

        assert "colour" not in read_doc(config_path)
        assert "colour" in caplog.text

    def test_legacy_fields_migrated_on_load(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        write_doc(config_path, {"theme": "zelda", "enabled": False, "volume": 0.2})
        config = store.load()
        assert config.sound_enabled is False
        assert config.sound_volume == 0.2

    def test_partial_hooks_backfilled(self, store: ConfigStore, config_path: Path) -> None:
        write_doc(config_path, {"sound_hooks": {"stop": False}})
        hooks = store.load().sound_hooks
        assert hooks["stop"] is False
        assert all(hooks[key] for key in HOOK_CONFIG_KEYS if key != "stop")

    def test_initialize_stamps_version(self, store: ConfigStore, config_path: Path) -> None:
        store.initialize()
        assert read_doc(config_path) == {**default_config_dict(), "version": VERSION}

    def test_load_or_defaults_does_not_create_file(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        config = store.load_or_defaults()
        assert config.theme == "zelda"
        assert not config_path.exists()

    def test_load_or_defaults_keeps_valid_fields(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        write_doc(
            config_path,
            {
                "theme": "mario",
                "sound_enabled": False,
                "sound_volume": 50,
                "sound_hooks": {"stop": False},
                "version": VERSION,
            },
        )

        with pytest.raises(NotInitializedError):
            store.load()

        config = store.load_or_defaults()
        assert config.theme == "mario"
        assert config.sound_enabled is False
        assert config.sound_volume == 0.5
        assert config.sound_hooks["stop"] is False
        assert read_doc(config_path)["sound_volume"] == 50

    def test_reset_restores_defaults(self, store: ConfigStore, config_path: Path) -> None:
        store.initialize()
        store.set_volume(20)
        store.set_theme("mario")

        store.reset()

        assert read_doc(config_path) == {**default_config_dict(), "version": VERSION}
        assert store.get_volume() == 0.5

    def test_get_config_returns_copy(self, store: ConfigStore) -> None:
        store.initialize()
        copy = store.get_config()
        copy.sound_hooks["stop"] = False
        assert store.get_hook_state("Stop") is True


class TestValidateVolume:
    """Tests for validate_volume."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, 0.0), (100, 1.0), (50, 0.5), ("50", 0.5), (" 7 ", 0.07), (30.0, 0.3)],
    )
    def test_accepts_integers(self, value, expected) -> None:
        assert validate_volume(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [-1, 101, 12.5, "12.5", "abc", "", None, True])
    def test_rejects_invalid(self, value) -> None:
        with pytest.raises(InvalidInputError):
            validate_volume(value)


class TestSetters:
    """Tests for the persisted setters."""

    def test_mutator_loads_implicitly(self, config_path: Path) -> None:
        ConfigStore(config_path, VERSION).initialize()

        fresh = ConfigStore(config_path, VERSION)
        assert not fresh.loaded
        assert fresh.toggle_sound() is False
        assert read_doc(config_path)["sound_enabled"] is False

    def test_mutator_without_document_raises(self, store: ConfigStore) -> None:
        with pytest.raises(NotInitializedError):
            store.toggle_sound()

    def test_set_volume_persists_fraction(self, store: ConfigStore, config_path: Path) -> None:
        store.initialize()
        assert store.set_volume(30) == pytest.approx(0.3)
        assert read_doc(config_path)["sound_volume"] == pytest.approx(0.3)

    def test_set_volume_rejects_decimal(self, store: ConfigStore, config_path: Path) -> None:
        store.initialize()
        with pytest.raises(InvalidInputError):
            store.set_volume("12.5")
        assert read_doc(config_path)["sound_volume"] == 0.5

    def test_set_theme(self, store: ConfigStore, config_path: Path) -> None:
        store.initialize()
        assert store.set_theme("mario") == "mario"
        assert read_doc(config_path)["theme"] == "mario"

    def test_get_and_set_by_key(self, store: ConfigStore) -> None:
        store.initialize()
        store.set("sound_enabled", False)
        assert store.get("sound_enabled") is False

    def test_unknown_key_rejected(self, store: ConfigStore) -> None:
        store.initialize()
        with pytest.raises(InvalidInputError):
            store.set("colour", "green")
        with pytest.raises(InvalidInputError):
            store.get("colour")

    def test_update_validates(self, store: ConfigStore) -> None:
        store.initialize()
        with pytest.raises(InvalidInputError):
            store.update({"sound_volume": 2})
        assert store.get_volume() == 0.5


class TestHookStates:
    """Tests for per-hook flags."""

    def test_defaults_to_enabled(self, store: ConfigStore) -> None:
        store.initialize()
        assert store.get_hook_state("Stop") is True
        assert store.get_active_hooks_count() == 7

    def test_set_hook_state_persists(self, store: ConfigStore, config_path: Path) -> None:
        store.initialize()
        store.set_hook_state("PreToolUse", False)
        assert store.get_hook_state("PreToolUse") is False
        assert read_doc(config_path)["sound_hooks"]["pre_tool_use"] is False

    def test_set_hook_state_accepts_config_key(self, store: ConfigStore) -> None:
        store.initialize()
        store.set_hook_state("subagent_stop", False)
        assert store.get_hook_state("SubagentStop") is False

    def test_unknown_hook_rejected(self, store: ConfigStore) -> None:
        store.initialize()
        with pytest.raises(InvalidInputError):
            store.set_hook_state("Bogus", True)

    def test_set_all_invert_reset(self, store: ConfigStore) -> None:
        store.initialize()
        store.set_all_hook_states(False)
        assert store.get_active_hooks_count() == 0

        store.set_hook_state("Stop", True)
        store.invert_hook_states()
        assert store.get_active_hooks_count() == 6
        assert store.get_hook_state("Stop") is False

        store.reset_hook_states()
        assert store.get_all_hook_states() == {key: True for key in HOOK_CONFIG_KEYS}

    def test_event_name_translation(self) -> None:
        assert event_to_config_key("SessionStart") == "session_start"
        assert event_to_config_key("UserPromptSubmit") == "user_prompt_submit"
        assert event_to_config_key("CustomEvent") == "custom_event"
        assert config_key_to_event("pre_tool_use") == "PreToolUse"
        assert config_key_to_event("unknown") == "unknown"


class TestImportExport:
    """Tests for import_config/export."""

    def test_import_filters_migrates_and_stamps(
        self, store: ConfigStore, config_path: Path
    ) -> None:
        store.import_config({"theme": "mario", "volume": 0.1, "extra": 1, "version": "0.0.1"})

        doc = read_doc(config_path)
        assert doc["theme"] == "mario"
        assert doc["sound_volume"] == 0.1
        assert doc["version"] == VERSION
        assert "extra" not in doc
        assert "volume" not in doc

    def test_import_invalid_raises(self, store: ConfigStore) -> None:
        with pytest.raises(InvalidInputError):
            store.import_config({"sound_volume": -3})

    def test_export_matches_file(self, store: ConfigStore, config_path: Path) -> None:
        store.initialize()
        assert store.export() == read_doc(config_path)
