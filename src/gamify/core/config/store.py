"""
Config store for ~/.claude-gamify/config.json.

The store keeps one in-memory document. Every mutator loads the file if it
has not been loaded yet, applies its change and rewrites the whole file.
There is no partial write and no locking. The notification path only reads
this file.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gamify.core.exceptions import InvalidInputError, NotInitializedError

from .migration import filter_valid_keys, merge_with_defaults
from .models import (
    CONFIG_TO_EVENT,
    HOOK_CONFIG_KEYS,
    HOOK_EVENT_MAPPING,
    VALID_KEYS,
    SoundConfig,
    default_config_dict,
    default_hook_states,
)

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def validate_volume(volume: object) -> float:
    """
    Validate a volume percentage and convert it to the stored fraction.

    Accepts an integer, an integral float, or a string holding an integer,
    in the range 0-100.

    Args:
        volume: User input

    Returns:
        Volume as a fraction in [0.0, 1.0]

    Raises:
        InvalidInputError: If the value is not an integer or is out of range

    Example:
        >>> validate_volume("50")
        0.5
    """
    number: int | None = None
    if isinstance(volume, bool):
        number = None
    elif isinstance(volume, int):
        number = volume
    elif isinstance(volume, float) and volume.is_integer():
        number = int(volume)
    elif isinstance(volume, str) and _INTEGER_RE.match(volume.strip()):
        number = int(volume.strip())

    if number is None or number < 0 or number > 100:
        raise InvalidInputError(
            "Volume must be an integer between 0 and 100", value=volume
        )
    return number / 100


def event_to_config_key(event_name: str) -> str:
    """Convert a Claude event name (PascalCase) to its config key (snake_case)."""
    if event_name in HOOK_EVENT_MAPPING:
        return HOOK_EVENT_MAPPING[event_name]
    return _CAMEL_BOUNDARY_RE.sub("_", event_name).lower()


def config_key_to_event(config_key: str) -> str:
    """Convert a config key back to its Claude event name."""
    return CONFIG_TO_EVENT.get(config_key, config_key)


class ConfigStore:
    """
    Load, migrate, validate and persist the preference document.

    Example:
        >>> store = ConfigStore(Path("~/.claude-gamify/config.json"), "0.4.0")
        >>> store.initialize()
        >>> store.set_volume(30)
        0.3
    """

    def __init__(self, config_path: Path, version: str) -> None:
        self.config_path = config_path
        self.version = version
        self._config: SoundConfig | None = None

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._config is not None

    def exists(self) -> bool:
        return self.config_path.exists()

    def _read_document(self) -> dict[str, Any]:
        try:
            raw = json.loads(self.config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise NotInitializedError(path=str(self.config_path)) from e
        if not isinstance(raw, dict):
            raise NotInitializedError(path=str(self.config_path))
        return raw

    def load(self) -> SoundConfig:
        """
        Read, migrate and validate the document.

        Raises:
            NotInitializedError: If the file is missing, unreadable or invalid
        """
        raw = self._read_document()
        try:
            self._config = SoundConfig(**merge_with_defaults(raw))
        except ValidationError as e:
            raise NotInitializedError(
                f"Configuration file is invalid: {self.config_path}",
                path=str(self.config_path),
            ) from e
        return self._config

    def load_or_defaults(self) -> SoundConfig:
        """
        Read-only load that never fails.

        A missing or unparseable document gives the built-in defaults. A
        document with invalid fields keeps its valid fields and takes
        defaults for the rest. Nothing is written back.
        """
        try:
            raw = self._read_document()
        except NotInitializedError:
            logger.debug("No usable config at %s, using defaults", self.config_path)
            self._config = SoundConfig(**default_config_dict())
            return self._config

        merged = merge_with_defaults(raw)
        try:
            self._config = SoundConfig(**merged)
        except ValidationError as e:
            invalid = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            logger.debug("Ignoring invalid config fields: %s", ", ".join(sorted(invalid)))
            self._config = SoundConfig(
                **{key: value for key, value in merged.items() if key not in invalid}
            )
        return self._config

    def save(self) -> None:
        """Write the whole in-memory document to disk."""
        config = self._require()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(
            json.dumps(config.to_document(), indent=2) + "\n", encoding="utf-8"
        )

    def initialize(self) -> SoundConfig:
        """Write built-in defaults stamped with the running version."""
        self._config = SoundConfig(**default_config_dict(), version=self.version)
        self.save()
        return self._config

    def reset(self) -> SoundConfig:
        return self.initialize()

    def _require(self) -> SoundConfig:
        if self._config is None:
            return self.load()
        return self._config

    # ------------------------------------------------------------------
    # Whole-document access
    # ------------------------------------------------------------------

    def get_config(self) -> SoundConfig:
        """Return a copy of the current document."""
        return self._require().model_copy(deep=True)

    def export(self) -> dict[str, Any]:
        return self._require().to_document()

    def import_config(self, document: dict[str, Any]) -> SoundConfig:
        """
        Replace the document with an imported one.

        Unknown keys are dropped, legacy fields migrated, missing keys filled
        from defaults and the version stamped to the running version.

        Raises:
            InvalidInputError: If the imported values fail validation
        """
        merged = merge_with_defaults(document)
        merged["version"] = self.version
        try:
            self._config = SoundConfig(**merged)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid configuration: {e}") from e
        self.save()
        return self._config

    def update(self, changes: dict[str, Any]) -> SoundConfig:
        """Apply whitelisted changes on top of the current document."""
        current = self._require().to_document()
        current.update(filter_valid_keys(changes))
        try:
            self._config = SoundConfig(**current)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid configuration: {e}") from e
        self.save()
        return self._config

    def get(self, key: str) -> Any:
        if key not in VALID_KEYS:
            raise InvalidInputError(f"Invalid configuration key: {key}")
        return getattr(self._require(), key)

    def set(self, key: str, value: Any) -> None:
        if key not in VALID_KEYS:
            raise InvalidInputError(f"Invalid configuration key: {key}")
        self.update({key: value})

    # ------------------------------------------------------------------
    # Setters used by interactive flows
    # ------------------------------------------------------------------

    def toggle_sound(self) -> bool:
        config = self._require()
        config.sound_enabled = not config.sound_enabled
        self.save()
        return config.sound_enabled

    def set_volume(self, volume: object) -> float:
        """Set volume from a 0-100 integer percentage; returns the stored fraction."""
        fraction = validate_volume(volume)
        config = self._require()
        config.sound_volume = fraction
        self.save()
        return config.sound_volume

    def set_theme(self, theme_name: str) -> str:
        config = self._require()
        config.theme = theme_name
        self.save()
        return config.theme

    def get_theme(self) -> str:
        return self._require().theme

    def is_sound_enabled(self) -> bool:
        return self._require().sound_enabled

    def get_volume(self) -> float:
        return self._require().sound_volume

    # ------------------------------------------------------------------
    # Per-hook flags
    # ------------------------------------------------------------------

    def get_hook_state(self, event_name: str) -> bool:
        """Return whether sound is enabled for a Claude event (default True)."""
        key = event_to_config_key(event_name)
        return self._require().sound_hooks.get(key, True)

    def set_hook_state(self, event_name: str, enabled: bool) -> None:
        key = event_to_config_key(event_name)
        if key not in HOOK_CONFIG_KEYS:
            raise InvalidInputError(f"Invalid hook name: {event_name}")
        config = self._require()
        hooks = dict(config.sound_hooks)
        hooks[key] = enabled
        config.sound_hooks = hooks
        self.save()

    def set_all_hook_states(self, enabled: bool) -> None:
        config = self._require()
        config.sound_hooks = {key: enabled for key in HOOK_CONFIG_KEYS}
        self.save()

    def invert_hook_states(self) -> None:
        config = self._require()
        config.sound_hooks = {
            key: not config.sound_hooks.get(key, True) for key in HOOK_CONFIG_KEYS
        }
        self.save()

    def reset_hook_states(self) -> None:
        config = self._require()
        config.sound_hooks = default_hook_states()
        self.save()

    def get_all_hook_states(self) -> dict[str, bool]:
        hooks = self._require().sound_hooks
        return {key: hooks.get(key, True) for key in HOOK_CONFIG_KEYS}

    def get_active_hooks_count(self) -> int:
        return sum(1 for enabled in self.get_all_hook_states().values() if enabled)
