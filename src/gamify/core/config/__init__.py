"""
Configuration document for gamify.

Exports:
    SoundConfig: The persisted preference document
    ConfigStore: Load, migrate, validate and persist it
    migrate_config: Pure, idempotent schema migration
    validate_volume: Percentage input to stored fraction
"""

from .migration import merge_configurations, merge_with_defaults, migrate_config
from .models import (
    DEFAULT_THEME,
    HOOK_CONFIG_KEYS,
    HOOK_EVENT_MAPPING,
    HOOK_EVENTS,
    RESERVED_THEME,
    SoundConfig,
)
from .store import ConfigStore, config_key_to_event, event_to_config_key, validate_volume

__all__ = [
    "ConfigStore",
    "DEFAULT_THEME",
    "HOOK_CONFIG_KEYS",
    "HOOK_EVENTS",
    "HOOK_EVENT_MAPPING",
    "RESERVED_THEME",
    "SoundConfig",
    "config_key_to_event",
    "event_to_config_key",
    "merge_configurations",
    "merge_with_defaults",
    "migrate_config",
    "validate_volume",
]
