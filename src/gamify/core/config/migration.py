"""
Schema migration for config.json.

Older releases wrote `enabled`/`volume` and had no per-hook flags. Migration
is a pure function over plain dicts and is idempotent:

    migrate_config(migrate_config(d)) == migrate_config(d)
"""

from __future__ import annotations

import logging
from typing import Any

from .models import HOOK_CONFIG_KEYS, VALID_KEYS, default_config_dict, default_hook_states

logger = logging.getLogger(__name__)

# legacy name -> current name
LEGACY_FIELDS: dict[str, str] = {
    "enabled": "sound_enabled",
    "volume": "sound_volume",
}


def migrate_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Migrate a configuration document to the current field layout.

    - Renames legacy fields when the current name is absent
    - Ensures `sound_hooks` exists and holds every known hook key
      (present keys keep their value, missing ones default to True)

    Args:
        config: Raw document (not modified)

    Returns:
        A new, migrated document

    Example:
        >>> migrate_config({"enabled": True, "volume": 0.3})["sound_volume"]
        0.3
    """
    migrated = dict(config)

    for legacy, current in LEGACY_FIELDS.items():
        if legacy in migrated and current not in migrated:
            migrated[current] = migrated.pop(legacy)
            logger.debug("Migrated config field %s -> %s", legacy, current)

    hooks = migrated.get("sound_hooks")
    if not isinstance(hooks, dict) or not hooks:
        migrated["sound_hooks"] = default_hook_states()
    else:
        hooks = dict(hooks)
        for key in HOOK_CONFIG_KEYS:
            hooks.setdefault(key, True)
        migrated["sound_hooks"] = hooks

    return migrated


def filter_valid_keys(config: dict[str, Any]) -> dict[str, Any]:
    """Drop keys outside the whitelist, logging each one."""
    filtered = {}
    for key, value in config.items():
        if key in VALID_KEYS:
            filtered[key] = value
        else:
            logger.debug("Dropping unknown config key: %s", key)
    return filtered


def merge_with_defaults(config: dict[str, Any]) -> dict[str, Any]:
    """Migrate, drop unknown keys and lay the result over the built-in defaults."""
    merged = default_config_dict()
    merged.update(filter_valid_keys(migrate_config(config)))
    return merged


def merge_configurations(
    local_config: dict[str, Any], template_config: dict[str, Any]
) -> dict[str, Any]:
    """
    Overlay local values onto the bundled template configuration.

    Only keys that exist in the template schema are carried over from the
    local document; local values win for those keys.
    """
    merged = dict(template_config)
    for key, value in (local_config or {}).items():
        if key in template_config:
            merged[key] = value
    return merged
