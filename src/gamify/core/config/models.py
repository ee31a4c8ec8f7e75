"""
Configuration data models for gamify.

These models define the structure of ~/.claude-gamify/config.json, with
validation and type safety via Pydantic. The set of hook events is fixed
and closed: it mirrors the lifecycle events Claude Code raises.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Claude Code event name -> config key
HOOK_EVENT_MAPPING: dict[str, str] = {
    "SessionStart": "session_start",
    "UserPromptSubmit": "user_prompt_submit",
    "PreToolUse": "pre_tool_use",
    "PostToolUse": "post_tool_use",
    "Notification": "notification",
    "Stop": "stop",
    "SubagentStop": "subagent_stop",
}

CONFIG_TO_EVENT: dict[str, str] = {key: event for event, key in HOOK_EVENT_MAPPING.items()}

HOOK_EVENTS: tuple[str, ...] = tuple(HOOK_EVENT_MAPPING)
HOOK_CONFIG_KEYS: tuple[str, ...] = tuple(HOOK_EVENT_MAPPING.values())

DEFAULT_THEME = "zelda"
RESERVED_THEME = "system"
DEFAULT_VOLUME = 0.5

# Whitelist of top-level keys in config.json
VALID_KEYS: tuple[str, ...] = (
    "theme",
    "sound_enabled",
    "sound_volume",
    "sound_hooks",
    "version",
)


def default_hook_states() -> dict[str, bool]:
    """Every known hook enabled."""
    return {key: True for key in HOOK_CONFIG_KEYS}


def default_config_dict() -> dict[str, Any]:
    """Built-in defaults, without a version stamp."""
    return {
        "theme": DEFAULT_THEME,
        "sound_enabled": True,
        "sound_volume": DEFAULT_VOLUME,
        "sound_hooks": default_hook_states(),
    }


class SoundConfig(BaseModel):
    """
    The persisted preference document.

    Volume is stored as a fraction in [0, 1]; user input is an integer
    percentage and is converted by `validate_volume`.

    Example:
        >>> cfg = SoundConfig(theme="zelda", sound_volume=0.3)
        >>> cfg.sound_hooks["stop"]
        True
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    theme: str = Field(default=DEFAULT_THEME, min_length=1, description="Active theme name")
    sound_enabled: bool = Field(default=True, description="Master sound switch")
    sound_volume: float = Field(
        default=DEFAULT_VOLUME,
        ge=0.0,
        le=1.0,
        description="Playback volume as a fraction (0.0-1.0)",
    )
    sound_hooks: dict[str, bool] = Field(
        default_factory=default_hook_states,
        description="Per-hook enable flags keyed by config key",
    )
    version: str | None = Field(
        default=None,
        description="Last tool version that wrote this document",
    )

    @field_validator("sound_hooks", mode="before")
    @classmethod
    def backfill_hooks(cls, value: Any) -> dict[str, Any]:
        """Keep known keys as given and enable any that are missing."""
        if not isinstance(value, dict):
            return default_hook_states()
        hooks = {key: value[key] for key in HOOK_CONFIG_KEYS if key in value}
        for key in HOOK_CONFIG_KEYS:
            hooks.setdefault(key, True)
        return hooks

    def to_document(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON shape."""
        return self.model_dump(mode="json", exclude_none=True)
