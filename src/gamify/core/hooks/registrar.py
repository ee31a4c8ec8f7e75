"""
Hook registration in Claude Code's ~/.claude/settings.json.

The settings document belongs to Claude Code. We only ever touch the
`hooks` section, and only under the seven known event names. Ownership of a
binding is structural: a binding is ours if its command references our
dispatcher path. There is no separate marker.

Binding layout written for each event:

    "Stop": [
      {"matcher": ".*",
       "hooks": [{"type": "command", "command": "\"<python>\" \"<dispatcher>\" Stop"}]}
    ]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from gamify.core.config.models import HOOK_EVENTS
from gamify.core.exceptions import ExternalDocumentError, InvalidInputError
from gamify.core.jsonfile import read_json_document, write_json_document

logger = logging.getLogger(__name__)


class HookIssue(BaseModel):
    """Represents a validation issue with hook configuration."""

    severity: str = Field(description="Issue severity: error, warning, info")
    message: str = Field(description="Human-readable issue description")
    hook_name: str | None = Field(default=None, description="Hook name if applicable")
    file_path: str | None = Field(default=None, description="Related file path if applicable")


def _binding_commands(entry: Any) -> list[str]:
    if not isinstance(entry, dict):
        return []
    return [
        hook.get("command", "")
        for hook in entry.get("hooks", []) or []
        if isinstance(hook, dict) and isinstance(hook.get("command"), str)
    ]


class HookRegistrar:
    """
    Install and remove gamify's bindings in the host hook-dispatch document.

    Example:
        >>> registrar = HookRegistrar(settings, dispatcher, "/usr/bin/python3")
        >>> registrar.setup()
        >>> registrar.are_hooks_installed()
        True
        >>> registrar.remove()
        7
    """

    def __init__(
        self,
        settings_path: Path,
        dispatcher_path: Path,
        python_executable: str,
    ) -> None:
        self.settings_path = settings_path
        self.dispatcher_path = dispatcher_path
        self.python_executable = python_executable
        self.hook_names: tuple[str, ...] = HOOK_EVENTS

    def command_for(self, hook_name: str) -> str:
        """The command string Claude Code runs for `hook_name`."""
        return f'"{self.python_executable}" "{self.dispatcher_path}" {hook_name}'

    def _owns(self, command: str) -> bool:
        return str(self.dispatcher_path) in command

    def _binding(self, command: str) -> list[dict[str, Any]]:
        return [
            {
                "matcher": ".*",
                "hooks": [{"type": "command", "command": command}],
            }
        ]

    def _check_name(self, hook_name: str) -> None:
        if hook_name not in self.hook_names:
            raise InvalidInputError(f"Invalid hook name: {hook_name}", hook_name=hook_name)

    def _has_our_command(self, entries: Any) -> bool:
        if not isinstance(entries, list):
            return False
        return any(self._owns(command) for entry in entries for command in _binding_commands(entry))

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def setup(self) -> None:
        """
        Write one binding for every known event.

        Each event key is replaced outright, so repeated calls converge to
        the same document. Any other binding stored under the same event
        key is discarded.

        Raises:
            ExternalDocumentError: If the settings file is unparseable or
                cannot be written
        """
        settings = read_json_document(self.settings_path)
        hooks = settings.get("hooks")
        if not isinstance(hooks, dict):
            hooks = {}

        for hook_name in self.hook_names:
            hooks[hook_name] = self._binding(self.command_for(hook_name))

        settings["hooks"] = hooks
        write_json_document(self.settings_path, settings)
        logger.info("Installed %d hooks in %s", len(self.hook_names), self.settings_path)

    def remove(self) -> int:
        """
        Remove every binding that references our dispatcher.

        Unrelated bindings under the same event key survive. Keys left
        empty are deleted, and the `hooks` section is deleted if it ends up
        empty.

        Returns:
            Number of bindings removed

        Raises:
            ExternalDocumentError: If the settings file is unparseable or
                cannot be written
        """
        if not self.settings_path.exists():
            return 0

        settings = read_json_document(self.settings_path)
        hooks = settings.get("hooks")
        if not isinstance(hooks, dict):
            return 0

        removed = 0
        for hook_name in self.hook_names:
            entries = hooks.get(hook_name)
            if not isinstance(entries, list):
                continue

            kept_entries = []
            for entry in entries:
                if not isinstance(entry, dict) or not isinstance(entry.get("hooks"), list):
                    kept_entries.append(entry)
                    continue
                kept_defs = [
                    hook
                    for hook in entry["hooks"]
                    if not (
                        isinstance(hook, dict)
                        and isinstance(hook.get("command"), str)
                        and self._owns(hook["command"])
                    )
                ]
                if len(kept_defs) < len(entry["hooks"]):
                    removed += 1
                if kept_defs:
                    kept_entries.append({**entry, "hooks": kept_defs})

            if kept_entries:
                hooks[hook_name] = kept_entries
            else:
                del hooks[hook_name]

        if removed == 0:
            logger.debug("No gamify hooks found in %s", self.settings_path)
            return 0

        if hooks:
            settings["hooks"] = hooks
        else:
            settings.pop("hooks", None)

        write_json_document(self.settings_path, settings)
        logger.info("Removed %d hook bindings from %s", removed, self.settings_path)
        return removed

    def update_hook(self, hook_name: str, command: str) -> None:
        """Replace the bindings for one known event with a single command."""
        self._check_name(hook_name)
        settings = read_json_document(self.settings_path)
        hooks = settings.get("hooks")
        if not isinstance(hooks, dict):
            hooks = {}
        hooks[hook_name] = self._binding(command)
        settings["hooks"] = hooks
        write_json_document(self.settings_path, settings)

    def enable_hook(self, hook_name: str) -> None:
        self._check_name(hook_name)
        self.update_hook(hook_name, self.command_for(hook_name))

    def disable_hook(self, hook_name: str) -> None:
        """Delete every binding under one known event key."""
        self._check_name(hook_name)
        if not self.settings_path.exists():
            return
        settings = read_json_document(self.settings_path)
        hooks = settings.get("hooks")
        if not isinstance(hooks, dict) or hook_name not in hooks:
            return
        del hooks[hook_name]
        if hooks:
            settings["hooks"] = hooks
        else:
            settings.pop("hooks", None)
        write_json_document(self.settings_path, settings)

    def backup_hooks(self) -> dict[str, Any]:
        """Return a copy of the whole `hooks` section ({} if unreadable)."""
        try:
            hooks = read_json_document(self.settings_path).get("hooks")
        except ExternalDocumentError as e:
            logger.warning("Could not back up hooks: %s", e)
            return {}
        return dict(hooks) if isinstance(hooks, dict) else {}

    def restore_hooks(self, backup: dict[str, Any]) -> None:
        settings = read_json_document(self.settings_path)
        settings["hooks"] = backup
        write_json_document(self.settings_path, settings)

    # ------------------------------------------------------------------
    # Read-only checks
    # ------------------------------------------------------------------

    def _read_hooks(self) -> dict[str, Any]:
        try:
            hooks = read_json_document(self.settings_path).get("hooks")
        except ExternalDocumentError as e:
            logger.debug("Treating unreadable settings as no hooks: %s", e)
            return {}
        return hooks if isinstance(hooks, dict) else {}

    def are_hooks_installed(self) -> bool:
        """True only when every known event carries one of our bindings."""
        hooks = self._read_hooks()
        return all(self._has_our_command(hooks.get(name)) for name in self.hook_names)

    def get_installed_hooks(self) -> list[str]:
        hooks = self._read_hooks()
        return [name for name in self.hook_names if self._has_our_command(hooks.get(name))]

    def get_hook_config(self, hook_name: str) -> list[Any] | None:
        entries = self._read_hooks().get(hook_name)
        return entries if isinstance(entries, list) else None

    def validate(self) -> list[HookIssue]:
        """
        Validate the hook configuration.

        Checks that:
        - settings.json exists and is valid JSON
        - the dispatcher script is present
        - every known event carries one of our bindings

        Returns:
            List of validation issues (empty if all checks pass)
        """
        issues: list[HookIssue] = []

        if not self.settings_path.exists():
            issues.append(
                HookIssue(
                    severity="error",
                    message="settings.json not found (hooks not installed)",
                    file_path=str(self.settings_path),
                )
            )
            return issues

        try:
            settings = read_json_document(self.settings_path)
        except ExternalDocumentError as e:
            issues.append(
                HookIssue(severity="error", message=e.message, file_path=str(self.settings_path))
            )
            return issues

        if not self.dispatcher_path.exists():
            issues.append(
                HookIssue(
                    severity="error",
                    message=f"Dispatcher script not found at {self.dispatcher_path}",
                    file_path=str(self.dispatcher_path),
                )
            )

        hooks = settings.get("hooks")
        if not isinstance(hooks, dict) or not hooks:
            issues.append(
                HookIssue(
                    severity="warning",
                    message="No hooks configured in settings.json",
                    file_path=str(self.settings_path),
                )
            )
            return issues

        for hook_name in self.hook_names:
            if hook_name not in hooks:
                issues.append(
                    HookIssue(
                        severity="warning",
                        message=f"Hook {hook_name} not configured",
                        hook_name=hook_name,
                    )
                )
            elif not self._has_our_command(hooks[hook_name]):
                issues.append(
                    HookIssue(
                        severity="warning",
                        message=f"Hook {hook_name} does not reference the gamify dispatcher",
                        hook_name=hook_name,
                    )
                )

        return issues
