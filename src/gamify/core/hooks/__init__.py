"""Claude Code hook registration."""

from .registrar import HookIssue, HookRegistrar

__all__ = ["HookIssue", "HookRegistrar"]
