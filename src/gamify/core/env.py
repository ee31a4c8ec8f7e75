"""
Layered .env loading for the GAMIFY_* path overrides.

GAMIFY_HOME, GAMIFY_CLAUDE_DIR and GAMIFY_TEMPLATE_DIR can be exported in
the shell or written to a .env file. Exported values always win; otherwise
the project .env (working directory) beats the user .env at
$XDG_CONFIG_HOME/gamify/.env. Keys without the GAMIFY_ prefix are ignored,
so an unrelated project .env never leaks into the process.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

ENV_PREFIX = "GAMIFY_"


def user_env_path() -> Path:
    """Return ~/.config/gamify/.env (or the XDG equivalent)."""
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return xdg_home / "gamify" / ".env"


def read_gamify_env(path: Path) -> dict[str, str]:
    """GAMIFY_* assignments in one .env file ({} if it does not exist)."""
    if not path.is_file():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key.startswith(ENV_PREFIX) and value is not None
    }


def load_layered_env(
    *,
    user_env: Path | None = None,
    project_env: Path | None = None,
) -> dict[str, str]:
    """
    Export GAMIFY_* values from the user and project .env files.

    Args:
        user_env: User-level file (defaults to `user_env_path()`)
        project_env: Project-level file (defaults to ./.env)

    Returns:
        The variables that were exported
    """
    layered = read_gamify_env(user_env or user_env_path())
    layered.update(read_gamify_env(project_env or Path.cwd() / ".env"))

    applied = {key: value for key, value in layered.items() if key not in os.environ}
    os.environ.update(applied)
    if applied:
        logger.debug("Loaded from .env: %s", ", ".join(sorted(applied)))
    return applied
