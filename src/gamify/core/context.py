"""
Process context for gamify.

A single GamifyContext is built once at process start and handed to every
component. Nothing else in the package resolves paths on its own, which
keeps the components testable against a temporary home directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

INSTALL_DIR_NAME = ".claude-gamify"
PLAYER_SCRIPT = "play_sound.py"
DISPATCHER_SCRIPT = "index.py"


def get_templates_dir() -> Path:
    """Get the bundled templates directory from the gamify package."""
    import gamify

    templates_dir = Path(gamify.__file__).parent / "templates"
    if templates_dir.is_dir():
        return templates_dir
    raise FileNotFoundError("Could not locate gamify templates directory")


class GamifyContext(BaseModel):
    """
    Resolved paths and version for one gamify process.

    Example:
        >>> ctx = GamifyContext.for_home(Path("/tmp/home"))
        >>> ctx.config_file
        PosixPath('/tmp/home/.claude-gamify/config.json')
    """

    model_config = ConfigDict(frozen=True)

    home: Path = Field(description="User home directory")
    install_root: Path = Field(description="Live installation root (~/.claude-gamify)")
    claude_dir: Path = Field(description="Claude Code configuration directory (~/.claude)")
    template_dir: Path = Field(description="Bundled assets shipped with the package")
    version: str = Field(description="Running tool version")
    python_executable: str = Field(
        default_factory=lambda: sys.executable or "python3",
        description="Interpreter used in hook commands and runtime scripts",
    )

    @property
    def config_file(self) -> Path:
        return self.install_root / "config.json"

    @property
    def themes_dir(self) -> Path:
        return self.install_root / "themes"

    @property
    def player_path(self) -> Path:
        return self.install_root / PLAYER_SCRIPT

    @property
    def dispatcher_path(self) -> Path:
        return self.install_root / DISPATCHER_SCRIPT

    @property
    def claude_settings_path(self) -> Path:
        return self.claude_dir / "settings.json"

    @property
    def output_styles_dir(self) -> Path:
        return self.claude_dir / "output-styles"

    @property
    def template_themes_dir(self) -> Path:
        return self.template_dir / "themes"

    @property
    def template_config_path(self) -> Path:
        return self.template_dir / "config.json"

    @classmethod
    def for_home(
        cls,
        home: Path,
        *,
        template_dir: Path | None = None,
        version: str | None = None,
    ) -> "GamifyContext":
        """Build a context rooted at an explicit home directory."""
        from gamify import __version__

        return cls(
            home=home,
            install_root=home / INSTALL_DIR_NAME,
            claude_dir=home / ".claude",
            template_dir=template_dir if template_dir is not None else get_templates_dir(),
            version=version or __version__,
        )

    @classmethod
    def from_environment(cls) -> "GamifyContext":
        """
        Build the context from the process environment.

        Supported env vars:
            GAMIFY_HOME - overrides the installation root
            GAMIFY_CLAUDE_DIR - overrides the Claude Code config directory
            GAMIFY_TEMPLATE_DIR - overrides the bundled assets directory
        """
        home = Path.home()
        ctx = cls.for_home(
            home,
            template_dir=Path(os.environ["GAMIFY_TEMPLATE_DIR"])
            if os.environ.get("GAMIFY_TEMPLATE_DIR")
            else None,
        )
        updates: dict[str, Path] = {}
        if install_root := os.environ.get("GAMIFY_HOME"):
            updates["install_root"] = Path(install_root).expanduser()
        if claude_dir := os.environ.get("GAMIFY_CLAUDE_DIR"):
            updates["claude_dir"] = Path(claude_dir).expanduser()
        return ctx.model_copy(update=updates) if updates else ctx
