"""
Theme data models.

A theme is a directory under ~/.claude-gamify/themes holding one sound per
hook event (`<HookEventName>.<ext>`), an optional README.md whose first
line is the description, and an optional output-style.md.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# Resolution order when several files share a hook name
SOUND_EXTENSIONS: tuple[str, ...] = (".aiff", ".mp3", ".wav")

STYLE_FILENAME = "output-style.md"
README_FILENAME = "README.md"
NO_DESCRIPTION = "No description"


class Theme(BaseModel):
    """An installed sound theme."""

    name: str = Field(description="Theme directory name")
    description: str = Field(default=NO_DESCRIPTION, description="First README line")
    path: Path = Field(description="Theme directory")
    sound_files: list[str] = Field(
        default_factory=list,
        description="Hook names with a sound asset (extension stripped)",
    )
    has_style: bool = Field(default=False, description="Whether output-style.md is present")


class ThemeValidation(BaseModel):
    """Result of checking a candidate theme directory."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
