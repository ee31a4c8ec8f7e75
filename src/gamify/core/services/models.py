"""Result models for installation lifecycle operations."""

from __future__ import annotations

from pydantic import BaseModel, Field


class InitResult(BaseModel):
    """Result of `gamify init`."""

    copied_files: list[str] = Field(default_factory=list, description="Assets deployed")
    hooks_installed: list[str] = Field(default_factory=list, description="Hook events bound")
    styles_installed: list[str] = Field(
        default_factory=list, description="Themes whose output style was installed"
    )
    active_style: str | None = Field(default=None, description="Host output style after init")


class UninstallResult(BaseModel):
    """Result of `gamify uninstall`. Steps are best-effort; failures land in `errors`."""

    success: bool = Field(default=True)
    removed_hooks: int = Field(default=0, description="Hook bindings removed")
    removed_styles: list[str] = Field(
        default_factory=list, description="Output style files removed"
    )
    errors: list[str] = Field(default_factory=list)
