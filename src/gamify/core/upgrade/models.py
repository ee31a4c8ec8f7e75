"""Result models for the startup upgrade pass."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StepResult(BaseModel):
    """Outcome of one best-effort upgrade step."""

    name: str = Field(description="Step identifier")
    success: bool = Field(default=True)
    error: str | None = Field(default=None, description="Failure message if the step failed")
    copied: list[str] = Field(default_factory=list, description="Destination files written")


class UpgradeReport(BaseModel):
    """Everything one upgrade pass did."""

    from_version: str | None = Field(default=None, description="Config version before the pass")
    version: str = Field(description="Version stamped by the pass")
    steps: list[StepResult] = Field(default_factory=list)

    @property
    def copied_files(self) -> list[str]:
        return [path for step in self.steps for path in step.copied]

    @property
    def errors(self) -> list[str]:
        return [f"{step.name}: {step.error}" for step in self.steps if not step.success]

    @property
    def success(self) -> bool:
        return all(step.success for step in self.steps)
