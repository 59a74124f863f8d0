"""
Workspace folder model.

A workspace folder is the unit schema resolution works on; persisted
organization choices are keyed by its name.
"""
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class WorkspaceFolder(BaseModel):
    """A folder opened as a workspace root."""

    model_config = {"frozen": True}

    name: str = Field(..., description="Workspace folder name, used as the persisted-choice key")
    path: Path = Field(..., description="Filesystem root of the workspace folder")

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        """Validate that name is not empty."""
        if not v or not v.strip():
            raise ValueError("Workspace folder name cannot be empty")
        return v.strip()

    @classmethod
    def from_path(cls, path: Path | str) -> "WorkspaceFolder":
        """Build a workspace folder named after its directory."""
        resolved = Path(path).expanduser().resolve()
        return cls(name=resolved.name or str(resolved), path=resolved)
