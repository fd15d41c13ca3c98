"""
Configuration models.

Unknown keys are rejected and boolean flags are strict: only real booleans
(YAML true/false) are accepted, never strings like "yes" or numbers.
The parsed configuration is read once at startup and never reloaded.
"""

import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _require_absolute(value: str, field_name: str) -> str:
    if not Path(value).is_absolute():
        raise ValueError(f"{field_name} must be an absolute path: {value}")
    return os.path.normpath(value)


class FolderConfig(BaseModel):
    """
    One folder rule as written in the configuration file.

    Example (YAML):
        - source: /srv/incoming
          destination: /srv/processed
          is_share: false
          command: /usr/local/bin/scan --quiet
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: str = Field(..., description="Absolute path of the watched directory")
    destination: str = Field(..., description="Absolute path files are moved into")
    is_share: bool = Field(
        default=False,
        strict=True,
        description="Network share without native change events (polled instead)",
    )
    command: Optional[str] = Field(
        default=None,
        description="Executable plus fixed arguments; the file path is appended",
    )

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        return _require_absolute(v, "source")

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        return _require_absolute(v, "destination")

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("command must not be blank (omit it instead)")
        return v


class RuntimeSettings(BaseModel):
    """
    Timing knobs for the detection engine.

    Defaults: 1 second stability sampling, 5 second share polling, no
    stability timeout, destination directories must already exist.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    stability_interval: float = Field(
        default=1.0, gt=0, description="Seconds between file size samples"
    )
    poll_interval: float = Field(
        default=5.0, gt=0, description="Seconds between share directory snapshots"
    )
    stability_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Give up on a file still growing after this many seconds (None: wait forever)",
    )
    create_destination: bool = Field(
        default=False,
        strict=True,
        description="Create missing destination directories before moving",
    )


class ShuttleConfig(BaseModel):
    """Root of the configuration document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    folders: List[FolderConfig] = Field(default_factory=list)
    settings: RuntimeSettings = Field(default_factory=RuntimeSettings)

    @model_validator(mode="after")
    def validate_unique_sources(self) -> "ShuttleConfig":
        """Source directories are the rule key; two rules cannot share one."""
        seen = set()
        for folder in self.folders:
            if folder.source in seen:
                raise ValueError(f"Duplicate source directory: {folder.source}")
            seen.add(folder.source)
        return self
