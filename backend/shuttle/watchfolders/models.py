"""
Watch folder data models.

Pydantic models reject unknown fields; boolean flags are strict.
DirectorySnapshot is a plain frozen dataclass: it is rebuilt every polling
cycle and only ever compared against its predecessor.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..execution.models import CommandOutcome, NOT_CONFIGURED


class WatchRule(BaseModel):
    """
    Binding of one source directory to a destination and optional command.

    Rules are built once from configuration and never mutated.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: str = Field(..., description="Absolute path to the watched directory")
    destination: str = Field(..., description="Absolute path files are moved into")
    is_share: bool = Field(
        default=False,
        strict=True,
        description="Polled share instead of native events",
    )
    command: Optional[str] = Field(
        default=None, description="Command template run before relocation"
    )

    @field_validator("source", "destination")
    @classmethod
    def validate_absolute_path(cls, v: str) -> str:
        """Ensure path is absolute."""
        if not Path(v).is_absolute():
            raise ValueError(f"Watch rule path must be absolute: {v}")
        return v


class StabilityCheck(BaseModel):
    """
    Result of waiting for a file to stop changing size.
    """

    model_config = ConfigDict(extra="forbid")

    path: str = Field(..., description="Path that was sampled")
    size_bytes: int = Field(..., description="Size at the final sample (0 if unreadable)")
    sample_count: int = Field(..., description="Number of size samples taken")
    zero_size: bool = Field(
        default=False, description="Released because the file was empty or unreadable"
    )


class DetectionOrigin(str, Enum):
    """Which watch source reported a file."""

    LOCAL = "local"
    SHARE = "share"


@dataclass(frozen=True)
class DirectorySnapshot:
    """
    Point-in-time listing of a share directory: file path -> size.

    Only non-directory entries are recorded, recursively.
    """

    directory: str
    entries: Mapping[str, int] = field(default_factory=dict)
    taken_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def new_paths(self, previous: "DirectorySnapshot") -> List[str]:
        """
        Paths present here but absent from previous, sorted.

        Paths whose size changed are not reported; only appearance counts.
        """
        return sorted(p for p in self.entries if p not in previous.entries)

    @classmethod
    def empty(cls, directory: str) -> "DirectorySnapshot":
        return cls(directory=directory)


class DispatchStatus(str, Enum):
    """
    Final state of one dispatch.

    MOVED: File reached its destination
    FAILED: A hard step failed; file left where the failure put it
    """

    MOVED = "moved"
    FAILED = "failed"


class DispatchResult(BaseModel):
    """
    Outcome of the full per-file pipeline.

    A command failure does not make a dispatch FAILED; it is recorded in
    command and the status reflects the relocation.
    """

    model_config = ConfigDict(extra="forbid")

    status: DispatchStatus
    source_path: str
    destination_path: str
    rule_source: Optional[str] = None
    origin: Optional[DetectionOrigin] = None
    stability: Optional[StabilityCheck] = None
    command: CommandOutcome = Field(default_factory=lambda: NOT_CONFIGURED)
    relocation_method: Optional[str] = None
    failure_stage: Optional[str] = None
    failure_reason: Optional[str] = None
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    def duration_seconds(self) -> Optional[float]:
        """Dispatch duration in seconds, including the stability wait."""
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def summary(self) -> str:
        """Human-readable one-line summary."""
        if self.status == DispatchStatus.MOVED:
            text = f"MOVED {self.source_path} -> {self.destination_path}"
            if self.command.is_warning:
                text += f" (command warning: {self.command.failure_reason})"
            return text
        return (
            f"FAILED {self.source_path} -> {self.destination_path} "
            f"at {self.failure_stage}: {self.failure_reason}"
        )
