"""
Command outcome models.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class CommandStatus(str, Enum):
    """
    Outcome of the optional per-file command.

    NOT_CONFIGURED: Rule has no command
    SUCCEEDED: Command exited with status 0
    FAILED: Command ran and exited non-zero
    LAUNCH_FAILED: Command could not be started
    """

    NOT_CONFIGURED = "not_configured"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    LAUNCH_FAILED = "launch_failed"


class CommandOutcome(BaseModel):
    """
    Result of running a rule's command against one file.

    Every status is non-fatal to the dispatch: relocation proceeds
    regardless of what the command did. Outcomes are immutable, so the
    shared NOT_CONFIGURED instance can be handed to every dispatch.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: CommandStatus
    argv: Tuple[str, ...] = Field(default_factory=tuple)
    exit_code: Optional[int] = None
    stdout: str = ""
    failure_reason: Optional[str] = None

    @property
    def is_warning(self) -> bool:
        return self.status in (CommandStatus.FAILED, CommandStatus.LAUNCH_FAILED)


NOT_CONFIGURED = CommandOutcome(status=CommandStatus.NOT_CONFIGURED)
