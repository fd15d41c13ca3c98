"""
Command execution error types.

Command failures never block relocation. They are converted into a
CommandOutcome by the runner and reported as warnings.
"""

from typing import List, Optional

from ..errors import ShuttleError


class CommandError(ShuttleError):
    """Raised when a command cannot be launched at all."""

    def __init__(self, argv: List[str], reason: str, cause: Optional[Exception] = None):
        self.argv = argv
        self.reason = reason
        self.cause = cause
        super().__init__(f"Could not run command {argv}: {reason}")
