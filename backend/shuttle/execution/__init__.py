"""
Execution — optional external command run against each detected file.

Public API:
    CommandRunner — Run a template with the file path appended
    CommandOutcome — Non-fatal result of one command run
    CommandStatus — NOT_CONFIGURED / SUCCEEDED / FAILED / LAUNCH_FAILED
    CommandError — Command could not be launched
    build_argv — Split a template and append the file path
"""

from .errors import CommandError
from .models import CommandOutcome, CommandStatus
from .command import CommandRunner, build_argv, execute

__all__ = [
    "CommandError",
    "CommandOutcome",
    "CommandStatus",
    "CommandRunner",
    "build_argv",
    "execute",
]
