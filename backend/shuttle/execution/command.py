"""
External command execution.

Design rules:
- One subprocess per file
- Capture stdout for the log
- Non-zero exit code = FAILED outcome, never an exception
- Launch failure = LAUNCH_FAILED outcome
- No timeout
"""

import logging
import shlex
import subprocess
from typing import List, Optional

from .errors import CommandError
from .models import CommandOutcome, CommandStatus, NOT_CONFIGURED

logger = logging.getLogger(__name__)


def build_argv(template: str, file_path: str) -> List[str]:
    """
    Split a command template and append the detected file path.

    The template is split with shell quoting rules, so executables or
    arguments containing spaces can be quoted. The file path is always
    passed as one argument, never re-split.
    """
    argv = shlex.split(template)
    if not argv:
        raise ValueError("Command template is empty")
    argv.append(file_path)
    return argv


def execute(argv: List[str]) -> subprocess.CompletedProcess:
    """
    Run argv to completion, capturing stdout.

    Output that is not valid in the locale encoding is decoded with
    replacement characters, so only a failure to start the process raises.

    Raises:
        CommandError: If the process cannot be started
    """
    try:
        return subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            check=False,
        )
    except (OSError, ValueError) as e:
        raise CommandError(argv, str(e), e) from e


class CommandRunner:
    """Runs a rule's command template against a detected file."""

    def run(self, template: Optional[str], file_path: str) -> CommandOutcome:
        """
        Run the command for one file and classify the result.

        Returns NOT_CONFIGURED when template is None.
        """
        if template is None:
            return NOT_CONFIGURED

        try:
            argv = build_argv(template, file_path)
        except ValueError as e:
            logger.warning(f"Invalid command template {template!r}: {e}")
            return CommandOutcome(
                status=CommandStatus.LAUNCH_FAILED,
                failure_reason=f"Invalid command template: {e}",
            )

        logger.info(f"Running command {argv}")

        try:
            completed = execute(argv)
        except CommandError as e:
            logger.warning(f"Could not run command {argv}: {e.reason}")
            return CommandOutcome(
                status=CommandStatus.LAUNCH_FAILED,
                argv=argv,
                failure_reason=e.reason,
            )

        logger.debug(f"Command {argv[0]} output: {completed.stdout!r}")

        if completed.returncode != 0:
            logger.warning(
                f"Command {argv[0]} exited with non-zero code {completed.returncode} "
                f"for {file_path}: {completed.stderr.strip()}"
            )
            return CommandOutcome(
                status=CommandStatus.FAILED,
                argv=argv,
                exit_code=completed.returncode,
                stdout=completed.stdout,
                failure_reason=f"Exit code {completed.returncode}",
            )

        return CommandOutcome(
            status=CommandStatus.SUCCEEDED,
            argv=argv,
            exit_code=0,
            stdout=completed.stdout,
        )
