"""
Action dispatcher — the per-file pipeline.

Coordinates, in order:
1. Rule lookup by containing directory
2. Stability wait (via FileStabilityChecker)
3. Optional command (via CommandRunner), never a gate
4. Relocation (via Relocator)

Each dispatch runs on its own thread. There is no pool, no per-directory
serialization and no retry: a failed dispatch is final for that file until
a watch source reports it again.
"""

import logging
import os
import threading
from datetime import datetime
from typing import Callable, Optional, Tuple

from ..execution.command import CommandRunner
from ..relocation.errors import RelocationError
from ..relocation.relocator import Relocator
from .errors import FileStabilityError
from .models import DetectionOrigin, DispatchResult, DispatchStatus, WatchRule
from .registry import RuleTable
from .stability import FileStabilityChecker

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """
    Runs stability wait → command → relocation for detected files.
    """

    def __init__(
        self,
        stability_checker: Optional[FileStabilityChecker] = None,
        command_runner: Optional[CommandRunner] = None,
        relocator: Optional[Relocator] = None,
        on_result: Optional[Callable[[DispatchResult], None]] = None,
    ):
        self.stability_checker = stability_checker or FileStabilityChecker()
        self.command_runner = command_runner or CommandRunner()
        self.relocator = relocator or Relocator()
        self.on_result = on_result

    @staticmethod
    def resolve_destination(
        file_path: str, rule_table: RuleTable
    ) -> Tuple[Optional[WatchRule], str]:
        """
        Find the rule for file_path and the path it should be moved to.

        A file whose directory has no rule resolves to its bare base name,
        i.e. a path relative to the working directory.
        """
        rule = rule_table.rule_for_file(file_path)
        base = os.path.basename(file_path)
        if rule is None:
            return None, os.path.join("", base)
        return rule, os.path.join(rule.destination, base)

    def dispatch(
        self,
        file_path: str,
        rule_table: RuleTable,
        origin: Optional[DetectionOrigin] = None,
    ) -> DispatchResult:
        """
        Process one detected file synchronously.

        Returns:
            DispatchResult (MOVED or FAILED); never raises for expected failures
        """
        started_at = datetime.now()
        rule, destination = self.resolve_destination(file_path, rule_table)

        if rule is None:
            logger.warning(
                f"No watch rule for directory of {file_path}; "
                f"destination resolves to {destination!r}"
            )

        result = DispatchResult(
            status=DispatchStatus.FAILED,
            source_path=file_path,
            destination_path=destination,
            rule_source=rule.source if rule else None,
            origin=origin,
            started_at=started_at,
        )

        try:
            result.stability = self.stability_checker.wait_until_stable(file_path)
        except FileStabilityError as e:
            logger.error(f"Giving up on {file_path}: {e}")
            result.failure_stage = "stability"
            result.failure_reason = str(e)
            result.completed_at = datetime.now()
            return result

        if rule is not None and rule.command is not None:
            result.command = self.command_runner.run(rule.command, file_path)
            if result.command.is_warning:
                logger.warning(
                    f"Command for {file_path} (rule {rule.source}) did not succeed: "
                    f"{result.command.failure_reason}; moving file anyway"
                )

        try:
            method = self.relocator.relocate(file_path, destination)
        except RelocationError as e:
            logger.error(
                f"Move failed for {file_path} -> {destination} "
                f"(rule {result.rule_source}) at {e.stage}: {e.cause}"
            )
            result.failure_stage = f"relocation:{e.stage}"
            result.failure_reason = str(e)
            result.completed_at = datetime.now()
            return result

        result.status = DispatchStatus.MOVED
        result.relocation_method = method.value
        result.completed_at = datetime.now()
        logger.info(f"Move complete: {file_path} -> {destination} ({method.value})")
        return result

    def submit(
        self,
        file_path: str,
        rule_table: RuleTable,
        origin: Optional[DetectionOrigin] = None,
    ) -> threading.Thread:
        """
        Dispatch file_path on a new daemon thread and return immediately.

        The thread is returned so callers (mostly tests) can join it.
        """
        thread = threading.Thread(
            target=self._run,
            args=(file_path, rule_table, origin),
            name=f"dispatch:{os.path.basename(file_path)}",
            daemon=True,
        )
        thread.start()
        return thread

    def _run(
        self,
        file_path: str,
        rule_table: RuleTable,
        origin: Optional[DetectionOrigin],
    ) -> None:
        try:
            result = self.dispatch(file_path, rule_table, origin)
        except Exception as e:
            logger.exception(f"Unexpected error dispatching {file_path}: {e}")
            return

        if self.on_result is not None:
            self.on_result(result)
