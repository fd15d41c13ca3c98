"""
Share poll source — snapshot diffing for directories without native events.

Network shares do not deliver change notifications, so each shared rule
gets its own polling thread. Every cycle takes a fresh recursive snapshot
and dispatches the paths that were not in the previous one.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from .dispatcher import ActionDispatcher
from .errors import EnumerationError
from .models import DetectionOrigin, DirectorySnapshot, WatchRule
from .registry import RuleTable
from .scanner import FileScanner

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0


class SharePoller:
    """
    Polling watch source for one shared directory.

    The retained snapshot is owned by this poller's thread alone. It is
    replaced after every successful cycle and kept as-is when a cycle's
    enumeration fails, so the next diff is still computed against the last
    good listing.

    Example:
        poller = SharePoller(rule, shared_table, dispatcher)
        poller.start()
    """

    def __init__(
        self,
        rule: WatchRule,
        rule_table: RuleTable,
        dispatcher: ActionDispatcher,
        scanner: Optional[FileScanner] = None,
        interval: float = DEFAULT_POLL_INTERVAL,
        stop_event: Optional[threading.Event] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.rule = rule
        self.rule_table = rule_table
        self.dispatcher = dispatcher
        self.scanner = scanner or FileScanner()
        self.interval = interval
        self._stop_event = stop_event
        self._sleep = sleep
        self._previous = DirectorySnapshot.empty(rule.source)
        self._thread: Optional[threading.Thread] = None

    @property
    def previous(self) -> DirectorySnapshot:
        return self._previous

    def take_initial_snapshot(self) -> DirectorySnapshot:
        """
        Record the starting contents. Files already present are never dispatched.

        If the directory cannot be listed the retained snapshot stays empty,
        so everything seen on the first good cycle counts as new.
        """
        try:
            self._previous = self.scanner.snapshot(self.rule.source)
        except EnumerationError as e:
            logger.error(f"Error reading directory {self.rule.source}: {e.reason}")
        return self._previous

    def poll_once(self) -> List[str]:
        """
        Run one polling cycle.

        Returns:
            Paths that were dispatched this cycle (empty if the cycle was skipped)
        """
        try:
            current = self.scanner.snapshot(self.rule.source)
        except EnumerationError as e:
            logger.error(f"Error reading directory {self.rule.source}: {e.reason}")
            return []

        new_paths = current.new_paths(self._previous)
        for path in new_paths:
            logger.info(f"New file detected: {path} (size: {current.entries[path]} bytes)")
            self.dispatcher.submit(path, self.rule_table, DetectionOrigin.SHARE)

        self._previous = current
        return new_paths

    def _pause(self) -> bool:
        """Sleep one interval. Returns True if a stop was requested."""
        if self._stop_event is None:
            self._sleep(self.interval)
            return False
        return self._stop_event.wait(self.interval)

    def run(self) -> None:
        """Polling loop. Only returns when the stop event is set."""
        self.take_initial_snapshot()
        while not self._pause():
            self.poll_once()
        logger.debug(f"Share poller for {self.rule.source} stopped")

    def start(self) -> threading.Thread:
        """Run the polling loop on a daemon thread."""
        if self._thread is not None:
            logger.warning(f"Share poller for {self.rule.source} already running")
            return self._thread

        logger.info(
            f"Adding folder to polling group: {self.rule.source} -> "
            f"{self.rule.destination} (command: {self.rule.command})"
        )
        self._thread = threading.Thread(
            target=self.run, name=f"share-poll:{self.rule.source}", daemon=True
        )
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
