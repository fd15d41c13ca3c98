"""
Shuttle service — wires configuration to the running watch sources.

Startup order:
1. Build the rule table and split it into local and shared tables
2. Build one dispatcher shared by every source
3. Start the native event source for local rules
4. Start one poller per shared rule

Everything is constructed before any thread starts; the tables handed to
the threads are immutable.
"""

import logging
import threading
from typing import Callable, List, Optional

from watchdog.observers import Observer

from .config.models import ShuttleConfig
from .execution.command import CommandRunner
from .relocation.relocator import Relocator
from .watchfolders.dispatcher import ActionDispatcher
from .watchfolders.local_source import LocalWatchSource
from .watchfolders.models import DispatchResult
from .watchfolders.registry import RuleTable
from .watchfolders.share_poller import SharePoller
from .watchfolders.stability import FileStabilityChecker

logger = logging.getLogger(__name__)

# Seconds close() waits for each poller before abandoning it
DEFAULT_JOIN_TIMEOUT = 5.0


class ShuttleService:
    """
    Runs every watch source for one configuration.

    stop() sets a shared stop event checked at every sleep (stability waits,
    poll intervals) and closes the native watcher. In-flight dispatches are
    not drained: their threads are daemons and die with the process.
    """

    def __init__(
        self,
        config: ShuttleConfig,
        observer_factory: Callable[[], Observer] = Observer,
        on_result: Optional[Callable[[DispatchResult], None]] = None,
        join_timeout: float = DEFAULT_JOIN_TIMEOUT,
    ):
        self.config = config
        self.join_timeout = join_timeout
        self.stop_event = threading.Event()

        self.rule_table = RuleTable.from_config(config)
        self.local_rules, self.shared_rules = self.rule_table.partition()

        settings = config.settings
        self.dispatcher = ActionDispatcher(
            stability_checker=FileStabilityChecker(
                check_interval=settings.stability_interval,
                timeout=settings.stability_timeout,
                stop_event=self.stop_event,
            ),
            command_runner=CommandRunner(),
            relocator=Relocator(create_destination=settings.create_destination),
            on_result=on_result or self._log_result,
        )

        self.local_source: Optional[LocalWatchSource] = None
        if len(self.local_rules):
            self.local_source = LocalWatchSource(
                self.local_rules, self.dispatcher, observer_factory=observer_factory
            )

        self.pollers: List[SharePoller] = [
            SharePoller(
                rule,
                self.shared_rules,
                self.dispatcher,
                interval=settings.poll_interval,
                stop_event=self.stop_event,
            )
            for rule in self.shared_rules
        ]

    @staticmethod
    def _log_result(result: DispatchResult) -> None:
        logger.debug(f"Dispatch finished: {result.summary()}")

    def start(self) -> None:
        """
        Start all watch sources.

        Raises:
            WatchSubsystemError: If the native watcher cannot start at all
        """
        logger.info(
            f"Starting Shuttle: {len(self.local_rules)} local folder(s), "
            f"{len(self.shared_rules)} shared folder(s)"
        )
        for rule in self.shared_rules:
            logger.debug(f"Not adding {rule.source} to watcher (share, polled instead)")
        for rule in self.local_rules:
            logger.debug(f"Not adding {rule.source} to polling group (local, watched)")

        if self.local_source is not None:
            self.local_source.start()

        for poller in self.pollers:
            poller.start()

    def run_forever(self) -> None:
        """Block until stop() is called."""
        self.stop_event.wait()

    def stop(self) -> None:
        """Request shutdown. Safe to call more than once and from signal handlers."""
        if self.stop_event.is_set():
            return
        logger.info("Stopping Shuttle")
        self.stop_event.set()

    def close(self) -> None:
        """
        Stop and release the native watcher and pollers.

        A poller stuck listing an unresponsive share is abandoned after
        join_timeout; its daemon thread dies with the process.
        """
        self.stop()
        if self.local_source is not None:
            self.local_source.close()
        for poller in self.pollers:
            poller.join(self.join_timeout)
            if poller.is_alive():
                logger.warning(
                    f"Share poller for {poller.rule.source} did not stop within "
                    f"{self.join_timeout}s, abandoning it"
                )
