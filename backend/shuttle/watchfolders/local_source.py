"""
Local watch source — native filesystem creation events.

Every local rule's source directory is scheduled on one watchdog Observer.
All handlers feed a single queue, and one dedicated loop thread drains it in
arrival order, handing each created file to the dispatcher without waiting
for the dispatch to finish.
"""

import logging
import os
import queue
import threading
from typing import Callable, Optional, Union

from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .dispatcher import ActionDispatcher
from .errors import WatchSubsystemError
from .models import DetectionOrigin
from .registry import RuleTable

logger = logging.getLogger(__name__)

# Queue sentinel marking the end of the event stream
_CLOSED = object()

QueueItem = Union[FileSystemEvent, WatchSubsystemError, object]


class CreatedEventHandler(FileSystemEventHandler):
    """
    Forwards watchdog events for one watched directory onto a shared queue.

    Creation events are forwarded as-is. A rename whose target lands in the
    watched directory (the usual "write name.part, rename to name" pattern)
    is forwarded as a creation of the target. Removal of the watched
    directory itself is reported as a WatchSubsystemError, since no further
    events will arrive for it.
    """

    def __init__(self, directory: str, events: "queue.Queue[QueueItem]"):
        super().__init__()
        self.directory = os.path.normpath(directory)
        self._events = events

    def on_created(self, event: FileSystemEvent) -> None:
        self._events.put(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        dest_path = os.fsdecode(event.dest_path)
        if os.path.dirname(os.path.normpath(dest_path)) != self.directory:
            return
        if event.is_directory:
            self._events.put(DirCreatedEvent(dest_path))
        else:
            self._events.put(FileCreatedEvent(dest_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        if os.path.normpath(os.fsdecode(event.src_path)) == self.directory:
            self._events.put(
                WatchSubsystemError(self.directory, "watched directory was removed")
            )


class LocalWatchSource:
    """
    Event-driven watch source for non-shared rules.

    Lifecycle:
        start() — start observer, schedule every directory, start event loop
        close() — stop observer, end the event loop

    A directory that cannot be scheduled is reported and skipped; the other
    directories keep being watched. An observer that cannot start, or a
    start in which no directory at all could be scheduled, raises
    WatchSubsystemError from start().
    """

    def __init__(
        self,
        rule_table: RuleTable,
        dispatcher: ActionDispatcher,
        observer_factory: Callable[[], Observer] = Observer,
    ):
        self.rule_table = rule_table
        self.dispatcher = dispatcher
        self._observer_factory = observer_factory
        self._events: "queue.Queue[QueueItem]" = queue.Queue()
        self._observer: Optional[Observer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def events(self) -> "queue.Queue[QueueItem]":
        return self._events

    def start(self) -> None:
        """
        Subscribe to every local directory and start the event loop.

        Raises:
            WatchSubsystemError: If the observer cannot be started or no
                directory could be watched
        """
        if self._thread is not None:
            logger.warning("LocalWatchSource already running")
            return

        observer = self._observer_factory()
        try:
            observer.start()
        except OSError as e:
            raise WatchSubsystemError("<observer>", f"cannot start observer: {e}") from e

        # Emitters start as soon as they are scheduled on a running observer,
        # so a bad directory fails its own schedule() call only
        failures = []
        scheduled = 0
        for source in self.rule_table.sources():
            rule = self.rule_table.get(source)
            handler = CreatedEventHandler(source, self._events)
            try:
                observer.schedule(handler, source, recursive=False)
            except OSError as e:
                failures.append(WatchSubsystemError(source, str(e)))
                continue
            scheduled += 1
            logger.info(
                f"Adding folder to watcher: {source} -> {rule.destination} "
                f"(command: {rule.command})"
            )

        if failures and scheduled == 0:
            observer.stop()
            observer.join()
            reasons = "; ".join(str(f) for f in failures)
            raise WatchSubsystemError(
                "<observer>", f"no local directory could be watched: {reasons}"
            )

        for failure in failures:
            self._events.put(failure)

        self._observer = observer
        self._thread = threading.Thread(
            target=self.run, name="local-watch", daemon=True
        )
        self._thread.start()

    def run(self) -> None:
        """
        Event loop. Returns when the queue is closed.
        """
        while True:
            item = self._events.get()
            if item is _CLOSED:
                return
            if isinstance(item, WatchSubsystemError):
                logger.error(f"Watcher error: {item}")
                continue
            self.handle_event(item)

    def handle_event(self, event: FileSystemEvent) -> Optional[threading.Thread]:
        """
        Dispatch a created file. Directories and other event kinds are ignored.

        Returns:
            The dispatch thread, or None if the event was ignored
        """
        logger.debug(f"Watcher event: {event}")
        if event.event_type != "created" or event.is_directory:
            return None

        path = os.fsdecode(event.src_path)
        logger.info(f"File created detected: {path}")
        return self.dispatcher.submit(path, self.rule_table, DetectionOrigin.LOCAL)

    def close(self) -> None:
        """Stop watching. In-flight dispatches are left to finish on their own."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

        self._events.put(_CLOSED)
        if self._thread is not None:
            self._thread.join()
            self._thread = None
