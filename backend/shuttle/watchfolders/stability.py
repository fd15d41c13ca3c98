"""
File stability detection.

Uses polling to determine when a file has finished copying/writing.
A file is considered stable when two consecutive size samples are equal,
or as soon as a sample reads zero (empty or unreadable file).

There is no upper bound on the wait by default: a file that keeps growing
keeps its waiter blocked. A timeout and a stop event are available but
must be configured explicitly.
"""

import logging
import os
import threading
import time
from typing import Callable, Optional

from .errors import FileStabilityError
from .models import StabilityCheck

logger = logging.getLogger(__name__)


def file_size(path: str) -> int:
    """
    Current size of path in bytes, or 0 if it cannot be read.

    Zero doubles as the "give up waiting" sentinel for the stability loop.
    """
    try:
        return os.stat(path).st_size
    except OSError as e:
        logger.error(f"Error while checking size of {path}: {e}")
        return 0


class FileStabilityChecker:
    """
    Blocking size-sampling stability detector.

    Configuration:
        check_interval: Seconds between size samples (default: 1)
        timeout: Seconds before giving up on a growing file (default: None, wait forever)
        stop_event: Event waited on instead of sleep; when set the wait is abandoned

    Holds no per-file state, so one instance may serve any number of
    concurrent waits on different paths.
    """

    def __init__(
        self,
        check_interval: float = 1.0,
        timeout: Optional[float] = None,
        stop_event: Optional[threading.Event] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        size_probe: Callable[[str], int] = file_size,
    ):
        self.check_interval = check_interval
        self.timeout = timeout
        self._stop_event = stop_event
        self._sleep = sleep
        self._clock = clock
        self._size_probe = size_probe

    def _pause(self) -> bool:
        """Sleep one interval. Returns True if a stop was requested."""
        if self._stop_event is None:
            self._sleep(self.check_interval)
            return False
        return self._stop_event.wait(self.check_interval)

    def wait_until_stable(self, path: str) -> StabilityCheck:
        """
        Block until path stops changing size.

        Returns:
            StabilityCheck with the final size and number of samples

        Raises:
            FileStabilityError: If the configured timeout elapses or the
                stop event is set while waiting
        """
        started = self._clock()
        size = self._size_probe(path)
        samples = 1

        if size == 0:
            return StabilityCheck(
                path=path, size_bytes=0, sample_count=samples, zero_size=True
            )

        while True:
            if self._pause():
                raise FileStabilityError(
                    f"Stop requested while waiting for {path} to settle"
                )

            new_size = self._size_probe(path)
            samples += 1

            if new_size == 0:
                return StabilityCheck(
                    path=path, size_bytes=0, sample_count=samples, zero_size=True
                )
            if new_size == size:
                return StabilityCheck(
                    path=path, size_bytes=new_size, sample_count=samples
                )

            logger.debug(
                f"File {path} has changed ({size} -> {new_size} bytes), "
                f"waiting {self.check_interval}s more"
            )
            size = new_size

            if self.timeout is not None and self._clock() - started >= self.timeout:
                raise FileStabilityError(
                    f"File {path} still growing after {self.timeout}s "
                    f"({size} bytes, {samples} samples)"
                )


def wait_until_stable(path: str) -> StabilityCheck:
    """Block until path settles, sampling once per second with no timeout."""
    return FileStabilityChecker().wait_until_stable(path)
