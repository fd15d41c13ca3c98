"""
Watch folder error hierarchy.

All errors are non-fatal to the service except a watch subsystem that
cannot be started at all. They indicate one operation failed, but Shuttle
continues watching every other directory.
"""

from ..errors import ShuttleError


class WatchFolderError(ShuttleError):
    """Base exception for watch folder failures."""

    pass


class FileStabilityError(WatchFolderError):
    """File did not settle (stability timeout reached or shutdown requested)."""

    pass


class WatchSubsystemError(WatchFolderError):
    """Native change notification setup or delivery failed."""

    def __init__(self, directory: str, reason: str):
        self.directory = directory
        self.reason = reason
        super().__init__(f"Watch failure for {directory}: {reason}")


class EnumerationError(WatchFolderError):
    """Share directory could not be listed during a polling cycle."""

    def __init__(self, directory: str, reason: str):
        self.directory = directory
        self.reason = reason
        super().__init__(f"Cannot list directory {directory}: {reason}")


class DuplicateWatchFolderError(WatchFolderError):
    """Two rules declare the same source directory."""

    pass
