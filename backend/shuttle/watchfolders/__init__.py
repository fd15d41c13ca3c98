"""
Watch folders — detect new files, wait for them to settle, move them on.

Local directories are watched with native filesystem events (watchdog);
network shares are polled and diffed. Both feed the same dispatcher.

Public API:
    WatchRule — Source → destination binding with optional command
    RuleTable — Immutable rule lookup, partitioned into local/shared
    FileStabilityChecker — File size polling for write completion detection
    FileScanner — Recursive directory snapshots for share polling
    ActionDispatcher — Orchestration: stability → command → relocation
    LocalWatchSource — Native event watch source
    SharePoller — Polling watch source for one share
"""

from .errors import (
    WatchFolderError,
    FileStabilityError,
    WatchSubsystemError,
    EnumerationError,
    DuplicateWatchFolderError,
)
from .models import (
    WatchRule,
    StabilityCheck,
    DetectionOrigin,
    DirectorySnapshot,
    DispatchStatus,
    DispatchResult,
)
from .registry import RuleTable
from .stability import FileStabilityChecker, file_size, wait_until_stable
from .scanner import FileScanner
from .dispatcher import ActionDispatcher
from .local_source import LocalWatchSource, CreatedEventHandler
from .share_poller import SharePoller

__all__ = [
    # Errors
    "WatchFolderError",
    "FileStabilityError",
    "WatchSubsystemError",
    "EnumerationError",
    "DuplicateWatchFolderError",
    # Models
    "WatchRule",
    "StabilityCheck",
    "DetectionOrigin",
    "DirectorySnapshot",
    "DispatchStatus",
    "DispatchResult",
    # Registry
    "RuleTable",
    # Core
    "FileStabilityChecker",
    "file_size",
    "wait_until_stable",
    "FileScanner",
    "ActionDispatcher",
    "LocalWatchSource",
    "CreatedEventHandler",
    "SharePoller",
]
