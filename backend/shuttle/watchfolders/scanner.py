"""
Filesystem scanner for share watch folders.

Recursively lists every non-directory entry under a directory together with
its size. Used by the share poller where native change events are not
available.
"""

import logging
import os
from typing import Dict

from .errors import EnumerationError
from .models import DirectorySnapshot

logger = logging.getLogger(__name__)


class FileScanner:
    """
    Builds DirectorySnapshots.

    Unlike a best-effort listing, any failure to read a directory aborts the
    whole snapshot with EnumerationError, so a partial listing is never
    mistaken for files having disappeared and then reappeared.
    """

    def __init__(self, follow_symlinks: bool = False):
        """
        Initialize file scanner.

        Args:
            follow_symlinks: Descend into symlinked directories (default: False)
        """
        self.follow_symlinks = follow_symlinks

    def snapshot(self, directory: str) -> DirectorySnapshot:
        """
        Take a recursive snapshot of directory.

        Raises:
            EnumerationError: If the directory or any subdirectory cannot be listed
        """
        entries: Dict[str, int] = {}

        def _raise(error: OSError) -> None:
            raise EnumerationError(directory, str(error)) from error

        for root, _dirs, filenames in os.walk(
            directory, onerror=_raise, followlinks=self.follow_symlinks
        ):
            for name in filenames:
                path = os.path.join(root, name)
                try:
                    entries[path] = os.stat(path).st_size
                except FileNotFoundError:
                    # Removed between listing and stat
                    continue
                except OSError as e:
                    raise EnumerationError(directory, f"{path}: {e}") from e

        return DirectorySnapshot(directory=directory, entries=entries)
