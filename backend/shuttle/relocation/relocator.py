"""
File relocation.

Moves a file by atomic rename when possible. When rename fails (different
device, different share), falls back to streaming the bytes into the
destination and deleting the source afterwards.
"""

import logging
import os
import shutil
from enum import Enum
from typing import Callable

from .errors import RelocationError

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 1024 * 1024


class RelocationMethod(str, Enum):
    """How a successful relocation was carried out."""

    RENAMED = "renamed"
    COPIED = "copied"


class Relocator:
    """
    Rename-or-copy file mover.

    Args:
        create_destination: Create missing destination directories first
        rename: Rename primitive (default: os.rename)
        remove: Delete primitive used after a copy (default: os.remove)
    """

    def __init__(
        self,
        create_destination: bool = False,
        rename: Callable[[str, str], None] = os.rename,
        remove: Callable[[str], None] = os.remove,
    ):
        self.create_destination = create_destination
        self._rename = rename
        self._remove = remove

    def relocate(self, source: str, destination: str) -> RelocationMethod:
        """
        Move source to destination.

        Returns:
            RelocationMethod describing which path succeeded

        Raises:
            RelocationError: If both rename and the copy fallback fail
        """
        if self.create_destination:
            parent = os.path.dirname(destination)
            if parent:
                try:
                    os.makedirs(parent, exist_ok=True)
                except OSError as e:
                    raise RelocationError(
                        "create_destination_dir", source, destination, e
                    ) from e

        try:
            self._rename(source, destination)
            return RelocationMethod.RENAMED
        except OSError as e:
            logger.warning(
                f"Unable to move {source} by renaming, possibly different drives, "
                f"will copy and remove instead: {e}"
            )

        self._copy(source, destination)

        try:
            self._remove(source)
        except OSError as e:
            raise RelocationError("delete_source", source, destination, e) from e

        return RelocationMethod.COPIED

    def _copy(self, source: str, destination: str) -> None:
        try:
            src = open(source, "rb")
        except OSError as e:
            raise RelocationError("open_source", source, destination, e) from e

        with src:
            try:
                dst = open(destination, "wb")
            except OSError as e:
                raise RelocationError(
                    "create_destination", source, destination, e
                ) from e

            with dst:
                try:
                    shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
                except OSError as e:
                    raise RelocationError("copy", source, destination, e) from e


def relocate(source: str, destination: str) -> RelocationMethod:
    """Move source to destination with a default Relocator."""
    return Relocator().relocate(source, destination)
