"""
Relocation error types.
"""

from typing import Optional

from ..errors import ShuttleError


class RelocationError(ShuttleError):
    """
    Raised when a file cannot be moved to its destination.

    The stage names the step that failed:
        create_destination_dir — destination directory could not be created
        open_source — source could not be opened for the copy fallback
        create_destination — destination could not be created/truncated
        copy — byte copy failed part way
        delete_source — copy succeeded but the source could not be removed

    A delete_source failure leaves a complete copy at the destination and the
    original at the source. Nothing is rolled back.
    """

    def __init__(
        self,
        stage: str,
        source: str,
        destination: str,
        cause: Optional[Exception] = None,
    ):
        self.stage = stage
        self.source = source
        self.destination = destination
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Relocation of {source} -> {destination} failed at {stage}{detail}"
        )
