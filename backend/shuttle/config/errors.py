"""
Configuration error types.
"""

from typing import Optional

from ..errors import ShuttleError


class ConfigLoadError(ShuttleError):
    """
    Raised when the configuration file is missing or malformed.

    Fatal: the service aborts before watching anything.
    """

    def __init__(self, path: str, reason: str, cause: Optional[Exception] = None):
        self.path = path
        self.reason = reason
        self.cause = cause
        super().__init__(f"Cannot load configuration {path}: {reason}")
