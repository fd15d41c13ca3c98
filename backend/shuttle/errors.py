"""
Shuttle error root.

Every error raised by Shuttle inherits from ShuttleError. Only configuration
failures and a watch subsystem that cannot start at all are fatal; everything
else is reported where it happens and the service keeps running.
"""


class ShuttleError(Exception):
    """Base exception for all Shuttle failures."""
    pass
