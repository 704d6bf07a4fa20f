"""
Error types raised by the storage layer.
"""


class TrackPError(Exception):
    """Base class for all TrackP errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TrackPError):
    """Referenced project or task does not exist."""


class StorageError(TrackPError):
    """
    The relational backend failed (connection lost, constraint violated, ...).

    The message is the underlying driver message and is returned to the
    client verbatim.
    """
