"""
Application exceptions and their HTTP handlers.
"""
from .errors import TrackPError, NotFoundError, StorageError

__all__ = ['TrackPError', 'NotFoundError', 'StorageError']
