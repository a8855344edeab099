"""Exceptions raised inside the persistence boundary.

None of these ever reach callers of the store operations; the persistence
adapter catches them and degrades to an empty or unsaved store.
"""


class GridNavError(Exception):
    """Base class for gridnav errors."""


class PayloadError(GridNavError):
    """Persisted payload is missing, unreadable, or the wrong shape."""


class StorageError(GridNavError):
    """A session storage backend failed to read or write."""
