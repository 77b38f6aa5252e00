from typing import Optional


class PlayOrderError(Exception):
    """Base class for errors raised by the rename/reorder engine."""


class NameCollision(PlayOrderError):
    """
    Raised when a rename target is already taken.
    Remaining renames of the batch are not attempted.
    """

    def __init__(self, source: str, target: str):
        super().__init__(f"Cannot rename '{source}': '{target}' already exists")
        self.source = source
        self.target = target


class IOFailure(PlayOrderError):
    """
    A filesystem primitive failed (mkdir, move, copy, delete...).
    The original OSError is chained as __cause__.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MirrorIOFailure(IOFailure):
    """Mirror sync failed. Backup is best-effort, so callers usually only report this."""
