"""Common errors raised by the gallery domain core."""

from __future__ import annotations


class GalleryError(RuntimeError):
    """Base class for gallery failures."""


class ValidationFailed(GalleryError, ValueError):
    """Raised when user input fails validation before a mutation."""


class RecordNotFound(GalleryError):
    """Raised when a requested record id does not exist."""


class StoreError(GalleryError):
    """Raised when the key-value backend fails to read or write."""


class DependencyExists(GalleryError):
    """Raised when an artist still owns artworks and cannot be deleted."""

    def __init__(self, artist_id: str, count: int) -> None:
        super().__init__(
            f"Cannot delete artist '{artist_id}' with {count} "
            "associated artwork(s)"
        )
        self.artist_id = artist_id
        self.count = count


class BrokenReference(GalleryError):
    """Raised when an evaluation points at a missing artwork or artist."""

    def __init__(self, artwork_id: str, message: str) -> None:
        super().__init__(message)
        self.artwork_id = artwork_id
