"""Exceptions raised by the storage layer."""

from __future__ import annotations


class StorageFailure(RuntimeError):
    """Base class for storage errors surfaced to callers."""


class StorageUnavailable(StorageFailure):
    """Raised when the storage medium cannot be opened, initialized or read."""


class StorageWriteFailed(StorageFailure):
    """Raised when a specific insert, update or delete could not be persisted."""


__all__ = ["StorageFailure", "StorageUnavailable", "StorageWriteFailed"]
