"""
Abstract base class for storage backends.

A storage backend is a durable key-value slot store: each key holds one
blob (the journal keeps its whole serialized collection under a single key).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from inkwell.core.exceptions import InkwellError


@dataclass
class StorageMetadata:
    """Metadata for a stored slot."""

    key: str
    size: int
    modified_at: datetime
    content_type: str = "application/json"


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def save(self, key: str, data: bytes, content_type: str = "application/json") -> StorageMetadata:
        """Write data to a slot, replacing what was there."""

    @abstractmethod
    async def load(self, key: str) -> bytes:
        """Load data from storage. Raises StorageKeyError if not found."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a slot. Returns True if deleted, False if it didn't exist."""


class StorageError(InkwellError):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when storage operation is not permitted."""
