"""
Storage backends for inkwell.

Provides async key-value slot storage behind a pluggable backend
interface (local filesystem by default).
"""

from .base import (
    StorageBackend,
    StorageError,
    StorageKeyError,
    StorageMetadata,
    StoragePermissionError,
)
from .local import LocalStorage

__all__ = [
    "LocalStorage",
    "StorageBackend",
    "StorageError",
    "StorageKeyError",
    "StorageMetadata",
    "StoragePermissionError",
]
