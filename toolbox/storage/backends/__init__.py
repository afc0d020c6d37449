"""
Storage backends package.

This package contains the storage backend interface and the built-in
implementations for the 'file' and 'mem' schemes.
"""

from .base import (
    StorageBackend,
    StorageError,
    StorageNotFoundError,
    SchemeNotFoundError,
    InvalidUrlError,
)
from .filesystem import FileStorageBackend
from .memory import MemoryStorageBackend

__all__ = [
    "StorageBackend",
    "StorageError",
    "StorageNotFoundError",
    "SchemeNotFoundError",
    "InvalidUrlError",
    "FileStorageBackend",
    "MemoryStorageBackend",
]
