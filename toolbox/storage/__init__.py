"""
Storage module for the toolbox.

This module provides the scheme-dispatching storage service, its built-in
backends and the factory functions used to build a service for a URL.
"""

from .service import StorageService, url_scheme
from .factory import (
    StorageConfigurationError,
    StorageProviderRegistry,
    UnsupportedSchemeError,
    create_default_storage_service,
    create_storage_service,
    load_storage_config,
)
from .backends.base import (
    StorageBackend,
    StorageError,
    StorageNotFoundError,
    SchemeNotFoundError,
    InvalidUrlError,
)
from .backends.filesystem import FileStorageBackend
from .backends.memory import MemoryStorageBackend

__all__ = [
    "StorageService",
    "url_scheme",
    "StorageConfigurationError",
    "StorageProviderRegistry",
    "UnsupportedSchemeError",
    "create_default_storage_service",
    "create_storage_service",
    "load_storage_config",
    "StorageBackend",
    "StorageError",
    "StorageNotFoundError",
    "SchemeNotFoundError",
    "InvalidUrlError",
    "FileStorageBackend",
    "MemoryStorageBackend",
]
