"""
Storage service layer dispatching operations to backends by URL scheme.

This module provides the StorageService class that acts as the main
interface between callers and storage backends. The service itself only
resolves the backend for a URL's scheme; all I/O is done by the backend.
"""

import logging
from typing import BinaryIO, Dict, List
from urllib.parse import urlparse

from ..models.storage_object import StorageObject
from .backends.base import (
    Content,
    InvalidUrlError,
    SchemeNotFoundError,
    StorageBackend,
)
from .backends.filesystem import FileStorageBackend
from .backends.memory import MemoryStorageBackend

logger = logging.getLogger(__name__)


def url_scheme(url: str) -> str:
    """
    Get the scheme of a storage URL.

    Bare paths have no scheme and map to 'file'.

    Raises:
        InvalidUrlError: If url cannot be parsed
    """
    try:
        return urlparse(url).scheme or 'file'
    except ValueError as e:
        raise InvalidUrlError(f"Failed to parse url {url}: {e}") from e


class StorageService(StorageBackend):
    """
    Scheme-keyed storage facade.

    Holds one backend per scheme (the last registration wins) and forwards
    each call verbatim to the backend registered for the URL's scheme. A
    new service comes with the 'file' and 'mem' backends registered.
    """

    def __init__(self):
        """Initialize storage service with the built-in backends."""
        self._registry: Dict[str, StorageBackend] = {}
        self.register('file', FileStorageBackend())
        self.register('mem', MemoryStorageBackend())

    def register(self, scheme: str, backend: StorageBackend) -> None:
        """
        Register backend for a scheme, replacing any previous one.

        Args:
            scheme: URL scheme, e.g. 's3'
            backend: Backend serving that scheme
        """
        if scheme in self._registry:
            logger.debug(f"Replacing storage backend for scheme: {scheme}")
        self._registry[scheme] = backend

    def backends(self) -> Dict[str, StorageBackend]:
        """Registered backends keyed by scheme, in registration order."""
        return dict(self._registry)

    def _backend_for(self, url: str) -> StorageBackend:
        scheme = url_scheme(url)
        backend = self._registry.get(scheme)
        if backend is None:
            raise SchemeNotFoundError(f"Failed to lookup url schema {scheme} in {url}")
        logger.debug(f"Dispatching {url} to {type(backend).__name__}")
        return backend

    def list(self, url: str) -> List[StorageObject]:
        return self._backend_for(url).list(url)

    def exists(self, url: str) -> bool:
        return self._backend_for(url).exists(url)

    def storage_object(self, url: str) -> StorageObject:
        return self._backend_for(url).storage_object(url)

    def download(self, storage_object: StorageObject) -> BinaryIO:
        return self._backend_for(storage_object.url).download(storage_object)

    def upload(self, url: str, content: Content) -> None:
        self._backend_for(url).upload(url, content)

    def delete(self, storage_object: StorageObject) -> None:
        self._backend_for(storage_object.url).delete(storage_object)

    def close(self) -> None:
        """
        Close every registered backend in registration order.

        Stops at the first backend that fails to close and re-raises its
        error; backends registered after it are left open.
        """
        for scheme, backend in self._registry.items():
            try:
                backend.close()
            except Exception as e:
                logger.error(f"Failed to close storage backend for scheme {scheme}: {e}")
                raise

    def __enter__(self) -> "StorageService":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
