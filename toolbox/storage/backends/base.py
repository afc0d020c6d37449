"""
Abstract base class for storage backends.

This module defines the StorageBackend interface that every scheme-specific
storage implementation must follow, and the storage exception hierarchy.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, List, Union

from ...models.storage_object import StorageObject

Content = Union[bytes, BinaryIO]


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    A backend handles every URL of one scheme (file, mem, s3, ...). The
    storage service routes calls to backends by scheme and passes the URL
    through unchanged.
    """

    @abstractmethod
    def list(self, url: str) -> List[StorageObject]:
        """
        List objects for a URL.

        Args:
            url: Storage URL of a file or folder

        Returns:
            The object itself for a file; for a folder, the folder followed
            by its direct children

        Raises:
            StorageNotFoundError: If nothing exists at url
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    def exists(self, url: str) -> bool:
        """
        Check if a resource exists.

        Args:
            url: Storage URL

        Returns:
            True if resource exists, False otherwise

        Raises:
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    def storage_object(self, url: str) -> StorageObject:
        """
        Get the storage object for a URL.

        Args:
            url: Storage URL

        Returns:
            StorageObject describing the resource

        Raises:
            StorageNotFoundError: If nothing exists at url
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    def download(self, storage_object: StorageObject) -> BinaryIO:
        """
        Get a reader for an object's content.

        Args:
            storage_object: Object previously returned by this backend

        Returns:
            Binary file-like object; callers close it

        Raises:
            StorageNotFoundError: If the object no longer exists
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    def upload(self, url: str, content: Content) -> None:
        """
        Store content at a URL, replacing any existing content.

        Args:
            url: Destination storage URL
            content: Bytes or a binary reader

        Raises:
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    def delete(self, storage_object: StorageObject) -> None:
        """
        Remove an object; folders are removed with everything beneath them.

        Args:
            storage_object: Object previously returned by this backend

        Raises:
            StorageNotFoundError: If the object does not exist
            StorageError: If storage operation fails
        """
        pass

    def close(self) -> None:
        """Release resources held by the backend."""
        pass


def read_content(content: Content) -> bytes:
    """Read upload content given either as bytes or as a binary reader."""
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    return content.read()


class StorageError(Exception):
    """Exception raised for storage-related errors."""
    pass


class StorageNotFoundError(StorageError):
    """Exception raised when a storage resource does not exist."""
    pass


class SchemeNotFoundError(StorageError):
    """Exception raised when no backend is registered for a URL scheme."""
    pass


class InvalidUrlError(StorageError):
    """Exception raised when a storage URL cannot be parsed."""
    pass
