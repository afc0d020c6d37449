"""
In-memory storage backend implementation.

This module contains the MemoryStorageBackend that keeps 'mem' URLs in a
process-local dictionary. Folders are implicit: a folder exists while at
least one file is stored beneath it.
"""

import io
import logging
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List, Tuple
from urllib.parse import unquote, urlparse

from .base import Content, StorageBackend, StorageNotFoundError, read_content
from ...models.storage_object import StorageObject

logger = logging.getLogger(__name__)

SCHEME = "mem"


class MemoryStorageBackend(StorageBackend):
    """In-memory implementation of StorageBackend, mainly for tests and scratch data."""

    def __init__(self):
        self._files: Dict[str, Tuple[bytes, datetime]] = {}

    @staticmethod
    def _to_key(url: str) -> str:
        """Convert 'mem://bucket/a/b' to 'bucket/a/b'."""
        parsed = urlparse(url)
        return unquote(parsed.netloc + parsed.path).strip('/')

    @staticmethod
    def _prefix(key: str) -> str:
        return f"{key}/" if key else ""

    def _is_folder(self, key: str) -> bool:
        prefix = self._prefix(key)
        return any(name.startswith(prefix) for name in self._files)

    def _file_object(self, key: str) -> StorageObject:
        content, modified = self._files[key]
        return StorageObject(url=f"{SCHEME}://{key}", size=len(content), modified=modified)

    def _folder_object(self, key: str) -> StorageObject:
        return StorageObject(url=f"{SCHEME}://{key}", is_dir=True)

    def list(self, url: str) -> List[StorageObject]:
        key = self._to_key(url)
        if key in self._files:
            return [self._file_object(key)]
        if not self._is_folder(key):
            raise StorageNotFoundError(f"Object does not exist: {url}")

        prefix = self._prefix(key)
        children: Dict[str, bool] = {}
        for name in self._files:
            if not name.startswith(prefix):
                continue
            child, separator, _ = name[len(prefix):].partition('/')
            children[prefix + child] = children.get(prefix + child, False) or bool(separator)

        result = [self._folder_object(key)]
        for child_key in sorted(children):
            if children[child_key]:
                result.append(self._folder_object(child_key))
            else:
                result.append(self._file_object(child_key))
        return result

    def exists(self, url: str) -> bool:
        key = self._to_key(url)
        return key in self._files or self._is_folder(key)

    def storage_object(self, url: str) -> StorageObject:
        key = self._to_key(url)
        if key in self._files:
            return self._file_object(key)
        if self._is_folder(key):
            return self._folder_object(key)
        raise StorageNotFoundError(f"Object does not exist: {url}")

    def download(self, storage_object: StorageObject) -> BinaryIO:
        key = self._to_key(storage_object.url)
        if key not in self._files:
            raise StorageNotFoundError(f"Object does not exist: {storage_object.url}")
        content, _ = self._files[key]
        return io.BytesIO(content)

    def upload(self, url: str, content: Content) -> None:
        key = self._to_key(url)
        self._files[key] = (read_content(content), datetime.now(timezone.utc))
        logger.debug(f"Stored {len(self._files[key][0])} bytes at {SCHEME}://{key}")

    def delete(self, storage_object: StorageObject) -> None:
        key = self._to_key(storage_object.url)
        if key in self._files:
            del self._files[key]
            return
        if not self._is_folder(key):
            raise StorageNotFoundError(f"Object does not exist: {storage_object.url}")

        prefix = self._prefix(key)
        for name in [name for name in self._files if name.startswith(prefix)]:
            del self._files[name]
        logger.debug(f"Deleted folder {SCHEME}://{key}")
