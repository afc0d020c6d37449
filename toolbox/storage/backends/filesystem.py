"""
Filesystem storage backend implementation.

This module contains the FileStorageBackend that serves 'file' URLs and
bare paths from the local filesystem.
"""

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, List
from urllib.parse import unquote, urlparse

from .base import Content, StorageBackend, StorageError, StorageNotFoundError
from ...models.storage_object import StorageObject

logger = logging.getLogger(__name__)


class FileStorageBackend(StorageBackend):
    """
    Filesystem implementation of StorageBackend.

    Accepts 'file:///abs/path' URLs as well as plain paths. Objects are
    always reported with absolute 'file://' URLs.
    """

    def _to_path(self, url: str) -> Path:
        """Convert a file URL or plain path to a filesystem path."""
        parsed = urlparse(url)
        if parsed.scheme not in ('', 'file'):
            raise StorageError(f"Not a file URL: {url}")
        path = unquote(parsed.path)
        if parsed.netloc and parsed.netloc != 'localhost':
            path = parsed.netloc + path
        return Path(path)

    def _to_object(self, path: Path) -> StorageObject:
        stat = path.stat()
        is_dir = path.is_dir()
        return StorageObject(
            url=path.absolute().as_uri(),
            name=path.name,
            size=0 if is_dir else stat.st_size,
            modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            is_dir=is_dir
        )

    def list(self, url: str) -> List[StorageObject]:
        path = self._to_path(url)
        try:
            if not path.exists():
                raise StorageNotFoundError(f"Path does not exist: {url}")

            # Listed object first, then its entries
            result = [self._to_object(path)]
            if path.is_dir():
                for child in sorted(path.iterdir()):
                    result.append(self._to_object(child))
            return result

        except OSError as e:
            logger.error(f"Error listing {path}: {e}")
            raise StorageError(f"Failed to list {url}: {str(e)}") from e

    def exists(self, url: str) -> bool:
        return self._to_path(url).exists()

    def storage_object(self, url: str) -> StorageObject:
        path = self._to_path(url)
        try:
            return self._to_object(path)
        except FileNotFoundError as e:
            raise StorageNotFoundError(f"Path does not exist: {url}") from e
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            raise StorageError(f"Failed to get storage object {url}: {str(e)}") from e

    def download(self, storage_object: StorageObject) -> BinaryIO:
        path = self._to_path(storage_object.url)
        try:
            return open(path, 'rb')
        except FileNotFoundError as e:
            raise StorageNotFoundError(f"Path does not exist: {storage_object.url}") from e
        except OSError as e:
            logger.error(f"Error opening {path}: {e}")
            raise StorageError(f"Failed to download {storage_object.url}: {str(e)}") from e

    def upload(self, url: str, content: Content) -> None:
        path = self._to_path(url)
        try:
            # Create parent folders
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'wb') as f:
                if isinstance(content, (bytes, bytearray)):
                    f.write(content)
                else:
                    shutil.copyfileobj(content, f)
            logger.debug(f"Uploaded {path}")

        except OSError as e:
            logger.error(f"Error writing {path}: {e}")
            raise StorageError(f"Failed to upload {url}: {str(e)}") from e

    def delete(self, storage_object: StorageObject) -> None:
        path = self._to_path(storage_object.url)
        try:
            # Folders are removed with their contents
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()
            logger.debug(f"Deleted {path}")

        except FileNotFoundError as e:
            raise StorageNotFoundError(f"Path does not exist: {storage_object.url}") from e
        except OSError as e:
            logger.error(f"Error deleting {path}: {e}")
            raise StorageError(f"Failed to delete {storage_object.url}: {str(e)}") from e
