"""
Unit tests for the scheme-dispatching storage service.
"""

import io
import pytest
from typing import List

from toolbox.models.storage_object import StorageObject
from toolbox.storage.backends.base import (
    InvalidUrlError,
    SchemeNotFoundError,
    StorageBackend,
)
from toolbox.storage.backends.filesystem import FileStorageBackend
from toolbox.storage.backends.memory import MemoryStorageBackend
from toolbox.storage.service import StorageService, url_scheme


class RecordingBackend(StorageBackend):
    """Backend that records calls instead of doing I/O."""

    def __init__(self, close_error: Exception = None):
        self.calls: List[tuple] = []
        self.closed = False
        self.close_error = close_error

    def list(self, url):
        self.calls.append(("list", url))
        return [StorageObject(url=url)]

    def exists(self, url):
        self.calls.append(("exists", url))
        return True

    def storage_object(self, url):
        self.calls.append(("storage_object", url))
        return StorageObject(url=url)

    def download(self, storage_object):
        self.calls.append(("download", storage_object.url))
        return io.BytesIO(b"recorded")

    def upload(self, url, content):
        self.calls.append(("upload", url))

    def delete(self, storage_object):
        self.calls.append(("delete", storage_object.url))

    def close(self):
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


class TestUrlScheme:
    """Test cases for URL scheme resolution."""

    def test_schemes(self):
        """Test explicit schemes and bare paths."""
        assert url_scheme("mem://bucket/key") == "mem"
        assert url_scheme("s3://bucket/key") == "s3"
        assert url_scheme("file:///tmp/data") == "file"
        assert url_scheme("/tmp/data") == "file"

    def test_invalid_url(self):
        """Test that unparseable URLs raise."""
        with pytest.raises(InvalidUrlError):
            url_scheme("http://[::1/path")


class TestStorageService:
    """Test cases for StorageService dispatch."""

    def test_builtin_backends(self):
        """Test that a new service has file and mem backends."""
        service = StorageService()
        backends = service.backends()

        assert list(backends.keys()) == ["file", "mem"]
        assert isinstance(backends["file"], FileStorageBackend)
        assert isinstance(backends["mem"], MemoryStorageBackend)

    def test_register_routes_operations(self):
        """Test that every operation on a scheme reaches its backend."""
        service = StorageService()
        backend = RecordingBackend()
        service.register("mem", backend)
        storage_object = StorageObject(url="mem://bucket/key")

        assert service.list("mem://bucket") == [StorageObject(url="mem://bucket")]
        assert service.exists("mem://bucket/key") is True
        assert service.storage_object("mem://bucket/key") == storage_object
        assert service.download(storage_object).read() == b"recorded"
        service.upload("mem://bucket/key", b"data")
        service.delete(storage_object)

        assert backend.calls == [
            ("list", "mem://bucket"),
            ("exists", "mem://bucket/key"),
            ("storage_object", "mem://bucket/key"),
            ("download", "mem://bucket/key"),
            ("upload", "mem://bucket/key"),
            ("delete", "mem://bucket/key"),
        ]

    def test_last_registration_wins(self):
        """Test that re-registering a scheme replaces the backend."""
        service = StorageService()
        first, second = RecordingBackend(), RecordingBackend()
        service.register("s3", first)
        service.register("s3", second)

        service.exists("s3://bucket/key")

        assert first.calls == []
        assert second.calls == [("exists", "s3://bucket/key")]
        assert service.backends()["s3"] is second

    def test_unregistered_scheme(self):
        """Test that unknown schemes raise without touching any backend."""
        service = StorageService()
        backend = RecordingBackend()
        service.register("mem", backend)

        with pytest.raises(SchemeNotFoundError, match="ftp"):
            service.list("ftp://host/path")
        with pytest.raises(SchemeNotFoundError):
            service.upload("ftp://host/path", b"data")
        with pytest.raises(SchemeNotFoundError):
            service.delete(StorageObject(url="ftp://host/path"))

        assert backend.calls == []

    def test_memory_round_trip(self):
        """Test upload, listing, download and delete through the service."""
        service = StorageService()

        service.upload("mem://bucket/folder/data.txt", b"hello")
        assert service.exists("mem://bucket/folder/data.txt")

        objects = service.list("mem://bucket/folder")
        assert [o.name for o in objects] == ["folder", "data.txt"]

        with service.download(objects[1]) as reader:
            assert reader.read() == b"hello"

        service.delete(objects[1])
        assert not service.exists("mem://bucket/folder/data.txt")

    def test_bare_path_uses_file_backend(self, tmp_path):
        """Test that plain paths are served by the file backend."""
        service = StorageService()
        path = tmp_path / "data.txt"

        service.upload(str(path), io.BytesIO(b"content"))

        assert path.read_bytes() == b"content"
        assert service.exists(str(path))
        assert service.storage_object(path.as_uri()).size == 7


class TestStorageServiceClose:
    """Test cases for closing registered backends."""

    def test_close_all(self):
        """Test that close reaches every backend."""
        service = StorageService()
        first, second = RecordingBackend(), RecordingBackend()
        service.register("a", first)
        service.register("b", second)

        service.close()

        assert first.closed
        assert second.closed

    def test_close_stops_at_first_failure(self):
        """Test that the first close error is raised and later backends stay open."""
        service = StorageService()
        error = RuntimeError("B failed")
        first = RecordingBackend()
        failing = RecordingBackend(close_error=error)
        last = RecordingBackend()
        service.register("a", first)
        service.register("b", failing)
        service.register("c", last)

        with pytest.raises(RuntimeError, match="B failed") as excinfo:
            service.close()

        assert excinfo.value is error
        assert first.closed
        assert not last.closed

    def test_context_manager_closes(self):
        """Test that leaving a with block closes backends."""
        backend = RecordingBackend()
        with StorageService() as service:
            service.register("a", backend)

        assert backend.closed
