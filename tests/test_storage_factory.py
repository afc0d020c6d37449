"""
Unit tests for storage factory functions and configuration loading.
"""

import tempfile
import pytest
from pathlib import Path

from toolbox.storage.backends.memory import MemoryStorageBackend
from toolbox.storage.factory import (
    StorageConfigurationError,
    StorageProviderRegistry,
    UnsupportedSchemeError,
    create_default_storage_service,
    create_storage_service,
    load_storage_config,
)
from toolbox.storage.service import StorageService


@pytest.fixture(autouse=True)
def clear_environment(monkeypatch):
    """Keep environment overrides out of tests that do not set them."""
    monkeypatch.delenv("TOOLBOX_STORAGE_URL", raising=False)
    monkeypatch.delenv("TOOLBOX_STORAGE_CREDENTIALS", raising=False)


@pytest.fixture
def temp_config_dir():
    """Create temporary directory for configuration files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


class RecordingFactory:
    """Backend factory that remembers the credential file it was given."""

    def __init__(self):
        self.credential_files = []
        self.backend = MemoryStorageBackend()

    def __call__(self, credential_file):
        self.credential_files.append(credential_file)
        return self.backend


class TestStorageProviderRegistry:
    """Test cases for StorageProviderRegistry."""

    def test_register_and_get(self):
        """Test registering and looking up factories."""
        providers = StorageProviderRegistry()
        factory = RecordingFactory()
        providers.register("s3", factory)

        assert providers.get("s3") is factory
        assert providers.get("gs") is None
        assert providers.schemes() == ["s3"]


class TestCreateStorageService:
    """Test cases for URL-targeted service creation."""

    def test_file_url_without_providers(self):
        """Test that file URLs need no factory."""
        service = create_storage_service("file:///tmp/data")
        assert isinstance(service, StorageService)
        assert list(service.backends()) == ["file", "mem"]

        assert isinstance(create_storage_service("/tmp/data"), StorageService)

    def test_unsupported_scheme(self):
        """Test that schemes without factory are refused."""
        with pytest.raises(UnsupportedSchemeError, match="s3://bucket"):
            create_storage_service("s3://bucket/key")
        with pytest.raises(StorageConfigurationError):
            create_storage_service("mem://bucket/key", providers=StorageProviderRegistry())

    def test_factory_backend_registered(self):
        """Test that the factory backend serves the URL scheme."""
        providers = StorageProviderRegistry()
        factory = RecordingFactory()
        providers.register("s3", factory)

        service = create_storage_service("s3://bucket/key", "/secrets/s3.json", providers)

        assert factory.credential_files == ["/secrets/s3.json"]
        assert service.backends()["s3"] is factory.backend
        service.upload("s3://bucket/key", b"data")
        assert service.exists("s3://bucket/key")

    def test_factory_failure(self):
        """Test that factory errors are reported as configuration errors."""
        def failing_factory(credential_file):
            raise ValueError("bad credentials")

        providers = StorageProviderRegistry()
        providers.register("s3", failing_factory)

        with pytest.raises(StorageConfigurationError, match="bad credentials") as excinfo:
            create_storage_service("s3://bucket/key", "creds.json", providers)
        assert isinstance(excinfo.value.__cause__, ValueError)


class TestStorageConfig:
    """Test cases for YAML configuration loading."""

    def test_load_config(self, temp_config_dir):
        """Test loading a valid configuration file."""
        config_path = temp_config_dir / "storage.yaml"
        config_path.write_text("storage:\n  url: mem://bucket\n  credentials: creds.json\n")

        config = load_storage_config(config_path)

        assert config["storage"]["url"] == "mem://bucket"
        assert config["storage"]["credentials"] == "creds.json"

    def test_environment_overrides(self, temp_config_dir, monkeypatch):
        """Test that environment variables override file values."""
        config_path = temp_config_dir / "storage.yaml"
        config_path.write_text("storage:\n  url: mem://bucket\n")
        monkeypatch.setenv("TOOLBOX_STORAGE_URL", "s3://override")
        monkeypatch.setenv("TOOLBOX_STORAGE_CREDENTIALS", "/env/creds.json")

        config = load_storage_config(config_path)

        assert config["storage"]["url"] == "s3://override"
        assert config["storage"]["credentials"] == "/env/creds.json"

    def test_invalid_configs(self, temp_config_dir):
        """Test missing files, bad YAML and missing sections."""
        with pytest.raises(StorageConfigurationError, match="not found"):
            load_storage_config(temp_config_dir / "missing.yaml")

        bad_yaml = temp_config_dir / "bad.yaml"
        bad_yaml.write_text("storage: [unclosed\n")
        with pytest.raises(StorageConfigurationError, match="YAML"):
            load_storage_config(bad_yaml)

        no_section = temp_config_dir / "empty.yaml"
        no_section.write_text("other: 1\n")
        with pytest.raises(StorageConfigurationError, match="storage"):
            load_storage_config(no_section)

    def test_create_default_storage_service(self, temp_config_dir):
        """Test creating a service from configuration."""
        config_path = temp_config_dir / "storage.yaml"
        config_path.write_text("storage:\n  url: s3://bucket\n  credentials: creds.json\n")
        providers = StorageProviderRegistry()
        factory = RecordingFactory()
        providers.register("s3", factory)

        service = create_default_storage_service(config_path, providers)

        assert service.backends()["s3"] is factory.backend
        assert factory.credential_files == ["creds.json"]

    def test_dotenv_loaded_only_by_entry_point(self, temp_config_dir, monkeypatch):
        """Test that .env loading happens in the entry point, not in config loading."""
        config_path = temp_config_dir / "storage.yaml"
        config_path.write_text("storage:\n  url: file:///tmp\n")
        calls = []
        monkeypatch.setattr("toolbox.storage.factory.load_dotenv", lambda *args, **kwargs: calls.append(args))

        load_storage_config(config_path)
        assert calls == []

        create_default_storage_service(config_path)
        assert len(calls) == 1

    def test_create_default_storage_service_unsupported(self, temp_config_dir):
        """Test that configuration for an unknown scheme fails."""
        config_path = temp_config_dir / "storage.yaml"
        config_path.write_text("storage:\n  url: gs://bucket\n")

        with pytest.raises(UnsupportedSchemeError):
            create_default_storage_service(config_path)
