"""
Storage factory for creating storage services.

This module provides the registry of scheme-specific backend factories and
the functions that build a StorageService for a URL, optionally driven by
a YAML configuration file with environment variable overrides.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from .backends.base import StorageBackend, StorageError
from .service import StorageService, url_scheme

logger = logging.getLogger(__name__)

BackendFactory = Callable[[Optional[str]], StorageBackend]

DEFAULT_CONFIG_PATH = Path("config/storage.yaml")


class StorageConfigurationError(StorageError):
    """Exception raised for storage configuration errors."""
    pass


class UnsupportedSchemeError(StorageConfigurationError):
    """Exception raised when no backend can be built for a URL scheme."""
    pass


class StorageProviderRegistry:
    """
    Registry of backend factories keyed by URL scheme.

    A factory takes the path of a credential file (or None) and returns a
    backend for its scheme. The path is passed through unexamined.
    """

    def __init__(self):
        self._factories: Dict[str, BackendFactory] = {}

    def register(self, scheme: str, factory: BackendFactory) -> None:
        """Register factory for scheme, replacing any previous one."""
        self._factories[scheme] = factory
        logger.debug(f"Registered storage provider for scheme: {scheme}")

    def get(self, scheme: str) -> Optional[BackendFactory]:
        """Get factory for scheme, or None if none is registered."""
        return self._factories.get(scheme)

    def schemes(self) -> List[str]:
        return list(self._factories.keys())


def create_storage_service(
    url: str,
    credential_file: Optional[str] = None,
    providers: Optional[StorageProviderRegistry] = None
) -> StorageService:
    """
    Create storage service able to serve a URL.

    If a factory is registered for the URL's scheme it is called with the
    credential file and the resulting backend is registered on the service.

    Args:
        url: Storage URL the service is meant for
        credential_file: Optional credential file path for the factory
        providers: Backend factories by scheme

    Returns:
        StorageService instance

    Raises:
        InvalidUrlError: If url cannot be parsed
        StorageConfigurationError: If the backend factory fails
        UnsupportedSchemeError: If no factory exists and the scheme is not 'file'
    """
    scheme = url_scheme(url)
    service = StorageService()
    factory = providers.get(scheme) if providers is not None else None

    # Register backend built by the scheme's factory
    if factory is not None:
        try:
            backend = factory(credential_file)
        except Exception as e:
            logger.error(f"Failed to create storage backend for {url}: {e}")
            raise StorageConfigurationError(f"Failed to get storage for url {url}: {e}") from e
        service.register(scheme, backend)
        logger.info(f"Created storage service for scheme: {scheme}")
    elif scheme != 'file':
        raise UnsupportedSchemeError(f"Unsupported scheme {url}")

    return service


def load_storage_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load storage configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to configuration file (default: config/storage.yaml)

    Returns:
        Configuration dictionary

    Raises:
        StorageConfigurationError: If configuration loading fails
    """
    # Use default config path if not specified
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    try:
        if not config_path.exists():
            raise StorageConfigurationError(f"Configuration file not found: {config_path}")

        # Load YAML configuration
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        # Validate required sections
        if not isinstance(config, dict) or not isinstance(config.get('storage'), dict):
            raise StorageConfigurationError("Invalid configuration: missing 'storage' section")

        # Apply environment variable overrides
        return _apply_environment_overrides(config)

    except StorageConfigurationError:
        raise
    except yaml.YAMLError as e:
        raise StorageConfigurationError(f"YAML parsing error: {e}") from e
    except OSError as e:
        raise StorageConfigurationError(f"Configuration loading failed: {e}") from e


def _apply_environment_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Reads TOOLBOX_STORAGE_URL and TOOLBOX_STORAGE_CREDENTIALS from the
    process environment as it is; no .env file is loaded here.
    """
    storage_url = os.getenv('TOOLBOX_STORAGE_URL')
    if storage_url:
        config['storage']['url'] = storage_url
        logger.info(f"Storage URL overridden by environment: {storage_url}")

    credentials = os.getenv('TOOLBOX_STORAGE_CREDENTIALS')
    if credentials:
        config['storage']['credentials'] = credentials
        logger.info("Storage credentials file overridden by environment")

    return config


def create_default_storage_service(
    config_path: Optional[Path] = None,
    providers: Optional[StorageProviderRegistry] = None
) -> StorageService:
    """
    Create storage service from configuration file.

    This is the main entry point for creating a storage service with
    configuration loaded from file and environment overrides. It loads a
    .env file into the process environment (without replacing variables
    already set) before reading the overrides.

    Args:
        config_path: Optional path to configuration file
        providers: Backend factories by scheme

    Returns:
        StorageService instance ready for use

    Raises:
        StorageConfigurationError: If configuration or creation fails
    """
    load_dotenv()

    try:
        # Load YAML configuration with environment overrides
        config = load_storage_config(config_path)
        storage_config = config['storage']

        # Default to the local filesystem when no URL is configured
        return create_storage_service(
            storage_config.get('url') or 'file:///',
            storage_config.get('credentials'),
            providers
        )

    except StorageError as e:
        logger.error(f"Failed to create default storage service: {e}")
        raise
