"""
Minimal keyed lookup used by the dictionary-backed value provider.
"""

from abc import ABC, abstractmethod
from typing import Any


class DictionaryKeyError(KeyError):
    """Exception raised when a dictionary has no value for a key."""
    pass


class Dictionary(ABC):
    """Read-mostly keyed lookup."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """
        Get value for key.

        Raises:
            DictionaryKeyError: If key does not exist
        """
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if key exists."""
        pass


_MISSING = object()


class MapDictionary(dict, Dictionary):
    """
    Dictionary backed by a plain dict of string keys.

    get() keeps dict's optional default: with a default it behaves like
    dict.get, without one a missing key raises DictionaryKeyError.
    """

    def get(self, key: str, default: Any = _MISSING) -> Any:
        if key in self:
            return self[key]
        if default is not _MISSING:
            return default
        raise DictionaryKeyError(f"Failed to lookup: {key}")

    def exists(self, key: str) -> bool:
        return key in self
