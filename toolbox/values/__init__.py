"""
Value providers package.

This package contains the value provider interface, the name-keyed
registry and the built-in providers.
"""

from .base import ValueProvider, ValueProviderError, UnknownValueProviderError
from .dictionary import Dictionary, DictionaryKeyError, MapDictionary
from .registry import ValueProviderRegistry
from .builtin import (
    CastedValueProvider,
    CurrentDateProvider,
    CurrentTimeProvider,
    DictionaryProvider,
    EnvValueProvider,
    NilValueProvider,
    TimeDiffProvider,
    WeekdayProvider,
    default_value_provider_registry,
)

__all__ = [
    "ValueProvider",
    "ValueProviderError",
    "UnknownValueProviderError",
    "Dictionary",
    "DictionaryKeyError",
    "MapDictionary",
    "ValueProviderRegistry",
    "CastedValueProvider",
    "CurrentDateProvider",
    "CurrentTimeProvider",
    "DictionaryProvider",
    "EnvValueProvider",
    "NilValueProvider",
    "TimeDiffProvider",
    "WeekdayProvider",
    "default_value_provider_registry",
]
