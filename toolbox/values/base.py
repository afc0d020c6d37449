"""
Abstract base class for value providers.

This module defines the ValueProvider interface that all named dynamic
values (environment, time, casts, lookups) implement.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..context import Context


class ValueProvider(ABC):
    """
    Abstract base class for value providers.

    A provider computes one value from a call context and a list of
    positional arguments. Each implementation documents the arguments it
    expects.
    """

    @abstractmethod
    def get(self, context: Context, *arguments: Any) -> Any:
        """
        Compute a value.

        Args:
            context: Call context, may carry state for the provider
            *arguments: Provider-specific arguments

        Returns:
            Computed value (may be None)

        Raises:
            ValueProviderError: If the value cannot be computed
        """
        pass


class ValueProviderError(Exception):
    """Exception raised when a value provider fails."""
    pass


class UnknownValueProviderError(ValueProviderError, LookupError):
    """Exception raised when a provider name has not been registered."""
    pass
