"""
Registry of named value providers.
"""

import logging
from typing import Dict, List, Optional

from .base import UnknownValueProviderError, ValueProvider

logger = logging.getLogger(__name__)


class ValueProviderRegistry:
    """
    Name to value provider mapping.

    The registry is expected to be fully populated before first use, so
    get() treats an unknown name as a programming error and raises.
    Callers that expect absence should check contains() or use find().
    """

    def __init__(self):
        self._providers: Dict[str, ValueProvider] = {}

    def register(self, name: str, provider: ValueProvider) -> None:
        """Register provider under name, replacing any previous one."""
        if name in self._providers:
            logger.debug(f"Replacing value provider: {name}")
        self._providers[name] = provider

    def contains(self, name: str) -> bool:
        return name in self._providers

    def names(self) -> List[str]:
        """Registered provider names (order not significant)."""
        return list(self._providers.keys())

    def find(self, name: str) -> Optional[ValueProvider]:
        """Get provider by name, or None if it is not registered."""
        return self._providers.get(name)

    def get(self, name: str) -> ValueProvider:
        """
        Get provider by name.

        Args:
            name: Registered provider name

        Returns:
            ValueProvider instance

        Raises:
            UnknownValueProviderError: If no provider is registered under name
        """
        provider = self._providers.get(name)
        if provider is None:
            raise UnknownValueProviderError(f"Failed to lookup name: {name}")
        return provider

    def __contains__(self, name: str) -> bool:
        return self.contains(name)
