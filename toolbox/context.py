"""
Call context handed to value providers.
"""

from typing import Any, Dict, Hashable, Optional


class Context:
    """
    Keyed bag of state shared between a caller and value providers.

    Keys are any hashable value, so a class or a sentinel object can be
    used to avoid clashes between independent users of one context.
    """

    def __init__(self, values: Optional[Dict[Hashable, Any]] = None):
        self._values: Dict[Hashable, Any] = dict(values or {})

    def put(self, key: Hashable, value: Any) -> None:
        self._values[key] = value

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._values.get(key, default)

    def contains(self, key: Hashable) -> bool:
        return key in self._values

    def remove(self, key: Hashable) -> Any:
        """Remove key and return its value (None if absent)."""
        return self._values.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._values)
