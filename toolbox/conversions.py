"""
Best-effort value conversions.

These helpers never raise: input that cannot be converted yields the
target type's zero value (0, 0.0, False, '').
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from .dateformat import DateFormatError, parse_time

_TRUE_STRINGS = {"1", "t", "true", "y", "yes", "on"}


def as_int(value: Any) -> int:
    """Convert value to int, returning 0 when conversion is not possible."""
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            return 0
    return 0


def as_float(value: Any) -> float:
    """Convert value to float, returning 0.0 when conversion is not possible."""
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def as_bool(value: Any) -> bool:
    """
    Convert value to bool.

    Strings are true when they read as a truthy flag ('true', '1', 'yes',
    ...), numbers when non-zero. Anything else is False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def as_string(value: Any) -> str:
    """Convert value to str; None becomes ''."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def as_time(value: Any, pattern: str = "") -> Optional[datetime]:
    """
    Convert value to a datetime.

    Args:
        value: datetime, date, epoch seconds, or text
        pattern: Date pattern used for text; ISO 8601 when empty

    Returns:
        datetime, or None when value cannot be read as a time
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str) and value:
        if pattern:
            try:
                return parse_time(pattern, value)
            except DateFormatError:
                return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None
