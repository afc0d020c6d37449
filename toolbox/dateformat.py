"""
Date format translation between token patterns and strftime layouts.

This module converts human-readable date patterns such as
``yyyy-MM-dd HH:mm:ss`` into the ``strftime``/``strptime`` directive
layout understood by ``datetime`` (``%Y-%m-%d %H:%M:%S``) and back, and
provides helpers to format and parse times through a pattern.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Mapping

logger = logging.getLogger(__name__)

DATE_FORMAT_KEYWORD = "dateFormat"
DATE_LAYOUT_KEYWORD = "dateLayout"

# Longest tokens first: shorter tokens are prefixes of longer ones.
_PATTERN_TOKENS = [
    ("yyyy", "%Y"),
    ("SSS", "%f"),
    ("yy", "%y"),
    ("MM", "%m"),
    ("dd", "%d"),
    ("HH", "%H"),
    ("hh", "%I"),
    ("mm", "%M"),
    ("ss", "%S"),
    ("ZZ", "%:z"),
    ("M", "%-m"),
    ("d", "%-d"),
    ("Z", "%z"),
    ("z", "%Z"),
]

_LAYOUT_TOKENS = {directive: token for token, directive in _PATTERN_TOKENS}

_DIRECTIVE = re.compile(r"%(-[md]|:z|.)", re.DOTALL)


class DateFormatError(ValueError):
    """Exception raised when a time does not match a date pattern."""
    pass


def to_layout(pattern: str) -> str:
    """
    Convert a date pattern into a strftime layout.

    The pattern is scanned left to right; at each position the longest
    known token wins, anything else is copied through as a literal.

    Args:
        pattern: Date pattern, e.g. 'yyyy-MM-dd HH:mm:ss.SSS ZZ'

    Returns:
        Layout string, e.g. '%Y-%m-%d %H:%M:%S.%f %:z'
    """
    layout = []
    position = 0
    while position < len(pattern):
        for token, directive in _PATTERN_TOKENS:
            if pattern.startswith(token, position):
                layout.append(directive)
                position += len(token)
                break
        else:
            char = pattern[position]
            layout.append("%%" if char == "%" else char)
            position += 1
    return "".join(layout)


def to_pattern(layout: str) -> str:
    """
    Convert a strftime layout back into a date pattern.

    Directives without a pattern token are kept as they are.

    Args:
        layout: Layout string, e.g. '%Y%m%d'

    Returns:
        Date pattern, e.g. 'yyyyMMdd'
    """
    def replace(match: re.Match) -> str:
        directive = match.group(0)
        if directive == "%%":
            return "%"
        return _LAYOUT_TOKENS.get(directive, directive)

    return _DIRECTIVE.sub(replace, layout)


def _utc_offset(value: datetime, separator: str) -> str:
    offset = value.utcoffset()
    if offset is None:
        return ""
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}{separator}{minutes % 60:02d}"


def format_time(value: datetime, layout: str) -> str:
    """
    Format a datetime through a layout.

    Directives that strftime does not support portably are rendered here:
    '%-m' and '%-d' (no padding), '%:z' (offset with colon) and '%f',
    which yields milliseconds to match the 'SSS' token.

    Args:
        value: Time to format
        layout: Layout string

    Returns:
        Formatted text
    """
    def render(match: re.Match) -> str:
        directive = match.group(1)
        if directive == "%":
            return "%"
        if directive == "-m":
            return str(value.month)
        if directive == "-d":
            return str(value.day)
        if directive == ":z":
            return _utc_offset(value, ":")
        if directive == "z":
            return _utc_offset(value, "")
        if directive == "f":
            return f"{value.microsecond // 1000:03d}"
        return value.strftime("%" + directive)

    return _DIRECTIVE.sub(render, layout)


def _strptime_layout(layout: str) -> str:
    """
    Rewrite a layout into directives strptime accepts.

    Without an AM/PM marker a 12-hour field is read as a plain hour, so
    '12' stays noon instead of becoming midnight.
    """
    has_am_pm = any(match.group(1) == "p" for match in _DIRECTIVE.finditer(layout))

    def replace(match: re.Match) -> str:
        directive = match.group(1)
        if directive in ("-m", "-d"):
            return "%" + directive[1]
        if directive == ":z":
            return "%z"
        if directive == "I" and not has_am_pm:
            return "%H"
        return match.group(0)

    return _DIRECTIVE.sub(replace, layout)


def parse_time(pattern: str, text: str) -> datetime:
    """
    Parse text using the layout derived from a date pattern.

    Times without zone information are taken as UTC.

    Args:
        pattern: Date pattern, e.g. 'yyyy-MM-dd'
        text: Text to parse, e.g. '2020-01-01'

    Returns:
        Parsed timezone-aware datetime

    Raises:
        DateFormatError: If text does not match the pattern
    """
    layout = _strptime_layout(to_layout(pattern))
    try:
        parsed = datetime.strptime(text, layout)
    except ValueError as e:
        logger.debug(f"Text '{text}' does not match layout '{layout}': {e}")
        raise DateFormatError(f"Failed to parse '{text}' with pattern '{pattern}': {e}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_to_string(pattern: str, base_offset: int, timestamp: int) -> str:
    """
    Format an epoch timestamp as local time through a date pattern.

    Args:
        pattern: Date pattern
        base_offset: Seconds since the epoch added to the timestamp
        timestamp: Nanoseconds since the epoch (or since base_offset)

    Returns:
        Formatted text
    """
    instant = datetime.fromtimestamp(base_offset, tz=timezone.utc)
    instant += timedelta(microseconds=timestamp // 1000)
    return format_time(instant.astimezone(), to_layout(pattern))


def get_layout(settings: Mapping[str, str]) -> str:
    """
    Get the time layout configured in settings.

    A layout under DATE_LAYOUT_KEYWORD wins over a pattern under
    DATE_FORMAT_KEYWORD whenever the key is present, even if empty;
    has_layout() uses the same presence rule.

    Returns:
        Layout string, or '' when neither key is set
    """
    if DATE_LAYOUT_KEYWORD in settings:
        return settings[DATE_LAYOUT_KEYWORD] or ""
    if DATE_FORMAT_KEYWORD in settings:
        return to_layout(settings[DATE_FORMAT_KEYWORD] or "")
    return ""


def has_layout(settings: Mapping[str, str]) -> bool:
    """Check whether settings carry a date layout or date pattern."""
    return DATE_LAYOUT_KEYWORD in settings or DATE_FORMAT_KEYWORD in settings
