"""
Toolbox: storage dispatch by URL scheme, named value providers and
date pattern to strftime layout conversion.
"""

from .context import Context
from .dateformat import (
    DATE_FORMAT_KEYWORD,
    DATE_LAYOUT_KEYWORD,
    DateFormatError,
    format_time,
    get_layout,
    has_layout,
    parse_time,
    timestamp_to_string,
    to_layout,
    to_pattern,
)

__all__ = [
    "Context",
    "DATE_FORMAT_KEYWORD",
    "DATE_LAYOUT_KEYWORD",
    "DateFormatError",
    "format_time",
    "get_layout",
    "has_layout",
    "parse_time",
    "timestamp_to_string",
    "to_layout",
    "to_pattern",
]

__version__ = "1.0.0"
