"""
Built-in value providers.

Environment lookup, casts, current time and date, relative time
arithmetic, weekday, nil and dictionary-backed lookups.
"""

import logging
import os
from datetime import datetime, timedelta
from typing import Any, Hashable

from ..context import Context
from ..conversions import as_bool, as_float, as_int, as_string, as_time
from ..dateformat import DateFormatError, format_time, parse_time, to_layout
from .base import ValueProvider, ValueProviderError
from .dictionary import Dictionary
from .registry import ValueProviderRegistry

logger = logging.getLogger(__name__)

_TIME_UNITS = {
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "hour": timedelta(hours=1),
    "min": timedelta(minutes=1),
    "sec": timedelta(seconds=1),
}


class EnvValueProvider(ValueProvider):
    """Returns the value of the environment variable named by the first argument."""

    def get(self, context: Context, *arguments: Any) -> Any:
        if not arguments:
            raise ValueProviderError("Expected environment variable name but had no arguments")
        key = as_string(arguments[0])
        value = os.environ.get(key)
        if value is None:
            raise ValueProviderError(f"Failed to lookup {key} in env")
        return value


class CastedValueProvider(ValueProvider):
    """
    Casts a value to the type named by the first argument.

    Arguments:
        'time', text, date pattern -> datetime (raises on parse failure)
        'int' | 'float' | 'bool' | 'string', value -> converted value;
        these never fail, bad input gives the type's zero value
    """

    _CASTS = {
        "int": as_int,
        "float": as_float,
        "bool": as_bool,
        "string": as_string,
    }

    def get(self, context: Context, *arguments: Any) -> Any:
        if not arguments:
            raise ValueProviderError("Failed to cast due to invalid number of arguments, wanted 2 but had 0")
        target = as_string(arguments[0])
        if len(arguments) < 2:
            raise ValueProviderError(
                f"Failed to cast to {target} due to invalid number of arguments, wanted 2 but had {len(arguments)}"
            )

        if target == "time":
            if len(arguments) != 3:
                raise ValueProviderError(
                    f"Failed to cast to time due to invalid number of arguments, expected 2 but had {len(arguments) - 1}"
                )
            text = as_string(arguments[1])
            try:
                return parse_time(as_string(arguments[2]), text)
            except DateFormatError as e:
                raise ValueProviderError(f"Failed to cast to time {text}: {e}") from e

        cast = self._CASTS.get(target)
        if cast is None:
            raise ValueProviderError(f"Failed to cast to {target} - unsupported type")
        return cast(arguments[1])


class CurrentTimeProvider(ValueProvider):
    """Returns the current local time."""

    def get(self, context: Context, *arguments: Any) -> Any:
        return datetime.now().astimezone()


class TimeDiffProvider(ValueProvider):
    """
    Shifts a base time by an amount of time units.

    Arguments:
        base: a time value or 'now' (case-insensitive)
        amount: signed integer (optional, with unit)
        unit: day | week | hour | min | sec (case-insensitive); any other
            unit shifts by nothing
        format: 'unix' for epoch seconds, 'timestamp' for epoch
            milliseconds, otherwise a date pattern for formatted text
            (optional, requires amount and unit)

    Without a format the shifted datetime is returned.
    """

    def get(self, context: Context, *arguments: Any) -> Any:
        if not arguments:
            raise ValueProviderError("Expected base time but had no arguments")

        if as_string(arguments[0]).lower() == "now":
            result = datetime.now().astimezone()
        else:
            result = as_time(arguments[0])
            if result is None:
                raise ValueProviderError(f"Failed to read base time: {arguments[0]!r}")

        if len(arguments) >= 3:
            amount = as_int(arguments[1])
            unit = as_string(arguments[2]).lower()
            result += _TIME_UNITS.get(unit, timedelta(0)) * amount

        output_format = as_string(arguments[3]) if len(arguments) == 4 else ""
        if output_format == "unix":
            return int(result.timestamp())
        if output_format == "timestamp":
            return int(result.timestamp() * 1000)
        if output_format:
            return format_time(result, to_layout(output_format))
        return result


class WeekdayProvider(ValueProvider):
    """Returns the current weekday, 0 for Sunday through 6 for Saturday."""

    def get(self, context: Context, *arguments: Any) -> Any:
        return datetime.now().isoweekday() % 7


class CurrentDateProvider(ValueProvider):
    """Returns today's local date as yyyymmdd, e.g. '20170205'."""

    def get(self, context: Context, *arguments: Any) -> Any:
        return datetime.now().strftime("%Y%m%d")


class NilValueProvider(ValueProvider):
    """Always returns None."""

    def get(self, context: Context, *arguments: Any) -> Any:
        return None


class DictionaryProvider(ValueProvider):
    """
    Looks up the first argument in a Dictionary stored in the call context.

    A single-argument lookup of a missing key is optional and returns None;
    with more arguments the dictionary's DictionaryKeyError propagates.
    """

    def __init__(self, context_key: Hashable):
        """
        Initialize dictionary provider.

        Args:
            context_key: Context key under which the Dictionary is stored
        """
        self.context_key = context_key

    def get(self, context: Context, *arguments: Any) -> Any:
        if not arguments:
            raise ValueProviderError("Expected at least one argument but had 0")
        key = as_string(arguments[0])

        dictionary = context.get(self.context_key)
        if not isinstance(dictionary, Dictionary):
            raise ValueProviderError(f"No dictionary found in context under {self.context_key!r}")

        if len(arguments) == 1 and not dictionary.exists(key):
            logger.debug(f"Optional dictionary lookup missed: {key}")
            return None
        return dictionary.get(key)


def default_value_provider_registry() -> ValueProviderRegistry:
    """
    Create a registry holding the stateless built-in providers.

    Names: env, cast, now, timeDiff, weekday, currentDate, nil. The
    dictionary provider needs a context key and is registered by callers.
    """
    registry = ValueProviderRegistry()
    registry.register("env", EnvValueProvider())
    registry.register("cast", CastedValueProvider())
    registry.register("now", CurrentTimeProvider())
    registry.register("timeDiff", TimeDiffProvider())
    registry.register("weekday", WeekdayProvider())
    registry.register("currentDate", CurrentDateProvider())
    registry.register("nil", NilValueProvider())
    return registry
