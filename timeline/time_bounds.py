"""TimeBound value type.

A TimeBound is either a concrete point in time (a year, or a day count relative
to the epoch date) or one of two sentinels meaning "the earliest/latest time
available in the dataset". Sentinels are kept as their string tokens so they
survive storage and URLs unchanged, and only become infinities when a caller
explicitly asks for a numeric interpretation.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum
from typing import Any

_INT_RE = re.compile(r"^-?\d+$")


class TimeBoundValue(StrEnum):
    """The two unbounded TimeBound sentinels."""

    UNBOUNDED_LEFT = "earliest"
    UNBOUNDED_RIGHT = "latest"


TimeBound = int | TimeBoundValue
TimeBounds = tuple[TimeBound, TimeBound]


def is_unbounded(time: TimeBound | str | None) -> bool:
    """Return whether a value is either sentinel (or its raw token)."""

    return is_unbounded_left(time) or is_unbounded_right(time)


def is_unbounded_left(time: TimeBound | str | None) -> bool:
    """Return whether a value is the `earliest` sentinel."""

    return isinstance(time, str) and time == TimeBoundValue.UNBOUNDED_LEFT.value


def is_unbounded_right(time: TimeBound | str | None) -> bool:
    """Return whether a value is the `latest` sentinel."""

    return isinstance(time, str) and time == TimeBoundValue.UNBOUNDED_RIGHT.value


def format_time_bound(time: TimeBound) -> str:
    """Format a TimeBound as its plain string token."""

    if isinstance(time, TimeBoundValue):
        return time.value
    return str(time)


def parse_time_bound(text: str, default: TimeBound) -> TimeBound:
    """Parse a sentinel token or a signed integer.

    Args:
        text: Raw string, e.g. `"earliest"`, `"-500"` or `"2015"`.
        default: Value returned when `text` is neither a sentinel nor an integer.

    Returns:
        The parsed TimeBound, or `default` when parsing fails.
    """

    value = text.strip()
    if is_unbounded(value):
        return TimeBoundValue(value)
    if _INT_RE.match(value):
        try:
            return int(value)
        except ValueError:
            # Longer than the interpreter's int/str conversion limit.
            return default
    return default


def _from_json(value: Any, default: TimeBound) -> TimeBound:
    if isinstance(value, TimeBoundValue):
        return value
    if isinstance(value, str):
        return parse_time_bound(value, default)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, float):
        if not value.is_integer():
            return default
        return int(value)
    if isinstance(value, int):
        return value
    return default


def _to_json(time: TimeBound | None) -> int | str | None:
    if isinstance(time, TimeBoundValue):
        return time.value
    return time


def min_time_from_json(value: Any) -> TimeBound:
    """Decode a stored start bound, defaulting to `earliest` when missing."""

    return _from_json(value, TimeBoundValue.UNBOUNDED_LEFT)


def max_time_from_json(value: Any) -> TimeBound:
    """Decode a stored end bound, defaulting to `latest` when missing."""

    return _from_json(value, TimeBoundValue.UNBOUNDED_RIGHT)


min_time_to_json = _to_json
max_time_to_json = _to_json


def time_bound_to_number(time: TimeBound | None) -> float | None:
    """Strictly convert a TimeBound to a number.

    Sentinels become `-inf` (`earliest`) and `+inf` (`latest`), which keeps
    comparisons against concrete times meaningful.

    Args:
        time: TimeBound to convert, or None.

    Returns:
        A number, or None when `time` is None.
    """

    if time is None:
        return None
    if is_unbounded_left(time):
        return -math.inf
    if is_unbounded_right(time):
        return math.inf
    return time
