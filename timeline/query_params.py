"""URL query-string codec for timeline bounds.

The `time` query parameter carries a TimeBounds pair:

    time=2000..2005          two years
    time=1500                a single year (start == end)
    time=earliest..2005      unbounded start
    time=2020-01-01..latest  day granularity, dates relative to EPOCH_DATE

Older URLs used trailing or leading dots (`time=2015..`, `time=..2005`,
`time=..`) and a single-value `year` parameter. Those forms are still parsed
but never produced, because link-preview services strip trailing dots from
URLs.

Parsing never raises: malformed input degrades to the caller's default bound.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any

from .time_bounds import (
    TimeBound,
    TimeBounds,
    TimeBoundValue,
    format_time_bound,
    max_time_from_json,
    min_time_from_json,
    parse_time_bound,
)

EPOCH_DATE = date(2020, 1, 21)

RANGE_SEPARATOR = ".."

# Keyboard shortcut cycle: latest only, earliest only, all time.
TIMELINE_SHORTCUTS: tuple[str, ...] = ("latest", "earliest", RANGE_SEPARATOR)

_ISO_DATE_RE = re.compile(r"^\d{4}-[01]\d-[0-3]\d$")


def day_from_iso_date(text: str, *, epoch: date = EPOCH_DATE) -> int | None:
    """Convert an ISO `YYYY-MM-DD` date into a signed day count.

    Args:
        text: ISO calendar date.
        epoch: Date that maps to day 0.

    Returns:
        Days between `epoch` and the date (negative before the epoch), or None
        when `text` is not a valid calendar date.
    """

    if not _ISO_DATE_RE.match(text):
        return None
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return None
    return (parsed - epoch).days


def format_day(days: int, *, epoch: date = EPOCH_DATE) -> str:
    """Format a day count as an ISO date relative to `epoch`.

    Day counts that fall outside the representable calendar are returned as
    plain integers.
    """

    try:
        return (epoch + timedelta(days=days)).isoformat()
    except OverflowError:
        return str(days)


def upgrade_legacy_time_string(text: str) -> str:
    """Rewrite legacy open-ended ranges into their explicit form.

    `..` becomes `earliest..latest`, `2015..` becomes `2015..latest` and
    `..2005` becomes `earliest..2005`. Other values are returned unchanged.
    """

    if text == RANGE_SEPARATOR:
        return "earliest..latest"
    if text.endswith(RANGE_SEPARATOR):
        return text + TimeBoundValue.UNBOUNDED_RIGHT.value
    if text.startswith(RANGE_SEPARATOR):
        return TimeBoundValue.UNBOUNDED_LEFT.value + text
    return text


def parse_time_uri_component(param: str, default: TimeBound, *, epoch: date = EPOCH_DATE) -> TimeBound:
    """Parse one endpoint of a `time` parameter.

    Args:
        param: A sentinel token, a signed integer or an ISO date.
        default: Value returned when `param` cannot be parsed.
        epoch: Date that maps to day 0 for ISO dates.

    Returns:
        The parsed TimeBound, or `default`.
    """

    days = day_from_iso_date(param, epoch=epoch)
    if days is not None:
        return days
    if _ISO_DATE_RE.match(param):
        return default
    return parse_time_bound(param, default)


def format_time_uri_component(time: TimeBound, is_date: bool, *, epoch: date = EPOCH_DATE) -> str:
    """Format one TimeBound for a URL.

    Args:
        time: Bound to format.
        is_date: Format concrete values as ISO dates (day granularity) instead
            of decimal integers (year granularity).
        epoch: Date that maps to day 0.

    Returns:
        URL-safe string token.
    """

    if isinstance(time, TimeBoundValue):
        return format_time_bound(time)
    return format_day(time, epoch=epoch) if is_date else str(time)


def get_time_domain_from_query_string(text: str, *, epoch: date = EPOCH_DATE) -> TimeBounds:
    """Parse a `time` query parameter into a TimeBounds pair.

    A single token is used for both the start and end bound. When a range
    endpoint cannot be parsed it falls back to the matching sentinel; a
    malformed single token falls back to `latest`.

    Args:
        text: Raw `time` parameter value.
        epoch: Date that maps to day 0 for ISO dates.

    Returns:
        `(start, end)` bounds.
    """

    value = upgrade_legacy_time_string(text.strip())

    parts = value.split(RANGE_SEPARATOR)
    if len(parts) == 2 and parts[0] and parts[1]:
        return (
            parse_time_uri_component(parts[0], TimeBoundValue.UNBOUNDED_LEFT, epoch=epoch),
            parse_time_uri_component(parts[1], TimeBoundValue.UNBOUNDED_RIGHT, epoch=epoch),
        )

    time = parse_time_uri_component(value, TimeBoundValue.UNBOUNDED_RIGHT, epoch=epoch)
    return (time, time)


def format_time_bounds(bounds: TimeBounds, is_date: bool, *, epoch: date = EPOCH_DATE) -> str:
    """Format a TimeBounds pair as a `time` query parameter value.

    Equal bounds collapse to a single token; otherwise `start..end`.
    """

    start, end = bounds
    formatted_start = format_time_uri_component(start, is_date, epoch=epoch)
    if start == end:
        return formatted_start
    formatted_end = format_time_uri_component(end, is_date, epoch=epoch)
    return f"{formatted_start}{RANGE_SEPARATOR}{formatted_end}"


def time_param_for(
    bounds: TimeBounds,
    *,
    authored: tuple[Any, Any],
    is_date: bool,
    epoch: date = EPOCH_DATE,
) -> str | None:
    """Return the `time` parameter for a share URL.

    Args:
        bounds: Current timeline bounds.
        authored: Bounds the chart was authored with, as stored (missing
            values count as sentinels).
        is_date: Whether the chart uses day granularity.
        epoch: Date that maps to day 0.

    Returns:
        Encoded bounds, or None when they equal the authored bounds.
    """

    authored_bounds = (min_time_from_json(authored[0]), max_time_from_json(authored[1]))
    if tuple(bounds) == authored_bounds:
        return None
    return format_time_bounds(bounds, is_date, epoch=epoch)


def legacy_query_params_to_current(params: Mapping[str, str]) -> dict[str, str]:
    """Upgrade legacy query parameters.

    A non-empty `year` parameter becomes `time` unless `time` is already
    present; `year` itself is always dropped.
    """

    upgraded = dict(params)
    year = upgraded.pop("year", None)
    if year and not upgraded.get("time"):
        upgraded["time"] = year
    return upgraded


def next_timeline_shortcut(current: str | None) -> str:
    """Return the next value of the latest/earliest/all-time shortcut cycle."""

    try:
        index = TIMELINE_SHORTCUTS.index(current or "")
    except ValueError:
        return TIMELINE_SHORTCUTS[0]
    return TIMELINE_SHORTCUTS[(index + 1) % len(TIMELINE_SHORTCUTS)]
