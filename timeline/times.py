"""Helpers over a dataset's available times.

Available times are an ascending sequence of distinct integers (years or day
indices) owned by the caller. Gaps are allowed.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence

from .time_bounds import TimeBound, is_unbounded_left, is_unbounded_right

Time = int


def find_closest_time(times: Sequence[Time], target: TimeBound | float) -> Time | None:
    """Return the available time closest to `target`.

    Sentinels resolve to the first/last available time. On an exact tie the
    earlier candidate wins.

    Args:
        times: Ascending available times.
        target: A TimeBound or any (possibly fractional) number.

    Returns:
        The closest available time, or None when `times` is empty.
    """

    if not times:
        return None
    if is_unbounded_left(target):
        return times[0]
    if is_unbounded_right(target):
        return times[-1]

    index = bisect_left(times, target)
    if index == 0:
        return times[0]
    if index == len(times):
        return times[-1]

    before = times[index - 1]
    after = times[index]
    if after - target < target - before:
        return after
    return before


def next_time(times: Sequence[Time], time: Time) -> Time:
    """Return the available time right after `time`.

    Saturates at the last available time, which is also returned when `time`
    is not one of the available times.
    """

    index = bisect_left(times, time)
    if index < len(times) - 1 and times[index] == time:
        return times[index + 1]
    return times[-1]


def time_progress(time: Time, min_time: Time, max_time: Time) -> float:
    """Return the position of `time` within `[min_time, max_time]` as a fraction."""

    if max_time == min_time:
        return 0.0
    return (time - min_time) / (max_time - min_time)


def is_strictly_ascending(times: Sequence[Time]) -> bool:
    """Return whether `times` is strictly ascending (sorted, no duplicates)."""

    return all(a < b for a, b in zip(times, times[1:]))
