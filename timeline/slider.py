"""Pointer helpers for timeline slider widgets.

Slider UIs report pointer positions as a fraction of the track width and need
to decide which handle a pointer-down grabs. Both decisions are pure and live
here so any front end (or the JSON API) resolves them identically.
"""

from __future__ import annotations

from .controller import DragHandle
from .times import Time


def input_time_from_fraction(fraction: float, min_time: Time, max_time: Time) -> float:
    """Map a pointer position on the slider track to a time.

    Fractions outside `[0, 1]` are kept as-is so that dragging past the track
    ends produces times outside the available range (which the controller pins
    to the unbounded sentinels).

    Args:
        fraction: Pointer x offset divided by the track width.
        min_time: First available time.
        max_time: Last available time.

    Returns:
        Input time, possibly fractional.
    """

    return min_time + fraction * (max_time - min_time)


def drag_target_for(
    input_time: float,
    start_time: Time,
    end_time: Time,
    *,
    is_start_marker: bool = False,
    is_end_marker: bool = False,
) -> DragHandle:
    """Return the handle grabbed by a pointer-down.

    Args:
        input_time: Pointer position in time units.
        start_time: Resolved start handle time.
        end_time: Resolved end handle time.
        is_start_marker: Whether the pointer landed on the start marker.
        is_end_marker: Whether the pointer landed on the end marker.

    Returns:
        `both` when grabbing coinciding markers or the span between the
        handles, otherwise the handle on the pointer's side.
    """

    if start_time == end_time and (is_start_marker or is_end_marker):
        return DragHandle.BOTH
    if is_start_marker or input_time <= start_time:
        return DragHandle.START
    if is_end_marker or input_time >= end_time:
        return DragHandle.END
    return DragHandle.BOTH
