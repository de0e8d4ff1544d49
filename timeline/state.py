"""In-memory TimelineManager implementation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .time_bounds import TimeBound, TimeBounds, TimeBoundValue
from .times import Time


@dataclass(slots=True)
class TimelineState:
    """Mutable timeline state shared between a chart and its controller.

    Args:
        times: Ascending available times of the active dataset.
        timeline_filter_start: Current start bound.
        timeline_filter_end: Current end bound.
        is_playing: Whether a playback loop is running.
        ms_per_tick: Delay between playback ticks in milliseconds.
        disable_play: UI hint that playback should not be offered.
        format_time_fn: Formats a bound for display.
        on_play: Called once each time playback starts.
    """

    times: Sequence[Time]
    timeline_filter_start: TimeBound = TimeBoundValue.UNBOUNDED_LEFT
    timeline_filter_end: TimeBound = TimeBoundValue.UNBOUNDED_RIGHT
    is_playing: bool = False
    ms_per_tick: int | None = None
    disable_play: bool = False
    format_time_fn: Callable[[TimeBound], str] | None = None
    on_play: Callable[[], None] | None = None

    @property
    def timeline_filter(self) -> TimeBounds:
        """Return the current `(start, end)` bounds."""

        return (self.timeline_filter_start, self.timeline_filter_end)

    @timeline_filter.setter
    def timeline_filter(self, value: TimeBounds) -> None:
        self.timeline_filter_start, self.timeline_filter_end = value
