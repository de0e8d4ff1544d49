"""Timeline services for stored charts.

`ChartTimeline` binds a Chart row to an in-memory TimelineState and a
TimelineController, applies request query parameters, and serializes the
result for the JSON endpoints and the management command.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from charts.models import Chart
from timeline.controller import DragHandle, TimelineController
from timeline.query_params import (
    format_day,
    format_time_bounds,
    get_time_domain_from_query_string,
    legacy_query_params_to_current,
    next_timeline_shortcut,
    time_param_for,
)
from timeline.slider import drag_target_for, input_time_from_fraction
from timeline.state import TimelineState
from timeline.time_bounds import (
    TimeBound,
    TimeBoundValue,
    format_time_bound,
    max_time_to_json,
    min_time_to_json,
)
from timeline.times import is_strictly_ascending

logger = logging.getLogger(__name__)


class ChartTimelineError(ValueError):
    """Raised when a chart cannot host a timeline."""


def time_formatter(chart: Chart) -> Callable[[TimeBound], str]:
    """Return the display formatter for a chart's times.

    Day charts format concrete times as ISO dates, year charts as integers.
    Sentinels keep their token.
    """

    def format_time(time: TimeBound) -> str:
        if isinstance(time, TimeBoundValue):
            return format_time_bound(time)
        return format_day(time) if chart.is_date else str(time)

    return format_time


@dataclass(slots=True)
class ChartTimeline:
    """A chart's timeline for the duration of one request or command."""

    chart: Chart
    state: TimelineState
    controller: TimelineController

    @classmethod
    def from_query_params(
        cls,
        chart: Chart,
        params: Mapping[str, str] | None = None,
        *,
        range_mode: bool = True,
        is_playing: bool = False,
    ) -> ChartTimeline:
        """Build a timeline from a chart and request query parameters.

        The legacy `year` parameter is upgraded to `time`. A missing or empty
        `time` keeps the chart's authored bounds.

        Args:
            chart: Chart to host.
            params: Query parameters (e.g. `request.GET.dict()`).
            range_mode: Initial controller range mode.
            is_playing: Whether the client reports an active playback.

        Returns:
            ChartTimeline with its state and controller wired together.

        Raises:
            ChartTimelineError: When the chart has no usable available times.
        """

        times = list(chart.times or [])
        if not times or not is_strictly_ascending(times):
            raise ChartTimelineError(f"Chart {chart.slug!r} has no usable available times.")

        current = legacy_query_params_to_current(params or {})
        bounds = chart.authored_time_bounds
        time_param = (current.get("time") or "").strip()
        if time_param:
            bounds = get_time_domain_from_query_string(time_param)

        state = TimelineState(
            times=tuple(times),
            timeline_filter_start=bounds[0],
            timeline_filter_end=bounds[1],
            is_playing=is_playing,
            ms_per_tick=chart.ms_per_tick,
            disable_play=chart.disable_play,
            format_time_fn=time_formatter(chart),
        )
        timeline = cls(chart=chart, state=state, controller=TimelineController(state))
        state.on_play = timeline._on_play
        if not range_mode:
            timeline.controller.toggle_range_mode()
        return timeline

    def _on_play(self) -> None:
        logger.info("Timeline play started for chart %s at %s.", self.chart.slug, self.full_time_param())

    def time_param(self) -> str | None:
        """Return the share-URL `time` value, or None when unchanged."""

        return time_param_for(
            self.state.timeline_filter,
            authored=(self.chart.min_time, self.chart.max_time),
            is_date=self.chart.is_date,
        )

    def full_time_param(self) -> str:
        """Return the `time` value for the current bounds, even when unchanged."""

        return format_time_bounds(self.state.timeline_filter, self.chart.is_date)

    def drag(
        self,
        *,
        input_time: float | None = None,
        fraction: float | None = None,
        handle: DragHandle | str | None = None,
        grab_time: float | None = None,
        grab_bounds: str | None = None,
        is_start_marker: bool = False,
        is_end_marker: bool = False,
        release: bool = False,
    ) -> DragHandle:
        """Apply one pointer drag to the timeline.

        A drag spanning several requests sends the current bounds as `time`
        and repeats the pointer-down `grab_time` and `grab_bounds` with every
        move, so panning offsets are always measured against the bounds at
        pointer-down.

        Args:
            input_time: Pointer position in time units.
            fraction: Pointer position as a fraction of the slider width; used
                when `input_time` is not given.
            handle: Handle to drag. Chosen from the pointer position when
                omitted.
            grab_time: Where the pointer went down; anchors range panning.
            grab_bounds: `time` parameter when the pointer went down. Defaults
                to the current bounds.
            is_start_marker: Pointer went down on the start marker.
            is_end_marker: Pointer went down on the end marker.
            release: Pointer was released; snaps near-adjacent handles.

        Returns:
            The handle that was actually moved.
        """

        controller = self.controller
        if input_time is None:
            input_time = input_time_from_fraction(fraction or 0.0, controller.min_time, controller.max_time)
        anchor = input_time if grab_time is None else grab_time

        origin = controller
        if grab_bounds:
            start, end = get_time_domain_from_query_string(grab_bounds)
            origin = TimelineController(
                TimelineState(times=self.state.times, timeline_filter_start=start, timeline_filter_end=end)
            )

        if handle is None or handle == "":
            handle = drag_target_for(
                anchor,
                origin.start_time,
                origin.end_time,
                is_start_marker=is_start_marker,
                is_end_marker=is_end_marker,
            )
        handle = DragHandle(handle)
        if handle is DragHandle.BOTH:
            origin.set_drag_offsets(anchor)
            controller.drag_offsets = origin.drag_offsets

        moved = controller.drag_handle_to_time(handle, input_time)
        if release and not self.state.is_playing:
            controller.snap_times()
        return moved

    def play_frames(self, number_of_ticks: int | None = None) -> list[dict[str, Any]]:
        """Run playback without delays and capture one frame per tick."""

        frames: list[dict[str, Any]] = []
        for _ in self.controller.ticks(number_of_ticks):
            frames.append(self.frame())
        return frames

    def reset(self, bound: str) -> None:
        """Reset the `start` or `end` bound to its unbounded sentinel."""

        if bound == "start":
            self.controller.reset_start_to_min()
        else:
            self.controller.reset_end_to_max()

    def toggle_shortcut(self, current: str | None) -> str:
        """Apply the next latest/earliest/all-time shortcut and return it."""

        shortcut = next_timeline_shortcut(current)
        self.state.timeline_filter = get_time_domain_from_query_string(shortcut)
        return shortcut

    def frame(self) -> dict[str, Any]:
        """Return the minimal per-tick payload used by playback."""

        controller = self.controller
        format_time = self.state.format_time_fn or format_time_bound
        return {
            "bounds": self.full_time_param(),
            "start_time": controller.start_time,
            "end_time": controller.end_time,
            "start_label": format_time(controller.start_time),
            "end_label": format_time(controller.end_time),
            "start_progress": controller.start_time_progress,
            "end_progress": controller.end_time_progress,
        }

    def as_json(self) -> dict[str, Any]:
        """Serialize the timeline state for JSON responses."""

        controller = self.controller
        state = self.state
        return {
            "chart": self.chart.slug,
            "time": self.time_param(),
            "start": min_time_to_json(state.timeline_filter_start),
            "end": max_time_to_json(state.timeline_filter_end),
            **self.frame(),
            "min_time": controller.min_time,
            "max_time": controller.max_time,
            "is_playing": state.is_playing,
            "range_mode": controller.range_mode,
            "disable_play": state.disable_play,
            "ms_per_tick": state.ms_per_tick,
        }
