"""Timeline controller.

The controller reads and writes two bounds (`timeline_filter_start`,
`timeline_filter_end`) on a caller-owned manager object and derives everything
else (resolved times, progress) from them on each read. It owns only the range
mode flag and the offsets captured when a whole range is grabbed.

Playback is split in two layers: `ticks()` is a plain generator that advances
the timeline one available time per step, and `play()` is the coroutine that
drives it with a non-blocking delay between steps. Setting
`manager.is_playing = False` from anywhere stops the loop at the top of the
next iteration.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import closing
from enum import StrEnum
from typing import Protocol

from .time_bounds import TimeBound, TimeBoundValue, time_bound_to_number
from .times import Time, find_closest_time, next_time, time_progress

logger = logging.getLogger(__name__)


class DragHandle(StrEnum):
    """Slider handles that can be dragged."""

    START = "start"
    END = "end"
    BOTH = "both"


class TimelineManager(Protocol):
    """Object the controller reads from and writes to.

    Optional members (`ms_per_tick`, `disable_play`, `format_time_fn`,
    `on_play`) are looked up with `getattr` and may be absent.
    """

    times: Sequence[Time]
    timeline_filter_start: TimeBound
    timeline_filter_end: TimeBound
    is_playing: bool


class TimelineController:
    """Drive timeline dragging and playback for a TimelineManager."""

    def __init__(self, manager: TimelineManager) -> None:
        """Initialize the controller.

        Args:
            manager: Caller-owned state. The controller keeps a reference but
                never takes ownership.
        """

        self.manager = manager
        # True: playing extends the end handle. False: a single point moves.
        self.range_mode = True
        self.drag_offsets: tuple[int, int] = (0, 0)
        self._loop_active = False

    @property
    def _times_asc(self) -> Sequence[Time]:
        return self.manager.times

    def _closest(self, target: TimeBound | float) -> Time:
        closest = find_closest_time(self._times_asc, target)
        assert closest is not None, "timeline has no available times"
        return closest

    @property
    def start_time(self) -> Time:
        """Available time closest to the start bound."""

        return self._closest(self.manager.timeline_filter_start)

    @property
    def end_time(self) -> Time:
        """Available time closest to the end bound."""

        return self._closest(self.manager.timeline_filter_end)

    @property
    def min_time(self) -> Time:
        return self._times_asc[0]

    @property
    def max_time(self) -> Time:
        return self._times_asc[-1]

    @property
    def start_time_progress(self) -> float:
        return time_progress(self.start_time, self.min_time, self.max_time)

    @property
    def end_time_progress(self) -> float:
        return time_progress(self.end_time, self.min_time, self.max_time)

    @property
    def is_playing(self) -> bool:
        return bool(getattr(self.manager, "is_playing", False))

    def get_next_time(self, time: Time) -> Time:
        """Return the available time after `time`, saturating at `max_time`."""

        return next_time(self._times_asc, time)

    def snap_times(self) -> None:
        """Collapse handles that are within one time unit of each other."""

        start_time, end_time = self.start_time, self.end_time
        if start_time == end_time:
            return
        if end_time - start_time > 1:
            return
        self._update_start_time(end_time)

    def toggle_range_mode(self) -> TimelineController:
        """Switch between range playback and single-point playback."""

        self.range_mode = not self.range_mode
        return self

    def get_time_bound_from_drag(self, input_time: float) -> TimeBound:
        """Resolve a pointer position into a TimeBound.

        Positions past either end of the timeline pin to the matching sentinel
        rather than to the boundary value, so the selection keeps tracking the
        earliest/latest data if the dataset grows.

        Args:
            input_time: Pointer position in time units (may be fractional).

        Returns:
            A sentinel, or the closest available time.
        """

        if input_time < self.min_time:
            return TimeBoundValue.UNBOUNDED_LEFT
        if input_time > self.max_time:
            return TimeBoundValue.UNBOUNDED_RIGHT
        closest = self._closest(input_time)
        return min(self.max_time, max(self.min_time, closest))

    def set_drag_offsets(self, input_time: float) -> None:
        """Record the handle offsets relative to the time under the pointer."""

        closest = self._closest(input_time)
        self.drag_offsets = (self.start_time - closest, self.end_time - closest)

    def _drag_range_to_time(self, input_time: float) -> None:
        min_time, max_time = self.min_time, self.max_time
        start_offset, end_offset = self.drag_offsets
        closest = self._closest(input_time)

        start_time: TimeBound = start_offset + closest
        end_time: TimeBound = end_offset + closest

        if start_time < min_time:
            start_time = min_time
            end_time = self.get_time_bound_from_drag(min_time + (end_offset - start_offset))
        elif end_time > max_time:
            start_time = self.get_time_bound_from_drag(max_time + (start_offset - end_offset))
            end_time = max_time

        self._update_start_time(start_time)
        self._update_end_time(end_time)

    def drag_handle_to_time(self, handle: DragHandle | str, input_time: float) -> DragHandle:
        """Move a handle (or the whole range) to a pointer position.

        Dragging the start handle past the end handle (or the end past the
        start) hands the drag over to the other handle, after parking the
        dragged handle on the one it crossed.

        Args:
            handle: Handle grabbed by the pointer.
            input_time: Pointer position in time units.

        Returns:
            The handle that was actually moved.
        """

        handle = DragHandle(handle)
        time = self.get_time_bound_from_drag(input_time)
        position = time_bound_to_number(time)
        assert position is not None

        constrained = handle
        if handle is DragHandle.START and position > self.end_time:
            constrained = DragHandle.END
        elif handle is DragHandle.END and position < self.start_time:
            constrained = DragHandle.START

        if constrained is not handle:
            if handle is DragHandle.START:
                self._update_start_time(self.end_time)
            else:
                self._update_end_time(self.start_time)

        if self.is_playing and not self.range_mode:
            self._update_start_time(time)
            self._update_end_time(time)
        elif handle is DragHandle.BOTH:
            self._drag_range_to_time(input_time)
        elif constrained is DragHandle.START:
            self._update_start_time(time)
        else:
            self._update_end_time(time)

        return constrained

    def reset_start_to_min(self) -> None:
        self._update_start_time(TimeBoundValue.UNBOUNDED_LEFT)

    def reset_end_to_max(self) -> None:
        self._update_end_time(TimeBoundValue.UNBOUNDED_RIGHT)

    def _update_start_time(self, time: TimeBound) -> None:
        self.manager.timeline_filter_start = time

    def _update_end_time(self, time: TimeBound) -> None:
        self.manager.timeline_filter_end = time

    def _is_at_end(self) -> bool:
        return self.end_time == self.max_time

    def _reset_to_beginning(self) -> None:
        beginning = self.start_time if self.end_time != self.start_time else self.min_time
        self._update_end_time(beginning)

    def _stop(self) -> None:
        self.manager.is_playing = False

    def ticks(self, number_of_ticks: int | None = None) -> Iterator[Time]:
        """Advance the timeline one available time per iteration.

        Starting marks the manager as playing, rewinds when the end handle is
        already at `max_time`, and calls `on_play` once. Each step moves the
        end handle (and, outside range mode, the start handle) to the next
        available time and yields it. The manager stops playing after the step
        that reaches `max_time` or exhausts `number_of_ticks`.

        A request made while another loop of this controller is still active
        yields nothing. If that loop was paused during its inter-tick delay,
        the request resumes it; otherwise the manager is left untouched.

        Args:
            number_of_ticks: Optional tick budget.

        Yields:
            The time the end handle moved to.
        """

        if self._loop_active:
            if not self.manager.is_playing:
                logger.debug("Resuming the paused timeline playback loop.")
                self.manager.is_playing = True
                return
            logger.warning("Timeline playback is already running; ignoring play request.")
            return

        manager = self.manager
        self._loop_active = True
        try:
            manager.is_playing = True
            if self._is_at_end():
                self._reset_to_beginning()

            on_play: Callable[[], None] | None = getattr(manager, "on_play", None)
            if on_play is not None:
                on_play()

            tick_count = 0
            while manager.is_playing:
                upcoming = self.get_next_time(self.end_time)
                if not self.range_mode:
                    self._update_start_time(upcoming)
                self._update_end_time(upcoming)
                tick_count += 1
                if upcoming >= self.max_time or tick_count == number_of_ticks:
                    self._stop()
                yield upcoming
        finally:
            self._loop_active = False
            self._stop()

    async def play(self, number_of_ticks: int | None = None) -> int:
        """Play the timeline until `max_time` or the tick budget is reached.

        Args:
            number_of_ticks: Optional tick budget.

        Returns:
            Number of ticks executed (0 when another playback loop is active;
            that loop keeps running, resumed if it was paused).
        """

        delay_seconds = (getattr(self.manager, "ms_per_tick", None) or 0) / 1000
        tick_count = 0
        with closing(self.ticks(number_of_ticks)) as ticks:
            for _ in ticks:
                tick_count += 1
                if not self.manager.is_playing:
                    break
                await asyncio.sleep(delay_seconds)
        logger.debug("Timeline playback finished after %d ticks.", tick_count)
        return tick_count

    async def toggle_play(self) -> int:
        """Pause when playing, otherwise start playing.

        Returns:
            Ticks executed by the started playback, 0 when pausing.
        """

        if self.is_playing:
            self._stop()
            return 0
        return await self.play()
