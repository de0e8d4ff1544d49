"""Unit tests for TimelineController dragging and derived values."""

from __future__ import annotations

import pytest

from timeline.controller import DragHandle
from timeline.time_bounds import TimeBoundValue

pytestmark = pytest.mark.unit

LEFT = TimeBoundValue.UNBOUNDED_LEFT
RIGHT = TimeBoundValue.UNBOUNDED_RIGHT

YEARS = range(2000, 2010)
CENTURY = range(1900, 2010)


def test_derived_values_follow_the_manager(make_controller) -> None:
    """Resolved times and progress are recomputed from the current bounds."""

    controller = make_controller(YEARS, 2000, 2005)
    assert (controller.start_time, controller.end_time) == (2000, 2005)
    assert (controller.min_time, controller.max_time) == (2000, 2009)

    controller.manager.timeline_filter_end = 2009
    assert controller.end_time == 2009
    assert controller.end_time_progress == 1.0


def test_progress_with_unbounded_values(make_controller) -> None:
    """Sentinels resolve to the ends of the dataset."""

    controller = make_controller(YEARS, LEFT, RIGHT)
    assert controller.start_time == 2000
    assert controller.end_time == 2009
    assert controller.start_time_progress == 0.0
    assert controller.end_time_progress == 1.0


def test_progress_with_a_single_available_time(make_controller) -> None:
    """A one-time dataset reports zero progress instead of dividing by zero."""

    controller = make_controller([2015], 2015, 2015)
    assert controller.start_time_progress == 0.0
    assert controller.end_time_progress == 0.0


def test_get_next_time_saturates_at_max(make_controller) -> None:
    """The next time after the last one is the last one."""

    controller = make_controller(YEARS, 2000, 2005)
    assert controller.get_next_time(2008) == 2009
    assert controller.get_next_time(2009) == 2009


def test_time_bound_from_drag_pins_to_sentinels(make_controller) -> None:
    """Drags strictly outside the dataset pin to the unbounded sentinels."""

    controller = make_controller(CENTURY, 2000, 2005)
    assert controller.get_time_bound_from_drag(2009.1) == RIGHT
    assert controller.get_time_bound_from_drag(1899.9) == LEFT
    assert controller.get_time_bound_from_drag(2009) == 2009
    assert controller.get_time_bound_from_drag(1900) == 1900
    assert controller.get_time_bound_from_drag(1950.4) == 1950


def test_drag_end_past_start_switches_handles(make_controller) -> None:
    """Dragging the end handle left of the start hands over to the start."""

    controller = make_controller(CENTURY, 2000, 2005)
    moved = controller.drag_handle_to_time(DragHandle.END, 1950)

    assert moved is DragHandle.START
    assert (controller.start_time, controller.end_time) == (1950, 2000)


def test_drag_start_past_end_switches_handles(make_controller) -> None:
    """Dragging the start handle right of the end hands over to the end."""

    controller = make_controller(CENTURY, 1950, 2000)
    moved = controller.drag_handle_to_time("start", 2008)

    assert moved is DragHandle.END
    assert (controller.start_time, controller.end_time) == (2000, 2008)


def test_drag_start_beyond_dataset_switches_to_latest(make_controller) -> None:
    """A crossing drag past the last time stores the `latest` sentinel."""

    controller = make_controller(CENTURY, 1950, 2000)
    moved = controller.drag_handle_to_time(DragHandle.START, 2100)

    assert moved is DragHandle.END
    assert controller.manager.timeline_filter_start == 2000
    assert controller.manager.timeline_filter_end == RIGHT


def test_drag_single_handle(make_controller) -> None:
    """Dragging one handle within range moves only that bound."""

    controller = make_controller(CENTURY, 1950, 2000)
    assert controller.drag_handle_to_time(DragHandle.START, 1960.2) is DragHandle.START
    assert controller.manager.timeline_filter_start == 1960
    assert controller.manager.timeline_filter_end == 2000

    controller.drag_handle_to_time(DragHandle.END, 1850)
    assert controller.manager.timeline_filter_start == LEFT
    assert controller.manager.timeline_filter_end == 1960


def test_drag_while_playing_single_point_collapses_range(make_controller) -> None:
    """Single-point playback moves both bounds together."""

    controller = make_controller(YEARS, 2001, 2003, is_playing=True)
    controller.toggle_range_mode()

    controller.drag_handle_to_time(DragHandle.END, 2006)
    assert (controller.manager.timeline_filter_start, controller.manager.timeline_filter_end) == (2006, 2006)


def test_drag_while_playing_in_range_mode_moves_one_handle(make_controller) -> None:
    """Range-mode playback does not collapse a dragged handle."""

    controller = make_controller(YEARS, 2001, 2003, is_playing=True)
    controller.drag_handle_to_time(DragHandle.END, 2006)
    assert (controller.start_time, controller.end_time) == (2001, 2006)


def test_pan_preserves_span(make_controller) -> None:
    """Dragging both handles keeps the distance between them."""

    controller = make_controller(YEARS, 2002, 2004)
    controller.set_drag_offsets(2003)
    assert controller.drag_offsets == (-1, 1)

    moved = controller.drag_handle_to_time(DragHandle.BOTH, 2006)
    assert moved is DragHandle.BOTH
    assert (controller.start_time, controller.end_time) == (2005, 2007)


def test_pan_past_min_pins_start(make_controller) -> None:
    """Panning left of the dataset pins the start to the first time."""

    controller = make_controller(YEARS, 2002, 2004)
    controller.set_drag_offsets(2003)
    controller.drag_handle_to_time(DragHandle.BOTH, 2000)

    assert controller.manager.timeline_filter_start == 2000
    assert controller.manager.timeline_filter_end == 2002


def test_pan_past_max_pins_end(make_controller) -> None:
    """Panning right of the dataset pins the end to the last time."""

    controller = make_controller(YEARS, 2002, 2004)
    controller.set_drag_offsets(2003)
    controller.drag_handle_to_time(DragHandle.BOTH, 2009)

    assert controller.manager.timeline_filter_start == 2007
    assert controller.manager.timeline_filter_end == 2009


def test_pan_of_unbounded_range_keeps_sentinel(make_controller) -> None:
    """A span wider than the dataset overflows into a sentinel."""

    controller = make_controller([2000, 2001, 2002], 2000, 2002)
    controller.drag_offsets = (-1, 3)
    controller.drag_handle_to_time(DragHandle.BOTH, 2000)

    assert controller.manager.timeline_filter_start == 2000
    assert controller.manager.timeline_filter_end == RIGHT


def test_snap_times_collapses_adjacent_handles(make_controller) -> None:
    """Handles one unit apart collapse onto the end time."""

    controller = make_controller(YEARS, 2003, 2004)
    controller.snap_times()
    assert (controller.start_time, controller.end_time) == (2004, 2004)


def test_snap_times_keeps_wider_ranges(make_controller) -> None:
    """Gaps larger than one unit are left alone."""

    controller = make_controller(YEARS, 2003, 2005)
    controller.snap_times()
    assert (controller.start_time, controller.end_time) == (2003, 2005)


def test_reset_bounds_to_sentinels(make_controller) -> None:
    """Resets store sentinels, not resolved numbers."""

    controller = make_controller(YEARS, 2003, 2005)
    controller.reset_start_to_min()
    controller.reset_end_to_max()
    assert controller.manager.timeline_filter_start == LEFT
    assert controller.manager.timeline_filter_end == RIGHT


def test_toggle_range_mode_returns_controller(make_controller) -> None:
    """Range mode flips and the controller is returned for chaining."""

    controller = make_controller(YEARS, 2003, 2005)
    assert controller.toggle_range_mode() is controller
    assert controller.range_mode is False
    assert controller.toggle_range_mode().range_mode is True


def test_recreated_controller_reads_existing_state(make_controller) -> None:
    """A new controller over the same manager sees the same bounds."""

    from timeline.controller import TimelineController

    controller = make_controller(YEARS, 2003, 2005)
    rebuilt = TimelineController(controller.manager)
    assert (rebuilt.start_time, rebuilt.end_time) == (2003, 2005)
    assert rebuilt.range_mode is True
    assert rebuilt.drag_offsets == (0, 0)
