"""Unit tests for slider pointer helpers."""

from __future__ import annotations

import pytest

from timeline.controller import DragHandle
from timeline.slider import drag_target_for, input_time_from_fraction

pytestmark = pytest.mark.unit


def test_input_time_from_fraction() -> None:
    """Track fractions map linearly onto the available range."""

    assert input_time_from_fraction(0.0, 2000, 2010) == 2000
    assert input_time_from_fraction(0.5, 2000, 2010) == 2005
    assert input_time_from_fraction(1.2, 2000, 2010) == pytest.approx(2012)
    assert input_time_from_fraction(-0.1, 2000, 2010) == pytest.approx(1999)


@pytest.mark.parametrize(
    ("input_time", "markers", "expected"),
    [
        (2001, {}, DragHandle.START),
        (2003, {}, DragHandle.START),
        (2005, {}, DragHandle.BOTH),
        (2008, {}, DragHandle.END),
        (2012, {}, DragHandle.END),
        (2005, {"is_start_marker": True}, DragHandle.START),
        (2005, {"is_end_marker": True}, DragHandle.END),
    ],
)
def test_drag_target_for_separate_handles(input_time: float, markers: dict[str, bool], expected: DragHandle) -> None:
    """The grabbed handle depends on the pointer's side of the selection."""

    assert drag_target_for(input_time, 2003, 2008, **markers) is expected


def test_drag_target_for_coinciding_handles() -> None:
    """Grabbing a marker of a collapsed selection grabs both handles."""

    assert drag_target_for(2005, 2005, 2005, is_end_marker=True) is DragHandle.BOTH
    assert drag_target_for(2005, 2005, 2005) is DragHandle.START
    assert drag_target_for(2007, 2005, 2005) is DragHandle.END
