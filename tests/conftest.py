"""Pytest fixtures shared across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from timeline.controller import TimelineController
from timeline.state import TimelineState


@pytest.fixture
def make_controller() -> Callable[..., TimelineController]:
    """Return a factory building a controller over a fresh TimelineState."""

    def factory(times: Sequence[int], start: Any, end: Any, **kwargs: Any) -> TimelineController:
        state = TimelineState(times=tuple(times), timeline_filter_start=start, timeline_filter_end=end, **kwargs)
        return TimelineController(state)

    return factory


@pytest.fixture
def make_chart(db) -> Callable[..., Any]:
    """Return a factory creating Chart rows with sensible defaults."""

    from charts.models import Chart

    def factory(**overrides: Any) -> Chart:
        fields: dict[str, Any] = {
            "slug": "life-expectancy",
            "title": "Life expectancy",
            "min_time": 2000,
            "max_time": 2005,
            "times": list(range(2000, 2010)),
            "ms_per_tick": 0,
        }
        fields.update(overrides)
        return Chart.objects.create(**fields)

    return factory


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, commands, or IO.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
