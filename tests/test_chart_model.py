"""Integration tests for the Chart model."""

from __future__ import annotations

import pytest
from django.core.exceptions import ValidationError

from charts.models import Chart
from timeline.time_bounds import TimeBoundValue

pytestmark = pytest.mark.integration


@pytest.mark.django_db
def test_clean_accepts_valid_chart() -> None:
    """Integer times and TimeBound-shaped authored bounds are valid."""

    chart = Chart(slug="gdp", title="GDP", times=[1990, 2000, 2010], min_time="earliest", max_time=2000)
    chart.full_clean()


@pytest.mark.django_db
@pytest.mark.parametrize(
    ("fields", "error_field"),
    [
        ({"times": []}, "times"),
        ({"times": [2000, 2000]}, "times"),
        ({"times": [2001, 2000]}, "times"),
        ({"times": [2000, "2001"]}, "times"),
        ({"times": [True, 2001]}, "times"),
        ({"min_time": "soon"}, "min_time"),
        ({"max_time": 2000.5}, "max_time"),
        ({"max_time": False}, "max_time"),
    ],
)
def test_clean_rejects_invalid_fields(fields: dict[str, object], error_field: str) -> None:
    """Invalid times or authored bounds raise ValidationError."""

    values: dict[str, object] = {"slug": "gdp", "title": "GDP", "times": [2000, 2001]}
    values.update(fields)
    chart = Chart(**values)

    with pytest.raises(ValidationError) as excinfo:
        chart.clean()
    assert error_field in excinfo.value.message_dict


@pytest.mark.django_db
def test_authored_time_bounds_default_to_sentinels() -> None:
    """Missing authored bounds are unbounded on their side."""

    chart = Chart(slug="gdp", title="GDP", times=[2000], min_time=None, max_time="2001")
    assert chart.authored_time_bounds == (TimeBoundValue.UNBOUNDED_LEFT, 2001)


@pytest.mark.django_db
def test_ms_per_tick_defaults_from_settings(settings) -> None:
    """The playback delay default is read from settings."""

    settings.TIMELINE_DEFAULT_MS_PER_TICK = 250
    chart = Chart.objects.create(slug="gdp", title="GDP", times=[2000])

    assert chart.ms_per_tick == 250
    assert str(chart) == "Chart(gdp)"
