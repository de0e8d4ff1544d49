"""Database models for stored charts.

A Chart row carries only what its timeline needs: the authored time bounds,
the dataset's available times, and playback settings. The rest of a chart's
configuration lives with the renderer.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from timeline.time_bounds import TimeBounds, is_unbounded, max_time_from_json, min_time_from_json
from timeline.times import is_strictly_ascending


def default_ms_per_tick() -> int:
    """Return the configured default playback delay."""

    return settings.TIMELINE_DEFAULT_MS_PER_TICK


def _is_time_bound_json(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or is_unbounded(value)


class Chart(models.Model):
    """A chart whose timeline can be dragged, played and shared by URL.

    Attributes:
        slug: URL identifier.
        title: Display title.
        min_time: Authored start bound (int, `"earliest"`, `"latest"` or null).
        max_time: Authored end bound (int, `"earliest"`, `"latest"` or null).
        times: Ascending available times of the chart's dataset.
        is_date: Whether times are day counts (formatted as ISO dates).
        ms_per_tick: Delay between playback ticks.
        disable_play: Hide playback controls for this chart.
    """

    slug = models.SlugField(max_length=120, unique=True)
    title = models.CharField(max_length=200)
    min_time = models.JSONField(null=True, blank=True, help_text="Authored start bound.")
    max_time = models.JSONField(null=True, blank=True, help_text="Authored end bound.")
    times = models.JSONField(default=list, help_text="Strictly ascending available times.")
    is_date = models.BooleanField(default=False, help_text="Times are days since the epoch date.")
    ms_per_tick = models.PositiveIntegerField(default=default_ms_per_tick)
    disable_play = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["slug"]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"Chart({self.slug})"

    def clean(self) -> None:
        """Validate authored bounds and available times.

        Raises:
            ValidationError: When times are not strictly ascending integers or
                an authored bound is not a TimeBound.
        """

        errors: dict[str, str] = {}
        times = self.times
        if not isinstance(times, list) or not times:
            errors["times"] = "At least one available time is required."
        elif not all(isinstance(t, int) and not isinstance(t, bool) for t in times):
            errors["times"] = "Available times must be integers."
        elif not is_strictly_ascending(times):
            errors["times"] = "Available times must be strictly ascending without duplicates."

        for field_name in ("min_time", "max_time"):
            if not _is_time_bound_json(getattr(self, field_name)):
                errors[field_name] = "Expected an integer, 'earliest', 'latest' or empty."

        if errors:
            raise ValidationError(errors)

    @property
    def authored_time_bounds(self) -> TimeBounds:
        """Return the authored bounds with missing values as sentinels."""

        return (min_time_from_json(self.min_time), max_time_from_json(self.max_time))
