"""Admin registrations for charts."""

from __future__ import annotations

from django.contrib import admin

from charts.models import Chart


@admin.register(Chart)
class ChartAdmin(admin.ModelAdmin):
    """Admin configuration for Chart."""

    list_display = ("slug", "title", "min_time", "max_time", "is_date", "ms_per_tick", "disable_play")
    list_filter = ("is_date", "disable_play")
    search_fields = ("slug", "title")
    prepopulated_fields = {"slug": ("title",)}
