"""Django app configuration for charts."""

from __future__ import annotations

from django.apps import AppConfig


class ChartsConfig(AppConfig):
    """AppConfig for stored charts and their timelines."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "charts"
