"""URL configuration for chart timeline endpoints."""

from __future__ import annotations

from django.urls import path

from charts import views

app_name = "charts"

urlpatterns = [
    path("<slug:slug>/timeline/", views.timeline, name="timeline"),
    path("<slug:slug>/timeline/drag/", views.timeline_drag, name="timeline_drag"),
    path("<slug:slug>/timeline/play/", views.timeline_play, name="timeline_play"),
    path("<slug:slug>/timeline/reset/", views.timeline_reset, name="timeline_reset"),
    path("<slug:slug>/timeline/toggle/", views.timeline_toggle, name="timeline_toggle"),
]
