"""JSON endpoints driving a chart's timeline.

The server holds no per-user timeline state: each request sends the current
`time` parameter, the view rebuilds a ChartTimeline from it, applies the
action and answers with the new state (including the `time` value to put in
the share URL).
"""

from __future__ import annotations

from urllib.parse import urlencode

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.shortcuts import get_object_or_404
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from charts.forms import TimelineDragForm, TimelineForm, TimelinePlayForm, TimelineResetForm
from charts.models import Chart
from charts.services import ChartTimeline, ChartTimelineError


def _form_errors(form: TimelineForm) -> JsonResponse:
    return JsonResponse({"errors": form.errors.get_json_data()}, status=400)


def _timeline_error(exc: ChartTimelineError) -> JsonResponse:
    return JsonResponse({"errors": {"__all__": [{"message": str(exc), "code": "timeline"}]}}, status=400)


def _share_url(timeline: ChartTimeline) -> str:
    target = reverse("charts:timeline", kwargs={"slug": timeline.chart.slug})
    time_param = timeline.time_param()
    return f"{target}?{urlencode({'time': time_param})}" if time_param else target


def _state_response(timeline: ChartTimeline, **extra: object) -> JsonResponse:
    payload = timeline.as_json()
    payload["url"] = _share_url(timeline)
    payload.update(extra)
    return JsonResponse(payload)


def _build_timeline(chart: Chart, form: TimelineForm) -> ChartTimeline:
    return ChartTimeline.from_query_params(
        chart,
        form.query_params(),
        range_mode=not form.cleaned_data.get("single_point"),
        is_playing=bool(form.cleaned_data.get("is_playing")),
    )


@require_GET
def timeline(request: HttpRequest, slug: str) -> JsonResponse:
    """Resolve the `time` (or legacy `year`) parameter into timeline state."""

    chart = get_object_or_404(Chart, slug=slug)
    try:
        chart_timeline = ChartTimeline.from_query_params(chart, request.GET.dict())
    except ChartTimelineError as exc:
        return _timeline_error(exc)
    return _state_response(chart_timeline)


@require_POST
def timeline_drag(request: HttpRequest, slug: str) -> JsonResponse:
    """Apply a handle drag and report which handle actually moved."""

    chart = get_object_or_404(Chart, slug=slug)
    form = TimelineDragForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        chart_timeline = _build_timeline(chart, form)
    except ChartTimelineError as exc:
        return _timeline_error(exc)

    data = form.cleaned_data
    moved = chart_timeline.drag(
        input_time=data.get("input_time"),
        fraction=data.get("fraction"),
        handle=data.get("handle") or None,
        grab_time=data.get("grab_time"),
        grab_bounds=data.get("grab_bounds") or None,
        is_start_marker=bool(data.get("start_marker")),
        is_end_marker=bool(data.get("end_marker")),
        release=bool(data.get("release")),
    )
    return _state_response(chart_timeline, handle=moved.value)


@require_POST
def timeline_play(request: HttpRequest, slug: str) -> JsonResponse:
    """Run playback and return one frame per tick."""

    chart = get_object_or_404(Chart, slug=slug)
    if chart.disable_play:
        return JsonResponse(
            {"errors": {"__all__": [{"message": "Playback is disabled for this chart.", "code": "disabled"}]}},
            status=400,
        )
    form = TimelinePlayForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        chart_timeline = _build_timeline(chart, form)
    except ChartTimelineError as exc:
        return _timeline_error(exc)

    max_ticks: int = settings.TIMELINE_MAX_PLAY_TICKS
    ticks = min(form.cleaned_data.get("ticks") or max_ticks, max_ticks)
    frames = chart_timeline.play_frames(ticks)
    return _state_response(chart_timeline, frames=frames, ticks=len(frames))


@require_POST
def timeline_reset(request: HttpRequest, slug: str) -> JsonResponse:
    """Reset the start or end bound to its unbounded sentinel."""

    chart = get_object_or_404(Chart, slug=slug)
    form = TimelineResetForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        chart_timeline = _build_timeline(chart, form)
    except ChartTimelineError as exc:
        return _timeline_error(exc)

    chart_timeline.reset(form.cleaned_data["bound"])
    return _state_response(chart_timeline)


@require_POST
def timeline_toggle(request: HttpRequest, slug: str) -> JsonResponse:
    """Cycle the latest / earliest / all-time shortcut."""

    chart = get_object_or_404(Chart, slug=slug)
    form = TimelineForm(request.POST)
    if not form.is_valid():
        return _form_errors(form)
    try:
        chart_timeline = _build_timeline(chart, form)
    except ChartTimelineError as exc:
        return _timeline_error(exc)

    shortcut = chart_timeline.toggle_shortcut(form.cleaned_data.get("time") or None)
    return _state_response(chart_timeline, shortcut=shortcut)
