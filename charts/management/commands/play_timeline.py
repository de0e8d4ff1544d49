"""Play a chart's timeline on an asyncio event loop."""

from __future__ import annotations

import asyncio

from django.core.management.base import BaseCommand, CommandError

from charts.models import Chart
from charts.services import ChartTimeline, ChartTimelineError


class Command(BaseCommand):
    """Play a stored chart's timeline and print where it stopped."""

    help = "Play a chart's timeline from a `time` parameter and print the resulting `time` value."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("slug", help="Chart slug.")
        parser.add_argument(
            "--time",
            default="",
            help="Starting `time` parameter (default: the chart's authored bounds).",
        )
        parser.add_argument(
            "--ticks",
            type=int,
            default=None,
            help="Stop after this many ticks (default: play to the last available time).",
        )
        parser.add_argument(
            "--ms-per-tick",
            type=int,
            default=None,
            help="Override the chart's delay between ticks, in milliseconds.",
        )
        parser.add_argument(
            "--single-point",
            action="store_true",
            help="Move a single point instead of extending the range.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        slug: str = options["slug"]
        ticks: int | None = options["ticks"]
        ms_per_tick: int | None = options["ms_per_tick"]

        if ticks is not None and ticks < 1:
            raise CommandError("--ticks must be a positive integer.")
        if ms_per_tick is not None and ms_per_tick < 0:
            raise CommandError("--ms-per-tick must not be negative.")

        chart = Chart.objects.filter(slug=slug).first()
        if chart is None:
            raise CommandError(f"Unknown chart: {slug!r}")
        if chart.disable_play:
            raise CommandError(f"Playback is disabled for chart {slug!r}.")

        try:
            timeline = ChartTimeline.from_query_params(
                chart,
                {"time": options["time"]},
                range_mode=not options["single_point"],
            )
        except ChartTimelineError as exc:
            raise CommandError(str(exc)) from exc
        if ms_per_tick is not None:
            timeline.state.ms_per_tick = ms_per_tick

        tick_count = asyncio.run(timeline.controller.play(ticks))
        self.stdout.write(f"chart={slug} ticks={tick_count} time={timeline.full_time_param()}")
        return None
