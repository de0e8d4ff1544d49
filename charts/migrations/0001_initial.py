"""Create the Chart table."""

from __future__ import annotations

from django.db import migrations, models

import charts.models


class Migration(migrations.Migration):
    initial = True

    dependencies: list[tuple[str, str]] = []

    operations = [
        migrations.CreateModel(
            name="Chart",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(max_length=120, unique=True)),
                ("title", models.CharField(max_length=200)),
                ("min_time", models.JSONField(blank=True, help_text="Authored start bound.", null=True)),
                ("max_time", models.JSONField(blank=True, help_text="Authored end bound.", null=True)),
                ("times", models.JSONField(default=list, help_text="Strictly ascending available times.")),
                ("is_date", models.BooleanField(default=False, help_text="Times are days since the epoch date.")),
                ("ms_per_tick", models.PositiveIntegerField(default=charts.models.default_ms_per_tick)),
                ("disable_play", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["slug"],
            },
        ),
    ]
