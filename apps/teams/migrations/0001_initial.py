from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("team_name", models.CharField(blank=True, db_index=True, max_length=255)),
                (
                    "qualifying_zone",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Grouping key; one board section per zone.",
                        max_length=255,
                    ),
                ),
                (
                    "image_name",
                    models.CharField(
                        blank=True,
                        help_text="Local flag image resource identifier.",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("wins", models.PositiveIntegerField(db_index=True, default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "team",
                "verbose_name_plural": "teams",
                "db_table": "teams",
                "indexes": [
                    models.Index(fields=["qualifying_zone", "-wins", "team_name"], name="teams_standings_idx"),
                ],
            },
        ),
    ]
