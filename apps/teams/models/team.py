# ================================================================================
"""The core Team model and its associated manager/queryset."""

from __future__ import annotations

from typing import Self

from django.db import models
from django.db.models import F
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _


class TeamQuerySet(models.QuerySet["Team"]):
    """Custom QuerySet for the Team model."""

    def standings(self) -> Self:
        """
        Orders teams the way the board groups them: zone, most wins first, name.

        The database collation only approximates the final ordering; the results
        controller re-sorts with `common.text_utils.standard_sort_key`, which is
        accent-insensitive and compares digit runs numerically.
        """
        return self.order_by(Lower("qualifying_zone"), "-wins", Lower("team_name"), "pk")

    def increment_wins(self, pk: int, *, by: int = 1) -> int:
        """Atomically bumps `wins` in SQL; returns the number of rows touched."""
        return self.filter(pk=pk).update(wins=F("wins") + by)


class Team(models.Model):
    """A World Cup qualifying team and its running win count."""

    team_name = models.CharField(max_length=255, blank=True, db_index=True)
    qualifying_zone = models.CharField(
        max_length=255,
        blank=True,
        db_index=True,
        help_text=_("Grouping key; one board section per zone."),
    )
    image_name = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text=_("Local flag image resource identifier."),
    )
    wins = models.PositiveIntegerField(default=0, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TeamQuerySet.as_manager()

    class Meta:
        db_table = "teams"
        verbose_name = _("team")
        verbose_name_plural = _("teams")
        indexes = [
            models.Index(fields=["qualifying_zone", "-wins", "team_name"], name="teams_standings_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.team_name} ({self.qualifying_zone})"
