# ================================================================================
"""
DjangoTeamStore – the explicit, passed-in handle to the persisted team table.

Every mutation runs inside `transaction.atomic` and schedules a change
notification with `transaction.on_commit`, so listeners hear about a batch
only once it is durable, and only once per commit.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from django.db import DEFAULT_DB_ALIAS, transaction
from django.dispatch import Signal

from apps.teams.models import Team

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

log = structlog.get_logger(__name__).bind(component="DjangoTeamStore")

BULK_BATCH_SIZE = 500


class DjangoTeamStore:
    """Team store backed by the Django ORM on a single database alias."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self.using = using
        self.changed = Signal()
        self._dirty = 0

    def __repr__(self) -> str:
        return f"DjangoTeamStore(using={self.using!r})"

    # ---------------------------------------------------------------- reads
    def count(self) -> int:
        return Team.objects.using(self.using).count()

    def fetch_all(self) -> list[Team]:
        return list(Team.objects.using(self.using).standings())

    # ---------------------------------------------------------------- transactions
    @contextmanager
    def atomic(self) -> Iterator[None]:
        # A rolled-back block loses its on_commit callbacks, so it must not
        # leave its mutations counted either.
        dirty_before = self._dirty
        try:
            with transaction.atomic(using=self.using):
                yield
        except BaseException:
            self._dirty = dirty_before
            raise

    def _mark_dirty(self) -> None:
        # One callback per mutation; `_flush` collapses them into one signal.
        self._dirty += 1
        transaction.on_commit(self._flush, using=self.using)

    def _flush(self) -> None:
        if not self._dirty:
            return
        mutations, self._dirty = self._dirty, 0
        log.debug("store_committed", mutations=mutations, using=self.using)
        self.changed.send(sender=self.__class__, store=self)

    # ---------------------------------------------------------------- writes
    def create(
        self,
        *,
        team_name: str,
        qualifying_zone: str,
        image_name: str | None,
        wins: int = 0,
    ) -> Team:
        with self.atomic():
            team = Team.objects.using(self.using).create(
                team_name=team_name,
                qualifying_zone=qualifying_zone,
                image_name=image_name,
                wins=wins,
            )
            self._mark_dirty()
        return team

    def create_many(self, rows: Iterable[Mapping[str, Any]]) -> int:
        teams = [Team(**row) for row in rows]
        if not teams:
            return 0
        with self.atomic():
            Team.objects.using(self.using).bulk_create(teams, batch_size=BULK_BATCH_SIZE)
            self._mark_dirty()
        return len(teams)

    def increment_wins(self, pk: Any, *, by: int = 1) -> Team:
        if by < 0:
            msg = "wins can only be incremented."
            raise ValueError(msg)
        with self.atomic():
            if not Team.objects.using(self.using).increment_wins(pk, by=by):
                msg = f"Team {pk} not found."
                raise Team.DoesNotExist(msg)
            self._mark_dirty()
            return Team.objects.using(self.using).get(pk=pk)
