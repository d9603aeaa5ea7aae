# ================================================================================
"""In-memory team store used by the service tests."""

from __future__ import annotations

import copy
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.db import DatabaseError
from django.dispatch import Signal

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


@dataclass
class FakeTeam:
    pk: int
    team_name: str
    qualifying_zone: str
    image_name: str | None = None
    wins: int = 0


class InMemoryTeamStore:
    """
    Dict-backed store with the same commit semantics as DjangoTeamStore:
    nested `atomic()` blocks roll back on error, and `changed` is sent once
    when the outermost block commits after a mutation.
    """

    def __init__(self) -> None:
        self.changed = Signal()
        self.calls: Counter[str] = Counter()
        self.commits = 0
        self.fail_count = False
        self.fail_fetch = False
        self.fail_writes = False
        self._rows: dict[int, FakeTeam] = {}
        self._next_pk = 1
        self._depth = 0
        self._dirty = False

    # ---------------------------------------------------------------- reads
    def count(self) -> int:
        self.calls["count"] += 1
        if self.fail_count:
            msg = "count failed"
            raise DatabaseError(msg)
        return len(self._rows)

    def fetch_all(self) -> list[FakeTeam]:
        self.calls["fetch_all"] += 1
        if self.fail_fetch:
            msg = "fetch failed"
            raise DatabaseError(msg)
        return [copy.copy(team) for team in self._rows.values()]

    def get(self, pk: int) -> FakeTeam:
        return self._rows[pk]

    # ---------------------------------------------------------------- transactions
    @contextmanager
    def atomic(self) -> Iterator[None]:
        saved = (copy.deepcopy(self._rows), self._next_pk)
        self._depth += 1
        try:
            yield
        except BaseException:
            self._rows, self._next_pk = saved
            if self._depth == 1:
                self._dirty = False
            raise
        finally:
            self._depth -= 1
        if self._depth == 0 and self._dirty:
            self._dirty = False
            self.commits += 1
            self.changed.send(sender=self.__class__, store=self)

    # ---------------------------------------------------------------- writes
    def _write(self, name: str) -> None:
        self.calls[name] += 1
        if self.fail_writes:
            msg = f"{name} failed"
            raise DatabaseError(msg)
        self._dirty = True

    def create(
        self,
        *,
        team_name: str,
        qualifying_zone: str,
        image_name: str | None,
        wins: int = 0,
    ) -> FakeTeam:
        with self.atomic():
            self._write("create")
            team = FakeTeam(self._next_pk, team_name, qualifying_zone, image_name, wins)
            self._rows[team.pk] = team
            self._next_pk += 1
        return copy.copy(team)

    def create_many(self, rows: Iterable[Mapping[str, Any]]) -> int:
        rows = list(rows)
        if not rows:
            return 0
        with self.atomic():
            self._write("create_many")
            for row in rows:
                team = FakeTeam(self._next_pk, **row)
                self._rows[team.pk] = team
                self._next_pk += 1
        return len(rows)

    def increment_wins(self, pk: Any, *, by: int = 1) -> FakeTeam:
        if by < 0:
            msg = "wins can only be incremented."
            raise ValueError(msg)
        with self.atomic():
            if pk not in self._rows:
                msg = f"Team {pk} not found."
                raise LookupError(msg)
            self._write("increment_wins")
            self._rows[pk].wins += by
        return copy.copy(self._rows[pk])

    # ---------------------------------------------------------------- test helpers
    def update(self, pk: int, **fields: Any) -> None:
        """Edits any field of one team in its own commit."""
        with self.atomic():
            self._write("update")
            for name, value in fields.items():
                setattr(self._rows[pk], name, value)

    def delete(self, pk: int) -> None:
        with self.atomic():
            self._write("delete")
            del self._rows[pk]
