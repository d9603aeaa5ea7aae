# ================================================================================
"""
Defines the structural contracts (Protocols) for the team store.

The board, the seed importer and the results controller only ever talk to a
store through this shape, so the Django-backed store can be swapped for an
in-memory double in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from contextlib import AbstractContextManager

    from django.dispatch import Signal


class TeamRecord(Protocol):
    """Anything that looks like a persisted team."""

    pk: Any
    team_name: str
    qualifying_zone: str
    image_name: str | None
    wins: int


class TeamStoreProtocol(Protocol):
    """
    Contract for the team store handle.

    Mutations are visible to other readers once the outermost `atomic()` block
    commits; at that point the store sends `changed` exactly once per commit
    (with `store=<the store>` as keyword argument).
    """

    changed: Signal

    def count(self) -> int:
        """Number of persisted teams."""
        ...

    def fetch_all(self) -> Sequence[TeamRecord]:
        """Every team; ordering is not part of the contract."""
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Opens a transaction; commits on normal exit, rolls back on error."""
        ...

    def create(
        self,
        *,
        team_name: str,
        qualifying_zone: str,
        image_name: str | None,
        wins: int = 0,
    ) -> TeamRecord:
        """Inserts one team."""
        ...

    def create_many(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Inserts one team per mapping, in order; returns the number inserted."""
        ...

    def increment_wins(self, pk: Any, *, by: int = 1) -> TeamRecord:
        """Adds `by` to a team's wins and returns the refreshed team."""
        ...
