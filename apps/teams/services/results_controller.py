# ================================================================================
"""
TeamResultsController – a live, sorted and grouped view over the team store.

After `perform_fetch()` the controller listens to the store's commit signal.
On every commit it re-fetches, swaps in the new snapshot, diffs it against the
previous one and replays the resulting edit script to its delegate:

    controller_will_change_content(controller)
    controller_did_change_section(controller, change)   # per section edit
    controller_did_change_object(controller, change)    # per row edit
    controller_did_change_content(controller)

The new snapshot is already in place when the delegate is called, so
`object_at(new_path)` answers with post-commit data.

If the first fetch failed there is no baseline to diff against. The next commit
retries the fetch and, on success, asks the delegate to redraw everything via
`controller_did_reload_content(controller)`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog
from django.db import DatabaseError

from apps.teams.services.changes import (
    ChangeBatch,
    SectionDeleted,
    SectionInserted,
    diff_snapshots,
)
from apps.teams.services.snapshot import Snapshot, build_snapshot

if TYPE_CHECKING:
    from apps.teams.services.changes import RowChange, SectionChange
    from apps.teams.services.protocols import TeamStoreProtocol
    from apps.teams.services.snapshot import IndexPath, SectionInfo, TeamRow

log = structlog.get_logger(__name__).bind(component="TeamResultsController")


class ResultsFetchError(RuntimeError):
    """Raised when the initial fetch of the result set fails."""


class ResultsControllerDelegate(Protocol):
    def controller_will_change_content(self, controller: TeamResultsController) -> None: ...

    def controller_did_change_section(self, controller: TeamResultsController, change: SectionChange) -> None: ...

    def controller_did_change_object(self, controller: TeamResultsController, change: RowChange) -> None: ...

    def controller_did_change_content(self, controller: TeamResultsController) -> None: ...

    def controller_did_reload_content(self, controller: TeamResultsController) -> None: ...


class TeamResultsController:
    def __init__(
        self,
        store: TeamStoreProtocol,
        *,
        delegate: ResultsControllerDelegate | None = None,
    ) -> None:
        self.store = store
        self.delegate = delegate
        self._snapshot = Snapshot.empty()
        self._fetched = False
        self._fetch_failed = False
        self._last_changes = ChangeBatch()
        # Weak receiver: a dropped controller disconnects itself.
        store.changed.connect(self._store_did_change)

    # ---------------------------------------------------------------- fetching
    def perform_fetch(self) -> None:
        try:
            records = self.store.fetch_all()
        except DatabaseError as e:
            self._fetch_failed = True
            msg = f"Fetching teams failed: {e}"
            raise ResultsFetchError(msg) from e
        self._snapshot = build_snapshot(records)
        self._fetched = True
        self._fetch_failed = False
        log.debug(
            "results_fetched",
            sections=len(self._snapshot.sections),
            objects=len(self._snapshot),
        )

    # ---------------------------------------------------------------- result set
    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def sections(self) -> tuple[SectionInfo, ...]:
        return self._snapshot.sections

    @property
    def fetched_objects(self) -> list[TeamRow]:
        return list(self._snapshot)

    def object_at(self, path: IndexPath) -> TeamRow:
        return self._snapshot.object_at(path)

    def index_path_for(self, pk: Any) -> IndexPath | None:
        return self._snapshot.index_path_for(pk)

    @property
    def last_changes(self) -> ChangeBatch:
        return self._last_changes

    def take_changes(self) -> ChangeBatch:
        """Returns the edit script of the latest commit and forgets it."""
        changes, self._last_changes = self._last_changes, ChangeBatch()
        return changes

    # ---------------------------------------------------------------- live updates
    def _store_did_change(self, sender: Any, **kwargs: Any) -> None:
        if not self._fetched:
            # Before the first fetch there is nothing to diff; after a failed
            # one the next commit is the chance to catch up.
            if self._fetch_failed:
                self._recover()
            return
        try:
            records = self.store.fetch_all()
        except DatabaseError:
            log.exception("results_refetch_failed")
            return

        new_snapshot = build_snapshot(records)
        changes = diff_snapshots(self._snapshot, new_snapshot)
        self._snapshot = new_snapshot
        self._last_changes = changes
        if not changes:
            return

        log.debug("results_changed", changes=len(changes))
        if self.delegate is not None:
            self._replay(changes)

    def _replay(self, changes: ChangeBatch) -> None:
        delegate = self.delegate
        delegate.controller_will_change_content(self)
        for change in changes:
            if isinstance(change, SectionInserted | SectionDeleted):
                delegate.controller_did_change_section(self, change)
            else:
                delegate.controller_did_change_object(self, change)
        delegate.controller_did_change_content(self)

    def _recover(self) -> None:
        try:
            self.perform_fetch()
        except ResultsFetchError:
            log.exception("results_recovery_failed")
            return
        self._last_changes = ChangeBatch()
        log.info("results_recovered", objects=len(self._snapshot))
        if self.delegate is not None:
            self.delegate.controller_did_reload_content(self)
