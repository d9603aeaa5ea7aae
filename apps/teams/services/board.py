# ================================================================================
"""
TeamBoard – the one screen of the application.

The board owns the wiring: a store handle, the live results controller over
it, the list display rendering the results, and the reconciler that turns
each commit into display edits. Views and the management command only talk to
the board.
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING, Any

import structlog

from apps.teams import conf
from apps.teams.services.list_display import TeamListDisplay
from apps.teams.services.reconciler import TeamListReconciler
from apps.teams.services.results_controller import ResultsFetchError, TeamResultsController
from apps.teams.services.seed_importer import SeedImporter
from apps.teams.services.snapshot import TeamRow
from apps.teams.services.store import DjangoTeamStore
from apps.teams.services.team_actions import AddTeamPrompt, record_win

if TYPE_CHECKING:
    from pathlib import Path

    from apps.core.datatype import SeedResult
    from apps.teams.services.changes import ChangeBatch
    from apps.teams.services.protocols import TeamStoreProtocol
    from apps.teams.services.snapshot import IndexPath

log = structlog.get_logger(__name__).bind(component="TeamBoard")


class TeamBoard:
    def __init__(
        self,
        store: TeamStoreProtocol,
        *,
        seed_path: Path | str | None = None,
        skip_invalid: bool | None = None,
        visible_rows: int | None = None,
    ) -> None:
        self.store = store
        self.importer = SeedImporter(store, seed_path=seed_path, skip_invalid=skip_invalid)
        self.controller = TeamResultsController(store)
        self.display = TeamListDisplay(self.controller, visible_rows=visible_rows)
        self.reconciler = TeamListReconciler(self.display)
        self.controller.delegate = self.reconciler
        self.seed_result: SeedResult | None = None

    def load(self, *, seed: bool = True) -> SeedResult | None:
        """Seeds an empty store, fetches the results and draws the list."""
        if seed:
            self.seed_result = self.importer.import_if_empty()
        try:
            self.controller.perform_fetch()
        except ResultsFetchError:
            log.exception("board_fetch_failed")
        self.display.reload_data()
        # Seeding already shows up in the first fetch.
        self.controller.take_changes()
        return self.seed_result

    # ---------------------------------------------------------------- reading
    def render(self) -> dict[str, Any]:
        sections = self.display.rendered()
        return {
            "sections": sections,
            "section_count": len(sections),
            "team_count": sum(len(s["rows"]) for s in sections),
        }

    # ---------------------------------------------------------------- actions
    def add_team_prompt(self) -> AddTeamPrompt:
        return AddTeamPrompt(self.store)

    def add_team(self, team_name: str, qualifying_zone: str) -> tuple[TeamRow, ChangeBatch]:
        team = self.add_team_prompt().save(team_name, qualifying_zone)
        return TeamRow.from_record(team), self.controller.take_changes()

    def select_row(self, path: IndexPath) -> tuple[TeamRow, ChangeBatch]:
        """Records a win for the team shown at *path*; IndexError if there is none."""
        team = self.controller.object_at(path)
        record = record_win(self.store, team.pk)
        return TeamRow.from_record(record), self.controller.take_changes()


@cache
def get_board() -> TeamBoard:
    """The process-wide board over the default database."""
    board = TeamBoard(DjangoTeamStore())
    board.load(seed=conf.SEED_ON_STARTUP)
    return board
