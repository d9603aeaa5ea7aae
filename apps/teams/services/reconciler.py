# ================================================================================
"""
TeamListReconciler – keeps a TeamListDisplay in step with a TeamResultsController.

It is the controller's delegate: every commit opens one display update
transaction, turns each reported edit into display commands, and closes the
transaction so the display lays out once per commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from apps.teams.services.changes import (
    RowDeleted,
    RowInserted,
    RowMoved,
    RowUpdated,
    SectionDeleted,
    SectionInserted,
)
from apps.teams.services.list_display import bind_team_cell

if TYPE_CHECKING:
    from collections.abc import Callable

    from apps.teams.services.changes import RowChange, SectionChange
    from apps.teams.services.list_display import TeamCell, TeamListDisplay
    from apps.teams.services.results_controller import TeamResultsController
    from apps.teams.services.snapshot import TeamRow

log = structlog.get_logger(__name__).bind(component="TeamListReconciler")


class TeamListReconciler:
    def __init__(
        self,
        display: TeamListDisplay,
        *,
        configure: Callable[[TeamCell, TeamRow], TeamCell] = bind_team_cell,
    ) -> None:
        self.display = display
        self.configure = configure

    def controller_will_change_content(self, controller: TeamResultsController) -> None:
        self.display.begin_updates()

    def controller_did_change_object(self, controller: TeamResultsController, change: RowChange) -> None:
        match change:
            case RowInserted(new_path=new_path):
                self.display.insert_rows([new_path])
            case RowDeleted(old_path=old_path):
                self.display.delete_rows([old_path])
            case RowMoved(old_path=old_path, new_path=new_path):
                self.display.delete_rows([old_path])
                self.display.insert_rows([new_path])
            case RowUpdated(old_path=old_path, new_path=new_path):
                # Off-screen rows are bound from fresh data when scrolled in.
                if (cell := self.display.visible_cell(old_path)) is not None:
                    self.configure(cell, controller.object_at(new_path))
            case _:
                log.warning("unknown_row_change", change=repr(change))

    def controller_did_change_section(self, controller: TeamResultsController, change: SectionChange) -> None:
        match change:
            case SectionInserted(index=index):
                self.display.insert_sections([index])
            case SectionDeleted(index=index):
                self.display.delete_sections([index])
            case _:
                pass

    def controller_did_change_content(self, controller: TeamResultsController) -> None:
        self.display.end_updates()

    def controller_did_reload_content(self, controller: TeamResultsController) -> None:
        self.display.reload_data()
