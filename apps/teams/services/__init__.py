# ================================================================================
"""
Services for the 'teams' app.

This package provides the store handle, the seed importer, the live results
controller and the list display that together make up the team board. By
exposing key classes here, we allow for cleaner imports in other modules.

Example:
    from apps.teams.services import DjangoTeamStore, TeamBoard
"""

from .board import TeamBoard, get_board
from .changes import BatchUpdateError, ChangeBatch, apply_changes, diff_snapshots
from .list_display import TeamCell, TeamListDisplay
from .reconciler import TeamListReconciler
from .results_controller import ResultsFetchError, TeamResultsController
from .seed_importer import SeedImporter, SeedImportError
from .snapshot import IndexPath, Snapshot, TeamRow, build_snapshot
from .store import DjangoTeamStore
from .team_actions import AddTeamPrompt, add_team, record_win

__all__ = [
    "AddTeamPrompt",
    "BatchUpdateError",
    "ChangeBatch",
    "DjangoTeamStore",
    "IndexPath",
    "ResultsFetchError",
    "SeedImportError",
    "SeedImporter",
    "Snapshot",
    "TeamBoard",
    "TeamCell",
    "TeamListDisplay",
    "TeamListReconciler",
    "TeamResultsController",
    "TeamRow",
    "add_team",
    "apply_changes",
    "build_snapshot",
    "diff_snapshots",
    "get_board",
    "record_win",
]
