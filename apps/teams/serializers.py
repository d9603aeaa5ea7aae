# ================================================================================
"""
Read-only serializers for the board's API payloads.

Every payload object already knows how to turn itself into a dict; the
serializers only decide which pieces go into each response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .services.changes import ChangeBatch
    from .services.snapshot import IndexPath, TeamRow


class TeamSerializer:
    """Serializes board rows."""

    @staticmethod
    def serialize_team(team: TeamRow, *, path: IndexPath | None = None) -> dict[str, Any]:
        data = team.to_dict()
        if path is not None:
            data["index_path"] = path.to_dict()
        return data


class ChangeBatchSerializer:
    """Serializes the edit script of one commit."""

    @staticmethod
    def serialize_batch(batch: ChangeBatch) -> dict[str, Any]:
        return {
            "count": len(batch),
            "section_changes": len(batch.section_changes),
            "row_changes": len(batch.row_changes),
            "changes": batch.to_list(),
        }

    @classmethod
    def serialize_mutation(cls, team: TeamRow, batch: ChangeBatch, *, path: IndexPath | None = None) -> dict[str, Any]:
        return {
            "team": TeamSerializer.serialize_team(team, path=path),
            "changes": cls.serialize_batch(batch),
        }
