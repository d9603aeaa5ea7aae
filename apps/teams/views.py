# apps/teams/views.py
# ======================================================================
"""Asynchronous API views for the team board."""

from __future__ import annotations

from typing import Any

import structlog
from asgiref.sync import sync_to_async
from django.http import Http404, HttpRequest

from apps.teams.conf import AddTeamPayload
from apps.teams.serializers import ChangeBatchSerializer
from apps.teams.services.board import TeamBoard, get_board
from apps.teams.services.snapshot import IndexPath
from common.views_utils import BaseAppView, BaseAsyncView, OrjsonResponse

log = structlog.get_logger(__name__).bind(component="TeamViews")

# The board and its store live on Django's shared sync thread.
_board = sync_to_async(get_board, thread_sensitive=True)


# --- /teams ---
class TeamBoardView(BaseAppView):
    """
    GET  /api/v1/teams – the rendered board, one section per qualifying zone.
    POST /api/v1/teams – answers the add-team prompt (save or cancel).
    """

    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        return {}

    async def _produce_payload(self, p: dict[str, Any]) -> dict[str, Any]:
        board = await _board()
        return await sync_to_async(board.render, thread_sensitive=True)()

    async def post(self, request: HttpRequest, **kwargs) -> OrjsonResponse:
        payload = self.parse_body(request, AddTeamPayload)
        board = await _board()
        if payload.action == "cancel":
            await sync_to_async(board.add_team_prompt().cancel, thread_sensitive=True)()
            return OrjsonResponse({"status": "cancelled"})

        team, changes = await sync_to_async(board.add_team, thread_sensitive=True)(
            payload.team_name,
            payload.qualifying_zone,
        )
        path = board.controller.index_path_for(team.pk)
        return OrjsonResponse(ChangeBatchSerializer.serialize_mutation(team, changes, path=path), status=201)


# --- /teams/prompt ---
class AddTeamPromptView(BaseAppView):
    """GET /api/v1/teams/prompt – what the add-team modal shows."""

    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]:
        return {}

    async def _produce_payload(self, p: dict[str, Any]) -> dict[str, Any]:
        board = await _board()
        return board.add_team_prompt().to_dict()


# --- /teams/sections/<s>/rows/<r>/win ---
class RecordWinView(BaseAsyncView):
    """POST /api/v1/teams/sections/{section}/rows/{row}/win – the row tap."""

    async def post(self, request: HttpRequest, *, section: int, row: int) -> OrjsonResponse:
        board: TeamBoard = await _board()
        path = IndexPath(section, row)
        try:
            team, changes = await sync_to_async(board.select_row, thread_sensitive=True)(path)
        except IndexError as e:
            msg = f"No team at section {section}, row {row}."
            raise Http404(msg) from e
        new_path = board.controller.index_path_for(team.pk)
        return OrjsonResponse(ChangeBatchSerializer.serialize_mutation(team, changes, path=new_path))
