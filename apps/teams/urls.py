# ================================================================================
"""URLConf for the Teams API (async views)."""

from __future__ import annotations

from django.urls import include, path

from .views import AddTeamPromptView, RecordWinView, TeamBoardView

app_name = "teams"

row_patterns = [
    path("/win", RecordWinView.as_view(), name="win"),
]

urlpatterns = [
    path("", TeamBoardView.as_view(), name="board"),
    path("/prompt", AddTeamPromptView.as_view(), name="prompt"),
    path("/sections/<int:section>/rows/<int:row>", include(row_patterns)),
]
