# ================================================================================
"""
User-facing mutations of the board: adding a team and recording a win.

Both commit through the store handle they are given; failures propagate to
the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from apps.teams import conf

if TYPE_CHECKING:
    from apps.teams.services.protocols import TeamRecord, TeamStoreProtocol

log = structlog.get_logger(__name__).bind(component="TeamActions")


def add_team(
    store: TeamStoreProtocol,
    *,
    team_name: str,
    qualifying_zone: str,
    image_name: str | None = conf.DEFAULT_IMAGE_NAME,
) -> TeamRecord:
    """Creates one team with zero wins. Inputs are stored exactly as given."""
    with store.atomic():
        team = store.create(
            team_name=team_name,
            qualifying_zone=qualifying_zone,
            image_name=image_name,
            wins=0,
        )
    log.info("team_added", team_id=team.pk, team_name=team_name, zone=qualifying_zone)
    return team


def record_win(store: TeamStoreProtocol, pk: Any) -> TeamRecord:
    """Adds exactly one win to a team."""
    with store.atomic():
        team = store.increment_wins(pk, by=1)
    log.info("team_win_recorded", team_id=pk, wins=team.wins)
    return team


@dataclass(slots=True)
class PromptField:
    name: str
    placeholder: str


@dataclass(slots=True)
class AddTeamPrompt:
    """
    The modal form shown by the add button.

    `save()` creates the team; `cancel()` leaves the store untouched. A prompt
    is single-use: once dismissed either way it ignores further actions.
    """

    store: TeamStoreProtocol
    title: str = conf.PROMPT_TITLE
    message: str = conf.PROMPT_MESSAGE
    fields: list[PromptField] = field(
        default_factory=lambda: [
            PromptField("team_name", conf.PROMPT_NAME_PLACEHOLDER),
            PromptField("qualifying_zone", conf.PROMPT_ZONE_PLACEHOLDER),
        ],
    )
    dismissed: bool = False

    def save(self, team_name: str, qualifying_zone: str) -> TeamRecord | None:
        if self.dismissed:
            log.warning("prompt_already_dismissed", action="save")
            return None
        self.dismissed = True
        return add_team(self.store, team_name=team_name, qualifying_zone=qualifying_zone)

    def cancel(self) -> None:
        if not self.dismissed:
            log.debug("add_team_cancelled")
        self.dismissed = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "fields": [{"name": f.name, "placeholder": f.placeholder} for f in self.fields],
            "actions": [
                {"name": "save", "title": conf.PROMPT_SAVE_TITLE, "style": "default"},
                {"name": "cancel", "title": conf.PROMPT_CANCEL_TITLE, "style": "cancel"},
            ],
        }
