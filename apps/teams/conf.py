# ================================================================================
"""Configuration, constants, and Pydantic validators for the 'teams' app."""

from __future__ import annotations

from pathlib import Path
from typing import Final, Literal

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field

# ─── Board Defaults ────────────────────────────────────────────────────────────
# Image assigned to every team created from the add-team prompt.
DEFAULT_IMAGE_NAME: Final[str] = settings.TEAMS_CONFIG.DEFAULT_IMAGE_NAME

SEED_PATH: Final[Path] = Path(settings.TEAMS_CONFIG.SEED_PATH)
SKIP_INVALID_SEED_ROWS: Final[bool] = settings.TEAMS_CONFIG.SKIP_INVALID_SEED_ROWS
SEED_ON_STARTUP: Final[bool] = settings.TEAMS_CONFIG.SEED_ON_STARTUP

# ─── Add-Team Prompt ───────────────────────────────────────────────────────────
PROMPT_TITLE: Final[str] = "Secret Team"
PROMPT_MESSAGE: Final[str] = "Add a new team"
PROMPT_NAME_PLACEHOLDER: Final[str] = "Team Name"
PROMPT_ZONE_PLACEHOLDER: Final[str] = "Qualifying Zone"
PROMPT_SAVE_TITLE: Final[str] = "Save"
PROMPT_CANCEL_TITLE: Final[str] = "Cancel"

# ─── Row Rendering ─────────────────────────────────────────────────────────────
SCORE_LABEL_TEMPLATE: Final[str] = "Wins: {wins}"

# ─── Management Command Defaults ──────────────────────────────────────────────
SEED_CMD_SUCCESS: Final[str] = "✓ Team seed check completed."
SEED_CMD_FAILURE: Final[str] = "✗ Team seed finished with an error."


# ─── Pydantic Configuration & Validation Models ────────────────────────────────


class TeamSeedRow(BaseModel):
    """
    Validates a single record of the bundled seed file.

    The seed uses camelCase keys; every key is required, unknown keys are
    rejected, and values must already have the right JSON type (no coercion of
    "3" into 3, and no booleans standing in for integers).
    """

    team_name: str = Field(alias="teamName", strict=True)
    qualifying_zone: str = Field(alias="qualifyingZone", strict=True)
    image_name: str = Field(alias="imageName", strict=True)
    wins: int = Field(alias="wins", ge=0, strict=True)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class AddTeamPayload(BaseModel):
    """Body of `POST /api/v1/teams`; names and zones are taken as typed."""

    action: Literal["save", "cancel"] = "save"
    team_name: str = ""
    qualifying_zone: str = ""

    model_config = ConfigDict(extra="ignore", frozen=True)
