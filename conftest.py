"""Pytest configuration for the World Cup project.

Service tests run against an in-memory store; tests that go through the ORM
use pytest-django's `django_db` marker. The process-wide board is rebuilt for
every test so no state leaks between them.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import orjson
import pytest

from apps.teams.tests.fakes import InMemoryTeamStore

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture(autouse=True)
def _fresh_board() -> Iterator[None]:
    from apps.teams.services.board import get_board

    get_board.cache_clear()
    yield
    get_board.cache_clear()


@pytest.fixture
def store() -> InMemoryTeamStore:
    return InMemoryTeamStore()


@pytest.fixture
def seed_file(tmp_path: Path) -> Callable[[object], Path]:
    """Writes a JSON document to a temporary seed file and returns its path."""

    def _write(data: object) -> Path:
        path = tmp_path / "seed.json"
        path.write_bytes(orjson.dumps(data))
        return path

    return _write


@pytest.fixture
def seed_rows() -> list[dict[str, object]]:
    return [
        {"teamName": "Ghana", "qualifyingZone": "Africa", "imageName": "ghana-flag", "wins": 0},
        {"teamName": "Brazil", "qualifyingZone": "South America", "imageName": "brazil-flag", "wins": 2},
        {"teamName": "Algeria", "qualifyingZone": "Africa", "imageName": "algeria-flag", "wins": 1},
    ]
