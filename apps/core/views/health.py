"""Liveness probe served by Starlette in front of Django."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from django.db import DatabaseError, connections
from django.utils import timezone
from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from starlette.requests import Request


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _select_one() -> None:
    with connections["default"].cursor() as cursor:
        cursor.execute("SELECT 1")


async def _probe_database() -> dict[str, str | float]:
    started = time.perf_counter()
    try:
        await asyncio.to_thread(_select_one)
    except DatabaseError as exc:
        return {"status": "unhealthy", "error": str(exc)}
    return {"status": "healthy", "response_time_ms": _elapsed_ms(started)}


async def health_check(request: Request) -> JSONResponse:
    """
    `GET /health` reports 200 when the team store answers and 503 when it does not.
    `?check=basic` skips the database and only proves the process is up.
    """
    started = time.perf_counter()
    now = timezone.now().isoformat()
    if request.query_params.get("check") == "basic":
        return JSONResponse({"status": "ok", "timestamp": now})

    database = await _probe_database()
    healthy = database["status"] == "healthy"
    return JSONResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "checks": {"database": database},
            "timestamp": now,
            "response_time_ms": _elapsed_ms(started),
        },
        status_code=200 if healthy else 503,
    )
