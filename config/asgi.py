"""
ASGI entry point.

Django serves the API; Starlette sits in front of it for `/health`, CORS and the
startup hook that checks the database and builds (and, if empty, seeds) the
standings board before the first request.
"""

from __future__ import annotations

import asyncio
import os
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.asgi import get_asgi_application
from django.db import DatabaseError, connections
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Mount, Route

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.local")
django_app = get_asgi_application()

# Needs the app registry.
from apps.core.views import health_check  # noqa: E402
from apps.teams.services.board import get_board  # noqa: E402

STARTUP_DB_TIMEOUT = 5.0
CLOSE_TIMEOUT = 10.0

logger = structlog.get_logger(__name__).bind(component="asgi")


class StartupError(Exception):
    """The service cannot start: the database is unreachable or too slow."""


def _ping_default_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")


async def check_database() -> None:
    try:
        async with asyncio.timeout(STARTUP_DB_TIMEOUT):
            await asyncio.to_thread(_ping_default_database)
    except TimeoutError as e:
        msg = f"No answer from the database within {STARTUP_DB_TIMEOUT}s"
        raise StartupError(msg) from e
    except DatabaseError as e:
        msg = f"Cannot reach the database: {e}"
        raise StartupError(msg) from e


async def build_board() -> None:
    board = await sync_to_async(get_board, thread_sensitive=True)()
    seed = board.seed_result or {"status": "disabled", "imported": 0}
    logger.info(
        "board_loaded",
        seed_status=seed["status"],
        imported=seed["imported"],
        teams=len(board.controller.snapshot),
    )


async def close_connections() -> None:
    try:
        async with asyncio.timeout(CLOSE_TIMEOUT):
            await sync_to_async(connections.close_all)()
    except TimeoutError:
        logger.warning("db_close_timed_out", timeout_s=CLOSE_TIMEOUT)
    except DatabaseError as e:
        logger.warning("db_close_failed", error=str(e))


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    started = time.monotonic()
    logger.info("startup_begin")
    try:
        await check_database()
        await build_board()
    except StartupError:
        logger.exception("startup_aborted")
        raise
    logger.info("startup_done", duration_s=round(time.monotonic() - started, 2))

    yield

    await close_connections()
    logger.info("shutdown_done")


application = Starlette(
    debug=settings.DEBUG,
    routes=[
        Route("/health", endpoint=health_check, methods=["GET", "HEAD"]),
        Mount("/", app=django_app),
    ],
    middleware=[
        Middleware(
            CORSMiddleware,
            allow_origins=getattr(settings, "CORS_ALLOWED_ORIGINS", ["*"]),
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        ),
    ],
    lifespan=lifespan,
)
