"""Core data types and type definitions."""

from __future__ import annotations

from typing import Literal, NotRequired, TypedDict

type ResultStatus = Literal["ok", "skipped", "error"]

# ─── Import Result Types ─────────────────────────────


class ImportResult(TypedDict):
    """Dictionary type for bulk import results."""

    imported: int
    skipped: int


class SeedResult(ImportResult):
    """Outcome of a one-time seed import check."""

    status: ResultStatus
    source: NotRequired[str]  # seed file path
    error: NotRequired[str]
    processing_ms: NotRequired[float]


# ─── Factory Functions ──────────────────────


def new_seed_result(
    *,
    status: ResultStatus = "ok",
    imported: int = 0,
    skipped: int = 0,
) -> SeedResult:
    """Create a new SeedResult with validation."""
    if imported < 0 or skipped < 0:
        msg = "Import counts cannot be negative"
        raise ValueError(msg)
    return SeedResult(status=status, imported=imported, skipped=skipped)
