# ================================================================================
"""
SeedImporter – one-time import of the bundled team seed file.

`import_if_empty()` counts the teams; when the table is empty it reads the
seed file and inserts every record in file order inside a single transaction.
A populated table is left alone: nothing past the count is read or written.

By default the seed is all-or-nothing: any malformed record aborts the import
before the first write. With `skip_invalid=True` the valid records are
imported and the rest are counted as skipped.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
import structlog
from django.db import DatabaseError
from pydantic import TypeAdapter, ValidationError

from apps.core.datatype import SeedResult, new_seed_result
from apps.teams import conf
from apps.teams.conf import TeamSeedRow

if TYPE_CHECKING:
    from apps.teams.services.protocols import TeamStoreProtocol

log = structlog.get_logger(__name__).bind(component="SeedImporter")

_SEED_ROWS = TypeAdapter(list[TeamSeedRow])


class SeedImportError(ValueError):
    """Raised when the seed file cannot be read or does not hold valid teams."""


def _read_seed(path: Path) -> list[Any]:
    try:
        raw = path.read_bytes()
    except OSError as e:
        msg = f"Cannot read seed file {path}: {e}"
        raise SeedImportError(msg) from e
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        msg = f"Seed file {path} is not valid JSON: {e}"
        raise SeedImportError(msg) from e
    if not isinstance(data, list):
        msg = f"Seed file {path} must hold a JSON array, got {type(data).__name__}."
        raise SeedImportError(msg)
    return data


def load_seed_rows(path: Path, *, skip_invalid: bool = False) -> tuple[list[TeamSeedRow], int]:
    """
    Parses the seed file at *path*.

    Returns the validated rows in file order and the number of records that
    were skipped (always 0 unless *skip_invalid* is set).
    """
    data = _read_seed(path)
    if not skip_invalid:
        try:
            return _SEED_ROWS.validate_python(data), 0
        except ValidationError as e:
            msg = f"Seed file {path} holds {e.error_count()} invalid value(s): {e.errors()[0]['msg']}"
            raise SeedImportError(msg) from e

    rows: list[TeamSeedRow] = []
    skipped = 0
    for position, item in enumerate(data):
        try:
            rows.append(TeamSeedRow.model_validate(item))
        except ValidationError as e:
            skipped += 1
            log.warning("seed_row_skipped", position=position, errors=e.error_count())
    return rows, skipped


class SeedImporter:
    def __init__(
        self,
        store: TeamStoreProtocol,
        *,
        seed_path: Path | str | None = None,
        skip_invalid: bool | None = None,
    ) -> None:
        self.store = store
        self.seed_path = Path(seed_path) if seed_path is not None else conf.SEED_PATH
        self.skip_invalid = conf.SKIP_INVALID_SEED_ROWS if skip_invalid is None else skip_invalid

    def import_if_empty(self) -> SeedResult:
        start = time.perf_counter()
        try:
            existing = self.store.count()
        except DatabaseError as e:
            log.exception("seed_import_failed", stage="count")
            return self._failed(str(e), start)

        if existing:
            log.debug("seed_import_skipped", existing=existing)
            return self._finish(new_seed_result(status="skipped"), start)

        try:
            result = self.import_seed()
        except SeedImportError as e:
            log.error("seed_import_failed", stage="parse", error=str(e), source=str(self.seed_path))
            return self._failed(str(e), start)
        except DatabaseError as e:
            log.exception("seed_import_failed", stage="commit", source=str(self.seed_path))
            return self._failed(str(e), start)

        log.info(
            "seed_import_completed",
            imported=result["imported"],
            skipped=result["skipped"],
            source=str(self.seed_path),
        )
        return self._finish(result, start)

    def import_seed(self) -> SeedResult:
        """Imports the seed unconditionally; parse errors raise SeedImportError."""
        rows, skipped = load_seed_rows(self.seed_path, skip_invalid=self.skip_invalid)
        with self.store.atomic():
            imported = self.store.create_many(row.model_dump() for row in rows)
        return new_seed_result(imported=imported, skipped=skipped)

    def _failed(self, error: str, start: float) -> SeedResult:
        result = new_seed_result(status="error")
        result["error"] = error
        return self._finish(result, start)

    def _finish(self, result: SeedResult, start: float) -> SeedResult:
        result["source"] = str(self.seed_path)
        result["processing_ms"] = round((time.perf_counter() - start) * 1000, 2)
        return result
