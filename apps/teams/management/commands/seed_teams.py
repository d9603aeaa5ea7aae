# ================================================================================
"""
Django management command to seed the team table from the bundled JSON file.

Seeding only happens when the table is empty, so the command is safe to run
on every deploy.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
import structlog
from django.core.management.base import BaseCommand, CommandError, CommandParser

from apps.teams.conf import SEED_CMD_FAILURE, SEED_CMD_SUCCESS, SEED_PATH, SKIP_INVALID_SEED_ROWS
from apps.teams.services.seed_importer import SeedImporter
from apps.teams.services.store import DjangoTeamStore

if TYPE_CHECKING:
    from collections.abc import Mapping

log = structlog.get_logger(__name__)


class Command(BaseCommand):
    """Imports the team seed file into an empty team table."""

    help = "Seeds the team table from the bundled JSON file when it is empty."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--seed-path",
            type=Path,
            default=SEED_PATH,
            help="JSON file to import (an array of {teamName, qualifyingZone, imageName, wins}).",
        )
        parser.add_argument(
            "--skip-invalid",
            action="store_true",
            default=SKIP_INVALID_SEED_ROWS,
            help="Import the valid records and skip malformed ones instead of aborting.",
        )
        parser.add_argument(
            "--database",
            default="default",
            help="Database alias to seed.",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Output the result as raw JSON instead of pretty-printing.",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        self.stdout.write(self.style.SUCCESS("► Checking team seed..."))
        importer = SeedImporter(
            DjangoTeamStore(using=options["database"]),
            seed_path=options["seed_path"],
            skip_invalid=options["skip_invalid"],
        )
        result = importer.import_if_empty()

        if options["json"]:
            self.stdout.write(orjson.dumps(result, option=orjson.OPT_INDENT_2).decode())
        else:
            self._pretty_print(result)

        if result["status"] == "error":
            log.error("seed_teams_failed", error=result.get("error"))
            raise CommandError(SEED_CMD_FAILURE)
        self.stdout.write(self.style.SUCCESS(SEED_CMD_SUCCESS))

    def _pretty_print(self, result: Mapping[str, Any]) -> None:
        """Formats and prints a user-friendly summary of the seed result."""
        style = self.style
        self.stdout.write(style.MIGRATE_HEADING("\n" + "=" * 26))
        self.stdout.write(style.SUCCESS("  SEED SUMMARY"))
        self.stdout.write(style.MIGRATE_HEADING("=" * 26))

        if result["status"] == "error":
            self.stdout.write(f"  Status  : {style.ERROR('Failed')}")
            self.stdout.write(f"  Error   : {result.get('error', 'Unknown error')}")
        else:
            self.stdout.write(f"  Status  : {result['status']}")
            self.stdout.write(f"  Source  : {result.get('source', 'n/a')}")
            self.stdout.write(f"  Imported: {style.SUCCESS(result['imported'])}")
            self.stdout.write(f"  Skipped : {style.WARNING(result['skipped'])}")
            self.stdout.write(f"  Duration: {result.get('processing_ms', 'n/a')} ms")

        self.stdout.write(style.MIGRATE_HEADING("=" * 26))
