from io import StringIO

import orjson
import pytest
from django.core.management import CommandError, call_command

from apps.teams.models import Team


def _run(*args):
    out = StringIO()
    call_command("seed_teams", *args, stdout=out, stderr=StringIO())
    return out.getvalue()


@pytest.mark.django_db
def test_seeds_the_bundled_file_once():
    output = _run()
    assert "SEED SUMMARY" in output
    assert Team.objects.count() == 32

    output = _run("--json")
    result = orjson.loads(output[output.index("{") : output.rindex("}") + 1])
    assert result["status"] == "skipped"
    assert Team.objects.count() == 32


@pytest.mark.django_db
def test_custom_seed_path(seed_file, seed_rows):
    output = _run("--seed-path", str(seed_file(seed_rows)), "--json")
    result = orjson.loads(output[output.index("{") : output.rindex("}") + 1])

    assert result["status"] == "ok"
    assert result["imported"] == 3
    assert list(Team.objects.order_by("pk").values_list("team_name", flat=True)) == ["Ghana", "Brazil", "Algeria"]


@pytest.mark.django_db
def test_malformed_seed_fails_the_command(seed_file, seed_rows):
    path = seed_file([*seed_rows, {"teamName": "Broken"}])

    with pytest.raises(CommandError):
        _run("--seed-path", str(path))
    assert Team.objects.count() == 0

    _run("--seed-path", str(path), "--skip-invalid")
    assert Team.objects.count() == 3
