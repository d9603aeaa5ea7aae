import pytest

from apps.teams import conf
from apps.teams.services.seed_importer import SeedImporter, SeedImportError, load_seed_rows


def test_bundled_seed_is_valid():
    rows, skipped = load_seed_rows(conf.SEED_PATH)
    assert len(rows) == 32
    assert skipped == 0
    assert {row.qualifying_zone for row in rows} == {"Africa", "Asia", "Europe", "North America", "South America"}
    assert all(row.wins == 0 for row in rows)


def test_imports_every_record_in_file_order(store, seed_file, seed_rows):
    result = SeedImporter(store, seed_path=seed_file(seed_rows)).import_if_empty()

    assert result["status"] == "ok"
    assert result["imported"] == 3
    assert result["skipped"] == 0
    assert result["source"].endswith("seed.json")
    teams = store.fetch_all()
    assert [(t.team_name, t.qualifying_zone, t.image_name, t.wins) for t in teams] == [
        ("Ghana", "Africa", "ghana-flag", 0),
        ("Brazil", "South America", "brazil-flag", 2),
        ("Algeria", "Africa", "algeria-flag", 1),
    ]
    assert store.commits == 1


def test_second_launch_is_a_no_op(store, seed_file, seed_rows):
    importer = SeedImporter(store, seed_path=seed_file(seed_rows))
    importer.import_if_empty()
    store.calls.clear()

    result = importer.import_if_empty()

    assert result["status"] == "skipped"
    assert result["imported"] == 0
    assert dict(store.calls) == {"count": 1}
    assert store.count() == 3


def test_populated_store_never_reads_the_seed_file(store, tmp_path):
    store.create(team_name="Secret", qualifying_zone="Nowhere", image_name=None)
    result = SeedImporter(store, seed_path=tmp_path / "missing.json").import_if_empty()
    assert result["status"] == "skipped"


@pytest.mark.parametrize(
    "document",
    [
        {"teamName": "Ghana"},
        [{"teamName": "Ghana", "qualifyingZone": "Africa", "imageName": "ghana-flag"}],
        [{"teamName": "Ghana", "qualifyingZone": "Africa", "imageName": "ghana-flag", "wins": "3"}],
        [{"teamName": "Ghana", "qualifyingZone": "Africa", "imageName": "ghana-flag", "wins": True}],
        [{"teamName": "Ghana", "qualifyingZone": "Africa", "imageName": "ghana-flag", "wins": -1}],
        [{"teamName": "Ghana", "qualifyingZone": "Africa", "imageName": "ghana-flag", "wins": 0, "rank": 1}],
        [{"teamName": 7, "qualifyingZone": "Africa", "imageName": "ghana-flag", "wins": 0}],
    ],
)
def test_malformed_seed_writes_nothing(store, seed_file, seed_rows, document):
    result = SeedImporter(store, seed_path=seed_file(document)).import_if_empty()

    assert result["status"] == "error"
    assert result["error"]
    assert store.count() == 0
    assert store.commits == 0


def test_one_bad_record_aborts_the_whole_import(store, seed_file, seed_rows):
    rows = [*seed_rows, {"teamName": "Broken"}]
    result = SeedImporter(store, seed_path=seed_file(rows)).import_if_empty()
    assert result["status"] == "error"
    assert store.count() == 0


def test_skip_invalid_imports_only_valid_records(store, seed_file, seed_rows):
    rows = [seed_rows[0], {"teamName": "Broken"}, seed_rows[1], {**seed_rows[2], "wins": "many"}]
    result = SeedImporter(store, seed_path=seed_file(rows), skip_invalid=True).import_if_empty()

    assert result["status"] == "ok"
    assert result["imported"] == 2
    assert result["skipped"] == 2
    assert [t.team_name for t in store.fetch_all()] == ["Ghana", "Brazil"]


def test_invalid_json_and_missing_file_are_recoverable(store, tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("[{")

    assert SeedImporter(store, seed_path=broken).import_if_empty()["status"] == "error"
    assert SeedImporter(store, seed_path=tmp_path / "missing.json").import_if_empty()["status"] == "error"
    assert store.count() == 0


def test_import_seed_raises_on_malformed_input(store, seed_file):
    with pytest.raises(SeedImportError):
        SeedImporter(store, seed_path=seed_file({"not": "a list"})).import_seed()


def test_count_failure_is_reported(store, seed_file, seed_rows):
    store.fail_count = True
    result = SeedImporter(store, seed_path=seed_file(seed_rows)).import_if_empty()
    assert result["status"] == "error"
    assert "count failed" in result["error"]


def test_commit_failure_is_reported(store, seed_file, seed_rows):
    store.fail_writes = True
    result = SeedImporter(store, seed_path=seed_file(seed_rows)).import_if_empty()

    assert result["status"] == "error"
    store.fail_writes = False
    assert store.count() == 0


def test_empty_array_imports_nothing(store, seed_file):
    result = SeedImporter(store, seed_path=seed_file([])).import_if_empty()
    assert result["status"] == "ok"
    assert result["imported"] == 0
    assert store.commits == 0
