import pytest

from apps.teams.services.board import TeamBoard
from apps.teams.services.snapshot import IndexPath


@pytest.fixture
def board(store, seed_file, seed_rows):
    board = TeamBoard(store, seed_path=seed_file(seed_rows))
    board.load()
    return board


def test_first_load_seeds_and_draws(board):
    assert board.seed_result["status"] == "ok"
    screen = board.render()

    assert screen["section_count"] == 2
    assert screen["team_count"] == 3
    assert [s["title"] for s in screen["sections"]] == ["Africa", "South America"]
    assert [r["team_label"] for r in screen["sections"][0]["rows"]] == ["Algeria", "Ghana"]
    assert not board.controller.last_changes


def test_second_load_does_not_reseed(store, seed_file, seed_rows, board):
    again = TeamBoard(store, seed_path=seed_file(seed_rows))
    assert again.load()["status"] == "skipped"
    assert again.render()["team_count"] == 3


def test_select_row_increments_and_reports_the_batch(board):
    # Ghana ties Algeria on wins and stays second on name.
    team, changes = board.select_row(IndexPath(0, 1))
    assert (team.team_name, team.wins) == ("Ghana", 1)
    assert [c.kind for c in changes] == ["row_updated"]

    team, changes = board.select_row(IndexPath(0, 1))
    assert (team.team_name, team.wins) == ("Ghana", 2)
    assert [c.kind for c in changes] == ["row_moved"]
    assert board.render()["sections"][0]["rows"][0] == {
        "team_label": "Ghana",
        "score_label": "Wins: 2",
        "flag_image": "ghana-flag",
    }


def test_select_row_keeps_other_teams(board):
    before = {row.pk: row.wins for row in board.controller.fetched_objects}
    team, _ = board.select_row(IndexPath(1, 0))

    after = {row.pk: row.wins for row in board.controller.fetched_objects}
    assert after[team.pk] == before[team.pk] + 1
    assert {pk: w for pk, w in after.items() if pk != team.pk} == {
        pk: w for pk, w in before.items() if pk != team.pk
    }


def test_select_missing_row_raises(board):
    with pytest.raises(IndexError):
        board.select_row(IndexPath(0, 9))


def test_add_team_lands_in_its_zone(board):
    team, changes = board.add_team("Cameroon", "Africa")

    assert team.image_name == "wenderland-flag"
    assert team.wins == 0
    assert [c.to_dict() for c in changes] == [
        {"kind": "row_inserted", "pk": team.pk, "new_path": {"section": 0, "row": 1}},
    ]
    assert board.render()["team_count"] == 4


def test_cancelled_prompt_leaves_board_unchanged(board, store):
    before = board.render()
    board.add_team_prompt().cancel()
    assert board.render() == before
    assert store.count() == 3


def test_fetch_failure_leaves_an_empty_board(store, seed_file, seed_rows):
    store.fail_fetch = True
    board = TeamBoard(store, seed_path=seed_file(seed_rows))
    board.load()
    assert board.render() == {"sections": [], "section_count": 0, "team_count": 0}


def test_board_catches_up_after_a_failed_first_fetch(store, seed_file, seed_rows):
    store.fail_fetch = True
    board = TeamBoard(store, seed_path=seed_file(seed_rows))
    board.load()
    assert board.render()["team_count"] == 0

    store.fail_fetch = False
    team, changes = board.add_team("Iran", "Asia")

    assert (team.team_name, team.wins) == ("Iran", 0)
    assert not changes
    screen = board.render()
    assert screen["team_count"] == 4
    assert [s["title"] for s in screen["sections"]] == ["Africa", "Asia", "South America"]
    assert board.controller.index_path_for(team.pk) == IndexPath(1, 0)


def test_select_row_reports_committed_wins_when_refetch_fails(board, store):
    before = board.render()
    store.fail_fetch = True

    team, changes = board.select_row(IndexPath(1, 0))

    assert (team.team_name, team.wins) == ("Brazil", 3)
    assert store.get(team.pk).wins == 3
    assert not changes
    assert board.render() == before
