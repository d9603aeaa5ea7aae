import pytest

from common.text_utils import standard_sort_key


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("Africa", "asia"),
        ("asia", "Europe"),
        ("Group 2", "Group 10"),
        ("Équipe A", "Equipe B"),
        ("North America", "South America"),
    ],
)
def test_sort_key_orders_like_a_file_browser(left, right):
    assert standard_sort_key(left) < standard_sort_key(right)
    assert sorted([right, left], key=standard_sort_key) == [left, right]


def test_case_and_accents_are_ignored():
    assert standard_sort_key("CÔTE D'IVOIRE") == standard_sort_key("cote d'ivoire")
    assert standard_sort_key("Brasil") == standard_sort_key("BRASIL")


def test_empty_text_sorts_first():
    assert standard_sort_key("") == ()
    assert standard_sort_key(None) == ()
    assert standard_sort_key("") < standard_sort_key("Africa")


def test_numbers_sort_before_words_at_same_position():
    assert sorted(["Zone B", "Zone 1", "Zone 12"], key=standard_sort_key) == ["Zone 1", "Zone 12", "Zone B"]
