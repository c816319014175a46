import pytest

from intellisense.fuzzy import levenshtein_distance


@pytest.mark.parametrize("a,b,expected", [
    ("kitten", "sitting", 3),
    ("same", "same", 0),
    ("", "abc", 3),
    ("abc", "", 3),
    (None, "ab", 2),
    ("flaw", "lawn", 2),
])
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected


def test_levenshtein_is_symmetric():
    assert levenshtein_distance("element", "elemnet") == levenshtein_distance("elemnet", "element")
