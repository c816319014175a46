# src/e2e/test_search.py
import pytest

from intellisense.models import CompletionItem, CompletionItemType
from intellisense.search import SearchOptions, search


@pytest.fixture
def items():
    return [
        CompletionItem("complexType"),
        CompletionItem("elementType"),
        CompletionItem("attribute", CompletionItemType.ATTRIBUTE),
        CompletionItem("simpleElement"),
        CompletionItem("element"),
    ]


def _labels(rows):
    return [r.label for r in rows]


def test_ranks_prefix_before_substring_and_drops_misses(items):
    assert _labels(search("elem", items)) == ["element", "elementType", "simpleElement"]


@pytest.mark.parametrize("q", ["", "   ", None])
def test_blank_query_returns_everything_in_order(items, q):
    assert _labels(search(q, items)) == _labels(items)


def test_query_is_stripped(items):
    assert _labels(search("  elem ", items)) == _labels(search("elem", items))


def test_max_results_and_min_score(items):
    assert _labels(search("elem", items, SearchOptions(max_results=1))) == ["element"]
    assert _labels(search("elem", items, SearchOptions().with_min_score(700))) == ["element", "elementType"]


def test_relevance_boost_changes_order():
    rows = search("elem", [CompletionItem("element"), CompletionItem("elementType", relevance_score=10)])
    assert _labels(rows) == ["elementType", "element"]


def test_ties_keep_input_order():
    a = CompletionItem("name", description="first")
    b = CompletionItem("name", description="second")
    assert search("name", [a, b]) == [a, b]


def test_case_sensitive_option(items):
    rows = search("Elem", items, SearchOptions().with_case_sensitive())
    assert _labels(rows) == ["simpleElement"]


def test_no_items():
    assert search("x", []) == []


SCHEMA_WORDS = ["element", "sequence", "choice", "complexType", "simpleType", "elementType"]


def test_camel_case_abbreviation_finds_complex_type():
    rows = search("cT", [CompletionItem(w) for w in SCHEMA_WORDS])
    assert "complexType" in _labels(rows)


def test_upper_case_query_matches_lower_case_label():
    rows = search("ELEM", [CompletionItem(w) for w in SCHEMA_WORDS])
    assert _labels(rows)[0] == "element"


def test_max_results_keeps_highest_scored():
    rows = search("e", [CompletionItem(w) for w in SCHEMA_WORDS], SearchOptions().with_max_results(3))
    assert len(rows) == 3
    assert _labels(rows)[:2] == ["element", "elementType"]
