import pytest

from intellisense.models import CompletionItem, CompletionItemType
from intellisense.search import SearchOptions, advanced_search


@pytest.fixture
def attrs():
    return [
        CompletionItem("id", CompletionItemType.ATTRIBUTE, description="Unique identifier",
                       data_type="xs:ID", required=True),
        CompletionItem("name", CompletionItemType.ATTRIBUTE, description="Display name",
                       data_type="xs:string"),
    ]


def test_description_search_is_opt_in(attrs):
    assert advanced_search("identifier", attrs) == []
    rows = advanced_search("identifier", attrs, SearchOptions().with_search_in_description())
    assert [r.label for r in rows] == ["id"]


def test_data_type_search(attrs):
    rows = advanced_search("string", attrs, SearchOptions().with_search_in_data_type())
    assert [r.label for r in rows] == ["name"]


def test_type_priority_breaks_equal_labels():
    value = CompletionItem("value", CompletionItemType.VALUE)
    element = CompletionItem("value", CompletionItemType.ELEMENT)
    assert advanced_search("value", [value, element]) == [element, value]

    opts = SearchOptions().with_type_priority(CompletionItemType.VALUE, 20)
    assert advanced_search("value", [value, element], opts) == [value, element]


def test_required_and_documented_items_rank_higher():
    plain = CompletionItem("name", CompletionItemType.ATTRIBUTE)
    documented = CompletionItem("name", CompletionItemType.ATTRIBUTE, description="doc")
    required = CompletionItem("name", CompletionItemType.ATTRIBUTE, required=True)
    assert advanced_search("name", [plain, documented, required]) == [required, documented, plain]


def test_blank_query_passes_through(attrs):
    assert advanced_search("", attrs) == attrs


def test_label_weight_lifts_weak_label_match_over_description_hit():
    # "qz" aligns late and scattered in the label, so its label score stays low
    weak_label = CompletionItem("xxq" + "y" * 40 + "z", CompletionItemType.ATTRIBUTE)
    by_description = CompletionItem("other", CompletionItemType.ATTRIBUTE, description="qz marker")
    items = [weak_label, by_description]

    opts = SearchOptions().with_search_in_description()
    assert advanced_search("qz", items, opts) == [by_description, weak_label]

    opts = SearchOptions().with_search_in_description().with_label_weight(3)
    assert advanced_search("qz", items, opts) == [weak_label, by_description]
