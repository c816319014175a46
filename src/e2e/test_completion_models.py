from dataclasses import FrozenInstanceError

import pytest

from intellisense.models import CompletionContext, CompletionItem, CompletionItemType, CompletionType


def test_context_defaults_and_str():
    ctx = CompletionContext(full_text="<root>", selected_text=None, caret_position=6)
    assert ctx.selected_text == ""
    assert ctx.completion_type is CompletionType.ELEMENT
    s = str(ctx)
    assert "type=ELEMENT" in s and "inElement=false" in s


def test_context_to_dict_is_plain():
    ctx = CompletionContext(full_text="<ro", selected_text="", caret_position=3, completion_start=1)
    d = ctx.to_dict()
    assert d["completion_type"] == "ELEMENT"
    assert d["prefix"] == "ro"
    assert d["element_path"] == []


def test_item_is_immutable():
    it = CompletionItem("element")
    with pytest.raises(FrozenInstanceError):
        it.label = "other"  # type: ignore[misc]
    assert it.text_to_insert == "element"


def test_item_from_dict_aliases_and_defaults():
    it = CompletionItem.from_dict(
        {"label": "id", "type": "attribute", "dataType": "xs:ID", "required": True, "relevance": 3}
    )
    assert it.type is CompletionItemType.ATTRIBUTE
    assert it.data_type == "xs:ID"
    assert it.required and it.relevance_score == 3
    assert CompletionItem.from_dict({"label": "x"}, default_type=CompletionItemType.VALUE).type is CompletionItemType.VALUE


@pytest.mark.parametrize("raw", [{}, {"label": 3}, {"label": "x", "type": "bogus"}])
def test_item_from_dict_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        CompletionItem.from_dict(raw)
