# src/e2e/test_catalog_loader.py
import json
from pathlib import Path

import pytest

from intellisense.catalog import CandidateProvider, MemoryProvider, load_catalog, make_provider
from intellisense.models import CompletionItemType, CompletionType


def test_load_catalog_counts_and_types(catalog_path: Path):
    prov = load_catalog(str(catalog_path))
    assert isinstance(prov, MemoryProvider)
    assert isinstance(prov, CandidateProvider)
    assert prov.count() == 13
    assert prov.keys(CompletionType.ATTRIBUTE_VALUE) == ["*", "child@type"]


def test_section_default_item_types(catalog_path: Path):
    prov = load_catalog(str(catalog_path))
    from intellisense.context import analyze

    attrs = prov.candidates(analyze("<root><child ", 13))
    assert {it.type for it in attrs} == {CompletionItemType.ATTRIBUTE}
    text = prov.candidates(analyze("<root>", 6))
    assert [it.type for it in text] == [CompletionItemType.SNIPPET]


def test_missing_catalog_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "nope.json"))


@pytest.mark.parametrize("doc,section", [
    ({"elements": []}, "elements"),
    ({"attributes": {"child": {"label": "id"}}}, "attributes"),
    ({"values": {"*": [{"type": "value"}]}}, "values"),
    ({"templates": {"*": ["xsl:template"]}}, "templates"),
])
def test_malformed_section_is_named(tmp_path: Path, doc, section):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    with pytest.raises(ValueError, match=section):
        load_catalog(str(path))


def test_invalid_json_raises_value_error(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(str(path))


def test_make_provider_dsns(catalog_path: Path):
    prov = make_provider(f"json:///{catalog_path}")
    assert prov.count() == 13
    assert isinstance(make_provider("memory://"), MemoryProvider)
    with pytest.raises(ValueError):
        make_provider("sqlite:///corpus.sqlite")
