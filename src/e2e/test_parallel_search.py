import pytest

from intellisense import config as CFG
from intellisense.models import CompletionItem, CompletionItemType
from intellisense.search import SearchOptions, advanced_search, search


@pytest.fixture
def many_items():
    kinds = list(CompletionItemType)
    return [
        CompletionItem(f"{stem}{i}", kinds[i % len(kinds)], description=f"item {i}")
        for i in range(300)
        for stem in ("element", "elem", "attr", "xelement")
    ]


@pytest.mark.parametrize("rank", [search, advanced_search])
def test_parallel_and_serial_agree(monkeypatch, many_items, rank):
    monkeypatch.setattr(CFG, "PARALLEL_THRESHOLD", 10)
    serial = rank("elem1", many_items, SearchOptions(parallel_processing=False))
    parallel = rank("elem1", many_items, SearchOptions(parallel_processing=True))
    assert serial and serial == parallel
