# intellisense/catalog/loader.py
from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict

from ..models import CompletionItem, CompletionItemType, CompletionType
from .memory_provider import MemoryProvider

log = logging.getLogger(__name__)

# JSON section -> (completion type it serves, item type when an entry omits "type")
SECTIONS: Dict[str, tuple[CompletionType, CompletionItemType]] = {
    "elements":   (CompletionType.ELEMENT,         CompletionItemType.ELEMENT),
    "attributes": (CompletionType.ATTRIBUTE,       CompletionItemType.ATTRIBUTE),
    "values":     (CompletionType.ATTRIBUTE_VALUE, CompletionItemType.VALUE),
    "text":       (CompletionType.TEXT_CONTENT,    CompletionItemType.TEXT),
    "namespaces": (CompletionType.NAMESPACE,       CompletionItemType.NAMESPACE),
    "templates":  (CompletionType.TEMPLATE,        CompletionItemType.SNIPPET),
}


def _load_section(provider: MemoryProvider, name: str, raw: Any) -> int:
    if not isinstance(raw, dict):
        raise ValueError(f"catalog section {name!r} must be an object, got {type(raw).__name__}")
    ctype, default_type = SECTIONS[name]
    added = 0
    for key, entries in raw.items():
        if not isinstance(entries, list):
            raise ValueError(f"catalog section {name!r}: entry {key!r} must be a list of items")
        items = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValueError(f"catalog section {name!r}: items under {key!r} must be objects")
            try:
                items.append(CompletionItem.from_dict(entry, default_type=default_type))
            except (TypeError, ValueError) as e:
                raise ValueError(f"catalog section {name!r}: {e}") from e
        added += provider.add(ctype, key, items)
    return added


def load_catalog(path: str) -> MemoryProvider:
    """
    Read a JSON catalog into a MemoryProvider.

    The document is an object with any of the sections in SECTIONS; each
    maps a key (element name, "element@attribute", attribute name or "*")
    to a list of item objects. Unknown sections are ignored with a warning.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            doc = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"catalog {path} is not valid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise ValueError(f"catalog {path} must be a JSON object")

    provider = MemoryProvider()
    for name, raw in doc.items():
        if name not in SECTIONS:
            log.warning("Ignoring unknown catalog section %r in %s", name, path)
            continue
        n = _load_section(provider, name, raw)
        log.debug("Loaded %d items from section %r", n, name)

    log.info("Loaded catalog %s: items=%d", path, provider.count())
    return provider
