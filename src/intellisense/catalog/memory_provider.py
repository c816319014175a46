# intellisense/catalog/memory_provider.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from ..models import CompletionContext, CompletionItem, CompletionItemType, CompletionType

log = logging.getLogger(__name__)

ANY = "*"  # table key matching every element


class MemoryProvider:
    """
    In-memory candidate tables, one per CompletionType, keyed by element name.

    Attribute values are looked up as "<element>@<attribute>", then
    "<attribute>", then ANY; every other type as "<element>", then ANY.
    """

    def __init__(self, tables: Optional[Dict[CompletionType, Dict[str, List[CompletionItem]]]] = None) -> None:
        self._tables: Dict[CompletionType, Dict[str, List[CompletionItem]]] = {t: {} for t in CompletionType}
        for ctype, table in (tables or {}).items():
            for key, items in table.items():
                self.add(ctype, key, items)

    # C
    def add(self, completion_type: CompletionType, key: str, items: Iterable[CompletionItem]) -> int:
        bucket = self._tables[completion_type].setdefault(key, [])
        n = len(bucket)
        bucket.extend(items)
        return len(bucket) - n

    # R
    def count(self) -> int:
        return sum(len(items) for table in self._tables.values() for items in table.values())

    def keys(self, completion_type: CompletionType) -> List[str]:
        return sorted(self._tables[completion_type])

    def candidates(self, context: CompletionContext) -> List[CompletionItem]:
        ctype = context.completion_type
        if ctype is CompletionType.ELEMENT and context.closing_tag:
            return self._closers(context)

        element = context.current_element
        if ctype is CompletionType.ATTRIBUTE_VALUE:
            attr = context.current_attribute or ""
            keys = [f"{element}@{attr}", attr, ANY]
        else:
            keys = [element, ANY]

        items = self._lookup(ctype, keys)
        log.debug("MemoryProvider: %d candidates for %s keys=%s", len(items), ctype.name, keys)
        return items

    # D
    def clear(self) -> None:
        for table in self._tables.values():
            table.clear()

    # ------------- internals -------------

    def _lookup(self, ctype: CompletionType, keys: List[str]) -> List[CompletionItem]:
        table = self._tables[ctype]
        for key in keys:
            if key and table.get(key):
                return list(table[key])
        return []

    @staticmethod
    def _closers(context: CompletionContext) -> List[CompletionItem]:
        """Open elements, innermost first: the only names a closing tag may use."""
        out: List[CompletionItem] = []
        seen = set()
        for name in reversed(context.element_path):
            if name in seen:
                continue
            seen.add(name)
            out.append(CompletionItem(label=name, type=CompletionItemType.ELEMENT,
                                      description=f"Close <{name}>"))
        return out
