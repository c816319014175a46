# intellisense/catalog/api.py
from __future__ import annotations
from typing import List, Protocol, runtime_checkable

from ..models import CompletionContext, CompletionItem


@runtime_checkable
class CandidateProvider(Protocol):
    """Supplies the raw candidates valid at a context; ranking happens elsewhere."""
    def candidates(self, context: CompletionContext) -> List[CompletionItem]: ...


def make_provider(dsn: str) -> CandidateProvider:
    """
    Factory:
      - json:///path/to/catalog.json -> MemoryProvider loaded from the JSON catalog
      - memory://                    -> empty MemoryProvider (fill it with add())
    """
    if dsn.startswith("json:///"):
        from .loader import load_catalog
        return load_catalog(dsn.removeprefix("json:///"))

    if dsn.startswith("memory://"):
        from .memory_provider import MemoryProvider
        return MemoryProvider()

    raise ValueError(f"Unsupported provider DSN: {dsn}")
