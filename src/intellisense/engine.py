# intellisense/engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from . import config as CFG
from .catalog.api import CandidateProvider, make_provider
from .context import analyze
from .highlight import highlight_matches
from .models import CompletionContext, CompletionItem
from .search import SearchOptions, advanced_search, search

log = logging.getLogger(__name__)

# A refiner may mutate the context in place or hand back a replacement.
Refiner = Callable[[CompletionContext], Optional[CompletionContext]]


@dataclass(frozen=True)
class CompletionSession:
    """Result of one completion request: the analyzed context and what was ranked for it."""
    context: CompletionContext
    query: str
    results: Tuple[CompletionItem, ...] = ()
    highlights: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "context": self.context.to_dict(),
            "query": self.query,
            "results": [
                {**it.to_dict(), "highlight": self.highlights.get(it.label, it.label)}
                for it in self.results
            ],
        }


class CompletionEngine:
    """
    Thin orchestration layer that glues together:
      - context analysis (context.analyze),
      - optional refiners (schema lookup, XSLT template overlay, ...),
      - a CandidateProvider (JSON catalog or in-memory tables),
      - ranking (search / advanced_search) and highlighting.

    Provider DSNs (via catalog.make_provider):
      - "json:///path/to/catalog.json"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        provider: Optional[CandidateProvider] = None,
        *,
        options: Optional[SearchOptions] = None,
        refiners: Iterable[Refiner] = (),
    ) -> None:
        self.provider = provider
        self.options = options or SearchOptions()
        self.refiners: List[Refiner] = list(refiners)

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs) -> "CompletionEngine":
        log.info("Initializing candidate provider: %s", dsn)
        return cls(make_provider(dsn), **kwargs)

    # ------------- query -------------

    # /* ~~~ Analyze the caret, collect candidates, rank and highlight them ~~~ */
    def complete(
        self,
        full_text: Optional[str],
        caret_position: int,
        selected_text: Optional[str] = None,
        *,
        query: Optional[str] = None,
        options: Optional[SearchOptions] = None,
        advanced: bool = False,
        items: Optional[Sequence[CompletionItem]] = None,
    ) -> CompletionSession:
        ctx = analyze(full_text, caret_position, selected_text)
        for refine in self.refiners:
            ctx = refine(ctx) or ctx

        if items is None:
            if self.provider is None:
                raise RuntimeError("CompletionEngine has no provider; pass one or supply items=")
            items = self.provider.candidates(ctx)

        q = ctx.prefix if query is None else query
        opts = options or self.options
        rank = advanced_search if advanced else search
        results = rank(q, items, opts)
        # INTELLISENSE_VERBOSE / --verbose promote per-request ranking lines to info
        log.log(logging.INFO if CFG.VERBOSE else logging.DEBUG,
                "complete(): type=%s query=%r candidates=%d results=%d",
                ctx.completion_type.name, q, len(items), len(results))

        highlights = {
            it.label: highlight_matches(it.label, q, case_sensitive=opts.case_sensitive)
            for it in results[:CFG.HIGHLIGHT_TOP_N]
        }
        return CompletionSession(context=ctx, query=q, results=tuple(results), highlights=highlights)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        close = getattr(self.provider, "close", None)
        try:
            if callable(close):
                close()
        finally:
            self.provider = None
            log.info("Engine shutdown complete")
