"""
XML IntelliSense Core

Context-aware completion for partially typed XML: decide where the caret
sits, collect the candidates valid there and rank them against what the
user has typed so far.

- Context analysis: context.analyze(full_text, caret, selected)
- Matching: fuzzy.score / fuzzy_score / match_positions / levenshtein_distance
- Ranking: search.search / advanced_search with SearchOptions
- Candidates: catalog.MemoryProvider, catalog.load_catalog (JSON)
- Orchestration: engine.CompletionEngine -> CompletionSession

Example Usage:
    from intellisense import CompletionEngine

    eng = CompletionEngine.from_dsn("json:////path/to/catalog.json")
    session = eng.complete('<root><child attr="va', 21)
    for item in session.results:
        print(item.label, session.highlights.get(item.label))
"""

# src/intellisense/__init__.py
from .catalog import CandidateProvider, MemoryProvider, load_catalog, make_provider
from .context import analyze
from .engine import CompletionEngine, CompletionSession
from .fuzzy import fuzzy_score, levenshtein_distance, match_positions, score
from .highlight import highlight_matches
from .models import CompletionContext, CompletionItem, CompletionItemType, CompletionType
from .search import SearchOptions, advanced_search, search

__version__ = "1.0.0"
__all__ = [
    "CandidateProvider", "CompletionContext", "CompletionEngine", "CompletionItem",
    "CompletionItemType", "CompletionSession", "CompletionType", "MemoryProvider",
    "SearchOptions", "advanced_search", "analyze", "fuzzy_score", "highlight_matches",
    "levenshtein_distance", "load_catalog", "make_provider", "match_positions",
    "score", "search",
]
