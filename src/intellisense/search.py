# intellisense/search.py
from __future__ import annotations
import logging
import warnings
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence

from . import config as CFG
from .fuzzy import fold, score
from .models import CompletionItem, CompletionItemType

log = logging.getLogger(__name__)


def _require_int(name: str, value, minimum: int, *, optional: bool = False) -> None:
    if value is None and optional:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


@dataclass
class SearchOptions:
    """
    Ranking knobs for search()/advanced_search(). Every field has a default;
    the with_* builders return self so calls chain:

        SearchOptions().with_max_results(3).with_min_score(50)
    """
    max_results: Optional[int] = None          # None -> unbounded
    min_score: int = 0
    search_in_description: bool = False
    search_in_data_type: bool = False
    case_sensitive: bool = False
    parallel_processing: bool = True
    label_weight: int = 1
    type_priorities: Dict[str, int] = field(default_factory=lambda: dict(CFG.TYPE_PRIORITIES))

    def __post_init__(self) -> None:
        self._check()

    def _check(self) -> None:
        _require_int("max_results", self.max_results, 0, optional=True)
        _require_int("min_score", self.min_score, 0)
        _require_int("label_weight", self.label_weight, 1)

    # ---- builders ----

    def with_max_results(self, n: Optional[int]) -> "SearchOptions":
        _require_int("max_results", n, 0, optional=True)
        self.max_results = n
        return self

    def with_min_score(self, n: int) -> "SearchOptions":
        _require_int("min_score", n, 0)
        self.min_score = n
        return self

    def with_search_in_description(self, enabled: bool = True) -> "SearchOptions":
        self.search_in_description = enabled
        return self

    def with_search_in_data_type(self, enabled: bool = True) -> "SearchOptions":
        self.search_in_data_type = enabled
        return self

    def with_case_sensitive(self, enabled: bool = True) -> "SearchOptions":
        self.case_sensitive = enabled
        return self

    def with_parallel_processing(self, enabled: bool = True) -> "SearchOptions":
        self.parallel_processing = enabled
        return self

    def with_label_weight(self, weight: int) -> "SearchOptions":
        _require_int("label_weight", weight, 1)
        self.label_weight = weight
        return self

    def with_type_priority(self, item_type: CompletionItemType, priority: int) -> "SearchOptions":
        _require_int("priority", priority, 0)
        self.type_priorities[item_type.name] = priority
        return self

    # ---- deprecated aliases (older callers use both names) ----

    @property
    def minimum_score(self) -> int:
        warnings.warn("minimum_score is deprecated, use min_score", DeprecationWarning, stacklevel=2)
        return self.min_score

    @minimum_score.setter
    def minimum_score(self, n: int) -> None:
        warnings.warn("minimum_score is deprecated, use min_score", DeprecationWarning, stacklevel=2)
        self.with_min_score(n)

    def with_minimum_score(self, n: int) -> "SearchOptions":
        warnings.warn("with_minimum_score is deprecated, use with_min_score", DeprecationWarning, stacklevel=2)
        return self.with_min_score(n)

    @property
    def use_parallel_processing(self) -> bool:
        warnings.warn("use_parallel_processing is deprecated, use parallel_processing",
                      DeprecationWarning, stacklevel=2)
        return self.parallel_processing

    @use_parallel_processing.setter
    def use_parallel_processing(self, enabled: bool) -> None:
        warnings.warn("use_parallel_processing is deprecated, use parallel_processing",
                      DeprecationWarning, stacklevel=2)
        self.parallel_processing = enabled

    def type_priority(self, item_type: CompletionItemType) -> int:
        return self.type_priorities.get(item_type.name, CFG.DEFAULT_TYPE_PRIORITY)


# ------------- scoring -------------

def score_item(query: str, item: CompletionItem, options: SearchOptions) -> int:
    """Label score plus the provider's relevance boost; 0 when the label does not match."""
    sc = score(query, item.label, case_sensitive=options.case_sensitive)
    if sc <= 0:
        return 0
    return max(1, sc + item.relevance_score)


def _field_hit(query: str, text: Optional[str], case_sensitive: bool) -> bool:
    if not text:
        return False
    return fold(query, case_sensitive) in fold(text, case_sensitive)


def score_item_advanced(query: str, item: CompletionItem, options: SearchOptions) -> int:
    """
    Label score weighted by label_weight, widened to description / data type
    when enabled, plus required, documentation and type-priority bonuses.
    """
    label_score = score_item(query, item, options) * options.label_weight

    desc_hit = options.search_in_description and _field_hit(query, item.description, options.case_sensitive)
    type_hit = options.search_in_data_type and _field_hit(query, item.data_type, options.case_sensitive)

    if label_score <= 0:
        # label misses: an auxiliary field alone can still carry the item
        aux = max(CFG.DESCRIPTION_MATCH_SCORE if desc_hit else 0,
                  CFG.DATA_TYPE_MATCH_SCORE if type_hit else 0)
        if aux == 0:
            return 0
        total = aux
    else:
        total = label_score
        total += CFG.DESCRIPTION_BONUS if desc_hit else 0
        total += CFG.DATA_TYPE_BONUS if type_hit else 0

    if item.required:
        total += CFG.REQUIRED_BONUS
    if item.description:
        total += CFG.DOCUMENTED_BONUS
    total += options.type_priority(item.type) * CFG.TYPE_PRIORITY_WEIGHT
    return total


def _score_all(query: str, items: Sequence[CompletionItem], options: SearchOptions,
               scorer: Callable[[str, CompletionItem, SearchOptions], int]) -> List[int]:
    """Scores in item order; fans out to an executor for large lists."""
    if not options.parallel_processing or len(items) < CFG.PARALLEL_THRESHOLD:
        return [scorer(query, it, options) for it in items]

    fn = partial(scorer, query, options=options)
    exec_cls = ThreadPoolExecutor if CFG.SCORING_MODE == "threads" else ProcessPoolExecutor
    chunksize = CFG.CHUNK_SIZE if CFG.SCORING_MODE == "threads" else max(1, len(items) // (CFG.WORKERS * 8) or 1)
    log.debug("Scoring %d items with %s (workers=%d)", len(items), exec_cls.__name__, CFG.WORKERS)
    with exec_cls(max_workers=CFG.WORKERS) as ex:
        # Executor.map keeps input order, so ties resolve the same as the serial path
        return list(ex.map(fn, items, chunksize=chunksize))


def _rank(
    query: Optional[str],
    items: Sequence[CompletionItem],
    options: Optional[SearchOptions],
    scorer: Callable[[str, CompletionItem, SearchOptions], int],
    *,
    by_type: bool,
) -> List[CompletionItem]:
    items = list(items)
    if query is None or not query.strip():
        return items

    options = options or SearchOptions()
    q = query.strip()
    scores = _score_all(q, items, options, scorer)

    rows = [
        (sc, it) for sc, it in zip(scores, items)
        if sc > 0 and sc >= options.min_score
    ]

    def sort_key(row):
        sc, it = row
        prio = options.type_priority(it.type) if by_type else 0
        return (-sc, -it.relevance_score, -prio, len(it.label))

    rows.sort(key=sort_key)  # stable: equal keys keep input order
    out = [it for _, it in rows]
    if options.max_results is not None:
        out = out[:options.max_results]
    log.debug("Ranked %d/%d candidates for %r", len(out), len(items), q)
    return out


def search(query: Optional[str], items: Sequence[CompletionItem],
           options: Optional[SearchOptions] = None) -> List[CompletionItem]:
    """
    Rank items by how well their label matches query.
    Blank or None query returns all items in their original order.
    """
    return _rank(query, items, options, score_item, by_type=False)


def advanced_search(query: Optional[str], items: Sequence[CompletionItem],
                    options: Optional[SearchOptions] = None) -> List[CompletionItem]:
    """Like search(), but also scores description / data type and prefers primary item types."""
    return _rank(query, items, options, score_item_advanced, by_type=True)
