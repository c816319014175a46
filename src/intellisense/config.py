from __future__ import annotations
import os

# Per-request ranking logged at info (set INTELLISENSE_VERBOSE=1 or pass --verbose)
VERBOSE: bool = os.environ.get("INTELLISENSE_VERBOSE") == "1"

# /* ~~~ label score tiers: exact > prefix > substring > fuzzy ~~~ */
EMPTY_QUERY_SCORE: int = 100
EXACT_SCORE: int = 1000
PREFIX_SCORE: int = 800
PREFIX_BONUS: int = 15
SUBSTRING_SCORE: int = 600

# Fuzzy (subsequence) scoring
FUZZY_BASE: int = 100
FUZZY_CAP: int = SUBSTRING_SCORE - 1
CONSECUTIVE_BONUS: int = 15
SEPARATOR_BONUS: int = 30
CAMEL_BONUS: int = 10
LEADING_LETTER_PENALTY: int = -5
MAX_LEADING_LETTER_PENALTY: int = -15
UNMATCHED_LETTER_PENALTY: int = -1

# /* ~~~ advanced search: auxiliary fields and bonuses ~~~ */
DESCRIPTION_MATCH_SCORE: int = 80
DESCRIPTION_BONUS: int = 30
DATA_TYPE_MATCH_SCORE: int = 70
DATA_TYPE_BONUS: int = 25
REQUIRED_BONUS: int = 50
DOCUMENTED_BONUS: int = 20
TYPE_PRIORITY_WEIGHT: int = 10
DEFAULT_TYPE_PRIORITY: int = 1

# Higher wins at near-equal scores; keys are CompletionItemType names
TYPE_PRIORITIES: dict[str, int] = {
    "ELEMENT": 10,
    "ATTRIBUTE": 8,
    "VALUE": 7,
    "SNIPPET": 6,
    "TYPE": 5,
    "TEXT": 4,
    "NAMESPACE": 2,
}

# scoring fan-out:
# - "threads" (default, no pickling)
# - "procs" for very large candidate lists
SCORING_MODE = "threads"
PARALLEL_THRESHOLD: int = 512   # below this, scoring stays serial
CHUNK_SIZE: int = 64

_cpu = os.cpu_count() or 4
WORKERS = _cpu * 2 if SCORING_MODE == "threads" else _cpu

# highlighting
MARK_OPEN: str = "<mark>"
MARK_CLOSE: str = "</mark>"
HIGHLIGHT_TOP_N: int = 10

# CLI / web defaults
TOP_K: int = 20
