# intellisense/fuzzy.py
from __future__ import annotations
from typing import List, Optional, Tuple

from . import config as CFG

# Scoring tiers (see config):
#   empty query -> 100, exact -> 1000, prefix -> 815, substring -> 600,
#   subsequence -> 1..599, nothing -> 0


def fold(s: str, case_sensitive: bool = False) -> str:
    """Lowercase char by char so indices in the folded string match the original."""
    if case_sensitive:
        return s
    out = []
    for ch in s:
        low = ch.lower()
        out.append(low if len(low) == 1 else ch)
    return "".join(out)


def _is_word_boundary(raw: str, i: int) -> bool:
    """Start of text, after a separator, a camel hump, or a letter/digit change."""
    if i == 0:
        return True
    cur, prev = raw[i], raw[i - 1]
    if not prev.isalnum():
        return True
    if cur.isupper() and prev.islower():
        return True
    return cur.isdigit() != prev.isdigit()


def _is_subsequence(q: str, t: str, start: int) -> bool:
    it = iter(t[start:])
    return all(ch in it for ch in q)


def _greedy_alignment(q: str, t: str) -> Optional[List[int]]:
    """Leftmost in-order alignment of q inside t."""
    out: List[int] = []
    j = 0
    for i, ch in enumerate(t):
        if j < len(q) and ch == q[j]:
            out.append(i)
            j += 1
    return out if j == len(q) else None


def _boundary_alignment(q: str, t: str, raw: str) -> Optional[List[int]]:
    """
    Prefer word-initial positions (``cT`` -> ``c``omplex``T``ype) as long as
    the remaining query can still be matched after them.
    """
    out: List[int] = []
    pos = 0
    for j, qc in enumerate(q):
        rest = q[j + 1:]
        k = next(
            (k for k in range(pos, len(t))
             if t[k] == qc and _is_word_boundary(raw, k) and _is_subsequence(rest, t, k + 1)),
            None,
        )
        if k is None:
            k = t.find(qc, pos)
            if k == -1:
                return None
        out.append(k)
        pos = k + 1
    return out


def _alignment_score(positions: List[int], raw: str) -> int:
    score = CFG.FUZZY_BASE
    prev = -2
    for i in positions:
        if i == prev + 1:
            score += CFG.CONSECUTIVE_BONUS
        if _is_word_boundary(raw, i):
            score += CFG.SEPARATOR_BONUS
        if i > 0 and raw[i].isupper() and raw[i - 1].islower():
            score += CFG.CAMEL_BONUS
        prev = i

    # unmatched letters inside the matched span
    span = positions[-1] - positions[0] + 1
    score += (span - len(positions)) * CFG.UNMATCHED_LETTER_PENALTY

    leading = positions[0]
    if leading > 0:
        score += max(leading * CFG.LEADING_LETTER_PENALTY, CFG.MAX_LEADING_LETTER_PENALTY)

    return max(1, min(score, CFG.FUZZY_CAP))


def _best_alignment(q: str, t: str, raw: str) -> Tuple[int, List[int]]:
    """Return (score, positions) of the better alignment, or (0, []) if none."""
    best: Tuple[int, List[int]] = (0, [])
    for positions in (_greedy_alignment(q, t), _boundary_alignment(q, t, raw)):
        if not positions:
            continue
        sc = _alignment_score(positions, raw)
        if sc > best[0]:
            best = (sc, positions)
    return best


def fuzzy_score(query: Optional[str], target: Optional[str], *, case_sensitive: bool = False) -> int:
    """
    Subsequence score of query inside target, ignoring the exact/prefix/substring
    tiers. Empty query -> 100; no in-order alignment -> 0.
    """
    if not query:
        return CFG.EMPTY_QUERY_SCORE
    if not target or len(query) > len(target):
        return 0
    return _best_alignment(fold(query, case_sensitive), fold(target, case_sensitive), target)[0]


def score(query: Optional[str], target: Optional[str], *, case_sensitive: bool = False) -> int:
    """Tiered match score of query against target; 0 means no match."""
    if not query:
        return CFG.EMPTY_QUERY_SCORE
    target = target or ""
    if len(query) > len(target):
        return 0

    q = fold(query, case_sensitive)
    t = fold(target, case_sensitive)
    if t == q:
        return CFG.EXACT_SCORE
    if t.startswith(q):
        return CFG.PREFIX_SCORE + CFG.PREFIX_BONUS
    if q in t:
        return CFG.SUBSTRING_SCORE
    return _best_alignment(q, t, target)[0]


def match_positions(query: Optional[str], target: Optional[str], *, case_sensitive: bool = False) -> List[int]:
    """
    Indices of target characters matched by query, using the same alignment
    that score() rewards: contiguous for prefix/substring hits, otherwise the
    best fuzzy alignment. Empty list when nothing aligns.
    """
    if not query or not target or len(query) > len(target):
        return []
    q = fold(query, case_sensitive)
    t = fold(target, case_sensitive)
    start = t.find(q)
    if start != -1:
        return list(range(start, start + len(q)))
    return _best_alignment(q, t, target)[1]


def levenshtein_distance(a: Optional[str], b: Optional[str]) -> int:
    """Classic edit distance (insert/delete/substitute, unit cost)."""
    a = a or ""
    b = b or ""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                cur[j] = prev[j - 1]
            else:
                cur[j] = 1 + min(prev[j], cur[j - 1], prev[j - 1])
        prev = cur
    return prev[-1]
