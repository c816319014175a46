from __future__ import annotations
from typing import Optional

from . import config as CFG
from .fuzzy import match_positions


def highlight_matches(
    target: str,
    query: Optional[str],
    *,
    case_sensitive: bool = False,
    open_mark: Optional[str] = None,
    close_mark: Optional[str] = None,
) -> str:
    """
    Wrap every matched character of target in a marker, keeping its original case.
    Contiguous (prefix/substring) hits are marked where they occur; otherwise the
    fuzzy alignment used for scoring is marked. Empty/None query or no alignment
    returns target unchanged.
    """
    if not query or not target:
        return target
    positions = set(match_positions(query, target, case_sensitive=case_sensitive))
    if not positions:
        return target

    open_mark = CFG.MARK_OPEN if open_mark is None else open_mark
    close_mark = CFG.MARK_CLOSE if close_mark is None else close_mark
    out = []
    for i, ch in enumerate(target):
        if i in positions:
            out.append(f"{open_mark}{ch}{close_mark}")
        else:
            out.append(ch)
    return "".join(out)
