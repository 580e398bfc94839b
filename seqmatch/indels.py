"""Pattern matching allowing indels, reporting only best local matches.

A substring S' of the subject is a best local match when its edit distance
to the pattern is at most ``max_nmis``, no substring of S' is as close, and
no substring of the subject containing S' is closer.
"""
from __future__ import annotations

from typing import Optional

from .matching import (
    Match,
    SeqLike,
    _as_bytes,
    nedit_for_ploffset,
    nmismatch_at_pshift,
    select_match_table,
)


def _first_matching_offsets(pattern: bytes, table) -> list[Optional[int]]:
    """For each byte, the offset of the first pattern letter it matches."""
    return [
        next((i for i, x in enumerate(pattern) if table[x][c]), None)
        for c in range(256)
    ]


class _BestLocalMatches:
    """Holds a provisory match until it is superseded or confirmed."""

    def __init__(self) -> None:
        self.matches: list[Match] = []
        self._pending: Optional[tuple[Match, int]] = None

    def offer(self, start: int, width: int, nedit: int) -> None:
        candidate = Match(start, width)
        if self._pending is not None:
            pending, pending_nedit = self._pending
            # Starts only grow, so a longer reach confirms the pending match.
            if candidate.end > pending.end:
                self.matches.append(pending)
            elif nedit > pending_nedit:
                return
        self._pending = (candidate, nedit)

    def flush(self) -> list[Match]:
        if self._pending is not None:
            self.matches.append(self._pending[0])
            self._pending = None
        return self.matches


def indel_matches(
    pattern: SeqLike,
    subject: SeqLike,
    max_nmis: int,
    fixed_pattern: bool = True,
    fixed_subject: bool = True,
) -> list[Match]:
    """Find the best local matches of ``pattern`` in ``subject``.

    Each match starts on a subject letter matching some pattern letter; the
    pattern letters before the first such one count as deletions.
    """
    p = _as_bytes(pattern)
    s = _as_bytes(subject)
    if not p:
        raise ValueError("empty pattern")
    table = select_match_table(fixed_pattern, fixed_subject)
    first_offset = _first_matching_offsets(p, table)
    best = _BestLocalMatches()
    for j0, c in enumerate(s):
        i0 = first_offset[c]
        if i0 is None:
            continue
        rest = p[i0 + 1:]
        budget = max_nmis - i0
        if budget < 0:
            continue
        if budget == 0:
            nedit = nmismatch_at_pshift(rest, s, j0 + 1, 0, table)
            width = len(rest)
        else:
            nedit, width = nedit_for_ploffset(rest, s, j0 + 1, budget, table)
        if nedit <= budget:
            best.offer(j0 + 1, width + 1, nedit + i0)
    return best.flush()