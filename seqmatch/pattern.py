"""Exact and inexact matching of one pattern against subjects."""
from __future__ import annotations

import enum
from typing import Iterable, Union

from .boyermoore import boyermoore_matches
from .indels import indel_matches
from .matching import (
    Match,
    SeqLike,
    _as_bytes,
    _fixed_pair,
    nmismatch_at_pshift,
    select_match_table,
)
from .shiftor import shiftor_matches


class Algorithm(str, enum.Enum):
    """Matching algorithms understood by :func:`match_pattern`."""

    NAIVE_EXACT = "naive-exact"
    NAIVE_INEXACT = "naive-inexact"
    BOYER_MOORE = "boyer-moore"
    SHIFT_OR = "shift-or"
    INDELS = "indels"


def _as_algorithm(algorithm: Union[str, Algorithm]) -> Algorithm:
    try:
        return Algorithm(algorithm)
    except ValueError:
        raise ValueError(f'"{algorithm}": unknown algorithm') from None


def _naive_exact(p: bytes, s: bytes) -> list[Match]:
    if not p:
        raise ValueError("empty pattern")
    matches = []
    start = s.find(p)
    while start != -1:
        matches.append(Match(start + 1, len(p)))
        start = s.find(p, start + 1)
    return matches


def _naive_inexact(p: bytes, s: bytes, max_nmis: int, min_nmis: int, fixed) -> list[Match]:
    if not p:
        raise ValueError("empty pattern")
    table = select_match_table(*fixed)
    plen = len(p)
    min_pshift = 1 - plen if plen <= max_nmis else -max_nmis
    last_pshift = len(s) - min_pshift - plen
    return [
        Match(pshift + 1, plen)
        for pshift in range(min_pshift, last_pshift + 1)
        if min_nmis <= nmismatch_at_pshift(p, s, pshift, max_nmis, table) <= max_nmis
    ]


def _match_one(p: bytes, s: bytes, max_nmis, min_nmis, fixed, algo: Algorithm) -> list[Match]:
    if max_nmis < len(p) - len(s) or min_nmis > len(p):
        return []
    if len(p) <= max_nmis or algo is Algorithm.NAIVE_INEXACT:
        return _naive_inexact(p, s, max_nmis, min_nmis, fixed)
    if algo is Algorithm.NAIVE_EXACT:
        return _naive_exact(p, s)
    if algo is Algorithm.BOYER_MOORE:
        return boyermoore_matches(p, s)
    if algo is Algorithm.SHIFT_OR:
        return shiftor_matches(p, s, max_nmis, *fixed)
    return indel_matches(p, s, max_nmis, *fixed)


def match_pattern(
    pattern: SeqLike,
    subject: SeqLike,
    max_mismatch: int = 0,
    min_mismatch: int = 0,
    fixed=True,
    algorithm: Union[str, Algorithm] = Algorithm.NAIVE_INEXACT,
) -> list[Match]:
    """Find the matches of ``pattern`` in ``subject``.

    Without indels all matches have the width of the pattern; with the
    "indels" algorithm only best local matches are reported. A pattern no
    longer than ``max_mismatch`` is always matched with the naive inexact
    method.
    """
    algo = _as_algorithm(algorithm)
    return _match_one(
        _as_bytes(pattern), _as_bytes(subject),
        max_mismatch, min_mismatch, _fixed_pair(fixed), algo,
    )


def match_pattern_views(
    pattern: SeqLike,
    subject: SeqLike,
    views: Iterable[tuple[int, int]],
    max_mismatch: int = 0,
    min_mismatch: int = 0,
    fixed=True,
    algorithm: Union[str, Algorithm] = Algorithm.NAIVE_INEXACT,
) -> list[Match]:
    """Like :func:`match_pattern` within each ``(start, width)`` view.

    Positions are relative to the whole subject; matches are returned in
    view order.
    """
    algo = _as_algorithm(algorithm)
    p = _as_bytes(pattern)
    s = _as_bytes(subject)
    fixed_pair = _fixed_pair(fixed)
    matches: list[Match] = []
    for start, width in views:
        offset = start - 1
        if offset < 0 or offset + width > len(s):
            raise ValueError("'subject' has \"out of limits\" views")
        view = s[offset:offset + width]
        matches.extend(
            Match(m.start + offset, m.width)
            for m in _match_one(p, view, max_mismatch, min_mismatch, fixed_pair, algo)
        )
    return matches


def vmatch_pattern(
    pattern: SeqLike,
    subjects: Iterable[SeqLike],
    max_mismatch: int = 0,
    min_mismatch: int = 0,
    fixed=True,
    algorithm: Union[str, Algorithm] = Algorithm.NAIVE_INEXACT,
) -> list[list[Match]]:
    """Apply :func:`match_pattern` to each subject; one list of matches per subject."""
    algo = _as_algorithm(algorithm)
    p = _as_bytes(pattern)
    fixed_pair = _fixed_pair(fixed)
    return [
        _match_one(p, _as_bytes(s), max_mismatch, min_mismatch, fixed_pair, algo)
        for s in subjects
    ]