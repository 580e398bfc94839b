"""Matching a set of patterns (a dictionary) against one or several subjects.

Each pattern is matched on its own with :func:`seqmatch.pattern.match_pattern`,
so patterns may have different lengths and any algorithm can be used.
"""
from __future__ import annotations

from numbers import Integral
from typing import Iterable, Optional, Sequence, Union

from .matching import Match, SeqLike, _as_bytes
from .pattern import Algorithm, _as_algorithm, match_pattern, match_pattern_views

Weight = Union[int, float, Sequence[Union[int, float]], None]


def match_patterns(
    patterns: Iterable[SeqLike],
    subject: SeqLike,
    max_mismatch: int = 0,
    min_mismatch: int = 0,
    fixed=True,
    algorithm: Union[str, Algorithm] = Algorithm.NAIVE_INEXACT,
) -> list[list[Match]]:
    """Match every pattern against ``subject``; one list of matches per pattern."""
    algo = _as_algorithm(algorithm)
    s = _as_bytes(subject)
    return [
        match_pattern(p, s, max_mismatch, min_mismatch, fixed, algo)
        for p in patterns
    ]


def match_patterns_views(
    patterns: Iterable[SeqLike],
    subject: SeqLike,
    views: Iterable[tuple[int, int]],
    max_mismatch: int = 0,
    min_mismatch: int = 0,
    fixed=True,
    algorithm: Union[str, Algorithm] = Algorithm.NAIVE_INEXACT,
) -> list[list[Match]]:
    """Like :func:`match_patterns` within each ``(start, width)`` view of ``subject``.

    Positions are relative to the whole subject.
    """
    algo = _as_algorithm(algorithm)
    s = _as_bytes(subject)
    views = list(views)
    return [
        match_pattern_views(p, s, views, max_mismatch, min_mismatch, fixed, algo)
        for p in patterns
    ]


def vwhich_patterns(
    patterns: Iterable[SeqLike],
    subjects: Iterable[SeqLike],
    max_mismatch: int = 0,
    min_mismatch: int = 0,
    fixed=True,
    algorithm: Union[str, Algorithm] = Algorithm.NAIVE_INEXACT,
) -> list[list[int]]:
    """For each subject, the 1-based indices (ascending) of the patterns that match it."""
    algo = _as_algorithm(algorithm)
    pats = [_as_bytes(p) for p in patterns]
    subs = [_as_bytes(s) for s in subjects]
    return [
        [
            i
            for i, p in enumerate(pats, start=1)
            if match_pattern(p, s, max_mismatch, min_mismatch, fixed, algo)
        ]
        for s in subs
    ]


def _weights(weight: Weight, length: int) -> list:
    if weight is None:
        return [1] * length
    if isinstance(weight, (Integral, float)):
        return [weight] * length
    values = list(weight)
    if len(values) != length:
        raise ValueError(f"'weight' must have {length} elements")
    return values


def _as_collapse(collapse) -> int:
    if collapse is None or collapse is False:
        return 0
    if collapse is True:
        return 1
    if collapse in (0, 1, 2):
        return int(collapse)
    raise ValueError("'collapse' must be FALSE, 1 or 2")


def vcount_patterns(
    patterns: Iterable[SeqLike],
    subjects: Iterable[SeqLike],
    max_mismatch: int = 0,
    min_mismatch: int = 0,
    fixed=True,
    algorithm: Union[str, Algorithm] = Algorithm.NAIVE_INEXACT,
    collapse=0,
    weight: Weight = None,
):
    """Count the matches of every pattern in every subject.

    With ``collapse`` 0 the result is a matrix (list of rows, one row per
    pattern, one column per subject). With ``collapse`` 1 the columns are
    summed, each weighted by the subject's ``weight``: one value per pattern.
    With ``collapse`` 2 the rows are summed, each weighted by the pattern's
    ``weight``: one value per subject. Weights default to 1.
    """
    algo = _as_algorithm(algorithm)
    mode = _as_collapse(collapse)
    pats = [_as_bytes(p) for p in patterns]
    subs = [_as_bytes(s) for s in subjects]
    counts = [
        [len(match_pattern(p, s, max_mismatch, min_mismatch, fixed, algo)) for s in subs]
        for p in pats
    ]
    if mode == 0:
        return counts
    if mode == 1:
        w = _weights(weight, len(subs))
        return [sum(c * wj for c, wj in zip(row, w)) for row in counts]
    w = _weights(weight, len(pats))
    return [
        sum(counts[i][j] * w[i] for i in range(len(pats)))
        for j in range(len(subs))
    ]