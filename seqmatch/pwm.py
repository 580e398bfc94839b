"""Position weight matrix scoring and matching.

A PWM is a 4-row matrix of weights, one column per pattern position; its
rows correspond, in order, to the four bytes given as ``base_codes``.
Subject letters outside those four get weight 0 (with a warning).
"""
from __future__ import annotations

import warnings
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from .matching import Match, SeqLike, _as_bytes

_UNKNOWN_ROW = 4
_NON_BASE_WARNING = (
    "'subject' contains letters not in [ACGT] ==> assigned weight 0 to them"
)

BaseCodes = Union[str, bytes, Sequence[int]]


def _row_table(base_codes: BaseCodes) -> np.ndarray:
    codes = list(_as_bytes(base_codes)) if isinstance(base_codes, (str, bytes)) else list(base_codes)
    if len(codes) != 4:
        raise ValueError("'base_codes' must have 4 elements")
    if len(set(codes)) != 4:
        raise ValueError("'base_codes' contains duplicated values")
    table = np.full(256, _UNKNOWN_ROW, dtype=np.intp)
    for row, code in enumerate(codes):
        table[code] = row
    return table


def _as_pwm(pwm) -> np.ndarray:
    matrix = np.asarray(pwm, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != 4:
        raise ValueError("'pwm' must have 4 rows")
    # An extra row of zeros gives weight 0 to non-base letters.
    return np.vstack([matrix, np.zeros((1, matrix.shape[1]))])


class _Scorer:
    def __init__(self, pwm, subject: SeqLike, base_codes: BaseCodes) -> None:
        self.weights = _as_pwm(pwm)
        self.ncol = self.weights.shape[1]
        table = _row_table(base_codes)
        self.rows = table[np.frombuffer(_as_bytes(subject), dtype=np.uint8)]
        self._warned = False

    def _check_rows(self, rows: np.ndarray) -> None:
        if not self._warned and self.ncol and (rows == _UNKNOWN_ROW).any():
            warnings.warn(_NON_BASE_WARNING, stacklevel=4)
            self._warned = True

    def score(self, shift: int) -> float:
        if shift < 0 or len(self.rows) - shift < self.ncol:
            raise ValueError("'starting.at' contains invalid values")
        rows = self.rows[shift:shift + self.ncol]
        self._check_rows(rows)
        total = 0.0
        for col, row in enumerate(rows):
            total += float(self.weights[row, col])
        return total

    def matches(self, offset: int, width: int, min_score: float) -> list[Match]:
        nstart = width - self.ncol + 1
        if nstart <= 0:
            return []
        segment = self.rows[offset:offset + width]
        self._check_rows(segment)
        scores = np.zeros(nstart)
        for col in range(self.ncol):
            scores += self.weights[segment[col:col + nstart], col]
        return [
            Match(int(n1) + 1 + offset, self.ncol)
            for n1 in np.flatnonzero(scores >= min_score)
        ]


def pwm_score_starting_at(
    pwm,
    subject: SeqLike,
    starting_at: Iterable[Optional[int]],
    base_codes: BaseCodes = "ACGT",
) -> list[Optional[float]]:
    """Score ``pwm`` against ``subject`` at each 1-based start position.

    ``None`` positions give ``None``; a window not fully inside the subject
    raises :class:`ValueError`.
    """
    scorer = _Scorer(pwm, subject, base_codes)
    return [None if start is None else scorer.score(start - 1) for start in starting_at]


def match_pwm(
    pwm,
    subject: SeqLike,
    min_score: float,
    base_codes: BaseCodes = "ACGT",
) -> list[Match]:
    """Windows of ``subject`` whose PWM score is at least ``min_score``."""
    scorer = _Scorer(pwm, subject, base_codes)
    return scorer.matches(0, len(scorer.rows), min_score)


def match_pwm_views(
    pwm,
    subject: SeqLike,
    views: Iterable[tuple[int, int]],
    min_score: float,
    base_codes: BaseCodes = "ACGT",
) -> list[Match]:
    """Like :func:`match_pwm` within each ``(start, width)`` view of ``subject``.

    Match positions are relative to the whole subject; matches from all
    views are returned in view order.
    """
    scorer = _Scorer(pwm, subject, base_codes)
    matches: list[Match] = []
    for start, width in views:
        offset = start - 1
        if offset < 0 or offset + width > len(scorer.rows):
            raise ValueError("'subject' has \"out of limits\" views")
        matches.extend(scorer.matches(offset, width, min_score))
    return matches