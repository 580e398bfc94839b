"""Boyer-Moore-like exact matching.

The pattern is preprocessed lazily: "very strong good suffix" (VSGS) shifts
and "matching window" (MW) shifts are computed on demand and cached on the
:class:`PreprocessedPattern` instance.
"""
from __future__ import annotations

from typing import Optional, Union

from .matching import Match, SeqLike, _as_bytes

MAX_PATTERN_LENGTH = 20000


class PreprocessedPattern:
    """A pattern (reversed when walking backward) with its shift tables.

    ``j0`` is the start of the smallest suffix of the pattern that does not
    occur inside ``pattern[1:-1]`` and ``shift0`` is the smallest shift of
    the whole pattern onto itself (its smallest period).
    """

    def __init__(self, pattern: SeqLike, walk_backward: bool = False) -> None:
        seq = _as_bytes(pattern)
        if not seq:
            raise ValueError("empty pattern")
        if len(seq) > MAX_PATTERN_LENGTH:
            raise ValueError("pattern is too long")
        self.walk_backward = bool(walk_backward)
        self.seq = seq[::-1] if self.walk_backward else seq
        self._vsgs: dict[tuple[int, int], int] = {}
        self._mw: dict[tuple[int, int], int] = {}
        self.j0, self.shift0 = self._compute_j0_shift0()

    def __len__(self) -> int:
        return len(self.seq)

    def _compute_j0_shift0(self) -> tuple[int, int]:
        seq = self.seq
        n = len(seq)
        length = 1
        j0 = n - 1
        for j in range(j0 - 1, 0, -1):
            if seq[j:j + length] == seq[j0:j0 + length]:
                length += 1
                j0 -= 1
        last_j = 0 if n >= 2 else -1
        shift0 = j0 - last_j
        while shift0 < n:
            if seq[:length] == seq[shift0:shift0 + length]:
                break
            shift0 += 1
            length -= 1
        return j0, shift0

    def vsgs_shift(self, c: Union[int, str], j: int) -> int:
        """Shift to apply after letter ``c`` of the subject mismatched ``seq[j]``."""
        if isinstance(c, str):
            c = ord(c)
        seq = self.seq
        n = len(seq)
        if not 0 <= j < n:
            raise ValueError("'j' must be a valid offset in the pattern")
        if j < self.j0:
            return self.shift0
        key = (c, j)
        cached = self._vsgs.get(key)
        if cached is not None:
            return cached
        for shift in range(1, n):
            if shift <= j:
                k = j - shift
                if seq[k] != c:
                    continue
                k1 = k + 1
            else:
                k1 = 0
            k2 = n - shift
            if k1 == k2 or seq[k1:k2] == seq[k1 + shift:k2 + shift]:
                break
        else:
            shift = n
        self._vsgs[key] = shift
        return shift

    def mw_shift(self, j1: int, j2: int) -> int:
        """Smallest shift keeping the matching window ``seq[j1:j2]`` consistent."""
        seq = self.seq
        if not 0 <= j1 < j2 <= len(seq):
            raise ValueError("invalid matching window")
        key = (j1, j2)
        cached = self._mw.get(key)
        if cached is not None:
            return cached
        for shift in range(1, j2):
            k1 = j1 - shift if shift < j1 else 0
            k2 = j2 - shift
            if seq[k1:k2] == seq[k1 + shift:k2 + shift]:
                break
        else:
            shift = j2
        self._mw[key] = shift
        return shift


def boyermoore_matches(
    pattern: SeqLike,
    subject: SeqLike,
    max_matches: Optional[int] = None,
    walk_backward: bool = False,
) -> list[Match]:
    """Find the exact occurrences of ``pattern`` in ``subject``.

    Matches are returned in the order they are found: left to right, or
    right to left when ``walk_backward`` is true. When ``max_matches`` is a
    non-negative integer the search stops as soon as that many matches have
    been found (at least one is always reported if any exists).
    """
    pp = PreprocessedPattern(pattern, walk_backward)
    s = _as_bytes(subject)
    if walk_backward:
        s = s[::-1]
    seq = pp.seq
    m = len(seq)
    slen = len(s)
    rightmost = seq[m - 1]
    matches: list[Match] = []
    n = m - 1
    while n < slen:
        c = s[n]
        if c != rightmost:
            n += pp.vsgs_shift(c, m - 1)
            continue
        i = n - 1
        j = m - 2
        while j >= 0:
            c = s[i]
            if c != seq[j]:
                break
            i -= 1
            j -= 1
        i1 = i + 1
        j1 = j + 1
        if j1 == 0:
            if walk_backward:
                end = slen - i1
                start = end - m + 1
            else:
                start = i1 + 1
            matches.append(Match(start, m))
            if max_matches is not None and 0 <= max_matches <= len(matches):
                break
            shift = pp.shift0
        else:
            shift = pp.vsgs_shift(c, j1 - 1)
        n += shift
    return matches