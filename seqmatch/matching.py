"""Low-level matching primitives.

Bytewise match tables, mismatch counting at a given pattern shift, a banded
edit distance with early bailout, and the "match pattern at" family of
functions built on top of them.
"""
from __future__ import annotations

import enum
import warnings
from dataclasses import dataclass
from functools import lru_cache
from itertools import combinations
from typing import Callable, Iterable, Optional, Sequence, Union

MAX_NEDIT = 100
_INT_MAX = 2**31 - 1

SeqLike = Union[bytes, bytearray, memoryview, str]
MatchTable = tuple  # 256 rows (pattern byte) of 256-byte rows (subject byte)


@dataclass(frozen=True, order=True)
class Match:
    """A match on a subject: 1-based start position and width."""

    start: int
    width: int

    @property
    def end(self) -> int:
        """1-based position of the last letter of the match."""
        return self.start + self.width - 1


class AtAnswer(enum.IntEnum):
    """Shape of the answer returned by the "match pattern at" functions."""

    COUNTS = 0  # number of mismatches for each position
    LOGICAL = 1  # whether there is a match at each position
    FIRST_INDEX = 2  # 1-based index in 'at' of the first match
    FIRST_VALUE = 3  # value in 'at' of the first match


def _as_bytes(seq: SeqLike) -> bytes:
    if isinstance(seq, str):
        return seq.encode("latin-1")
    return bytes(seq)


def _fixed_pair(fixed) -> tuple[bool, bool]:
    if isinstance(fixed, bool):
        return fixed, fixed
    fixed_pattern, fixed_subject = fixed
    return bool(fixed_pattern), bool(fixed_subject)


_RULES: dict[tuple[bool, bool], Callable[[int, int], bool]] = {
    (True, True): lambda x, y: x == y,
    (True, False): lambda x, y: (x & ~y) == 0,
    (False, True): lambda x, y: (~x & y) == 0,
    (False, False): lambda x, y: (x & y) != 0,
}


@lru_cache(maxsize=None)
def _build_table(fixed_pattern: bool, fixed_subject: bool) -> MatchTable:
    rule = _RULES[fixed_pattern, fixed_subject]
    return tuple(
        bytes(int(rule(x, y)) for y in range(256)) for x in range(256)
    )


def select_match_table(fixed_pattern: bool, fixed_subject: bool) -> MatchTable:
    """Return the bytewise match table for the given fixedness.

    ``table[p][s]`` is 1 when pattern byte ``p`` matches subject byte ``s``:
    equality when both sides are fixed, otherwise a bit-inclusion or
    bit-intersection rule on the IUPAC bit codes.
    """
    return _build_table(bool(fixed_pattern), bool(fixed_subject))


def nmismatch_at_pshift(
    pattern: SeqLike,
    subject: SeqLike,
    pshift: int,
    max_nmis: int,
    match_table: Optional[MatchTable] = None,
) -> int:
    """Count mismatches of ``pattern`` placed at 0-based ``pshift`` on ``subject``.

    Letters falling outside the subject count as mismatches. Counting stops
    once the count exceeds ``max_nmis``.
    """
    p = _as_bytes(pattern)
    s = _as_bytes(subject)
    table = match_table if match_table is not None else select_match_table(True, True)
    slen = len(s)
    nmis = 0
    for j, x in enumerate(p, start=pshift):
        if 0 <= j < slen and table[x][s[j]]:
            continue
        nmis += 1
        if nmis > max_nmis:
            break
    return nmis


def _propagate(curr, prev, b, si, y2val, s, slen, row_length) -> None:
    nedit = prev[b] + (si < 0 or si >= slen or not y2val[s[si]])
    if b >= 1 and curr[b - 1] + 1 < nedit:
        nedit = curr[b - 1] + 1
    if b + 1 < row_length and prev[b + 1] + 1 < nedit:
        nedit = prev[b + 1] + 1
    curr[b] = nedit


def _nedit_banded(pattern, subject, offset, max_nedit, match_table, step):
    p = _as_bytes(pattern)
    s = _as_bytes(subject)
    if not p:
        return 0, 0
    if max_nedit == 0:
        raise ValueError("use nmismatch_at_pshift() when 'max_nedit' is 0")
    if max_nedit < 0:
        raise ValueError("'max_nedit' must be non-negative")
    bailout = max_nedit + 1
    band = min(max_nedit, len(p))
    if band > MAX_NEDIT:
        raise ValueError("'max.nedit' too big")
    table = match_table if match_table is not None else select_match_table(True, True)
    letters = p if step == 1 else p[::-1]
    slen = len(s)
    row_length = 2 * band + 1
    prev = [0] * row_length
    curr = [0] * row_length
    curr[band:] = range(row_length - band)

    # Stage 1: the band is still filling up, no bailout possible.
    for a in range(1, band):
        y2val = table[letters[a - 1]]
        prev, curr = curr, prev
        b0 = band - a
        curr[b0] = a
        si = offset
        for b in range(b0 + 1, row_length):
            _propagate(curr, prev, b, si, y2val, s, slen, row_length)
            si += step

    # Stage 2: first full row, still no bailout.
    y2val = table[letters[band - 1]]
    prev, curr = curr, prev
    curr[0] = min_nedit = band
    min_width = 0
    si = offset
    for b in range(1, row_length):
        _propagate(curr, prev, b, si, y2val, s, slen, row_length)
        if curr[b] < min_nedit:
            min_nedit = curr[b]
            min_width = (si - offset) * step + 1
        si += step

    # Stage 3: remaining rows, with bailout.
    a = band + 1
    base = offset
    for pi in range(band, len(p)):
        y2val = table[letters[pi]]
        prev, curr = curr, prev
        min_nedit = a
        min_width = 0
        si = base
        for b in range(row_length):
            _propagate(curr, prev, b, si, y2val, s, slen, row_length)
            if curr[b] < min_nedit:
                min_nedit = curr[b]
                min_width = (si - offset) * step + 1
            si += step
        if min_nedit >= bailout:
            break
        a += 1
        base += step
    return min_nedit, min_width


def nedit_for_ploffset(
    pattern: SeqLike,
    subject: SeqLike,
    ploffset: int,
    max_nedit: int,
    match_table: Optional[MatchTable] = None,
) -> tuple[int, int]:
    """Smallest edit distance between ``pattern`` and substrings starting at ``ploffset``.

    Returns ``(nedit, min_width)`` where ``min_width`` is the width of the
    shortest such substring reaching that distance. Values above
    ``max_nedit`` are not reported accurately (early bailout).
    """
    return _nedit_banded(pattern, subject, ploffset, max_nedit, match_table, 1)


def nedit_for_proffset(
    pattern: SeqLike,
    subject: SeqLike,
    proffset: int,
    max_nedit: int,
    match_table: Optional[MatchTable] = None,
) -> tuple[int, int]:
    """Like :func:`nedit_for_ploffset` for substrings ending at ``proffset``."""
    return _nedit_banded(pattern, subject, proffset, max_nedit, match_table, -1)


def nedit_at(
    pattern: SeqLike,
    subject: SeqLike,
    at: int,
    at_end: bool,
    max_nmis: int,
    with_indels: bool,
    fixed=True,
) -> int:
    """Number of mismatches (or edits) of ``pattern`` at 1-based position ``at``.

    ``at`` is the position of the pattern's first letter, or of its last
    letter when ``at_end`` is true.
    """
    table = select_match_table(*_fixed_pair(fixed))
    p = _as_bytes(pattern)
    if not with_indels or max_nmis == 0:
        offset = at - len(p) if at_end else at - 1
        return nmismatch_at_pshift(p, subject, offset, max_nmis, table)
    nedit = nedit_for_proffset if at_end else nedit_for_ploffset
    return nedit(p, subject, at - 1, max_nmis, table)[0]


def _as_list(values) -> list:
    if values is None or isinstance(values, int):
        return [values]
    return list(values)


def _as_answer(answer) -> AtAnswer:
    try:
        return AtAnswer(answer)
    except ValueError:
        raise ValueError(f"invalid 'ans_type' value ({answer})") from None


def _check_mismatch_lengths(at_length, max_mm, min_mm, answer) -> None:
    limit = max(at_length, 1)
    if len(max_mm) > limit:
        warnings.warn(
            "'max_mismatch' is longer than 'at' (remaining elements are ignored)",
            stacklevel=3,
        )
    if len(min_mm) > limit:
        warnings.warn(
            "'min_mismatch' is longer than 'at' (remaining elements are ignored)",
            stacklevel=3,
        )
    if at_length == 0:
        return
    if not max_mm:
        raise ValueError("'max_mismatch' must have at least 1 element")
    if answer is AtAnswer.COUNTS:
        return
    if not min_mm:
        raise ValueError("'min_mismatch' must have at least 1 element")


def _match_at(p, s, at, at_end, max_mm, min_mm, with_indels, fixed, answer, auto_reduce):
    results: list = []
    n = len(at)
    for i, pos in enumerate(at, start=1):
        if pos is None:
            if answer <= AtAnswer.LOGICAL:
                results.append(None)
            continue
        max_nmis = max_mm[(i - 1) % len(max_mm)]
        if max_nmis is None:
            max_nmis = len(p)
        nmis = nedit_at(p, s, pos, at_end, max_nmis, with_indels, fixed)
        if auto_reduce and i < n:
            p = p[:-1] if at_end else p[1:]
        if answer is AtAnswer.COUNTS:
            results.append(nmis)
            continue
        min_nmis = min_mm[(i - 1) % len(min_mm)]
        if min_nmis is None:
            min_nmis = 0
        is_matching = min_nmis <= nmis <= max_nmis
        if answer is AtAnswer.LOGICAL:
            results.append(is_matching)
            continue
        if is_matching:
            return i if answer is AtAnswer.FIRST_INDEX else pos
    if answer >= AtAnswer.FIRST_INDEX:
        return None
    return results


def match_pattern_at(
    pattern: SeqLike,
    subject: SeqLike,
    at: Iterable[Optional[int]],
    at_end: bool = False,
    max_mismatch=0,
    min_mismatch=0,
    with_indels: bool = False,
    fixed=True,
    answer=AtAnswer.LOGICAL,
    auto_reduce_pattern: bool = False,
):
    """Test ``pattern`` against ``subject`` at each 1-based position in ``at``.

    ``max_mismatch`` and ``min_mismatch`` are recycled along ``at``; ``None``
    entries (in ``at`` or the bounds) play the role of missing values. The
    return value depends on ``answer`` (see :class:`AtAnswer`): a list for
    COUNTS and LOGICAL, an int or ``None`` for FIRST_INDEX and FIRST_VALUE.
    """
    answer = _as_answer(answer)
    at = list(at)
    max_mm = _as_list(max_mismatch)
    min_mm = _as_list(min_mismatch)
    _check_mismatch_lengths(len(at), max_mm, min_mm, answer)
    return _match_at(
        _as_bytes(pattern), _as_bytes(subject), at, at_end,
        max_mm, min_mm, with_indels, fixed, answer, auto_reduce_pattern,
    )


def vmatch_pattern_at(
    pattern: SeqLike,
    subjects: Iterable[SeqLike],
    at: Iterable[Optional[int]],
    at_end: bool = False,
    max_mismatch=0,
    min_mismatch=0,
    with_indels: bool = False,
    fixed=True,
    answer=AtAnswer.LOGICAL,
    auto_reduce_pattern: bool = False,
) -> list:
    """Apply :func:`match_pattern_at` to each subject; one result per subject."""
    answer = _as_answer(answer)
    at = list(at)
    max_mm = _as_list(max_mismatch)
    min_mm = _as_list(min_mismatch)
    _check_mismatch_lengths(len(at), max_mm, min_mm, answer)
    p = _as_bytes(pattern)
    return [
        _match_at(p, _as_bytes(s), at, at_end, max_mm, min_mm,
                  with_indels, fixed, answer, auto_reduce_pattern)
        for s in subjects
    ]


def hamming_distances(sequences: Sequence[SeqLike]) -> list[int]:
    """Pairwise Hamming distances, in the order (0,1), (0,2), ..., (n-2,n-1)."""
    seqs = [_as_bytes(x) for x in sequences]
    if len(seqs) < 2:
        return []
    width = len(seqs[0])
    if any(len(x) != width for x in seqs[1:]):
        raise ValueError("Hamming distance requires equal length strings")
    if len(seqs) * (len(seqs) - 1) // 2 > _INT_MAX:
        raise ValueError("result would be too big an object")
    return [
        nedit_at(x, y, 1, False, width, False, True)
        for x, y in combinations(seqs, 2)
    ]