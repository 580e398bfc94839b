"""The shift-or (bitap) algorithm for matching with substitutions.

Bit masks are machine words of :data:`WORD_BITS` bits. The last letter of
the pattern maps to the lowest bit. Matches that start before the first
letter or end after the last letter of the subject are found as well.
"""
from __future__ import annotations

from .matching import Match, SeqLike, _as_bytes

WORD_BITS = 64
_WORD_MASK = (1 << WORD_BITS) - 1


def _pmask_map(pattern: bytes, fixed: bool) -> list[int]:
    """For each byte, a mask with a bit at 1 where the pattern does NOT match it."""
    pmasks = []
    for code in range(256):
        pmask = 0
        for x in pattern:
            pmask <<= 1
            mismatch = x != code if fixed else (x & code) == 0
            if mismatch:
                pmask |= 1
        pmasks.append(pmask)
    return pmasks


def _update_masks(masks: list[int], pmask: int) -> None:
    shifted = masks[0] >> 1
    masks[0] = shifted | pmask
    for e in range(1, len(masks)):
        previous = shifted
        shifted = masks[e] >> 1
        masks[e] = (shifted | pmask) & previous & masks[e - 1]


def shiftor_matches(
    pattern: SeqLike,
    subject: SeqLike,
    max_nmis: int = 0,
    fixed_pattern: bool = True,
    fixed_subject: bool = True,
) -> list[Match]:
    """Find the occurrences of ``pattern`` in ``subject`` with at most ``max_nmis`` mismatches.

    Letters outside the subject count as mismatches, so matches may start
    before position 1. The pattern must fit in a machine word and both
    sides must be equally fixed.
    """
    p = _as_bytes(pattern)
    s = _as_bytes(subject)
    if len(p) > WORD_BITS:
        raise ValueError("pattern is too long")
    if bool(fixed_pattern) != bool(fixed_subject):
        raise ValueError("fixedP != fixedS not supported by shift-or algo")
    if not p:
        raise ValueError("empty pattern")
    if max_nmis < 0:
        raise ValueError("'max_nmis' must be non-negative")
    plen = len(p)
    slen = len(s)
    pmasks = _pmask_map(p, bool(fixed_pattern))
    masks = [(1 << plen) - 1]
    for _ in range(max_nmis):
        masks.append(masks[-1] >> 1)
    matches: list[Match] = []
    for rpos in range(slen + plen - 1):
        pmask = pmasks[s[rpos]] if rpos < slen else _WORD_MASK
        _update_masks(masks, pmask)
        if any(mask & 1 == 0 for mask in masks):
            matches.append(Match(rpos - plen + 2, plen))
    return matches