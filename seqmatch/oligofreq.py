"""Oligonucleotide frequencies of DNA sequences.

Counts are indexed by two-bit signature (see :class:`TwobitEncoder`), so
index ``i`` of a result corresponds to ``all_oligos(width, ...)[i]``.
"""
from __future__ import annotations

import warnings
from collections.abc import Mapping
from itertools import product
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from .matching import SeqLike, _as_bytes
from .twobit import BaseCodes, TwobitEncoder

_MAX_OLIGO_WIDTH = 15


def _is_inverted(fast_moving_side: str) -> bool:
    return fast_moving_side != "right"


def all_oligos(width: int, base_letters: Union[str, Sequence[str]] = "ACGT",
               invert: bool = False) -> list[str]:
    """All ``4 ** width`` words, in two-bit signature order.

    Without ``invert`` the rightmost letter moves fastest; with it the
    leftmost one does.
    """
    if width < 0:
        raise ValueError("'width' must be non-negative")
    if width > _MAX_OLIGO_WIDTH:
        raise ValueError("mk_all_oligos(): width >= sizeof(ans_elt_buf))")
    letters = list(base_letters)
    if len(letters) != 4:
        raise ValueError("mk_all_oligos(): 'base_letters' must be of length 4")
    if any(not letter for letter in letters):
        raise ValueError("'base_letters' elements must be non-empty")
    letters = [letter[0] for letter in letters]
    words = product(letters, repeat=width)
    if invert:
        return ["".join(reversed(w)) for w in words]
    return ["".join(w) for w in words]


def _count_into(counts: np.ndarray, x: SeqLike, encoder: TwobitEncoder, step: int) -> None:
    width = encoder.width
    encoder.reset()
    for i, byte in enumerate(_as_bytes(x)):
        signature = encoder.shift(byte)
        if signature is not None and (i - width + 1) % step == 0:
            counts[signature] += 1


def _normalized(counts: np.ndarray) -> np.ndarray:
    result = counts.astype(float)
    totals = result.sum(axis=-1, keepdims=True)
    np.divide(result, totals, out=result, where=totals != 0)
    return result


def _check_args(width: int, step: int) -> None:
    if width < 1:
        raise ValueError("'width' must be >= 1")
    if step < 1:
        raise ValueError("'step' must be >= 1")


def oligo_frequency(
    x: SeqLike,
    width: int,
    step: int = 1,
    base_codes: BaseCodes = "ACGT",
    as_prob: bool = False,
    fast_moving_side: str = "right",
) -> np.ndarray:
    """Counts (or frequencies with ``as_prob``) of the ``width``-letter words of ``x``.

    Windows start every ``step`` letters from the first; windows holding a
    non-base letter are not counted.
    """
    _check_args(width, step)
    encoder = TwobitEncoder(base_codes, width, _is_inverted(fast_moving_side))
    counts = np.zeros(4 ** width, dtype=np.int64)
    _count_into(counts, x, encoder, step)
    return _normalized(counts) if as_prob else counts


def oligo_frequency_set(
    xs: Iterable[SeqLike],
    width: int,
    step: int = 1,
    base_codes: BaseCodes = "ACGT",
    as_prob: bool = False,
    fast_moving_side: str = "right",
    simplify_as: str = "matrix",
):
    """Oligo frequencies of several sequences.

    ``simplify_as`` is "matrix" (one row per sequence), "collapsed" (one
    vector for all sequences) or anything else for a list of vectors.
    """
    _check_args(width, step)
    encoder = TwobitEncoder(base_codes, width, _is_inverted(fast_moving_side))
    seqs = list(xs)
    ncol = 4 ** width
    if simplify_as == "matrix":
        counts = np.zeros((len(seqs), ncol), dtype=np.int64)
        for row, x in zip(counts, seqs):
            _count_into(row, x, encoder, step)
        return _normalized(counts) if as_prob else counts
    if simplify_as == "collapsed":
        counts = np.zeros(ncol, dtype=np.int64)
        for x in seqs:
            _count_into(counts, x, encoder, step)
        return _normalized(counts) if as_prob else counts
    result = []
    for x in seqs:
        counts = np.zeros(ncol, dtype=np.int64)
        _count_into(counts, x, encoder, step)
        result.append(_normalized(counts) if as_prob else counts)
    return result


def nucleotide_frequency_at(
    xs: Iterable[SeqLike],
    at: Sequence[Optional[int]],
    base_codes: BaseCodes = "ACGT",
    as_prob: bool = False,
    fast_moving_side: str = "right",
) -> np.ndarray:
    """Frequencies of the words formed by the letters at 1-based positions ``at``.

    Sequences for which a position is ``None`` or out of limits, or points
    at a non-base letter, are skipped with a warning (once per kind).
    """
    positions = list(at)
    encoder = TwobitEncoder(base_codes, len(positions), _is_inverted(fast_moving_side))
    counts = np.zeros(4 ** len(positions), dtype=np.int64)
    warn_limits = warn_letters = True
    for x in xs:
        try:
            signature = encoder.signature_at(x, positions)
        except IndexError:
            if warn_limits:
                warnings.warn("'at' contains NAs or \"out of limits\" locations",
                              stacklevel=2)
                warn_limits = False
            continue
        if signature is None:
            if warn_letters:
                warnings.warn("'at' points at non DNA/RNA base letters", stacklevel=2)
                warn_letters = False
            continue
        counts[signature] += 1
    return _normalized(counts) if as_prob else counts


def base_labels(base_codes: BaseCodes) -> Optional[list[str]]:
    """Letters naming the four bases, when ``base_codes`` carries them."""
    if isinstance(base_codes, Mapping):
        return [str(key) for key in base_codes]
    if isinstance(base_codes, str):
        return list(base_codes)
    if isinstance(base_codes, (bytes, bytearray)):
        return list(bytes(base_codes).decode("latin-1"))
    return None