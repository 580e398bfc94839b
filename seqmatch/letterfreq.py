"""Letter frequencies of sequences and sets of sequences.

``codes`` selects the letters to count and gives the column order: ``None``
counts every byte (256 columns). Otherwise it is a string or bytes of
letters, a sequence of byte values, or a mapping whose values are letters or
byte values. With ``with_other`` an extra last column counts every letter
not listed in ``codes``.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from .matching import SeqLike, _as_bytes

Codes = Union[None, str, bytes, Sequence[int], Mapping]


def _code_list(codes: Codes) -> list[int]:
    if isinstance(codes, Mapping):
        values = list(codes.values())
    elif isinstance(codes, (str, bytes, bytearray)):
        values = list(_as_bytes(codes))
    else:
        values = list(codes)
    result = [ord(v) if isinstance(v, str) else int(v) for v in values]
    if any(not 0 <= code < 256 for code in result):
        raise ValueError("codes must be byte values")
    return result


def _offset_table(codes: Codes, with_other: bool = False) -> tuple[np.ndarray, int]:
    """Map each byte to its column (-1 when not counted); also return the width."""
    if codes is None:
        return np.arange(256, dtype=np.intp), 256
    table = np.full(256, -1, dtype=np.intp)
    code_list = _code_list(codes)
    for column, code in enumerate(code_list):
        if table[code] != -1:
            raise ValueError("duplicated codes")
        table[code] = column
    width = len(code_list)
    if with_other:
        table[table == -1] = width
        width += 1
    return table, width


def _offsets(seq: SeqLike, table: np.ndarray) -> np.ndarray:
    data = _as_bytes(seq)
    if not data:
        return np.empty(0, dtype=np.intp)
    return table[np.frombuffer(data, dtype=np.uint8)]


def _count(offsets: np.ndarray, width: int) -> np.ndarray:
    return np.bincount(offsets[offsets >= 0], minlength=width).astype(np.int64)


def _colmap_table(single_codes: Codes, colmap) -> tuple[np.ndarray, int]:
    table, width = _offset_table(single_codes)
    if colmap is None:
        return table, width
    codes = _code_list(single_codes)
    columns = [int(c) for c in colmap]
    if len(codes) != len(columns):
        raise ValueError("lengths of 'single_codes' and 'colmap' differ")
    if any(c < 1 for c in columns):
        raise ValueError("'colmap' values must be >= 1")
    for code, column in zip(codes, columns):
        table[code] = column - 1
    return table, max(columns, default=0)


def letter_frequency(x: SeqLike, codes: Codes = None, with_other: bool = False) -> np.ndarray:
    """Count the letters of ``x``; one value per column."""
    table, width = _offset_table(codes, with_other)
    return _count(_offsets(x, table), width)


def _frequencies(xs: Iterable[SeqLike], table: np.ndarray, width: int,
                 collapse: bool) -> np.ndarray:
    rows = [_count(_offsets(x, table), width) for x in xs]
    if collapse:
        return np.sum(rows, axis=0, dtype=np.int64) if rows else np.zeros(width, np.int64)
    if not rows:
        return np.zeros((0, width), dtype=np.int64)
    return np.vstack(rows)


def letter_frequency_set(
    xs: Iterable[SeqLike],
    collapse: bool = False,
    codes: Codes = None,
    with_other: bool = False,
) -> np.ndarray:
    """Letter counts of several sequences.

    A matrix with one row per sequence, or a single vector with ``collapse``.
    """
    table, width = _offset_table(codes, with_other)
    return _frequencies(xs, table, width, collapse)


def letter_frequency_in_sliding_view(
    x: SeqLike,
    view_width: int,
    single_codes: Codes,
    colmap: Optional[Sequence[int]] = None,
) -> np.ndarray:
    """Letter counts in every window of ``view_width`` letters of ``x``.

    One row per window start. ``colmap`` gives, for each code, its 1-based
    column; several codes may share a column.
    """
    offsets = _offsets(x, np.zeros(256, dtype=np.intp))  # length only
    nrow = len(offsets) - view_width + 1
    if view_width < 1 or nrow < 1:
        raise ValueError("'x' is too short or 'view.width' is too big")
    table, width = _colmap_table(single_codes, colmap)
    offsets = _offsets(x, table)
    onehot = np.zeros((len(offsets) + 1, width), dtype=np.int64)
    positions = np.flatnonzero(offsets >= 0)
    onehot[positions + 1, offsets[positions]] = 1
    cumulative = np.cumsum(onehot, axis=0)
    return cumulative[view_width:view_width + nrow] - cumulative[:nrow]


def letter_frequency_by_colmap(
    xs: Iterable[SeqLike],
    single_codes: Codes,
    colmap: Optional[Sequence[int]] = None,
    collapse: bool = False,
) -> np.ndarray:
    """Like :func:`letter_frequency_set` with columns remapped by ``colmap``."""
    table, width = _colmap_table(single_codes, colmap)
    return _frequencies(xs, table, width, collapse)


def _shifts(shift) -> list:
    if shift is None or isinstance(shift, int):
        return [shift]
    return list(shift)


def consensus_matrix(
    xs: Iterable[SeqLike],
    shift=0,
    width: Optional[int] = None,
    codes: Codes = None,
    with_other: bool = False,
) -> np.ndarray:
    """Letter counts per position of aligned sequences.

    Each sequence is placed at 0-based ``shift`` (recycled along ``xs``);
    letters falling outside ``[0, width)`` are dropped. Without ``width``
    the matrix is wide enough for the rightmost letter. Rows are codes,
    columns are positions.
    """
    seqs = [_as_bytes(x) for x in xs]
    shifts = _shifts(shift)
    table, nrow = _offset_table(codes, with_other)
    if width is None:
        if not seqs:
            raise ValueError("'x' has no element and 'width' is NULL")
        if not shifts:
            raise ValueError("'shift' has no element")
    elif seqs and not shifts:
        raise ValueError("'shift' has no element")
    placed = []
    for k, seq in enumerate(seqs):
        s = shifts[k % len(shifts)]
        if s is None:
            raise ValueError("'shift' contains NAs")
        placed.append((seq, s))
    if width is None:
        ncol = max([0] + [len(seq) + s for seq, s in placed])
    else:
        if width < 0:
            raise ValueError("'width' must be non-negative")
        ncol = width
    matrix = np.zeros((nrow, ncol), dtype=np.int64)
    for seq, s in placed:
        i1 = max(0, -s)
        i2 = min(len(seq), ncol - s)
        if i1 >= i2:
            continue
        offsets = _offsets(seq[i1:i2], table)
        columns = np.arange(i1, i2) + s
        valid = offsets >= 0
        np.add.at(matrix, (offsets[valid], columns[valid]), 1)
    return matrix