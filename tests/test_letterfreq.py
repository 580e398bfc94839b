import numpy as np
import pytest
from hypothesis import given, strategies as st

from seqmatch.letterfreq import (
    consensus_matrix,
    letter_frequency,
    letter_frequency_by_colmap,
    letter_frequency_in_sliding_view,
    letter_frequency_set,
)

dna = st.text(alphabet="ACGTN", max_size=30)


def test_all_bytes_counted_without_codes():
    counts = letter_frequency("AAC")
    assert counts.shape == (256,)
    assert counts[ord("A")] == 2
    assert counts.sum() == 3


@given(dna)
def test_with_other_counts_every_letter(x):
    counts = letter_frequency(x, "ACGT", with_other=True)
    assert counts.shape == (5,)
    assert counts.sum() == len(x)
    assert counts[:4].sum() == letter_frequency(x, "ACGT").sum()


@given(st.lists(dna, max_size=5))
def test_set_collapse_is_sum_of_rows(xs):
    matrix = letter_frequency_set(xs, False, "ACGT", True)
    collapsed = letter_frequency_set(xs, True, "ACGT", True)
    assert matrix.shape == (len(xs), 5)
    assert np.array_equal(matrix.sum(axis=0), collapsed)
    for row, x in zip(matrix, xs):
        assert np.array_equal(row, letter_frequency(x, "ACGT", True))


@given(dna.filter(lambda s: len(s) >= 3), st.integers(1, 3))
def test_sliding_view_matches_windows(x, k):
    result = letter_frequency_in_sliding_view(x, k, "ACGT")
    windows = [x[i:i + k] for i in range(len(x) - k + 1)]
    assert np.array_equal(result, letter_frequency_by_colmap(windows, "ACGT"))


def test_sliding_view_too_short():
    with pytest.raises(ValueError, match="too short"):
        letter_frequency_in_sliding_view("AC", 3, "ACGT")


def test_colmap_length_mismatch():
    with pytest.raises(ValueError, match="differ"):
        letter_frequency_by_colmap(["ACGT"], "ACGT", [1, 2])


@given(st.lists(dna, max_size=4))
def test_colmap_merges_columns(xs):
    merged = letter_frequency_by_colmap(xs, "ACGT", [1, 2, 2, 1])
    plain = letter_frequency_set(xs, False, "ACGT")
    assert merged.shape == (len(xs), 2)
    assert np.array_equal(merged[:, 0], plain[:, 0] + plain[:, 3])
    assert np.array_equal(merged[:, 1], plain[:, 1] + plain[:, 2])


def test_colmap_collapse():
    xs = ["ACGT", "AAN"]
    collapsed = letter_frequency_by_colmap(xs, "ACGT", [1, 2, 2, 1], collapse=True)
    assert np.array_equal(collapsed, letter_frequency_by_colmap(xs, "ACGT", [1, 2, 2, 1]).sum(axis=0))


@given(st.lists(dna, min_size=1, max_size=5))
def test_consensus_column_sums(xs):
    matrix = consensus_matrix(xs, 0, None, "ACGT", True)
    ncol = max(len(x) for x in xs)
    assert matrix.shape == (5, ncol)
    for j in range(ncol):
        assert matrix[:, j].sum() == sum(len(x) > j for x in xs)


def test_consensus_negative_shift_clips():
    assert np.array_equal(
        consensus_matrix(["ACGT"], -1, 3, "ACGT"),
        consensus_matrix(["CGT"], 0, None, "ACGT"),
    )


def test_consensus_width_truncates():
    full = consensus_matrix(["ACGTA", "GG"], [0, 2], None, "ACGT")
    cut = consensus_matrix(["ACGTA", "GG"], [0, 2], 3, "ACGT")
    assert np.array_equal(cut, full[:, :3])


def test_consensus_errors():
    with pytest.raises(ValueError, match="no element"):
        consensus_matrix([], 0, None)
    with pytest.raises(ValueError, match="NAs"):
        consensus_matrix(["AC"], None)
    with pytest.raises(ValueError, match="'shift' has no element"):
        consensus_matrix(["AC"], [], 2)


def test_duplicated_codes():
    with pytest.raises(ValueError, match="duplicated"):
        letter_frequency("ACGT", "AAC")