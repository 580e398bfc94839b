import numpy as np
import pytest
from hypothesis import given, strategies as st

from seqmatch.oligofreq import (
    all_oligos,
    base_labels,
    nucleotide_frequency_at,
    oligo_frequency,
    oligo_frequency_set,
)


def test_all_oligos_width_one():
    assert all_oligos(1, "ACGT", False) == ["A", "C", "G", "T"]


def test_all_oligos_order():
    assert all_oligos(2, "ACGT", False)[:4] == ["AA", "AC", "AG", "AT"]
    assert all_oligos(2, "ACGT", True)[:4] == ["AA", "CA", "GA", "TA"]


def test_all_oligos_unique():
    words = all_oligos(3, "ACGT", False)
    assert len(set(words)) == len(words) == 4 ** 3


def test_all_oligos_errors():
    with pytest.raises(ValueError):
        all_oligos(16, "ACGT", False)
    with pytest.raises(ValueError):
        all_oligos(2, "ACG", False)


@pytest.mark.parametrize("side", ["right", "left"])
def test_oligo_index_round_trip(side):
    words = all_oligos(3, "ACGT", side != "right")
    for index, word in enumerate(words):
        counts = oligo_frequency(word, 3, fast_moving_side=side)
        assert counts.sum() == 1
        assert counts[index] == 1


def test_mononucleotides():
    assert oligo_frequency("ACGT", 1).tolist() == [1, 1, 1, 1]


def test_step():
    words = all_oligos(2, "ACGT", False)
    counts = oligo_frequency("ACGTACGT", 2, step=2)
    assert counts.sum() == 4
    assert counts[words.index("AC")] == 2
    assert counts[words.index("GT")] == 2


def test_non_base_windows_skipped():
    words = all_oligos(2, "ACGT", False)
    counts = oligo_frequency("ACNGT", 2)
    assert counts.sum() == 2
    assert counts[words.index("AC")] == counts[words.index("GT")] == 1


@given(st.text(alphabet="ACGT", min_size=0, max_size=30), st.integers(1, 4))
def test_window_count_invariant(seq, width):
    counts = oligo_frequency(seq, width)
    assert counts.sum() == max(len(seq) - width + 1, 0)


def test_as_prob():
    freqs = oligo_frequency("ACGTTGCA", 2, as_prob=True)
    assert freqs.sum() == pytest.approx(1.0)
    empty = oligo_frequency("NNN", 2, as_prob=True)
    assert not empty.any()


def test_bad_step():
    with pytest.raises(ValueError):
        oligo_frequency("ACGT", 2, step=0)


def test_set_shapes_agree():
    seqs = ["ACGT", "GGGA", "TTAC"]
    matrix = oligo_frequency_set(seqs, 2)
    assert matrix.shape == (3, 16)
    for row, seq in zip(matrix, seqs):
        assert row.tolist() == oligo_frequency(seq, 2).tolist()
    collapsed = oligo_frequency_set(seqs, 2, simplify_as="collapsed")
    assert collapsed.tolist() == matrix.sum(axis=0).tolist()
    listed = oligo_frequency_set(seqs, 2, simplify_as="list")
    assert [x.tolist() for x in listed] == matrix.tolist()


def test_set_matrix_rows_normalized():
    matrix = oligo_frequency_set(["ACGT", "NNNN"], 2, as_prob=True)
    assert matrix[0].sum() == pytest.approx(1.0)
    assert not matrix[1].any()


def test_nucleotide_frequency_at():
    words = all_oligos(2, "ACGT", False)
    with pytest.warns(UserWarning, match="non DNA/RNA"):
        counts = nucleotide_frequency_at(["ACG", "ACT", "NCG"], [1, 2])
    assert counts.sum() == 2
    assert counts[words.index("AC")] == 2


def test_nucleotide_frequency_at_out_of_limits():
    with pytest.warns(UserWarning, match="out of limits"):
        counts = nucleotide_frequency_at(["ACG", "ACGTA"], [1, 5])
    assert counts.sum() == 1


def test_base_labels():
    assert base_labels("ACGT") == ["A", "C", "G", "T"]
    assert base_labels([1, 2, 4, 8]) is None