import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from seqmatch.boyermoore import PreprocessedPattern, boyermoore_matches
from seqmatch.matching import Match


def _occurrences(pattern: str, subject: str) -> list[int]:
    return [
        k + 1
        for k in range(len(subject) - len(pattern) + 1)
        if subject.startswith(pattern, k)
    ]


def test_empty_pattern_raises():
    with pytest.raises(ValueError, match="empty pattern"):
        boyermoore_matches("", "ACGT")


def test_too_long_pattern_raises():
    with pytest.raises(ValueError, match="too long"):
        boyermoore_matches("A" * 20001, "A" * 20001)


def test_overlapping_matches():
    assert boyermoore_matches("aa", "aaa") == [Match(1, 2), Match(2, 2)]


def test_bytes_and_str_agree():
    assert boyermoore_matches(b"GAT", b"GATGATTGAT") == boyermoore_matches(
        "GAT", "GATGATTGAT"
    )


def test_no_match_in_short_subject():
    assert boyermoore_matches("ACGT", "ACG") == []


@pytest.mark.parametrize(
    "j1, j2, expected",
    [
        (0, 1, 1),
        (1, 2, 2),
        (2, 3, 3),
        (3, 4, 3),
        (2, 4, 3),
        (1, 4, 3),
        (0, 4, 3),
        (4, 5, 2),
        (5, 6, 2),
        (4, 6, 2),
        (0, 6, 5),
    ],
)
def test_mw_shift_documented_example(j1, j2, expected):
    pp = PreprocessedPattern("acbaba")
    assert pp.mw_shift(j1, j2) == expected


def test_mw_shift_rejects_bad_window():
    pp = PreprocessedPattern("acbaba")
    with pytest.raises(ValueError):
        pp.mw_shift(3, 3)


def test_vsgs_shift_rejects_bad_offset():
    pp = PreprocessedPattern("acbaba")
    with pytest.raises(ValueError):
        pp.vsgs_shift("a", 6)


patterns = st.text(alphabet="ab", min_size=1, max_size=6)
subjects = st.text(alphabet="ab", max_size=40)


@settings(max_examples=300)
@given(patterns, subjects)
def test_forward_matches_all_occurrences(pattern, subject):
    found = boyermoore_matches(pattern, subject)
    assert [m.start for m in found] == _occurrences(pattern, subject)
    assert all(m.width == len(pattern) for m in found)


@settings(max_examples=300)
@given(patterns, subjects)
def test_backward_is_reverse_of_forward(pattern, subject):
    forward = boyermoore_matches(pattern, subject)
    backward = boyermoore_matches(pattern, subject, walk_backward=True)
    assert backward == forward[::-1]


@given(patterns, subjects)
def test_max_matches_one(pattern, subject):
    occ = _occurrences(pattern, subject)
    first = boyermoore_matches(pattern, subject, max_matches=1)
    last = boyermoore_matches(pattern, subject, max_matches=1, walk_backward=True)
    assert [m.start for m in first] == occ[:1]
    assert [m.start for m in last] == occ[-1:]


@given(st.text(alphabet="acg", min_size=1, max_size=10))
def test_shift0_is_full_window_shift(pattern):
    pp = PreprocessedPattern(pattern)
    assert pp.shift0 == pp.mw_shift(0, len(pp))


@given(st.text(alphabet="acg", min_size=1, max_size=10), st.sampled_from("acgt"))
def test_vsgs_shift_bounds(pattern, letter):
    pp = PreprocessedPattern(pattern)
    for j in range(len(pp)):
        shift = pp.vsgs_shift(letter, j)
        assert 1 <= shift <= len(pp)
        if j < pp.j0:
            assert shift == pp.shift0