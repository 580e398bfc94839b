import warnings

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from seqmatch.pattern import Algorithm, match_pattern
from seqmatch.pwm import match_pwm, match_pwm_views, pwm_score_starting_at


def one_hot(word):
    matrix = np.zeros((4, len(word)))
    for col, letter in enumerate(word):
        matrix["ACGT".index(letter), col] = 1.0
    return matrix


def test_exact_word_scores_its_width():
    assert pwm_score_starting_at(one_hot("ACG"), "TACGT", [2]) == [3.0]


def test_none_start_gives_none():
    scores = pwm_score_starting_at(one_hot("AC"), "ACAC", [None, 1])
    assert scores == [None, 2.0]


def test_invalid_starts_raise():
    with pytest.raises(ValueError, match="starting.at"):
        pwm_score_starting_at(one_hot("AC"), "ACAC", [4])
    with pytest.raises(ValueError, match="starting.at"):
        pwm_score_starting_at(one_hot("AC"), "ACAC", [0])


def test_pwm_must_have_four_rows():
    with pytest.raises(ValueError, match="4 rows"):
        match_pwm(np.zeros((3, 2)), "ACGT", 0.0)


def test_base_codes_must_have_four_elements():
    with pytest.raises(ValueError):
        match_pwm(one_hot("AC"), "ACGT", 0.0, "ACG")


def test_non_base_letters_warn_once():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        scores = pwm_score_starting_at(one_hot("AC"), "ANNC", [1, 2, 3])
    assert len(caught) == 1
    assert "not in [ACGT]" in str(caught[0].message)
    assert scores[0] == 1.0


def test_custom_base_codes():
    codes = [1, 2, 4, 8]
    subject = bytes([1, 2, 4, 8])
    assert pwm_score_starting_at(one_hot("ACGT"), subject, [1], codes) == [4.0]


@settings(max_examples=60, deadline=None)
@given(st.text(alphabet="ACGT", min_size=1, max_size=5),
       st.text(alphabet="ACGT", max_size=30))
def test_full_score_matches_are_exact_occurrences(word, subject):
    expected = match_pattern(word, subject, 0, 0, True, Algorithm.NAIVE_EXACT)
    assert match_pwm(one_hot(word), subject, float(len(word))) == expected


@settings(max_examples=60, deadline=None)
@given(
    st.lists(st.lists(st.integers(-5, 5), min_size=3, max_size=3),
             min_size=4, max_size=4),
    st.text(alphabet="ACGT", min_size=3, max_size=25),
    st.integers(-10, 10),
)
def test_matches_agree_with_scores(rows, subject, min_score):
    pwm = np.array(rows, dtype=float)
    starts = range(1, len(subject) - 1)
    scores = pwm_score_starting_at(pwm, subject, starts)
    expected = [s for s, score in zip(starts, scores) if score >= min_score]
    assert [m.start for m in match_pwm(pwm, subject, min_score)] == expected


def test_whole_view_equals_plain_match():
    pwm = one_hot("GA")
    subject = "GAGATTGA"
    assert match_pwm_views(pwm, subject, [(1, len(subject))], 2.0) == match_pwm(
        pwm, subject, 2.0
    )


def test_views_shift_positions():
    pwm = one_hot("GA")
    subject = "TTGATTGA"
    in_view = match_pwm_views(pwm, subject, [(5, 4)], 2.0)
    assert [m.start for m in in_view] == [7]


def test_out_of_limits_view():
    with pytest.raises(ValueError, match="out of limits"):
        match_pwm_views(one_hot("GA"), "GAGA", [(3, 3)], 1.0)