# seqmatch

Pattern matching and frequency counting on biological sequences. Sequences
are given as `bytes` (or `str`, read as latin-1) of letter codes.
Positions in results are 1-based. Where a search allows mismatches, a match
may hang over either end of the subject.

## Modules

- `seqmatch.matching`: the low-level building blocks.
  - `select_match_table` returns the bytewise match tables for fixed and
    non-fixed (IUPAC bit code) letters.
  - `nmismatch_at_pshift` counts mismatches at a given shift.
  - `nedit_for_ploffset` and `nedit_for_proffset` compute a banded edit
    distance with early bailout. The substrings are anchored on the
    pattern's first or last letter.
  - `nedit_at`, `match_pattern_at` and `vmatch_pattern_at` test a pattern
    at given positions. The shape of their answer is chosen with
    `AtAnswer`.
  - `hamming_distances` returns the pairwise Hamming distances.
  - `Match` is a `(start, width)` result with an `end` property.
- `seqmatch.pattern`: `match_pattern`, `match_pattern_views` and
  `vmatch_pattern`. Each takes one of the `Algorithm` choices:
  `naive-exact`, `naive-inexact` (the default), `boyer-moore`, `shift-or`
  or `indels`. A pattern no longer than `max_mismatch` is always matched
  with the naive inexact method.
- `seqmatch.boyermoore`: `boyermoore_matches` and `PreprocessedPattern`,
  which caches its VSGS and matching-window shifts. Both support walking
  backward.
- `seqmatch.shiftor`: `shiftor_matches`, the bitap algorithm with
  substitutions. It takes patterns of up to 64 letters.
- `seqmatch.indels`: `indel_matches`, which reports only the best local
  matches under an edit distance.
- `seqmatch.dictmatch`: matches many patterns against subjects.
  - `match_patterns` and `match_patterns_views` give one list of matches
    per pattern.
  - `vwhich_patterns` gives, for each subject, the indices of the patterns
    that match it.
  - `vcount_patterns` counts the matches. The counts can be collapsed by
    pattern or by subject and weighted.
- `seqmatch.twobit`:
  - `TwobitEncoder` computes two-bit signatures of DNA words, one letter at
    a time, for a whole word, or for selected positions.
  - `TwobitDict` is a constant-width DNA dictionary. It has at most 14
    letters per word and records its duplicates in `high2low`. It reports
    `(pattern_index, end)` pairs along a subject.
- `seqmatch.pwm`: `pwm_score_starting_at`, `match_pwm` and
  `match_pwm_views` for 4-row position weight matrices. Letters other than
  the four bases get weight 0, with a warning.
- `seqmatch.letterfreq`:
  - `letter_frequency` and `letter_frequency_set` count letters, with an
    optional "other" column.
  - `letter_frequency_in_sliding_view` counts letters in each window of a
    sequence, and `letter_frequency_by_colmap` counts them with columns
    remapped by `colmap`.
  - `consensus_matrix` counts letters per position after shifting each
    sequence.
- `seqmatch.oligofreq`:
  - `oligo_frequency` and `oligo_frequency_set` give oligonucleotide
    counts or frequencies. Results come as a matrix, as a collapsed vector,
    or as a list of vectors.
  - `nucleotide_frequency_at` counts the word formed by the letters at
    chosen positions.
  - `all_oligos` lists the words in signature order, and `base_labels`
    gives the base letters.

Frequency results are numpy arrays without attached names. Use
`all_oligos` or your own `codes` to label their columns.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from seqmatch.pattern import match_pattern, Algorithm
from seqmatch.matching import hamming_distances

matches = match_pattern(b"ACGT", b"TTACGTACGA", 1, 0, (True, True),
                        Algorithm.NAIVE_INEXACT)
print(matches)  # [Match(start=3, width=4), Match(start=7, width=4)]

print(hamming_distances([b"ACGT", b"ACGA", b"TCGA"]))  # [1, 2, 1]
```

## What it does not do

- It has no two-way letter tables that cross-tabulate the letters of paired
  sequences, with or without quality codes.
- It has no Aho-Corasick dictionary; `dictmatch` matches each pattern on
  its own.
- It is a library only. There is no command-line tool, and nothing is
  stored between calls.