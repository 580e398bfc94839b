"""Two-bit encoding of DNA words and the "Twobit" dictionary matcher.

Each of the four base letters gets a 2-bit code (its position in
``base_codes``), so a word of ``width`` letters has a signature in
``range(4 ** width)``. By default the rightmost letter is the least
significant (it "moves fastest"); with ``invert`` the leftmost one is.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Optional, Sequence, Union

from .matching import SeqLike, _as_bytes

MAX_TWOBIT_DICT_WIDTH = 14

BaseCodes = Union[str, bytes, Sequence[int], Mapping]


def _as_codes(base_codes: BaseCodes) -> list[int]:
    if isinstance(base_codes, Mapping):
        values = list(base_codes.values())
        codes = [ord(v) if isinstance(v, str) else int(v) for v in values]
    elif isinstance(base_codes, (str, bytes, bytearray)):
        codes = list(_as_bytes(base_codes))
    else:
        codes = [int(code) for code in base_codes]
    if len(codes) != 4:
        raise ValueError("'base_codes' must be of length 4")
    if len(set(codes)) != 4:
        raise ValueError("'base_codes' contains duplicated values")
    if any(not 0 <= code < 256 for code in codes):
        raise ValueError("'base_codes' values must be byte values")
    return codes


def _as_byte(byte: Union[int, str]) -> int:
    return ord(byte) if isinstance(byte, str) else byte


class TwobitEncoder:
    """Computes two-bit signatures of words of a fixed width.

    :meth:`shift` feeds one letter at a time and returns the signature of
    the last ``width`` letters, or ``None`` while fewer than ``width``
    consecutive base letters have been seen.
    """

    def __init__(self, base_codes: BaseCodes = "ACGT", width: int = 1,
                 invert: bool = False) -> None:
        if width < 1:
            raise ValueError("'width' must be >= 1")
        self.width = width
        self.invert = bool(invert)
        self._bits: list[Optional[int]] = [None] * 256
        for bits, code in enumerate(_as_codes(base_codes)):
            self._bits[code] = bits
        self._mask = (1 << (2 * width)) - 1
        self._high_shift = 2 * (width - 1)
        self._signature = 0
        self._nvalid = 0

    def reset(self) -> None:
        """Forget all letters fed so far."""
        self._signature = 0
        self._nvalid = 0

    def shift(self, byte: Union[int, str]) -> Optional[int]:
        """Feed one letter; return the signature of the current word or ``None``."""
        bits = self._bits[_as_byte(byte)]
        if bits is None:
            self._nvalid = 0
            return None
        if self.invert:
            self._signature = (self._signature >> 2) | (bits << self._high_shift)
        else:
            self._signature = ((self._signature << 2) | bits) & self._mask
        self._nvalid += 1
        return self._signature if self._nvalid >= self.width else None

    def signature(self, seq: SeqLike) -> Optional[int]:
        """Signature of a word of exactly ``width`` letters; ``None`` if it holds a non-base letter."""
        s = _as_bytes(seq)
        if len(s) != self.width:
            raise ValueError(f"word must have {self.width} letters")
        self.reset()
        result = None
        for byte in s:
            result = self.shift(byte)
        return result

    def signature_at(self, seq: SeqLike, at: Iterable[Optional[int]]) -> Optional[int]:
        """Signature of the word made of the letters at the 1-based positions ``at``.

        Raises :class:`IndexError` for a ``None`` or out-of-limits position;
        returns ``None`` when a selected letter is not a base letter.
        """
        s = _as_bytes(seq)
        positions = list(at)
        if len(positions) != self.width:
            raise ValueError(f"'at' must have {self.width} elements")
        self.reset()
        result = None
        for pos in positions:
            if pos is None or not 1 <= pos <= len(s):
                raise IndexError("'at' contains NAs or \"out of limits\" locations")
            result = self.shift(s[pos - 1])
            if result is None and self._nvalid == 0:
                return None
        return result


class TwobitDict:
    """A dictionary of equal-width DNA words preprocessed for fast matching.

    ``exclude`` holds 0-based indices of patterns to leave out. After
    construction ``high2low[i]`` is the 0-based index of the first pattern
    identical to pattern ``i`` (``None`` for first occurrences and excluded
    patterns).
    """

    def __init__(self, patterns: Iterable[SeqLike], base_codes: BaseCodes = "ACGT",
                 exclude: Optional[Iterable[int]] = None) -> None:
        pats = [_as_bytes(p) for p in patterns]
        skipped = set(exclude) if exclude is not None else set()
        self.high2low: list[Optional[int]] = [None] * len(pats)
        self._sign2pos: dict[int, int] = {}
        self.width: Optional[int] = None
        self._encoder: Optional[TwobitEncoder] = None
        for offset, pattern in enumerate(pats):
            if offset in skipped:
                continue
            if not pattern:
                raise ValueError(f"empty trusted region for pattern {offset + 1}")
            if self._encoder is None:
                if len(pattern) > MAX_TWOBIT_DICT_WIDTH:
                    raise ValueError(
                        "the width of the Trusted Band must be <= 14 "
                        "when 'type=\"Twobit\"'"
                    )
                self.width = len(pattern)
                self._encoder = TwobitEncoder(base_codes, self.width)
            elif len(pattern) != self.width:
                raise ValueError("all the trusted regions must have the same length")
            signature = self._encoder.signature(pattern)
            if signature is None:
                raise ValueError(
                    f"non-base DNA letter found in Trusted Band for pattern {offset + 1}"
                )
            first = self._sign2pos.setdefault(signature, offset)
            if first != offset:
                self.high2low[offset] = first
        if self._encoder is None:
            raise ValueError("Trusted Band is empty")

    def __len__(self) -> int:
        return len(self.high2low)

    def match(self, subject: SeqLike, fixed_subject: bool = True) -> list[tuple[int, int]]:
        """Walk ``subject`` and report ``(pattern_index, end)`` pairs.

        ``pattern_index`` is 0-based and points at the first occurrence of
        the word in the dictionary; ``end`` is the 1-based end position.
        """
        if not fixed_subject:
            raise ValueError(
                "cannot treat IUPAC extended letters in the subject as "
                "ambiguities when 'pdict' is a PDict object of the \"Twobit\" type"
            )
        encoder = self._encoder
        encoder.reset()
        found = []
        for end, byte in enumerate(_as_bytes(subject), start=1):
            signature = encoder.shift(byte)
            if signature is None:
                continue
            index = self._sign2pos.get(signature)
            if index is not None:
                found.append((index, end))
        return found