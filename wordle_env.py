"""Wordle feedback oracle and pattern codec for fixed-length words."""

from __future__ import annotations

from collections import Counter
from enum import IntEnum
from typing import Iterable

WORD_LENGTH = 5


class Symbol(IntEnum):
    """Per-position feedback symbol. Values double as base-3 digits."""

    BLACK = 0   # letter not present, or already consumed by greens/yellows
    YELLOW = 1  # correct letter, wrong position
    GREEN = 2   # correct letter, correct position


SYMBOL_CHARS = {Symbol.BLACK: "B", Symbol.YELLOW: "Y", Symbol.GREEN: "G"}
_CHAR_TO_SYMBOL = {c: s for s, c in SYMBOL_CHARS.items()}

Pattern = tuple[int, ...]


# ------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------

class WordleError(Exception):
    """Base class for every error raised by this project."""


class ConfigurationError(WordleError, ValueError):
    """The word list or solver settings are unusable; no session can start."""


class ValidationError(WordleError, ValueError):
    """A guess or a feedback string was malformed. Nothing was changed."""


class SessionStateError(WordleError, RuntimeError):
    """A session method was called in a state that does not allow it."""


# ------------------------------------------------------------------
# Words
# ------------------------------------------------------------------

def is_word(text: str, length: int = WORD_LENGTH) -> bool:
    """True if *text* is exactly *length* lowercase ASCII letters."""
    return len(text) == length and text.isascii() and text.isalpha() and text.islower()


def normalize_word(text: str, length: int = WORD_LENGTH) -> str:
    """Strip and lowercase user input, raising ValidationError if it is not a word."""
    word = text.strip().lower()
    if not is_word(word, length):
        raise ValidationError(
            f"{text.strip()!r} is not a {length}-letter word (letters a-z only)"
        )
    return word


# ------------------------------------------------------------------
# Oracle
# ------------------------------------------------------------------

def feedback(guess: str, target: str) -> Pattern:
    """Return the feedback pattern for *guess* against *target*.

    Greens are assigned first and consume their letter; the remaining
    positions are then scanned left to right, so earlier copies of a
    repeated letter claim yellow credit before later ones.
    """
    n = len(target)
    if len(guess) != n:
        raise ValueError(
            f"guess length ({len(guess)}) != target length ({n})"
        )

    pat = [Symbol.BLACK] * n
    remaining = Counter(target)

    # Pass 1 – greens
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            pat[i] = Symbol.GREEN
            remaining[g] -= 1

    # Pass 2 – yellows
    for i, g in enumerate(guess):
        if pat[i] == Symbol.GREEN:
            continue
        if remaining[g] > 0:
            pat[i] = Symbol.YELLOW
            remaining[g] -= 1

    return tuple(int(s) for s in pat)


def feedback_code(guess: str, target: str) -> int:
    """Feedback for *guess* against *target* packed as a pattern code."""
    return encode_pattern(feedback(guess, target))


def filter_candidates(
    candidates: Iterable[str],
    guess: str,
    pattern: Pattern,
) -> list[str]:
    """Keep only candidates that would have produced *pattern* for *guess*."""
    pattern = tuple(pattern)
    return [w for w in candidates if feedback(guess, w) == pattern]


# ------------------------------------------------------------------
# Pattern codec
# ------------------------------------------------------------------

def num_patterns(length: int = WORD_LENGTH) -> int:
    return 3 ** length


def all_green(length: int = WORD_LENGTH) -> Pattern:
    return (int(Symbol.GREEN),) * length


def encode_pattern(pattern: Iterable[int]) -> int:
    """Pack a pattern into an int; position 0 is the least significant digit."""
    code = 0
    for i, s in enumerate(pattern):
        code += int(s) * (3 ** i)
    return code


def decode_pattern(code: int, length: int = WORD_LENGTH) -> Pattern:
    if not 0 <= code < num_patterns(length):
        raise ValidationError(
            f"pattern code {code} outside [0, {num_patterns(length)})"
        )
    digits = []
    for _ in range(length):
        code, digit = divmod(code, 3)
        digits.append(digit)
    return tuple(digits)


def parse_pattern(text: str, length: int = WORD_LENGTH) -> Pattern:
    """Parse feedback text such as ``"GYBBG"`` (case-insensitive).

    Raises
    ------
    ValidationError
        If the text does not hold exactly *length* characters from G, Y, B.
    """
    cleaned = text.strip().upper()
    if len(cleaned) != length:
        raise ValidationError(
            f"feedback must be exactly {length} characters of G/Y/B, got {text.strip()!r}"
        )
    try:
        return tuple(int(_CHAR_TO_SYMBOL[c]) for c in cleaned)
    except KeyError as exc:
        raise ValidationError(
            f"invalid feedback character {exc.args[0]!r}: use G, Y or B"
        ) from None


def format_pattern(pattern: Iterable[int]) -> str:
    return "".join(SYMBOL_CHARS[Symbol(s)] for s in pattern)
