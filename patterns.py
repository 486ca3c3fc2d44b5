"""Guess x target feedback-code matrix.

Every cell holds the pattern code ``feedback_code(guess, target)``.  The
matrix is built once per word list with vectorised numpy feedback, after
which a turn's entropy is only a bucket count over a block of it.

Large lists are built in row chunks on worker processes.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

# Matrix cells below which the build stays in-process
PARALLEL_THRESHOLD = 200_000
_MIN_CHUNK = 50
_ROW_BLOCK = 256


def code_dtype(length: int) -> np.dtype:
    """Smallest unsigned dtype that holds every code for *length* letters."""
    return np.min_scalar_type(3 ** length - 1)


def encode_words(words: Sequence[str], length: int) -> np.ndarray:
    """Words as an ``(n, length)`` array of byte values."""
    if not words:
        return np.zeros((0, length), dtype=np.int16)
    buf = "".join(words).encode("ascii")
    return np.frombuffer(buf, dtype=np.uint8).reshape(len(words), length).astype(np.int16)


def pattern_rows(guesses: Sequence[str], targets: Sequence[str], length: int) -> np.ndarray:
    """Feedback codes for every guess (rows) against every target (columns).

    Same rules as ``wordle_env.feedback``: greens first, then each
    non-green position is yellow while the target still has unmatched
    copies of that letter not claimed by an earlier yellow.
    """
    g = encode_words(guesses, length)
    t = encode_words(targets, length)
    out = np.empty((len(g), len(t)), dtype=code_dtype(length))
    powers = 3 ** np.arange(length)

    for start in range(0, len(g), _ROW_BLOCK):
        gb = g[start:start + _ROW_BLOCK]
        green = gb[:, None, :] == t[None, :, :]
        unmatched = ~green
        yellow = np.zeros_like(green)
        for i in range(length):
            letter = gb[:, i, None, None]
            supply = ((t[None, :, :] == letter) & unmatched).sum(axis=2)
            same = gb[:, :i] == gb[:, i, None]
            used = (yellow[:, :, :i] & same[:, None, :]).sum(axis=2)
            yellow[:, :, i] = unmatched[:, :, i] & (supply > used)
        digits = green * 2 + yellow
        out[start:start + len(gb)] = (digits * powers).sum(axis=2)
    return out


# ── Worker (module-level for pickling) ─────────────────────

def _build_rows(args):
    """Worker: matrix rows for one chunk of guesses."""
    chunk, words, length = args
    return pattern_rows(chunk, words, length)


class PatternMatrix:
    """Square feedback-code matrix over a fixed tuple of words.

    Parameters
    ----------
    words : tuple of str
        Row and column labels, in order.
    codes : np.ndarray
        ``codes[i, j]`` is the code of ``words[i]`` guessed against
        ``words[j]``.
    """

    def __init__(self, words: tuple[str, ...], codes: np.ndarray) -> None:
        self._words = words
        self._index = {w: i for i, w in enumerate(words)}
        self._codes = codes

    @classmethod
    def build(
        cls,
        words: Sequence[str],
        workers: int = 1,
        parallel_threshold: int = PARALLEL_THRESHOLD,
    ) -> "PatternMatrix":
        words = tuple(words)
        length = len(words[0]) if words else 0
        t0 = time.perf_counter()

        n = len(words)
        if workers > 1 and n * n >= parallel_threshold:
            chunk_size = max(_MIN_CHUNK, n // (workers * 4))
            chunks = [words[i:i + chunk_size] for i in range(0, n, chunk_size)]
            parts: list = [None] * len(chunks)
            with ProcessPoolExecutor(max_workers=min(workers, len(chunks))) as executor:
                futs = {
                    executor.submit(_build_rows, (ch, words, length)): i
                    for i, ch in enumerate(chunks)
                }
                for fut in as_completed(futs):
                    parts[futs[fut]] = fut.result()
            codes = np.vstack(parts)
        else:
            codes = pattern_rows(words, words, length)

        logger.debug("built %dx%d pattern matrix in %.2fs", n, n, time.perf_counter() - t0)
        return cls(words, codes)

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    @property
    def codes(self) -> np.ndarray:
        return self._codes

    def __len__(self) -> int:
        return len(self._words)

    def covers(self, words) -> bool:
        return all(w in self._index for w in words)

    def indices(self, words: Sequence[str]) -> np.ndarray:
        return np.fromiter((self._index[w] for w in words), dtype=np.intp, count=len(words))

    def block(self, guesses: Sequence[str], targets: Sequence[str]) -> np.ndarray:
        """Sub-matrix with one row per guess and one column per target."""
        return self._codes[np.ix_(self.indices(guesses), self.indices(targets))]
