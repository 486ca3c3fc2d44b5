"""Entropy ranking: score guesses by expected information gain.

For each guess the candidates are bucketed by the feedback pattern they
would show, and the Shannon entropy of the bucket distribution is the
guess's score.  Patterns come from a ``PatternMatrix`` built once per word
list, so a turn only counts buckets over a block of it.
"""

from __future__ import annotations

import logging
import os
import random
import time
from collections import OrderedDict
from typing import Iterable, Sequence

import numpy as np

from patterns import PARALLEL_THRESHOLD, PatternMatrix
from wordle_env import num_patterns

logger = logging.getLogger(__name__)

_DEFAULT_CACHE_SIZE = 8

Ranking = list[tuple[str, float]]


def row_entropies(block: np.ndarray, n_patterns: int) -> np.ndarray:
    """Entropy in bits of each row of pattern codes in *block*."""
    block = np.asarray(block, dtype=np.int64)
    rows, n = block.shape
    if n <= 1:
        return np.zeros(rows)
    offsets = np.arange(rows, dtype=np.int64)[:, None] * n_patterns
    counts = np.bincount((block + offsets).ravel(), minlength=rows * n_patterns)
    counts = counts.reshape(rows, n_patterns)
    # Equal bucket sizes must sum in the same order to give equal floats
    counts.sort(axis=1)
    p = counts / n
    with np.errstate(divide="ignore", invalid="ignore"):
        terms = np.where(counts > 0, p * np.log2(p), 0.0)
    return -terms.sum(axis=1) + 0.0


def pattern_entropy(codes: Iterable[int], n_patterns: int) -> float:
    """Entropy in bits of the distribution of pattern *codes*."""
    arr = np.fromiter(codes, dtype=np.int64)
    return float(row_entropies(arr[None, :], n_patterns)[0])


def _sort_key(item: tuple[str, float]):
    word, h = item
    return (-h, word)


class EntropyRanker:
    """Rank a guess pool by entropy against a candidate set.

    Parameters
    ----------
    workers : int or None
        Worker processes for building the pattern matrix; None uses every
        CPU core.  1 keeps the build in the calling process.
    parallel_threshold : int
        Minimum number of matrix cells before the build uses processes.
    max_guess_pool : int or None
        If set, larger pools are cut down to a seeded random sample of this
        size before scoring.  Off by default.
    seed : int
        Seed for the pool sample.
    cache_size : int
        Number of recent rankings kept; 0 disables the cache.
    """

    def __init__(
        self,
        workers: int | None = None,
        parallel_threshold: int = PARALLEL_THRESHOLD,
        max_guess_pool: int | None = None,
        seed: int = 42,
        cache_size: int = _DEFAULT_CACHE_SIZE,
    ) -> None:
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if max_guess_pool is not None and max_guess_pool < 1:
            raise ValueError(f"max_guess_pool must be >= 1, got {max_guess_pool}")
        self._workers = workers
        self._parallel_threshold = parallel_threshold
        self._max_guess_pool = max_guess_pool
        self._seed = seed
        self._cache_size = cache_size
        self._cache: OrderedDict[tuple, Ranking] = OrderedDict()
        self._matrix: PatternMatrix | None = None

    @property
    def workers(self) -> int:
        return self._workers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def rank(
        self,
        candidates: Sequence[str],
        guess_pool: Sequence[str],
        top_n: int = 0,
    ) -> Ranking:
        """Return ``(word, entropy)`` pairs, best first.

        Ties are broken by word order.  With a single candidate every
        entropy is zero and that candidate is returned first; with no
        candidates the ranking is empty.  ``top_n <= 0`` returns everything.
        """
        cands = tuple(candidates)
        pool = tuple(dict.fromkeys(guess_pool))
        if not cands or not pool:
            return []

        key = (cands, pool)
        ranked = self._cache.get(key)
        if ranked is not None:
            self._cache.move_to_end(key)
        else:
            ranked = self._rank(cands, pool)
            if self._cache_size > 0:
                self._cache[key] = ranked
                while len(self._cache) > self._cache_size:
                    self._cache.popitem(last=False)

        if top_n > 0:
            return ranked[:top_n]
        return list(ranked)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _rank(self, cands: tuple[str, ...], pool: tuple[str, ...]) -> Ranking:
        if len(cands) == 1:
            sole = cands[0]
            return [(sole, 0.0)] + [(w, 0.0) for w in sorted(pool) if w != sole]

        pool = self._bounded_pool(pool)
        matrix = self._matrix_for(pool + cands)
        t0 = time.perf_counter()
        h = row_entropies(matrix.block(pool, cands), num_patterns(len(cands[0])))
        scored = sorted(zip(pool, h.tolist()), key=_sort_key)

        logger.debug(
            "ranked %d guesses x %d candidates in %.2fs (best=%s H=%.4f)",
            len(pool), len(cands), time.perf_counter() - t0,
            scored[0][0], scored[0][1],
        )
        return scored

    def _matrix_for(self, words: tuple[str, ...]) -> PatternMatrix:
        """Pattern matrix covering *words*, rebuilt over the union when it does not."""
        if self._matrix is not None and self._matrix.covers(words):
            return self._matrix
        known = self._matrix.words if self._matrix is not None else ()
        self._matrix = PatternMatrix.build(
            tuple(dict.fromkeys(known + words)),
            workers=self._workers,
            parallel_threshold=self._parallel_threshold,
        )
        return self._matrix

    def _bounded_pool(self, pool: tuple[str, ...]) -> tuple[str, ...]:
        k = self._max_guess_pool
        if k is None or len(pool) <= k:
            return pool
        logger.info("guess pool capped: scoring a sample of %d of %d words", k, len(pool))
        return tuple(random.Random(self._seed).sample(pool, k))
