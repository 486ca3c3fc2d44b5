"""The set of words still consistent with every accepted piece of feedback."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from wordle_env import Pattern, filter_candidates

logger = logging.getLogger(__name__)


class CandidateStore:
    """Current candidate set, kept in lexicographic order.

    Filtering re-runs the feedback oracle against every candidate and keeps
    those that reproduce the observed pattern exactly; there is no other
    filtering path.
    """

    def __init__(self, words: Iterable[str]) -> None:
        self._words: tuple[str, ...] = tuple(sorted(set(words)))
        self._members = frozenset(self._words)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    def size(self) -> int:
        return len(self._words)

    def contains(self, word: str) -> bool:
        return word in self._members

    def first(self, n: int) -> tuple[str, ...]:
        """Up to *n* candidates in order; ``n <= 0`` returns all of them."""
        if n <= 0:
            return self._words
        return self._words[:n]

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def filter(self, guess: str, observed: Pattern) -> tuple[str, ...]:
        """Narrow to the candidates that would have produced *observed*."""
        before = len(self._words)
        kept = tuple(filter_candidates(self._words, guess, observed))
        self._set(kept)
        logger.debug("filter %s: %d -> %d candidates", guess, before, len(kept))
        return kept

    def snapshot(self) -> tuple[str, ...]:
        return self._words

    def restore(self, snapshot: tuple[str, ...]) -> None:
        self._set(tuple(snapshot))

    def _set(self, words: tuple[str, ...]) -> None:
        self._words = words
        self._members = frozenset(words)
