"""Abstract base class for guess-pool policies.

A policy decides which words the entropy ranker scores on a given turn:
the whole word list for early information gain, or only the remaining
candidates when it is time to go for the answer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class PoolContext:
    """Everything a policy may look at when choosing a guess pool.

    Attributes
    ----------
    vocabulary : tuple[str, ...]
        The full word list of the session (immutable).
    candidates : tuple[str, ...]
        Words still consistent with every accepted feedback pattern.
    turn : int
        The 1-based number of the turn about to be played.
    max_turns : int
        Turn limit of the session.
    """

    vocabulary: tuple[str, ...]
    candidates: tuple[str, ...]
    turn: int
    max_turns: int

    @property
    def remaining_turns(self) -> int:
        """Turns left including the one about to be played."""
        return self.max_turns - self.turn + 1


class PoolPolicy(ABC):
    """Interface that every guess-pool policy must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short policy name (used on the command line)."""
        ...

    @abstractmethod
    def guess_pool(self, ctx: PoolContext) -> Sequence[str]:
        """Return the words to score this turn."""
        ...

    def describe(self) -> str:
        return self.name
