"""Threshold policy: probe with the full list, then switch to solving."""

from __future__ import annotations

from pool_policy import PoolContext, PoolPolicy

DEFAULT_THRESHOLD = 20


class ThresholdPolicy(PoolPolicy):
    """Score the full word list while many candidates remain.

    Switches to the remaining candidates once at most *threshold* of them
    are left, or when only one turn remains.

    Parameters
    ----------
    threshold : int
        Candidate count at or below which only candidates are scored.
    """

    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        if threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {threshold}")
        self._threshold = threshold

    @property
    def name(self) -> str:
        return "threshold"

    @property
    def threshold(self) -> int:
        return self._threshold

    def describe(self) -> str:
        return f"threshold({self._threshold})"

    def guess_pool(self, ctx: PoolContext) -> tuple[str, ...]:
        if len(ctx.candidates) <= self._threshold or ctx.remaining_turns <= 1:
            return ctx.candidates
        return ctx.vocabulary
