"""Candidates-only policy: score the remaining candidates and nothing else."""

from __future__ import annotations

from pool_policy import PoolContext, PoolPolicy


class CandidatesPolicy(PoolPolicy):
    """Every suggestion could be the answer; a hit is always possible."""

    @property
    def name(self) -> str:
        return "candidates"

    def guess_pool(self, ctx: PoolContext) -> tuple[str, ...]:
        return ctx.candidates
