"""Full-list policy: score every word in the word list."""

from __future__ import annotations

from pool_policy import PoolContext, PoolPolicy


class FullListPolicy(PoolPolicy):
    """Always score the whole word list, candidate or not."""

    @property
    def name(self) -> str:
        return "full"

    def guess_pool(self, ctx: PoolContext) -> tuple[str, ...]:
        return ctx.vocabulary
