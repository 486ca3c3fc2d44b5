"""Letter-level summary of what the feedback so far says about the answer.

Display only: candidates are always filtered by replaying the oracle, never
by these rules.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from wordle_env import WORD_LENGTH, Pattern, Symbol


@dataclass
class LetterConstraints:
    greens: dict[int, str] = field(default_factory=dict)
    min_counts: dict[str, int] = field(default_factory=dict)
    exact_counts: dict[str, int] = field(default_factory=dict)
    wrong_positions: dict[str, set[int]] = field(default_factory=dict)
    word_length: int = WORD_LENGTH

    @property
    def present(self) -> set[str]:
        return {c for c, n in self.min_counts.items() if n > 0}

    @property
    def absent(self) -> set[str]:
        return {c for c, n in self.exact_counts.items() if n == 0}

    def mask(self) -> str:
        """Known greens as a string, ``"_ra_e"`` style."""
        return "".join(self.greens.get(i, "_") for i in range(self.word_length))

    def describe(self) -> list[str]:
        lines = [f"Known: {self.mask()}"]
        if self.present:
            parts = []
            for c in sorted(self.present):
                n = self.exact_counts.get(c)
                count = f"={n}" if n is not None else f">={self.min_counts[c]}"
                pos = self.wrong_positions.get(c)
                where = f" not at {','.join(str(p + 1) for p in sorted(pos))}" if pos else ""
                parts.append(f"{c}{count}{where}")
            lines.append("Present: " + "; ".join(parts))
        if self.absent:
            lines.append("Absent: " + "".join(sorted(self.absent)))
        return lines


def summarize(
    history: Iterable[tuple[str, Pattern]],
    word_length: int = WORD_LENGTH,
) -> LetterConstraints:
    """Derive letter constraints from (guess, pattern) pairs."""
    out = LetterConstraints(word_length=word_length)
    for guess, pattern in history:
        credited = Counter(
            g for g, s in zip(guess, pattern) if s != Symbol.BLACK
        )
        capped = {g for g, s in zip(guess, pattern) if s == Symbol.BLACK}

        for i, (g, s) in enumerate(zip(guess, pattern)):
            if s == Symbol.GREEN:
                out.greens[i] = g
            elif credited[g]:
                out.wrong_positions.setdefault(g, set()).add(i)

        for c, n in credited.items():
            out.min_counts[c] = max(out.min_counts.get(c, 0), n)
        # A black next to n credited copies pins the count at n.
        for c in capped:
            out.exact_counts[c] = credited[c]
            out.min_counts.setdefault(c, 0)
    return out
