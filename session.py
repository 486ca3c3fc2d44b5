"""Turn-by-turn session: guesses, feedback, filtering, undo.

A session runs in one of two modes:

* ``oracle``: the user plays an external puzzle, enters each guess and
  then the feedback the puzzle showed;
* ``game``: the session holds a secret word and computes feedback itself.

State only changes inside a commit, which snapshots the candidate set,
filters it, records the turn and runs the terminal check.  Undo pops the
last turn and restores its snapshot.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from candidates import CandidateStore
from constraints import LetterConstraints, summarize
from lexicon import validate_word_list
from policies import get_policy
from pool_policy import PoolContext, PoolPolicy
from ranker import EntropyRanker, Ranking
from wordle_env import (
    WORD_LENGTH,
    ConfigurationError,
    Pattern,
    SessionStateError,
    ValidationError,
    all_green,
    encode_pattern,
    feedback,
    format_pattern,
    normalize_word,
    parse_pattern,
)

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    ORACLE = "oracle"
    GAME = "game"


class State(str, Enum):
    AWAITING_GUESS = "awaiting_guess"
    AWAITING_FEEDBACK = "awaiting_feedback"
    FILTERING = "filtering"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


TERMINAL_STATES = frozenset({State.SOLVED, State.EXHAUSTED})


@dataclass(frozen=True)
class SessionConfig:
    """Session settings.

    Attributes
    ----------
    word_length : int
        Letters per word.
    max_turns : int
        Turns allowed before the session is exhausted.
    allow_non_words : bool
        If True, any string of letters of the right length is accepted as a
        guess; otherwise guesses must come from the word list.
    """

    word_length: int = WORD_LENGTH
    max_turns: int = 6
    allow_non_words: bool = False

    def __post_init__(self) -> None:
        if self.word_length < 1:
            raise ConfigurationError(f"word_length must be >= 1, got {self.word_length}")
        if self.max_turns < 1:
            raise ConfigurationError(f"max_turns must be >= 1, got {self.max_turns}")


@dataclass(frozen=True)
class Turn:
    guess: str
    feedback: Pattern
    remaining: int

    @property
    def code(self) -> int:
        return encode_pattern(self.feedback)

    @property
    def pattern_text(self) -> str:
        return format_pattern(self.feedback)


@dataclass(frozen=True)
class Status:
    turn: int
    max_turns: int
    candidates: int
    state: State
    message: str = ""

    @property
    def terminal(self) -> bool:
        return self.state in TERMINAL_STATES


class Session:
    """One Wordle session over a fixed word list.

    Parameters
    ----------
    vocabulary : iterable of str
        Validated word list (see ``lexicon.validate_word_list``).
    mode : Mode
        ``Mode.ORACLE`` or ``Mode.GAME``.
    secret : str or None
        Game mode only.  None picks a random word from the vocabulary.
    config : SessionConfig or None
        Turn limit, word length and guess rules.
    ranker : EntropyRanker or None
        Shared ranker; a default one is built if None.
    policy : PoolPolicy or None
        Guess-pool policy; defaults to ``threshold``.
    rng : random.Random or None
        Source for the random secret.
    """

    def __init__(
        self,
        vocabulary: Iterable[str],
        mode: Mode | str = Mode.ORACLE,
        *,
        secret: str | None = None,
        config: SessionConfig | None = None,
        ranker: EntropyRanker | None = None,
        policy: PoolPolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or SessionConfig()
        self._vocab = validate_word_list(vocabulary, self._config.word_length)
        self._vocab_set = frozenset(self._vocab)
        self._mode = Mode(mode)
        self._ranker = ranker or EntropyRanker()
        self._policy = policy or get_policy()

        self._secret: str | None = None
        if self._mode is Mode.GAME:
            if secret is None:
                secret = (rng or random.Random()).choice(self._vocab)
            elif secret not in self._vocab_set:
                raise ConfigurationError(f"secret {secret!r} is not in the word list")
            self._secret = secret
        elif secret is not None:
            raise ConfigurationError("a secret only makes sense in game mode")

        self._store = CandidateStore(self._vocab)
        self._turns: list[Turn] = []
        self._snapshots: list[tuple[str, ...]] = []
        self._pending: str | None = None
        self._state = State.AWAITING_GUESS

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def state(self) -> State:
        return self._state

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def policy(self) -> PoolPolicy:
        return self._policy

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self._vocab

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._store.words

    @property
    def history(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def pending_guess(self) -> str | None:
        return self._pending

    @property
    def turn_number(self) -> int:
        """1-based number of the turn being played (or last played, once over)."""
        if self.is_over:
            return len(self._turns)
        return len(self._turns) + 1

    @property
    def is_over(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def secret(self) -> str:
        """Reveal the secret word (game mode, only once the session is over)."""
        if self._secret is None:
            raise SessionStateError("oracle sessions have no secret")
        if not self.is_over:
            raise SessionStateError("game is still in progress")
        return self._secret

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def submit_guess(self, text: str) -> Turn | None:
        """Play a guess.

        In game mode the feedback is computed and the turn committed at
        once; the committed Turn is returned.  In oracle mode the guess is
        held until ``submit_feedback`` and None is returned.

        Raises
        ------
        ValidationError
            If *text* is not an acceptable guess.  State is unchanged.
        SessionStateError
            If the session is not waiting for a guess.
        """
        if self._state is not State.AWAITING_GUESS:
            raise SessionStateError(f"cannot accept a guess in state {self._state.value}")

        word = normalize_word(text, self._config.word_length)
        if not self._config.allow_non_words and word not in self._vocab_set:
            raise ValidationError(f"{word!r} is not in the word list")

        if self._mode is Mode.GAME:
            return self._commit(word, feedback(word, self._secret))

        self._pending = word
        self._state = State.AWAITING_FEEDBACK
        return None

    def submit_feedback(self, text: str) -> Turn:
        """Enter the observed feedback for the pending guess (oracle mode).

        Raises
        ------
        ValidationError
            If *text* is not a valid pattern.  The pending guess is kept.
        SessionStateError
            If no guess is waiting for feedback.
        """
        if self._state is not State.AWAITING_FEEDBACK:
            raise SessionStateError(f"no guess is waiting for feedback (state {self._state.value})")
        pattern = parse_pattern(text, self._config.word_length)
        return self._commit(self._pending, pattern)

    def cancel_guess(self) -> str | None:
        """Drop the pending oracle-mode guess; returns it (None if there was none)."""
        word = self._pending
        if self._state is State.AWAITING_FEEDBACK:
            self._pending = None
            self._state = State.AWAITING_GUESS
        return word

    def undo(self) -> bool:
        """Revert the last committed turn.

        Returns False, changing nothing, when there is no turn to undo.
        """
        if not self._turns:
            return False
        turn = self._turns.pop()
        self._store.restore(self._snapshots.pop())
        self._pending = None
        self._state = State.AWAITING_GUESS
        logger.info("undid turn %d (%s)", len(self._turns) + 1, turn.guess)
        return True

    def _commit(self, guess: str, pattern: Pattern) -> Turn:
        self._state = State.FILTERING
        self._snapshots.append(self._store.snapshot())
        remaining = self._store.filter(guess, pattern)

        turn = Turn(guess=guess, feedback=tuple(pattern), remaining=len(remaining))
        self._turns.append(turn)
        self._pending = None

        if self._mode is Mode.GAME:
            solved = guess == self._secret
        else:
            solved = turn.feedback == all_green(self._config.word_length)

        if solved:
            self._state = State.SOLVED
        elif not remaining or len(self._turns) >= self._config.max_turns:
            self._state = State.EXHAUSTED
        else:
            self._state = State.AWAITING_GUESS

        logger.debug(
            "turn %d: %s %s -> %d candidates (%s)",
            len(self._turns), guess, turn.pattern_text, turn.remaining,
            self._state.value,
        )
        return turn

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def guess_pool(self) -> tuple[str, ...]:
        ctx = PoolContext(
            vocabulary=self._vocab,
            candidates=self._store.words,
            turn=len(self._turns) + 1,
            max_turns=self._config.max_turns,
        )
        return tuple(self._policy.guess_pool(ctx))

    def suggest(self, top_n: int = 0) -> Ranking:
        """Ranked ``(word, entropy)`` suggestions; ``top_n <= 0`` means all."""
        if self.is_over:
            return []
        return self._ranker.rank(self._store.words, self.guess_pool(), top_n)

    def list_candidates(self, n: int = 0) -> tuple[tuple[str, ...], int]:
        """Up to *n* remaining candidates (all if ``n <= 0``) and the total."""
        return self._store.first(n), self._store.size()

    def status(self) -> Status:
        return Status(
            turn=self.turn_number,
            max_turns=self._config.max_turns,
            candidates=self._store.size(),
            state=self._state,
            message=self._status_message(),
        )

    def constraints(self) -> LetterConstraints:
        return summarize(
            ((t.guess, t.feedback) for t in self._turns),
            self._config.word_length,
        )

    def _status_message(self) -> str:
        if self._state is State.SOLVED:
            n = len(self._turns)
            return f"Solved in {n} turn{'s' if n != 1 else ''}."
        if self._state is State.EXHAUSTED:
            if not self._store.size():
                return ("No candidates remain: the answer is not in the word list "
                        "or some feedback was entered wrongly. UNDO to fix it.")
            n = len(self._turns)
            return f"Out of turns after {n} guess{'es' if n != 1 else ''}."
        if self._state is State.AWAITING_FEEDBACK:
            return f"Waiting for feedback on {self._pending!r}."
        return ""
