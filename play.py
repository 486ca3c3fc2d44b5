#!/usr/bin/env python3
"""Interactive Wordle arcade: play a game or get help solving one.

Usage:
    python3 play.py                        # main menu
    python3 play.py --mode game            # straight into a game
    python3 play.py --mode oracle          # solve an external puzzle
    python3 play.py --pool candidates      # only suggest possible answers
    python3 play.py --words my_words.txt --max-turns 8
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Callable

import ui
from lexicon import load_word_list
from policies import DEFAULT_POLICY, discover_policies, get_policy
from policies.threshold import DEFAULT_THRESHOLD
from ranker import EntropyRanker
from session import Mode, Session, SessionConfig, State
from wordle_env import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[..., None]


# ------------------------------------------------------------------
# Game mode
# ------------------------------------------------------------------

def run_game(session: Session, read: Reader = input, write: Writer = print) -> None:
    """Play against the session's secret until solved, out of turns or EXIT."""
    write(ui.header(ui.GAME_MODE_TITLE, ui.GAME_MODE_SUBTITLE, ui.GAME_COMMANDS))

    while not session.is_over:
        status = session.status()
        write(f"Turn {status.turn}/{status.max_turns} | "
              f"Possible answers remaining: {status.candidates}")
        try:
            raw = read("Enter guess or command: ")
        except EOFError:
            write("EOF received. Exiting mode.")
            return

        cmd = ui.parse_game_input(raw)
        if cmd.name == "guess":
            try:
                session.submit_guess(cmd.arg)
            except ValidationError as exc:
                write(f"Invalid guess: {exc}")
                continue
            write(ui.render_board(session.history))
        elif cmd.name == "help":
            write(ui.format_commands(ui.GAME_COMMANDS))
        elif cmd.name == "hint":
            write(ui.format_ranked(session.suggest(cmd.arg), cmd.arg,
                                   "suggestions", "No suggestions available."))
        elif cmd.name == "status":
            write(ui.format_status(session.status(), "possible answers"))
        elif cmd.name == "board":
            write(ui.render_board(session.history))
        elif cmd.name == "known":
            write("\n".join(session.constraints().describe()))
        elif cmd.name == "undo":
            write(ui.format_undo(session.undo()))
        elif cmd.name == "exit":
            return
        elif cmd.name == "unknown":
            write("Unknown command. Use /HELP.")
        else:
            write("Invalid guess. Enter a 5-letter word or a command like /HELP.")

    if session.state is State.SOLVED:
        n = len(session.history)
        write(f"You solved it in {n} turn{'s' if n != 1 else ''}!")
    else:
        write("Out of turns.")
    write(f"Answer: {session.secret.upper()}")


# ------------------------------------------------------------------
# Oracle (solver) mode
# ------------------------------------------------------------------

def _choose_guess(session: Session, read: Reader, write: Writer) -> str | None:
    """Show the best suggestion, letting the user break ties. None on EOF."""
    scored = session.suggest()
    if not scored:
        return None
    ties = ui.tie_set(scored)
    if len(ties) == 1:
        word, h = scored[0]
        write(f"Suggested guess: {word.upper()} ({h:.3f} bits)")
        return word

    write(f"Multiple top-ranked guesses ({len(ties)} total):")
    for i, (w, _) in enumerate(ties[:10], 1):
        write(f"   {i}. {w.upper()}")
    if len(ties) > 10:
        write(f"   ... +{len(ties) - 10} more")
    write("Pick a guess (number or word), or press Enter for #1.")
    while True:
        try:
            raw = read("> ")
        except EOFError:
            return None
        picked = ui.parse_tie_choice(raw, ties)
        if picked is not None:
            return picked
        write("Invalid choice. Enter a valid number or one of the tied words:")


def _replace_guess(session: Session, text: str, write: Writer) -> None:
    previous = session.cancel_guess()
    try:
        session.submit_guess(text)
    except ValidationError as exc:
        write(f"Invalid guess: {exc}")
        session.submit_guess(previous)


def _offer_undo(session: Session, read: Reader, write: Writer) -> bool:
    """After an empty candidate set, let the user take the last feedback back."""
    write("Type UNDO to take the last feedback back, or press Enter to leave.")
    try:
        raw = read("> ")
    except EOFError:
        return False
    if raw.strip().upper() == "UNDO":
        write(ui.format_undo(session.undo()))
        return True
    return False


def run_oracle(session: Session, read: Reader = input, write: Writer = print) -> None:
    """Suggest guesses for an external puzzle and filter on the typed feedback."""
    write(ui.header(ui.ORACLE_MODE_TITLE, ui.ORACLE_MODE_SUBTITLE, ui.ORACLE_COMMANDS))

    while True:
        if session.is_over:
            status = session.status()
            if session.state is State.SOLVED:
                write("Congratulations, you won!")
                return
            write(status.message)
            if status.candidates == 0 and _offer_undo(session, read, write):
                continue
            return

        write(ui.render_board(session.history))
        status = session.status()
        write(f"Turn {status.turn}/{status.max_turns} | "
              f"Remaining candidates: {status.candidates}")

        guess = _choose_guess(session, read, write)
        if guess is None:
            write("EOF received. Exiting mode.")
            return
        session.submit_guess(guess)

        # Feedback loop: stays on this guess until feedback, UNDO or EXIT.
        while session.state is State.AWAITING_FEEDBACK:
            write(f"Enter results for {session.pending_guess.upper()}:")
            try:
                raw = read("> ")
            except EOFError:
                write("EOF received. Exiting mode.")
                return

            cmd = ui.parse_oracle_input(raw)
            if cmd.name == "feedback":
                try:
                    session.submit_feedback(cmd.arg)
                except ValidationError as exc:
                    write(f"{exc}\nState unchanged. Please re-enter feedback for the same guess.")
            elif cmd.name == "guess":
                _replace_guess(session, cmd.arg, write)
            elif cmd.name == "help":
                write(ui.format_commands(ui.ORACLE_COMMANDS))
                write("You can also enter a 5-letter G/Y/B pattern directly.")
            elif cmd.name == "status":
                write(ui.format_status(session.status(), "candidates", session.pending_guess))
            elif cmd.name == "top":
                write(ui.format_ranked(session.suggest(cmd.arg), cmd.arg,
                                       "ranked guesses", "No scored guesses available."))
            elif cmd.name == "cands":
                words, total = session.list_candidates(cmd.arg)
                write(ui.format_words(words, total, "candidates", "No candidates remain."))
            elif cmd.name == "board":
                write(ui.render_board(session.history))
            elif cmd.name == "known":
                write("\n".join(session.constraints().describe()))
            elif cmd.name == "undo":
                write(ui.format_undo(session.undo()))
            elif cmd.name == "exit":
                return
            else:
                write("Invalid input. Enter G/Y/B, or type HELP.")


# ------------------------------------------------------------------
# Menu and CLI
# ------------------------------------------------------------------

_MENU_CHOICES = {
    "1": "game", "PLAY": "game", "GAME": "game",
    "2": "oracle", "SOLVER": "oracle", "SOLVE": "oracle",
    "3": "help", "HELP": "help",
    "4": "exit", "EXIT": "exit", "QUIT": "exit",
}


def parse_menu_choice(raw: str) -> str | None:
    return _MENU_CHOICES.get(raw.strip().upper())


def _help_text(words_source) -> str:
    return "\n".join([
        "1) Game Mode",
        "   You guess words; the game computes G/Y/B feedback.",
        "   Use commands like /HINT and /UNDO while playing.",
        "",
        "2) Solver Mode",
        "   The solver suggests guesses; you type Wordle feedback (G/Y/B).",
        "   Great when you're solving an external game.",
        "",
        f"All words come from the word list: {words_source}",
    ])


def main_menu(
    make_session: Callable[[Mode], Session],
    words_source,
    read: Reader = input,
    write: Writer = print,
    clear: bool = False,
) -> None:
    while True:
        if clear:
            write(ui.clear_screen(), end="")
        write("========================\nWordle Arcade\n========================\n")
        write("1) Play Wordle (Game Mode)")
        write("2) Solve an External Wordle (Solver Mode)")
        write("3) Help")
        write("4) Exit")
        try:
            raw = read("Choose an option: ")
        except EOFError:
            write("EOF received. Exiting.")
            return

        choice = parse_menu_choice(raw)
        if choice == "exit":
            return
        if choice == "help":
            write(_help_text(words_source))
            continue
        if choice is None:
            write("Invalid selection.")
            continue

        try:
            session = make_session(Mode(choice))
        except ConfigurationError as exc:
            write(f"Error: {exc}")
            continue
        if choice == "game":
            run_game(session, read, write)
        else:
            run_oracle(session, read, write)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Wordle game and entropy-based solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--words", type=str, default=None,
                        help="Path to word list (default: bundled data/wordlist.txt)")
    parser.add_argument("--mode", choices=["menu", "game", "oracle"], default="menu",
                        help="Start in the menu (default) or go straight to a mode")
    parser.add_argument("--max-turns", type=int, default=6,
                        help="Turns per session (default: 6)")
    parser.add_argument("--pool", choices=sorted(discover_policies()), default=DEFAULT_POLICY,
                        help=f"Guess-pool policy (default: {DEFAULT_POLICY})")
    parser.add_argument("--pool-threshold", type=int, default=DEFAULT_THRESHOLD,
                        help="Candidates at or below which the threshold policy "
                             f"only scores candidates (default: {DEFAULT_THRESHOLD})")
    parser.add_argument("--workers", type=int, default=None,
                        help="Processes for entropy scoring (default: all CPU cores)")
    parser.add_argument("--max-guess-pool", type=int, default=None,
                        help="Score at most this many sampled guesses per turn")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the secret word and pool sampling")
    parser.add_argument("--secret", type=str, default=None,
                        help="Fix the game-mode secret word")
    parser.add_argument("--allow-non-words", action="store_true",
                        help="Accept any letter combination as a guess")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        lex = load_word_list(args.words)
        options = {"threshold": args.pool_threshold} if args.pool == "threshold" else {}
        policy = get_policy(args.pool, **options)
        ranker = EntropyRanker(
            workers=args.workers,
            max_guess_pool=args.max_guess_pool,
            seed=args.seed if args.seed is not None else 42,
        )
        config = SessionConfig(max_turns=args.max_turns, allow_non_words=args.allow_non_words)
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    rng = random.Random(args.seed)
    logger.debug("policy=%s workers=%d words=%d", policy.describe(), ranker.workers, len(lex.words))

    def make_session(mode: Mode) -> Session:
        return Session(
            lex.words,
            mode,
            secret=args.secret.strip().lower() if args.secret and mode is Mode.GAME else None,
            config=config,
            ranker=ranker,
            policy=policy,
            rng=rng,
        )

    try:
        if args.mode == "menu":
            main_menu(make_session, lex.source, clear=sys.stdout.isatty())
        elif args.mode == "game":
            run_game(make_session(Mode.GAME))
        else:
            run_oracle(make_session(Mode.ORACLE))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
