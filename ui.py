"""Terminal command parsing and text rendering.

Everything here returns strings or plain values; ``play`` does the printing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from wordle_env import Symbol, ValidationError, format_pattern, parse_pattern

TILES = {Symbol.GREEN: "\U0001f7e9", Symbol.YELLOW: "\U0001f7e8", Symbol.BLACK: "⬛"}

DEFAULT_HINTS = 5
DEFAULT_LIST = 10
TIE_EPSILON = 1e-10

GAME_MODE_TITLE = "Game Mode"
GAME_MODE_SUBTITLE = "Enter a 5-letter guess"
GAME_COMMANDS = [
    ("/HELP", "Show this command list"),
    ("/HINT [n]", f"Show top n suggested guesses (default {DEFAULT_HINTS})"),
    ("/STATUS", "Show turn/candidate status"),
    ("/BOARD", "Reprint the board"),
    ("/KNOWN", "Summarise what the feedback says about each letter"),
    ("/UNDO", "Undo the previous accepted guess"),
    ("/EXIT", "Return to main menu"),
]

ORACLE_MODE_TITLE = "Solver Mode"
ORACLE_MODE_SUBTITLE = "Enter feedback as 5 chars: G/Y/B (example: GYBBY)"
ORACLE_COMMANDS = [
    ("HELP", "Show this command list"),
    ("STATUS", "Show turn and candidate status"),
    ("TOP [n]", f"Show top n suggestions (default {DEFAULT_LIST})"),
    ("CANDS [n]", f"Show first n remaining candidates (default {DEFAULT_LIST})"),
    ("GUESS <word>", "Play a different word than the suggestion"),
    ("BOARD", "Show guess history with colored feedback"),
    ("KNOWN", "Summarise what the feedback says about each letter"),
    ("UNDO", "Revert the previous accepted turn"),
    ("EXIT", "Return to main menu"),
]


@dataclass(frozen=True)
class Command:
    """A parsed line of input.

    ``name`` is one of the command names in lowercase, ``"guess"``,
    ``"feedback"``, ``"unknown"`` or ``"invalid"``; ``arg`` carries the
    guess text, the feedback text or the count for list commands.
    """

    name: str
    arg: str | int | None = None


def _count_arg(arg: str | None, default: int) -> int:
    try:
        n = int(arg) if arg is not None else default
    except ValueError:
        n = default
    return max(n, 1)


# ------------------------------------------------------------------
# Parsing
# ------------------------------------------------------------------

def parse_game_input(raw: str) -> Command:
    """Game mode: ``/COMMAND [n]`` or a guess."""
    trimmed = raw.strip()
    if not trimmed:
        return Command("invalid")

    if not trimmed.startswith("/"):
        return Command("guess", trimmed)

    parts = trimmed[1:].split()
    if not parts:
        return Command("unknown", "")
    cmd = parts[0].upper()
    arg = parts[1] if len(parts) > 1 else None

    if cmd == "HINT":
        return Command("hint", _count_arg(arg, DEFAULT_HINTS))
    if cmd in ("HELP", "STATUS", "BOARD", "KNOWN", "UNDO", "EXIT"):
        return Command(cmd.lower())
    return Command("unknown", cmd)


def parse_oracle_input(raw: str) -> Command:
    """Oracle mode: a feedback pattern or a bare command word."""
    trimmed = raw.strip()
    if not trimmed:
        return Command("invalid")

    try:
        return Command("feedback", format_pattern(parse_pattern(trimmed)))
    except ValidationError:
        pass

    parts = trimmed.split()
    cmd = parts[0].upper()
    arg = parts[1] if len(parts) > 1 else None

    if cmd in ("TOP", "CANDS"):
        return Command(cmd.lower(), _count_arg(arg, DEFAULT_LIST))
    if cmd == "GUESS":
        return Command("guess", arg) if arg else Command("invalid")
    if cmd in ("HELP", "STATUS", "BOARD", "KNOWN", "UNDO", "EXIT"):
        return Command(cmd.lower())
    return Command("invalid")


def tie_set(
    scored: Sequence[tuple[str, float]],
    eps: float = TIE_EPSILON,
) -> Sequence[tuple[str, float]]:
    """Leading run of *scored* whose entropy is within *eps* of the best."""
    if not scored:
        return scored[:0]
    best = scored[0][1]
    end = 1
    while end < len(scored) and abs(scored[end][1] - best) <= eps:
        end += 1
    return scored[:end]


def parse_tie_choice(raw: str, ties: Sequence[tuple[str, float]]) -> str | None:
    """Pick from *ties* by 1-based rank or by word; Enter picks the first."""
    choice = raw.strip().lower()
    if not choice:
        return ties[0][0]
    if choice.isdigit():
        k = int(choice)
        if 1 <= k <= len(ties):
            return ties[k - 1][0]
        return None
    for word, _ in ties:
        if word == choice:
            return word
    return None


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------

def tiles(pattern: Sequence[int]) -> str:
    return "".join(TILES[Symbol(s)] for s in pattern)


def render_board(turns) -> str:
    if not turns:
        return "Board: (empty)"
    lines = ["Board:"]
    for i, turn in enumerate(turns, 1):
        lines.append(f"  {i:>2}. {turn.guess.upper()}  {tiles(turn.feedback)}")
    return "\n".join(lines)


def format_ranked(
    scored: Sequence[tuple[str, float]],
    n: int,
    label: str,
    empty_message: str,
) -> str:
    limit = min(n, len(scored))
    if limit == 0:
        return empty_message
    lines = [f"Top {limit} {label}:"]
    for i, (w, h) in enumerate(scored[:limit], 1):
        lines.append(f"  {i:>2}. {w.upper()}  {h:.3f} bits")
    return "\n".join(lines)


def format_words(
    words: Sequence[str],
    total: int,
    label: str,
    empty_message: str,
) -> str:
    if not words:
        return empty_message
    lines = [f"First {len(words)} of {total} {label}:"]
    for i, w in enumerate(words, 1):
        lines.append(f"  {i:>2}. {w.upper()}")
    return "\n".join(lines)


def format_status(status, count_label: str, current_guess: str | None = None) -> str:
    text = (f"Status: turn {status.turn}/{status.max_turns} | "
            f"{count_label} {status.candidates}")
    if current_guess:
        text += f" | current guess {current_guess.upper()}"
    if status.terminal and status.message:
        text += f"\n{status.message}"
    return text


def format_undo(undid: bool) -> str:
    return "Previous turn undone." if undid else "Nothing to undo yet."


def format_commands(commands) -> str:
    lines = ["Commands:"]
    for name, description in commands:
        lines.append(f"  {name:<14} {description}")
    return "\n".join(lines)


def header(title: str, subtitle: str, commands) -> str:
    names = " ".join(name for name, _ in commands)
    bar = "=" * 24
    return f"{bar}\n{title}\n{subtitle}\nCommands: {names}\n{bar}\n"


def clear_screen() -> str:
    """ANSI clear-screen + cursor-home sequence."""
    return "\x1b[2J\x1b[H"
