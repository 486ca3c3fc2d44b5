"""Word-list loading and validation.

The loader reads a plain-text file with one word per line.  Case is folded
to lowercase, blank lines are skipped and repeated words keep their first
occurrence; anything else that is not a word of the configured length is
rejected with the offending line number.

``validate_word_list`` is the contract the solver core relies on: it never
coerces, it only accepts or raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from wordle_env import WORD_LENGTH, ConfigurationError, is_word

logger = logging.getLogger(__name__)

_DIR = Path(__file__).resolve().parent
DEFAULT_WORDLIST = _DIR / "data" / "wordlist.txt"


@dataclass(frozen=True)
class Lexicon:
    """A validated word list and where it came from."""
    words: tuple[str, ...]
    source: Path | None
    word_length: int = WORD_LENGTH


def validate_word_list(
    words: Iterable[str],
    word_length: int = WORD_LENGTH,
) -> tuple[str, ...]:
    """Return *words* as a tuple, or raise ConfigurationError.

    The list must be non-empty, duplicate-free, and hold only lowercase
    ASCII words of exactly *word_length* letters.
    """
    result = tuple(words)
    if not result:
        raise ConfigurationError("word list is empty")

    seen: set[str] = set()
    for idx, w in enumerate(result):
        if not isinstance(w, str) or not is_word(w, word_length):
            raise ConfigurationError(
                f"entry {idx} ({w!r}) is not a lowercase {word_length}-letter word"
            )
        if w in seen:
            raise ConfigurationError(f"entry {idx} ({w!r}) is a duplicate")
        seen.add(w)
    return result


def _load_txt(path: Path, word_length: int) -> list[str]:
    seen: set[str] = set()
    words: list[str] = []
    for line_no, raw in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        w = raw.strip()
        if not w:
            continue
        w = w.lower()
        if not is_word(w, word_length):
            raise ConfigurationError(
                f"{path}: invalid word at line {line_no}: expected exactly "
                f"{word_length} ASCII letters, got {raw.strip()!r}"
            )
        if w in seen:
            continue
        seen.add(w)
        words.append(w)
    return words


def load_word_list(
    path: str | Path | None = None,
    word_length: int = WORD_LENGTH,
) -> Lexicon:
    """Load a word list file.

    Parameters
    ----------
    path : str, Path or None
        Plain-text file, one word per line.  None uses the bundled
        ``data/wordlist.txt``.
    word_length : int
        Every word must have exactly this many letters.

    Returns
    -------
    Lexicon

    Raises
    ------
    ConfigurationError
        If the file is missing, holds an invalid line, or has no words.
    """
    src = Path(path) if path is not None else DEFAULT_WORDLIST
    if not src.is_file():
        raise ConfigurationError(f"word list not found: {src}")

    words = _load_txt(src, word_length)
    if not words:
        raise ConfigurationError(f"no {word_length}-letter words found in {src}")

    logger.debug("loaded %d words from %s", len(words), src)
    return Lexicon(
        words=validate_word_list(words, word_length),
        source=src,
        word_length=word_length,
    )
