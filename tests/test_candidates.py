import itertools

import pytest

from candidates import CandidateStore
from wordle_env import feedback, filter_candidates, parse_pattern

WORDS = (
    "crane", "trace", "slate", "plate", "grate", "react", "caret", "cater",
    "eerie", "geese", "those", "apple", "speed", "erase", "hello", "lolly",
    "allee", "ember", "shout", "stare",
)


def test_words_are_sorted_and_unique():
    store = CandidateStore(["trace", "crane", "trace"])
    assert store.words == ("crane", "trace")
    assert store.size() == 2
    assert len(store) == 2


def test_contains_and_first():
    store = CandidateStore(WORDS)
    assert store.contains("crane")
    assert "crane" in store
    assert not store.contains("zzzzz")
    assert store.first(3) == ("allee", "apple", "caret")
    assert store.first(0) == store.words
    assert store.first(-1) == store.words


def test_filter_scenario(words):
    store = CandidateStore(words)
    kept = store.filter("crane", parse_pattern("BGGBG"))
    assert kept == ("grate",)
    assert store.words == ("grate",)


@pytest.mark.parametrize("guess,target", itertools.product(WORDS, repeat=2))
def test_filter_never_drops_target(guess, target):
    store = CandidateStore(WORDS)
    before = store.size()
    kept = store.filter(guess, feedback(guess, target))
    assert target in kept
    assert len(kept) <= before
    assert all(feedback(guess, w) == feedback(guess, target) for w in kept)


def test_filter_is_monotone_over_turns():
    store = CandidateStore(WORDS)
    sizes = [store.size()]
    for guess in ("stare", "crane", "react"):
        store.filter(guess, feedback(guess, "caret"))
        sizes.append(store.size())
    assert sizes == sorted(sizes, reverse=True)
    assert "caret" in store


def test_snapshot_restore_is_exact():
    store = CandidateStore(WORDS)
    snap = store.snapshot()
    store.filter("crane", feedback("crane", "grate"))
    assert store.words != snap
    store.restore(snap)
    assert store.words == snap
    assert store.contains("crane")


def test_filter_agrees_with_filter_candidates():
    words = ("crane", "grate", "plate", "slate", "trace")
    store = CandidateStore(words)
    observed = feedback("crane", "grate")
    assert list(store.filter("crane", observed)) == filter_candidates(words, "crane", observed)
