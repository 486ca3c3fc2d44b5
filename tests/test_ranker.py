import math

import pytest

import patterns
from lexicon import load_word_list
from ranker import EntropyRanker, pattern_entropy, row_entropies
from wordle_env import feedback_code

POOL = ("crane", "trace", "slate", "plate", "grate", "fuzzy", "speed", "eerie")


def _direct(guess, candidates):
    return pattern_entropy((feedback_code(guess, t) for t in candidates), 243)


def test_pattern_entropy_basics():
    assert pattern_entropy([0, 0, 1, 1], 243) == 1.0
    assert pattern_entropy([5], 243) == 0.0
    assert pattern_entropy([], 243) == 0.0
    h = pattern_entropy([3, 3, 3], 243)
    assert h == 0.0
    assert math.copysign(1.0, h) == 1.0


def test_scenario_entropy_by_hand(words):
    # crane splits the scenario into buckets of sizes 1, 1, 2, 1
    expected = 3 * (0.2 * math.log2(5)) + 0.4 * math.log2(2.5)
    assert _direct("crane", words) == pytest.approx(expected)
    # slate separates all five words
    assert _direct("slate", words) == pytest.approx(math.log2(5))


def test_entropy_bounds(words, ranker):
    for n in range(2, len(words) + 1):
        cands = words[:n]
        bound = math.log2(min(243, n))
        for word, h in ranker.rank(cands, POOL):
            assert 0.0 <= h <= bound + 1e-12


def test_single_candidate_is_degenerate(ranker):
    ranked = ranker.rank(["grate"], POOL)
    assert ranked[0] == ("grate", 0.0)
    assert all(h == 0.0 for _, h in ranked)
    assert [w for w, _ in ranked[1:]] == sorted(w for w in POOL if w != "grate")
    assert _direct("crane", ["grate"]) == 0.0


def test_single_candidate_outside_pool(ranker):
    ranked = ranker.rank(["grate"], ["crane"])
    assert ranked == [("grate", 0.0), ("crane", 0.0)]


def test_empty_inputs(ranker):
    assert ranker.rank([], POOL) == []
    assert ranker.rank(["crane", "trace"], []) == []


def test_ties_break_alphabetically(ranker):
    ranked = ranker.rank(["crane", "trace"], ["fuzzy", "trace", "crane"])
    assert ranked == [("crane", 1.0), ("trace", 1.0), ("fuzzy", 0.0)]


def test_sorted_descending(words, ranker):
    ranked = ranker.rank(words, POOL)
    assert [w for w, _ in ranked[:2]] == ["plate", "slate"]
    keys = [(-h, w) for w, h in ranked]
    assert keys == sorted(keys)


def test_top_n(words, ranker):
    full = ranker.rank(words, POOL)
    assert ranker.rank(words, POOL, top_n=3) == full[:3]
    assert ranker.rank(words, POOL, top_n=0) == full
    assert ranker.rank(words, POOL, top_n=-5) == full
    assert len(full) == len(POOL)


def test_duplicate_pool_words_scored_once(words, ranker):
    ranked = ranker.rank(words, ["crane", "crane", "slate"])
    assert [w for w, _ in ranked] == ["slate", "crane"]


def test_cache_returns_copies(words, ranker):
    first = ranker.rank(words, POOL)
    first.clear()
    assert len(ranker.rank(words, POOL)) == len(POOL)


def test_guess_pool_cap_is_explicit_and_deterministic(words):
    ranker = EntropyRanker(workers=1, max_guess_pool=3, cache_size=0)
    a = ranker.rank(words, POOL)
    b = ranker.rank(words, POOL)
    assert len(a) == 3
    assert a == b
    assert {w for w, _ in a} <= set(POOL)


def test_parallel_matches_serial():
    vocab = load_word_list().words
    pool = vocab[:160]
    cands = vocab[::20]
    serial = EntropyRanker(workers=1, cache_size=0).rank(cands, pool)
    parallel = EntropyRanker(workers=2, parallel_threshold=0, cache_size=0).rank(cands, pool)
    assert parallel == serial


@pytest.mark.parametrize("kwargs", [{"workers": 0}, {"max_guess_pool": 0}])
def test_bad_settings(kwargs):
    with pytest.raises(ValueError):
        EntropyRanker(**kwargs)


def test_row_entropies_match_single_rows():
    block = [[0, 0, 1, 1], [5, 5, 5, 5], [0, 1, 2, 3]]
    h = row_entropies(block, 243)
    assert h.tolist() == [1.0, 0.0, 2.0]


def test_equal_bucket_sizes_give_equal_floats():
    # Same bucket sizes in different code positions
    a, b = row_entropies([[0, 0, 7, 9, 9, 9], [242, 3, 3, 3, 1, 1]], 243)
    assert a == b


def test_ranker_agrees_with_direct_scoring():
    vocab = load_word_list().words
    pool = vocab[:300]
    cands = vocab[::7]
    ranked = EntropyRanker(workers=1, cache_size=0).rank(cands, pool)
    assert len(ranked) == len(pool)
    for word, h in ranked[:40] + ranked[-10:]:
        assert h == pytest.approx(_direct(word, cands), abs=1e-9)


def test_matrix_is_reused_across_turns(words, ranker, monkeypatch):
    ranker.rank(words, words)

    def no_rebuild(cls, *args, **kwargs):
        raise AssertionError("matrix rebuilt")

    monkeypatch.setattr(patterns.PatternMatrix, "build", classmethod(no_rebuild))
    assert ranker.rank(words[:3], words)
    assert ranker.rank(words[1:4], words[:2])
