import itertools

import pytest

from wordle_env import (
    Symbol,
    ValidationError,
    all_green,
    decode_pattern,
    encode_pattern,
    feedback,
    feedback_code,
    filter_candidates,
    format_pattern,
    normalize_word,
    num_patterns,
    parse_pattern,
)

G, Y, B = Symbol.GREEN, Symbol.YELLOW, Symbol.BLACK


# --- Oracle golden cases ---
@pytest.mark.parametrize("guess,target,expected", [
    # worked example
    ("crane", "trace", "YGGBG"),
    # guess repeats a letter more often than the target
    ("allee", "apple", "GYBBG"),
    ("geese", "those", "BBBGG"),
    ("lolly", "hello", "BYGGB"),
    ("speed", "erase", "YBYYB"),
    # target repeats a letter more often than the guess
    ("ember", "eerie", "GBBYY"),
    # identical words
    ("crane", "crane", "GGGGG"),
    # nothing in common
    ("crane", "shout", "BBBBB"),
])
def test_feedback_golden(guess, target, expected):
    assert format_pattern(feedback(guess, target)) == expected


def test_crane_trace_symbols():
    assert feedback("crane", "trace") == (Y, G, G, B, G)


def test_earlier_duplicate_claims_yellow_first():
    # only one 'l' left after greens: position 1 takes it, position 2 is black
    pat = feedback("allee", "apple")
    assert pat[1] == Y
    assert pat[2] == B


def test_feedback_never_over_credits_letters():
    words = ["eerie", "geese", "those", "apple", "allee", "speed", "erase", "lolly", "hello"]
    for guess, target in itertools.product(words, repeat=2):
        pat = feedback(guess, target)
        for letter in set(guess):
            credited = sum(1 for g, s in zip(guess, pat) if g == letter and s != B)
            assert credited <= target.count(letter)


def test_feedback_length_mismatch():
    with pytest.raises(ValueError):
        feedback("cranes", "crane")


# --- Codec ---
def test_codec_round_trip_every_code():
    for code in range(num_patterns()):
        assert encode_pattern(decode_pattern(code)) == code


def test_codec_round_trip_every_pattern():
    for pat in itertools.product((0, 1, 2), repeat=5):
        assert decode_pattern(encode_pattern(pat)) == pat


def test_codec_digit_order():
    # position 0 is the least significant base-3 digit
    assert encode_pattern(parse_pattern("GYBBG")) == 2 + 1 * 3 + 2 * 81
    assert encode_pattern(all_green()) == 242
    assert encode_pattern((0,) * 5) == 0
    assert feedback_code("crane", "crane") == 242


@pytest.mark.parametrize("code", [-1, 243, 1000])
def test_decode_out_of_range(code):
    with pytest.raises(ValidationError):
        decode_pattern(code)


def test_parse_pattern_case_insensitive():
    assert parse_pattern("gyBbG") == (G, Y, B, B, G)
    assert parse_pattern("  GGGGG \n") == all_green()


@pytest.mark.parametrize("text", ["", "GYBB", "GYBBGG", "GYXBG", "12012", "G Y B"])
def test_parse_pattern_rejects(text):
    with pytest.raises(ValidationError):
        parse_pattern(text)


def test_format_pattern():
    assert format_pattern((2, 1, 0, 0, 2)) == "GYBBG"


# --- Words ---
def test_normalize_word():
    assert normalize_word("  CrAnE ") == "crane"


@pytest.mark.parametrize("text", ["cran", "cranes", "cr4ne", "cr-ne", "", "crané"])
def test_normalize_word_rejects(text):
    with pytest.raises(ValidationError):
        normalize_word(text)


# --- Filtering ---
def test_scenario_filter_matches_brute_force(words):
    observed = parse_pattern("BGGBG")
    kept = filter_candidates(words, "crane", observed)
    assert kept == [w for w in words if feedback("crane", w) == observed]
    assert kept == ["grate"]
