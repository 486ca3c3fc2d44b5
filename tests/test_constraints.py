from constraints import summarize
from wordle_env import parse_pattern


def test_summary_from_scenario():
    c = summarize([("crane", parse_pattern("BGGBG"))])
    assert c.greens == {1: "r", 2: "a", 4: "e"}
    assert c.absent == {"c", "n"}
    assert c.present == {"r", "a", "e"}
    assert c.mask() == "_ra_e"
    assert "Absent: cn" in c.describe()


def test_summary_duplicate_letters():
    # allee vs apple: one 'l' credited, the other black
    c = summarize([("allee", parse_pattern("GYBBG"))])
    assert c.exact_counts["l"] == 1
    assert c.exact_counts["e"] == 1
    assert c.wrong_positions["l"] == {1, 2}
    assert c.wrong_positions["e"] == {3}
    assert c.absent == set()
    assert c.min_counts["l"] == 1


def test_summary_takes_largest_minimum():
    c = summarize([
        ("speed", parse_pattern("YBYYB")),
        ("crane", parse_pattern("BGGBG")),
    ])
    assert c.min_counts["e"] == 2
    assert "e" not in c.exact_counts
    assert c.exact_counts["p"] == 0
    assert c.greens == {1: "r", 2: "a", 4: "e"}


def test_empty_history():
    c = summarize([])
    assert c.mask() == "_____"
    assert c.describe() == ["Known: _____"]
