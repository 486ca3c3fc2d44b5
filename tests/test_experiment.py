import json

import pytest

import experiment
from policies.candidates_only import CandidatesPolicy


@pytest.mark.parametrize("secret", ["crane", "trace", "slate", "plate", "grate"])
def test_play_one_solves_scenario(words, ranker, secret):
    log = experiment.play_one(words, secret, ranker, CandidatesPolicy())
    assert log["solved"]
    assert log["num_guesses"] <= 2
    assert log["steps"][0]["guess"] == "plate"
    assert log["steps"][-1]["feedback"] == "GGGGG"
    assert len(log["board"]) == log["num_guesses"]


def test_run_experiment(words, ranker):
    logs = experiment.run_experiment(words, ranker, CandidatesPolicy(), num_games=3, seed=1)
    assert [g["game"] for g in logs] == [1, 2, 3]
    assert len({g["secret"] for g in logs}) == 3
    assert all("board" not in g for g in logs)


def test_summarize():
    logs = [
        {"solved": True, "num_guesses": 2},
        {"solved": True, "num_guesses": 4},
        {"solved": False, "num_guesses": 6},
        {"solved": True, "num_guesses": 3},
    ]
    summary = experiment.summarize(logs)
    assert summary == {
        "games": 4,
        "solved": 3,
        "solve_rate": 0.75,
        "mean_guesses": 3.75,
        "median_guesses": 3.5,
        "max_guesses": 6,
    }
    assert experiment.summarize([])["games"] == 0


def test_main_writes_json(tmp_path, words):
    word_file = tmp_path / "words.txt"
    word_file.write_text("\n".join(words) + "\n", encoding="utf-8")
    out = tmp_path / "out.json"

    code = experiment.main([
        "--words", str(word_file), "--num-games", "5", "--pool", "candidates",
        "--workers", "1", "--json", str(out),
    ])
    assert code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["games"] == 5
    assert data["summary"]["solve_rate"] == 1.0
    assert data["summary"]["max_guesses"] <= 2


def test_main_rejects_bad_max_turns(capsys):
    assert experiment.main(["--max-turns", "0", "--workers", "1"]) == 2
    assert "max_turns" in capsys.readouterr().err
