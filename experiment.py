#!/usr/bin/env python3
"""Self-play experiment: the solver plays game mode against sampled secrets.

Each turn the solver plays its top suggestion.  Prints a summary, writes
JSON, and optionally a histogram of guess counts.

Usage:
    python3 experiment.py --num-games 20
    python3 experiment.py --pool candidates --verbose
    python3 experiment.py --num-games 100 --plot results/hist.png
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

import ui
from lexicon import load_word_list
from policies import DEFAULT_POLICY, discover_policies, get_policy
from policies.threshold import DEFAULT_THRESHOLD
from pool_policy import PoolPolicy
from ranker import EntropyRanker
from session import Mode, Session, SessionConfig, State
from wordle_env import ConfigurationError

RESULTS_DIR = Path(__file__).resolve().parent / "results"

logger = logging.getLogger(__name__)


def play_one(
    vocabulary: tuple[str, ...],
    secret: str,
    ranker: EntropyRanker,
    policy: PoolPolicy,
    max_turns: int = 6,
) -> dict:
    """Self-play a single game and return its log."""
    session = Session(
        vocabulary,
        Mode.GAME,
        secret=secret,
        config=SessionConfig(max_turns=max_turns),
        ranker=ranker,
        policy=policy,
    )
    steps: list[dict] = []
    while not session.is_over:
        word, h = session.suggest(1)[0]
        turn = session.submit_guess(word)
        steps.append({
            "guess": word,
            "feedback": turn.pattern_text,
            "entropy_bits": round(h, 4),
            "remaining": turn.remaining,
        })

    return {
        "secret": secret,
        "solved": session.state is State.SOLVED,
        "num_guesses": len(session.history),
        "steps": steps,
        "board": session.history,
    }


def run_experiment(
    vocabulary: tuple[str, ...],
    ranker: EntropyRanker,
    policy: PoolPolicy,
    num_games: int = 10,
    max_turns: int = 6,
    seed: int = 42,
    verbose: bool = False,
) -> list[dict]:
    rng = random.Random(seed)
    secrets = rng.sample(vocabulary, min(num_games, len(vocabulary)))

    logs: list[dict] = []
    for i, secret in enumerate(secrets, 1):
        result = play_one(vocabulary, secret, ranker, policy, max_turns)
        board = result.pop("board")
        result["game"] = i
        logs.append(result)

        if verbose:
            print(f"\n--- Game {i}/{len(secrets)} | Secret: {secret} ---")
            for n, (turn, step) in enumerate(zip(board, result["steps"]), 1):
                print(f"  Guess {n}: {turn.guess}  {ui.tiles(turn.feedback)}  "
                      f"remaining={turn.remaining}  H={step['entropy_bits']:.2f} bits")
            status = "SOLVED" if result["solved"] else "FAILED"
            print(f"  -> {status} in {result['num_guesses']} guesses")

    return logs


def summarize(logs: list[dict]) -> dict:
    n = len(logs)
    if not n:
        return {"games": 0, "solved": 0, "solve_rate": 0, "mean_guesses": 0,
                "median_guesses": 0, "max_guesses": 0}
    solved = sum(1 for g in logs if g["solved"])
    guesses = sorted(g["num_guesses"] for g in logs)
    median = (
        guesses[n // 2]
        if n % 2 == 1
        else (guesses[n // 2 - 1] + guesses[n // 2]) / 2
    )
    return {
        "games": n,
        "solved": solved,
        "solve_rate": round(solved / n, 4),
        "mean_guesses": round(sum(guesses) / n, 3),
        "median_guesses": median,
        "max_guesses": guesses[-1],
    }


def print_experiment_summary(summary: dict, policy_name: str) -> None:
    n = summary["games"]
    if not n:
        print("No games played.")
        return
    print(f"\n=== {policy_name} — {n} games ===")
    print(f"  Solved: {summary['solved']}/{n} ({100 * summary['solve_rate']:.1f}%)")
    print(f"  Guesses — mean: {summary['mean_guesses']:.2f}, "
          f"median: {summary['median_guesses']:.1f}, max: {summary['max_guesses']}")


def plot_distribution(logs: list[dict], policy_name: str, path: Path) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not installed — skipping plot", file=sys.stderr)
        return

    guesses = [g["num_guesses"] for g in logs]
    mx = max(guesses) if guesses else 6
    bins = list(range(1, mx + 2))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(guesses, bins=bins, edgecolor="black", align="left")
    ax.set_title(f"{policy_name} — guess distribution")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Count")
    fig.tight_layout()

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150)
    plt.close(fig)
    print(f"Plot saved to {path}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Solver self-play experiment")
    parser.add_argument("--words", type=str, default=None, help="Path to word list")
    parser.add_argument("--max-turns", type=int, default=6, help="Max guesses per game")
    parser.add_argument("--num-games", type=int, default=10, help="Number of games")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--pool", choices=sorted(discover_policies()), default=DEFAULT_POLICY,
                        help=f"Guess-pool policy (default: {DEFAULT_POLICY})")
    parser.add_argument("--pool-threshold", type=int, default=DEFAULT_THRESHOLD,
                        help="Threshold for the threshold policy")
    parser.add_argument("--workers", type=int, default=None,
                        help="Processes for entropy scoring (default: all CPU cores)")
    parser.add_argument("--verbose", action="store_true", help="Print per-game details")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram to this path")
    parser.add_argument("--json", type=str, default=None, help="Save results as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        lex = load_word_list(args.words)
        options = {"threshold": args.pool_threshold} if args.pool == "threshold" else {}
        policy = get_policy(args.pool, **options)
        ranker = EntropyRanker(workers=args.workers, seed=args.seed)
        SessionConfig(max_turns=args.max_turns)  # rejects a bad turn limit up front
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    print(f"Vocabulary: {len(lex.words)} words from {lex.source}")
    print(f"Policy: {policy.describe()}")

    logs = run_experiment(
        vocabulary=lex.words,
        ranker=ranker,
        policy=policy,
        num_games=args.num_games,
        max_turns=args.max_turns,
        seed=args.seed,
        verbose=args.verbose,
    )
    summary = summarize(logs)
    print_experiment_summary(summary, policy.describe())

    if args.plot:
        plot_distribution(logs, policy.describe(), Path(args.plot))

    json_path = Path(args.json) if args.json else RESULTS_DIR / f"experiment_{policy.name}.json"
    json_path.parent.mkdir(parents=True, exist_ok=True)
    output = {
        "policy": policy.describe(),
        "config": {
            "words": str(lex.source),
            "max_turns": args.max_turns,
            "num_games": args.num_games,
            "seed": args.seed,
        },
        "summary": summary,
        "games": logs,
    }
    json_path.write_text(json.dumps(output, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"JSON saved to {json_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
