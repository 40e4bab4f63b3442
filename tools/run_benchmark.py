#!/usr/bin/env python3
"""
Draughts Engine Benchmark Runner

Runs the tactical suite for each difficulty, then plays self-play matches
between pairs of difficulties to check that stronger settings actually win.

Usage:
    python tools/run_benchmark.py [--variant american] [--difficulties easy,medium]
                                  [--games 4] [--max-plies 200] [--verbose]
"""

import sys
import argparse
import time
from itertools import combinations
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from draughts_engine.rules.errors import UnknownVariantError
from draughts_engine.rules.loader import get_available_variants
from draughts_engine.search.config import AIConfig, Difficulty
from draughts_engine.utils.log import setup_logger
from draughts_engine.utils.testing import run_matches, run_tactics


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_tactics_benchmark(difficulties: list[Difficulty], verbose: bool = False) -> list[dict]:
    """
    Run the tactical suite once per difficulty.

    Args:
        difficulties: Difficulties to test
        verbose: If True, print detailed results for each position
    """
    print("=" * 80)
    print("TACTICAL SUITE")
    print("=" * 80)

    all_results = []
    for difficulty in difficulties:
        config = AIConfig.from_difficulty(difficulty, random_seed=0)
        result = run_tactics(config, verbose=verbose)
        all_results.append({'difficulty': difficulty.value, **result})

        failed = [r for r in result['results'] if not r.correct]
        if failed and verbose:
            print(f"\n  Failed positions ({difficulty.value}):")
            for r in failed:
                print(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print(f"\n{'Difficulty':<12} {'Correct':<12} {'%':<8} {'Avg Time':<12}")
    print("-" * 80)
    for r in all_results:
        print(f"{r['difficulty']:<12} {r['score']}/{r['total']:<10} {r['percentage']:<7.1f}% {format_time(r['avg_time']):<12}")

    return all_results


def run_match_benchmark(
    variant: str,
    difficulties: list[Difficulty],
    games: int,
    max_plies: int,
) -> list[dict]:
    """
    Play every pair of difficulties against each other.

    The weaker setting plays red in half of the games and black in the
    other half.
    """
    print("\n" + "=" * 80)
    print(f"SELF-PLAY ({variant}, {games} games per pairing, max {max_plies} plies)")
    print("=" * 80)

    all_results = []
    for weak, strong in combinations(difficulties, 2):
        weak_config = AIConfig.from_difficulty(weak)
        strong_config = AIConfig.from_difficulty(strong)

        start_time = time.time()
        first = run_matches(variant, weak_config, strong_config, games=games - games // 2, max_plies=max_plies)
        second = run_matches(variant, strong_config, weak_config, games=games // 2, max_plies=max_plies)
        elapsed = time.time() - start_time

        all_results.append({
            'pairing': f"{weak.value} v {strong.value}",
            'weak_wins': first['red'] + second['black'],
            'strong_wins': first['black'] + second['red'],
            'draws': first['draw'] + second['draw'],
            'unfinished': first['unfinished'] + second['unfinished'],
            'time': elapsed,
        })

    print(f"\n{'Pairing':<20} {'Weak':<8} {'Strong':<8} {'Draws':<8} {'Unfinished':<12} {'Time':<10}")
    print("-" * 80)
    for r in all_results:
        print(
            f"{r['pairing']:<20} {r['weak_wins']:<8} {r['strong_wins']:<8} {r['draws']:<8} "
            f"{r['unfinished']:<12} {format_time(r['time']):<10}"
        )

    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark the draughts AI on tactics and in self-play"
    )
    parser.add_argument(
        "--variant",
        type=str,
        default="american",
        help="Variant to play the self-play matches in (default: american)"
    )
    parser.add_argument(
        "--difficulties",
        type=str,
        default="easy,medium",
        help="Comma-separated list of difficulties (default: easy,medium)"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=4,
        help="Games per pairing (default: 4)"
    )
    parser.add_argument(
        "--max-plies",
        type=int,
        default=200,
        help="Plies after which a game is stopped unfinished (default: 200)"
    )
    parser.add_argument(
        "--skip-matches",
        action="store_true",
        help="Only run the tactical suite"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results and search logs"
    )

    args = parser.parse_args()
    setup_logger(debug=args.verbose)

    try:
        difficulties = [Difficulty(d.strip()) for d in args.difficulties.split(",")]
    except ValueError:
        print(f"Error: difficulties must be among {', '.join(d.value for d in Difficulty)}")
        sys.exit(1)

    if args.variant not in get_available_variants():
        print(f"Error: {UnknownVariantError(args.variant)}")
        sys.exit(1)

    try:
        run_tactics_benchmark(difficulties, verbose=args.verbose)
        if not args.skip_matches and len(difficulties) >= 2:
            run_match_benchmark(args.variant, difficulties, args.games, args.max_plies)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n\nError running benchmark: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    print("\n" + "=" * 80)
    print("Benchmark complete!")
    print("=" * 80)


if __name__ == "__main__":
    main()
