"""Simulate the outcome selector over a range of puzzle numbers.

Prints observed vs expected frequency for every outcome so a change to the
selection table (or the generator) shows up as a drift in the numbers.

Usage:
    uv run python bin/simulate_distribution.py
    uv run python bin/simulate_distribution.py --start 1 --count 100000
"""

from __future__ import annotations

import argparse
import logging
from collections import Counter

from moji.logic.enums import ResultType
from moji.logic.outcome import generate_result
from moji.logic.stats import SPECIAL_LABELS
from shared.logging import setup_logging

# Expected share of all plays per outcome label.
EXPECTED = {
    "1": 0.95 * 0.03,
    "2": 0.95 * 0.08,
    "3": 0.95 * 0.20,
    "4": 0.95 * 0.30,
    "5": 0.95 * 0.20,
    "6": 0.95 * 0.12,
    "X": 0.95 * 0.07,
    SPECIAL_LABELS[ResultType.SPECIAL_WIN]: 0.0125,
    SPECIAL_LABELS[ResultType.SPECIAL_FAIL]: 0.0125,
    SPECIAL_LABELS[ResultType.SPECIAL_STAR]: 0.0125,
    SPECIAL_LABELS[ResultType.SPECIAL_BULB]: 0.0125,
}


def simulate(start: int, count: int) -> Counter[str]:
    """Count outcome labels for puzzles start .. start + count - 1."""
    counts: Counter[str] = Counter()
    for puzzle_number in range(start, start + count):
        result = generate_result(puzzle_number)
        label = SPECIAL_LABELS[result.type] if result.is_special else result.score
        counts[label] += 1
    return counts


def _print_report(counts: Counter[str], count: int) -> None:
    print(f"{'outcome':>8}  {'count':>8}  {'observed':>9}  {'expected':>9}  {'delta':>7}")
    for label, expected in EXPECTED.items():
        observed = counts[label] / count
        print(f"{label:>8}  {counts[label]:>8}  {observed:>9.4f}  {expected:>9.4f}  {observed - expected:>+7.4f}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate Moji outcome frequencies")
    parser.add_argument("--start", type=int, default=1, help="first puzzle number")
    parser.add_argument("--count", type=int, default=10_000, help="number of puzzles to simulate")
    args = parser.parse_args()

    setup_logging(level=logging.WARNING)
    counts = simulate(args.start, args.count)
    print(f"Simulated puzzles {args.start}..{args.start + args.count - 1}")
    print()
    _print_report(counts, args.count)


if __name__ == "__main__":
    main()
