"""
Outcome selection: classify a puzzle into a result category.

One draw (the special roll) picks between the four low-probability
special outcomes and the normal branch; star, bulb and normal outcomes
consume exactly one more draw. Ranges are left-inclusive and evaluated in
order, so together they partition [0, 1).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from moji.logic.enums import ResultType
from moji.logic.rng import outcome_rng
from moji.logic.types import PuzzleResult

if TYPE_CHECKING:
    from moji.logic.rng import RandomStream

MAX_NORMAL_ROWS = 6
SPECIAL_FAIL_ROWS = 7

# (upper bound of special roll, outcome): 1.25% each, 5% in total.
# The normal branch covers [0.05, 1.0).
SPECIAL_THRESHOLDS: tuple[tuple[float, ResultType], ...] = (
    (0.0125, ResultType.SPECIAL_WIN),
    (0.025, ResultType.SPECIAL_FAIL),
    (0.0375, ResultType.SPECIAL_STAR),
    (0.05, ResultType.SPECIAL_BULB),
)

# Cumulative upper bounds of the outcome roll: 3%, 8%, 20%, 30%, 20%, 12%, 7%.
SCORE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.03, "1"),
    (0.11, "2"),
    (0.31, "3"),
    (0.61, "4"),
    (0.81, "5"),
    (0.93, "6"),
    (1.0, "X"),
)

FAIL_SCORE = "X"
SPECIAL_WIN_SCORE = "0"
SPECIAL_FAIL_SCORE = "7"
STAR_SCORE = "⭐"


def _finale_rows(rng: RandomStream) -> int:
    return int(rng.next() * MAX_NORMAL_ROWS) + 1


def _special_result(kind: ResultType, rng: RandomStream) -> PuzzleResult:
    if kind == ResultType.SPECIAL_WIN:
        return PuzzleResult(type=kind, score=SPECIAL_WIN_SCORE, rows=0, is_special=True, is_fail=False)
    if kind == ResultType.SPECIAL_FAIL:
        return PuzzleResult(
            type=kind,
            score=SPECIAL_FAIL_SCORE,
            rows=SPECIAL_FAIL_ROWS,
            is_special=True,
            is_fail=False,
        )
    rows = _finale_rows(rng)
    score = STAR_SCORE if kind == ResultType.SPECIAL_STAR else str(rows)
    return PuzzleResult(type=kind, score=score, rows=rows, is_special=True, is_fail=False)


def score_for_roll(outcome_roll: float) -> str:
    """Map a normal-branch roll onto a score label."""
    for upper, score in SCORE_THRESHOLDS:
        if outcome_roll < upper:
            return score
    return FAIL_SCORE


def _normal_result(rng: RandomStream) -> PuzzleResult:
    score = score_for_roll(rng.next())
    if score == FAIL_SCORE:
        return PuzzleResult(type=ResultType.FAIL, score=score, rows=MAX_NORMAL_ROWS, is_special=False, is_fail=True)
    return PuzzleResult(type=ResultType.WIN, score=score, rows=int(score), is_special=False, is_fail=False)


def select_outcome(rng: RandomStream) -> PuzzleResult:
    """Classify a puzzle using draws from the given stream."""
    special_roll = rng.next()
    for upper, kind in SPECIAL_THRESHOLDS:
        if special_roll < upper:
            return _special_result(kind, rng)
    return _normal_result(rng)


def generate_result(puzzle_index: int) -> PuzzleResult:
    """Result for a puzzle index. Every player on the same day gets the same one."""
    return select_outcome(outcome_rng(puzzle_index))
