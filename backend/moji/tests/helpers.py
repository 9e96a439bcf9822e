"""Shared builders and fakes for Moji tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from moji.logic.clock import Calendar
from moji.logic.enums import SPECIAL_TYPES, ResultType
from moji.logic.stats import StatsEngine
from moji.logic.types import HistoryEntry, PuzzleResult
from shared.storage import InMemoryStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from moji.logic.types import Grid

# Puzzle #1 is 2025-12-21, so this is puzzle #21.
DEFAULT_NOW = datetime(2026, 1, 10, 12, 0, 0, tzinfo=UTC)


class ScriptedStream:
    """Stand-in generator that replays fixed draws and counts how many were used."""

    def __init__(self, draws: Iterable[float]) -> None:
        self._draws = list(draws)
        self.used = 0

    def next(self) -> float:
        if self.used >= len(self._draws):
            raise AssertionError(f"stream exhausted after {self.used} draws")
        value = self._draws[self.used]
        self.used += 1
        return value


class FakeClock:
    """Mutable clock for tests that walk across calendar days."""

    def __init__(self, start: datetime = DEFAULT_NOW) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, days: int = 1) -> None:
        self.current += timedelta(days=days)


def make_result(result_type: ResultType, score: str, rows: int) -> PuzzleResult:
    return PuzzleResult(
        type=result_type,
        score=score,
        rows=rows,
        is_special=result_type in SPECIAL_TYPES,
        is_fail=result_type == ResultType.FAIL,
    )


def win(rows: int = 4) -> PuzzleResult:
    return make_result(ResultType.WIN, str(rows), rows)


def fail() -> PuzzleResult:
    return make_result(ResultType.FAIL, "X", 6)


def make_entry(
    date: str,
    *,
    result: PuzzleResult | None = None,
    puzzle_number: int = 1,
    grid: Grid | None = None,
) -> HistoryEntry:
    result = result or win()
    return HistoryEntry(
        date=date,
        puzzle_number=puzzle_number,
        score=result.score,
        type=result.type,
        is_fail=result.is_fail,
        is_special=result.is_special,
        grid=grid if grid is not None else [["green"] * 5 for _ in range(result.rows)],
    )


def make_engine(
    clock: FakeClock | None = None,
    *,
    store: InMemoryStore | None = None,
    unlimited_plays: bool = False,
) -> StatsEngine:
    return StatsEngine(
        store if store is not None else InMemoryStore(),
        Calendar(now=clock or FakeClock()),
        unlimited_plays=unlimited_plays,
    )
