"""
Play session: the explicit context for one device's game flow.

A new play selects the day's outcome, synthesizes a grid from the play
timestamp, and persists the result before returning, so presentation only
ever renders state that is already durable. A returning player gets the
persisted grid back verbatim instead of a regenerated one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from moji.logic.exceptions import NothingToShareError
from moji.logic.grid import generate_grid
from moji.logic.outcome import generate_result
from moji.logic.share import format_share_text

if TYPE_CHECKING:
    from moji.logic.clock import Calendar
    from moji.logic.stats import StatsEngine
    from moji.logic.types import Grid, PuzzleResult, StatsRecord

logger = structlog.get_logger()

# Unlimited plays give each attempt its own outcome index: puzzle * 1000 + attempt.
UNLIMITED_ATTEMPT_STRIDE = 1000


@dataclass(frozen=True)
class PlayOutcome:
    """Everything presentation needs to show one play."""

    puzzle_number: int
    result: PuzzleResult
    grid: Grid
    stats: StatsRecord
    is_replay: bool  # true when shown from history instead of freshly played


class PlaySession:
    def __init__(self, engine: StatsEngine, calendar: Calendar) -> None:
        self._engine = engine
        self._calendar = calendar
        self._current: PlayOutcome | None = None
        self._attempts = 0

    @property
    def current(self) -> PlayOutcome | None:
        return self._current

    @property
    def engine(self) -> StatsEngine:
        return self._engine

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    def outcome_index(self, puzzle_number: int) -> int:
        """Index fed to the outcome selector for the next play."""
        if not self._engine.unlimited_plays:
            return puzzle_number
        index = puzzle_number * UNLIMITED_ATTEMPT_STRIDE + self._attempts
        self._attempts += 1
        return index

    def resume(self) -> PlayOutcome | None:
        """Restore today's play from history, if the player already played today."""
        if not self._engine.has_played_today():
            return None
        entry = self._engine.today_entry()
        if entry is None:
            return None
        self._current = PlayOutcome(
            puzzle_number=entry.puzzle_number,
            result=entry.to_result(),
            grid=entry.grid,
            stats=self._engine.load(),
            is_replay=True,
        )
        return self._current

    def play(self, timestamp_ms: int | None = None) -> PlayOutcome:
        """Play today's puzzle, or replay it instantly when already played."""
        replay = self.resume()
        if replay is not None:
            return replay

        if timestamp_ms is None:
            timestamp_ms = int(self._calendar.now().timestamp() * 1000)

        puzzle_number = self._calendar.puzzle_number()
        result = generate_result(self.outcome_index(puzzle_number))
        grid = generate_grid(timestamp_ms, result)
        stats = self._engine.record_result(puzzle_number, result, grid)

        self._current = PlayOutcome(
            puzzle_number=puzzle_number,
            result=result,
            grid=grid,
            stats=stats,
            is_replay=False,
        )
        logger.debug("new play", puzzle_number=puzzle_number, grid_seed=timestamp_ms, rows=result.rows)
        return self._current

    def share_text(self) -> str:
        """Share text for the current play, using the streak as currently persisted."""
        if self._current is None:
            raise NothingToShareError("No result to share")
        streak = self._engine.load().current_streak
        return format_share_text(self._current.puzzle_number, self._current.result, self._current.grid, streak)
