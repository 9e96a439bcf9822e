"""Declarative description of the result screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from moji.logic.share import format_score, streak_line
from moji.logic.tiles import tile_css_class

if TYPE_CHECKING:
    from moji.logic.types import Grid, PuzzleResult, StatsRecord

STREAK_LOST_TEXT = "Streak lost 💔"


class ResultView(BaseModel):
    model_config = ConfigDict(frozen=True)

    puzzle_number: int
    score_label: str
    result_type: str
    is_fail: bool
    rows: list[list[str]]  # CSS class per tile
    streak_text: str
    streak_active: bool


def render_streak(stats: StatsRecord, result: PuzzleResult) -> tuple[str, bool]:
    """Streak banner text and whether it shows as active."""
    active = streak_line(stats.current_streak, result)
    if active:
        return active, True
    if result.is_fail:
        return STREAK_LOST_TEXT, False
    return "", False


def render_result(puzzle_number: int, result: PuzzleResult, grid: Grid, stats: StatsRecord) -> ResultView:
    streak_text, streak_active = render_streak(stats, result)
    return ResultView(
        puzzle_number=puzzle_number,
        score_label=format_score(result),
        result_type=result.type.value,
        is_fail=result.is_fail,
        rows=[[tile_css_class(tile) for tile in row] for row in grid],
        streak_text=streak_text,
        streak_active=streak_active,
    )
