"""
Share text formatting.

    Moji #42 4/6

    🟨🟩⬜🟦🟨
    🟩🟩🟨⬜🟩
    🟩🟩🟩🟨🟩
    🟦🟦🟦🟦🟦

    🔥 3 day streak
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from moji.logic.enums import ResultType
from moji.logic.tiles import symbol_tile, tile_symbol

if TYPE_CHECKING:
    from moji.logic.enums import Tile
    from moji.logic.types import Grid, PuzzleResult

GAME_NAME = "Moji"
MAX_SCORE_TOKEN = "6"
BULB_SCORE_TOKEN = "💡"


def format_score(result: PuzzleResult) -> str:
    """Score label shown in the header and the share text, e.g. "4/6" or "3/💡"."""
    if result.type == ResultType.SPECIAL_BULB:
        return f"{result.score}/{BULB_SCORE_TOKEN}"
    return f"{result.score}/{MAX_SCORE_TOKEN}"


def streak_line(current_streak: int, result: PuzzleResult) -> str:
    """Streak banner text, empty unless a streak longer than one survives this result."""
    if current_streak > 1 and not result.is_fail:
        return f"🔥 {current_streak} day streak"
    return ""


def format_grid_row(row: list[str]) -> str:
    return "".join(tile_symbol(tile) for tile in row)


def format_share_text(puzzle_number: int, result: PuzzleResult, grid: Grid, current_streak: int) -> str:
    """Shareable text for a played puzzle. Unknown tile kinds render as a blank square."""
    lines = [f"{GAME_NAME} #{puzzle_number} {format_score(result)}", ""]
    lines.extend(format_grid_row(row) for row in grid)
    streak = streak_line(current_streak, result)
    if streak:
        lines.extend(["", streak])
    return "\n".join(lines).strip()


def parse_grid_row(line: str) -> list[Tile]:
    """Recover the tiles of one shared grid row. Raises ValueError on a foreign symbol."""
    tiles = []
    for symbol in line:
        tile = symbol_tile(symbol)
        if tile is None:
            raise ValueError(f"Unknown tile symbol {symbol!r}")
        tiles.append(tile)
    return tiles
