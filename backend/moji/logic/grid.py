"""
Grid synthesis: build the tile grid that visualises a result.

Draw order is row-major and tile-major within a row. Rows whose tiles are
forced (star and bulb finales) consume no draws, and a win finale consumes
a single draw for its colour.

Progress rows bias toward green and yellow as the row index approaches the
final row:

    green   [0, 0.2 + 0.3 * p)
    yellow  [.., 0.5 + 0.2 * p)
    empty   [.., 0.7)
    blue    [.., 0.85)
    purple  [.., 1.0)

where p = row / total_rows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from moji.logic.enums import ResultType, Tile
from moji.logic.rng import grid_rng
from moji.logic.tiles import CHAOS_TILES, GRID_WIDTH, WIN_TILES

if TYPE_CHECKING:
    from moji.logic.rng import RandomStream
    from moji.logic.types import Grid, PuzzleResult

GREEN_BASE = 0.2
GREEN_PROGRESS = 0.3
YELLOW_BASE = 0.5
YELLOW_PROGRESS = 0.2
EMPTY_UPPER = 0.7
BLUE_UPPER = 0.85

_FINALE_TILES: dict[ResultType, Tile] = {
    ResultType.SPECIAL_STAR: Tile.STAR,
    ResultType.SPECIAL_BULB: Tile.LIGHTBULB,
}


def _pick(rng: RandomStream, pool: tuple[Tile, ...]) -> Tile:
    return pool[int(rng.next() * len(pool))]


def progress_tile(roll: float, progress_bias: float) -> Tile:
    """Map a roll onto a tile for a progress row at the given bias in [0, 1)."""
    if roll < GREEN_BASE + progress_bias * GREEN_PROGRESS:
        return Tile.GREEN
    if roll < YELLOW_BASE + progress_bias * YELLOW_PROGRESS:
        return Tile.YELLOW
    if roll < EMPTY_UPPER:
        return Tile.EMPTY
    if roll < BLUE_UPPER:
        return Tile.BLUE
    return Tile.PURPLE


def _build_row(rng: RandomStream, result: PuzzleResult, row: int) -> list[Tile]:
    is_last_row = row == result.rows - 1

    if result.type == ResultType.SPECIAL_WIN:
        return [_pick(rng, CHAOS_TILES) for _ in range(GRID_WIDTH)]

    if is_last_row and result.type in _FINALE_TILES:
        return [_FINALE_TILES[result.type]] * GRID_WIDTH

    if is_last_row and result.type == ResultType.WIN:
        return [_pick(rng, WIN_TILES)] * GRID_WIDTH

    progress_bias = row / result.rows
    return [progress_tile(rng.next(), progress_bias) for _ in range(GRID_WIDTH)]


def build_grid(rng: RandomStream, result: PuzzleResult) -> Grid:
    """Build result.rows rows of GRID_WIDTH tiles from the given stream."""
    return [_build_row(rng, result, row) for row in range(result.rows)]


def generate_grid(grid_seed: int, result: PuzzleResult) -> Grid:
    """Grid for a result from a per-play seed. The same seed always rebuilds the same grid."""
    return build_grid(grid_rng(grid_seed), result)
