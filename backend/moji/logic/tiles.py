"""
Tile vocabulary: share symbols, CSS classes, and the draw pools.

Pool order is part of the frozen draw contract; reordering a pool changes
which tile a given draw selects.
"""

from moji.logic.enums import Tile

GRID_WIDTH = 5

FALLBACK_SYMBOL = "⬜"
FALLBACK_CSS_CLASS = "empty"

TILE_SYMBOLS: dict[Tile, str] = {
    Tile.EMPTY: "⬜",
    Tile.YELLOW: "🟨",
    Tile.GREEN: "🟩",
    Tile.BLUE: "🟦",
    Tile.PURPLE: "🟪",
    Tile.ORANGE: "🟠",
    Tile.STAR: "⭐",
    Tile.LIGHTBULB: "💡",
    Tile.BLUE_CIRCLE: "🔵",
}

TILE_CSS_CLASSES: dict[Tile, str] = {
    Tile.EMPTY: "empty",
    Tile.YELLOW: "yellow",
    Tile.GREEN: "green",
    Tile.BLUE: "blue",
    Tile.PURPLE: "purple",
    Tile.ORANGE: "orange",
    Tile.STAR: "star",
    Tile.LIGHTBULB: "lightbulb",
    Tile.BLUE_CIRCLE: "blue",  # rendered as a blue tile, shared as a circle
}

_SYMBOL_TILES: dict[str, Tile] = {symbol: tile for tile, symbol in TILE_SYMBOLS.items()}

WIN_TILES: tuple[Tile, ...] = (Tile.GREEN, Tile.BLUE, Tile.PURPLE, Tile.YELLOW)

CHAOS_TILES: tuple[Tile, ...] = (
    Tile.GREEN,
    Tile.PURPLE,
    Tile.BLUE_CIRCLE,
    Tile.LIGHTBULB,
    Tile.YELLOW,
    Tile.BLUE,
    Tile.ORANGE,
    Tile.STAR,
)


def _as_tile(tile: str) -> Tile | None:
    try:
        return Tile(tile)
    except ValueError:
        return None


def tile_symbol(tile: str) -> str:
    """Share symbol for a tile kind; unknown kinds fall back to the blank square."""
    known = _as_tile(tile)
    if known is None:
        return FALLBACK_SYMBOL
    return TILE_SYMBOLS[known]


def tile_css_class(tile: str) -> str:
    """CSS class for a tile kind; unknown kinds render as empty."""
    known = _as_tile(tile)
    if known is None:
        return FALLBACK_CSS_CLASS
    return TILE_CSS_CLASSES[known]


def symbol_tile(symbol: str) -> Tile | None:
    """Inverse of tile_symbol for known symbols."""
    return _SYMBOL_TILES.get(symbol)
