"""
Reveal timeline for the result screen.

Animation is a schedule of view-state transitions computed after the play
has been persisted. Presentation may drop or supersede any of them without
affecting recorded state.

Tiles flip left to right, row by row:

    t = START_DELAY + row_offset + col * TILE_DELAY
    row_offset(r + 1) = row_offset(r) + width * TILE_DELAY + ROW_PAUSE

The header shows once every tile is revealed, the bottom section shortly
after that.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from moji.logic.types import Grid

START_DELAY_MS = 100
TILE_DELAY_MS = 80
ROW_PAUSE_MS = 150
BOTTOM_DELAY_MS = 300
PLAY_AGAIN_DELAY_MS = 1000


class TransitionKind(StrEnum):
    SHOW_RESULT = "show_result"
    REVEAL_TILE = "reveal_tile"
    REVEAL_HEADER = "reveal_header"
    REVEAL_BOTTOM = "reveal_bottom"
    PLAY_AGAIN = "play_again"


class ViewTransition(BaseModel):
    model_config = ConfigDict(frozen=True)

    at_ms: int
    kind: TransitionKind
    row: int | None = None
    col: int | None = None


def _tiles(grid: Grid) -> list[tuple[int, int]]:
    return [(row, col) for row, tiles in enumerate(grid) for col in range(len(tiles))]


def instant_timeline(grid: Grid) -> list[ViewTransition]:
    """Everything visible at once, for a returning player."""
    transitions = [ViewTransition(at_ms=0, kind=TransitionKind.SHOW_RESULT)]
    transitions.extend(
        ViewTransition(at_ms=0, kind=TransitionKind.REVEAL_TILE, row=row, col=col) for row, col in _tiles(grid)
    )
    transitions.append(ViewTransition(at_ms=0, kind=TransitionKind.REVEAL_HEADER))
    transitions.append(ViewTransition(at_ms=0, kind=TransitionKind.REVEAL_BOTTOM))
    return transitions


def reveal_timeline(grid: Grid, *, unlimited_plays: bool = False) -> list[ViewTransition]:
    """Animated reveal for a new play, sorted by time."""
    transitions = [ViewTransition(at_ms=0, kind=TransitionKind.SHOW_RESULT)]

    row_offset = 0
    for row, tiles in enumerate(grid):
        for col in range(len(tiles)):
            at_ms = START_DELAY_MS + row_offset + col * TILE_DELAY_MS
            transitions.append(ViewTransition(at_ms=at_ms, kind=TransitionKind.REVEAL_TILE, row=row, col=col))
        row_offset += len(tiles) * TILE_DELAY_MS + ROW_PAUSE_MS

    header_at = START_DELAY_MS + row_offset
    bottom_at = header_at + BOTTOM_DELAY_MS
    transitions.append(ViewTransition(at_ms=header_at, kind=TransitionKind.REVEAL_HEADER))
    transitions.append(ViewTransition(at_ms=bottom_at, kind=TransitionKind.REVEAL_BOTTOM))
    if unlimited_plays:
        transitions.append(ViewTransition(at_ms=bottom_at + PLAY_AGAIN_DELAY_MS, kind=TransitionKind.PLAY_AGAIN))
    return transitions
