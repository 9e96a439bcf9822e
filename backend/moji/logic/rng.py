"""
Seeded random number generation for outcome selection and grid synthesis.

Uses Mulberry32, a 32-bit state generator with a xorshift-multiply output
mix. The algorithm and its constants are a frozen contract: every shared
result and every persisted grid was produced by this exact stream, so any
change here silently invalidates them.

1. Reduce the seed modulo 2^32 (any integer is a valid seed)
2. Advance the state by a fixed odd increment (Weyl sequence)
3. Mix the state with two multiply-xorshift rounds
4. Scale the 32-bit output into [0, 1)
"""

from collections.abc import Iterator
from typing import Protocol

RNG_VERSION = "mulberry32-v1"  # Reported by /health so clients can detect a stream change

# Seed multipliers keep the outcome stream and the grid stream apart
# even when the same base value feeds both.
OUTCOME_SEED_MULTIPLIER = 12345
GRID_SEED_MULTIPLIER = 54321

_UINT32_MASK = 0xFFFFFFFF
_UINT32_SCALE = 4294967296.0  # 2^32
_WEYL_INCREMENT = 0x6D2B79F5


class RandomStream(Protocol):
    """Anything that yields floats in [0, 1) one draw at a time."""

    def next(self) -> float: ...


def _imul(a: int, b: int) -> int:
    """Multiply two uint32 values and keep the low 32 bits."""
    return (a * b) & _UINT32_MASK


class Mulberry32:
    """
    Pure Python Mulberry32 generator.

    Two instances built from the same seed yield identical sequences; the
    stream can only be restarted by constructing a new instance.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _UINT32_MASK

    def next_uint32(self) -> int:
        """Generate the next 32-bit unsigned integer and advance state."""
        self._state = (self._state + _WEYL_INCREMENT) & _UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _UINT32_MASK
        return (t ^ (t >> 14)) & _UINT32_MASK

    def next(self) -> float:
        """Generate the next float in [0, 1)."""
        return self.next_uint32() / _UINT32_SCALE

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.next()


def outcome_rng(puzzle_index: int) -> Mulberry32:
    """Build the outcome stream for a puzzle index; shared by every player on that day."""
    return Mulberry32(puzzle_index * OUTCOME_SEED_MULTIPLIER)


def grid_rng(grid_seed: int) -> Mulberry32:
    """Build the grid stream for a per-play seed (usually a millisecond timestamp)."""
    return Mulberry32(grid_seed * GRID_SEED_MULTIPLIER)
