"""
String enum definitions for Moji game concepts.
"""

from enum import StrEnum


class ResultType(StrEnum):
    """Closed set of mutually exclusive puzzle outcomes."""

    WIN = "win"
    FAIL = "fail"
    SPECIAL_WIN = "special-win"  # zero rows
    SPECIAL_FAIL = "special-fail"  # seven rows, does not break the streak
    SPECIAL_STAR = "special-star"  # star finale row
    SPECIAL_BULB = "special-bulb"  # lightbulb finale row


class Tile(StrEnum):
    """Tile kinds that can appear in a grid."""

    EMPTY = "empty"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    ORANGE = "orange"
    STAR = "star"
    LIGHTBULB = "lightbulb"
    BLUE_CIRCLE = "bluecircle"


SPECIAL_TYPES = frozenset(
    {
        ResultType.SPECIAL_WIN,
        ResultType.SPECIAL_FAIL,
        ResultType.SPECIAL_STAR,
        ResultType.SPECIAL_BULB,
    },
)
