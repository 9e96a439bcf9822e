"""
Pydantic models for puzzle results and the persisted statistics record.

Field names are snake_case in Python and camelCase on disk, matching the
record layout the browser game has always written.
"""

from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from moji.logic.enums import SPECIAL_TYPES, ResultType

MAX_ROWS = 7
SCORE_LABELS: tuple[str, ...] = ("1", "2", "3", "4", "5", "6", "X")

DayString = Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}$")]
GridRow = list[str]
Grid = list[GridRow]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def _check_result_flags(result_type: ResultType, *, is_fail: bool, is_special: bool) -> None:
    if is_fail != (result_type == ResultType.FAIL):
        raise ValueError("is_fail must be set exactly for plain fail results")
    if is_special != (result_type in SPECIAL_TYPES):
        raise ValueError("is_special must match the result type")


class PuzzleResult(_CamelModel):
    """Outcome category of a single play."""

    type: ResultType
    score: str
    rows: int = Field(ge=0, le=MAX_ROWS)
    is_special: bool
    is_fail: bool

    @model_validator(mode="after")
    def _validate_flags(self) -> Self:
        _check_result_flags(self.type, is_fail=self.is_fail, is_special=self.is_special)
        return self


class HistoryEntry(_CamelModel):
    """One recorded play. Never modified once appended."""

    date: DayString
    puzzle_number: int
    score: str
    type: ResultType
    is_fail: bool
    is_special: bool
    grid: Grid = Field(default_factory=list, max_length=MAX_ROWS)

    @model_validator(mode="after")
    def _validate_flags(self) -> Self:
        _check_result_flags(self.type, is_fail=self.is_fail, is_special=self.is_special)
        return self

    def to_result(self) -> PuzzleResult:
        """Rebuild the result of this entry; the row count is the persisted grid height."""
        return PuzzleResult(
            type=self.type,
            score=self.score,
            rows=len(self.grid),
            is_special=self.is_special,
            is_fail=self.is_fail,
        )


def _empty_distribution() -> dict[str, int]:
    return dict.fromkeys(SCORE_LABELS, 0)


class StatsRecord(_CamelModel):
    """Durable per-device statistics.

    Invariants maintained by StatsEngine.record_result:
    games_played == sum(distribution) + sum(special_outcomes),
    current_streak <= max_streak, and last_played_date equals the date of
    the last history entry whenever history is non-empty.
    """

    games_played: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    max_streak: int = Field(default=0, ge=0)
    distribution: dict[str, int] = Field(default_factory=_empty_distribution)
    special_outcomes: dict[str, int] = Field(default_factory=dict)
    last_played_date: DayString | None = None
    history: list[HistoryEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_last_played(self) -> Self:
        if self.history and self.last_played_date != self.history[-1].date:
            raise ValueError("last_played_date must be the date of the last history entry")
        return self

    @property
    def last_entry(self) -> HistoryEntry | None:
        return self.history[-1] if self.history else None
