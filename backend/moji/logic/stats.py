"""
Persistence and streak bookkeeping for the per-device statistics record.

The record is stored as one JSON document under a single key. A record
that fails to parse is treated as absent and replaced on the next write.

record_result() must complete before any presentation starts, so a crash
mid-animation never loses a play. It does not de-duplicate by date: the
caller gates new plays with has_played_today().
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from moji.logic.enums import ResultType
from moji.logic.exceptions import MalformedStatsError
from moji.logic.types import HistoryEntry, StatsRecord

if TYPE_CHECKING:
    from moji.logic.clock import Calendar
    from moji.logic.types import Grid, PuzzleResult
    from shared.storage import KeyValueStore

logger = structlog.get_logger()

STATS_KEY = "moji-stats"

SPECIAL_LABELS: dict[ResultType, str] = {
    ResultType.SPECIAL_WIN: "0",
    ResultType.SPECIAL_FAIL: "7",
    ResultType.SPECIAL_STAR: "⭐",
    ResultType.SPECIAL_BULB: "💡",
}


def decode_stats_record(raw: str, key: str = STATS_KEY) -> StatsRecord:
    """Parse a stored record. Raises MalformedStatsError if it does not fit the schema."""
    try:
        return StatsRecord.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedStatsError(key, f"{exc.error_count()} validation error(s)") from exc


def encode_stats_record(record: StatsRecord) -> str:
    return record.model_dump_json(by_alias=True)


def next_streak(record: StatsRecord, result: PuzzleResult, yesterday: str) -> int:
    """Streak after applying a result.

    A fail resets to zero. Otherwise the streak continues only when the
    last play was yesterday; a fail yesterday already left it at zero, so
    continuing counts up from there. Any gap starts over at one.
    """
    if result.is_fail:
        return 0
    last = record.last_entry
    if last is None or last.date != yesterday:
        return 1
    return record.current_streak + 1


def apply_result(
    record: StatsRecord,
    *,
    today: str,
    yesterday: str,
    puzzle_number: int,
    result: PuzzleResult,
    grid: Grid,
) -> StatsRecord:
    """Return a new record with one play applied."""
    distribution = dict(record.distribution)
    special_outcomes = dict(record.special_outcomes)
    if result.is_special:
        label = SPECIAL_LABELS[result.type]
        special_outcomes[label] = special_outcomes.get(label, 0) + 1
    else:
        distribution[result.score] = distribution.get(result.score, 0) + 1

    current_streak = next_streak(record, result, yesterday)
    entry = HistoryEntry(
        date=today,
        puzzle_number=puzzle_number,
        score=result.score,
        type=result.type,
        is_fail=result.is_fail,
        is_special=result.is_special,
        grid=[list(row) for row in grid],
    )
    return record.model_copy(
        update={
            "games_played": record.games_played + 1,
            "current_streak": current_streak,
            "max_streak": max(record.max_streak, current_streak),
            "distribution": distribution,
            "special_outcomes": special_outcomes,
            "last_played_date": today,
            "history": [*record.history, entry],
        },
    )


class StatsEngine:
    """
    Owns the durable StatsRecord for one device.

    The unlimited_plays flag is a testing override consulted only by
    has_played_today().
    """

    def __init__(
        self,
        store: KeyValueStore,
        calendar: Calendar,
        *,
        unlimited_plays: bool = False,
        key: str = STATS_KEY,
    ) -> None:
        self._store = store
        self._calendar = calendar
        self._unlimited_plays = unlimited_plays
        self._key = key

    @property
    def unlimited_plays(self) -> bool:
        return self._unlimited_plays

    def load(self) -> StatsRecord:
        """Read the stored record, or the empty record when absent or malformed."""
        raw = self._store.get(self._key)
        if raw is None:
            return StatsRecord()
        try:
            return decode_stats_record(raw, self._key)
        except MalformedStatsError as exc:
            logger.warning("discarding malformed stats record", key=exc.key, reason=exc.reason)
            return StatsRecord()

    def save(self, record: StatsRecord) -> None:
        self._store.set(self._key, encode_stats_record(record))

    def has_played_today(self) -> bool:
        if self._unlimited_plays:
            return False
        return self.today_entry() is not None

    def today_entry(self) -> HistoryEntry | None:
        """Today's history entry, when the last play happened today."""
        last = self.load().last_entry
        if last is not None and last.date == self._calendar.today_string():
            return last
        return None

    def record_result(self, puzzle_number: int, result: PuzzleResult, grid: Grid) -> StatsRecord:
        """Apply a new play and persist the whole record before returning it."""
        record = apply_result(
            self.load(),
            today=self._calendar.today_string(),
            yesterday=self._calendar.yesterday_string(),
            puzzle_number=puzzle_number,
            result=result,
            grid=grid,
        )
        self.save(record)
        logger.info(
            "recorded result",
            puzzle_number=puzzle_number,
            result_type=result.type,
            score=result.score,
            current_streak=record.current_streak,
            max_streak=record.max_streak,
        )
        return record
