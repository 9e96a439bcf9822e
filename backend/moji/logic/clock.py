"""Local calendar: today's day string, puzzle numbering, and the next-puzzle countdown."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

FIRST_PUZZLE_DATE = date(2025, 12, 21)
DAY_FORMAT = "%Y-%m-%d"


def _local_now() -> datetime:
    # naive local wall time; timestamp() resolves the DST offset per instant
    return datetime.now()


def day_string(day: date) -> str:
    return day.strftime(DAY_FORMAT)


class Calendar:
    """
    Clock provider for the core.

    Days are local calendar days of the device. The clock is injectable so
    tests and replays can pin "now".
    """

    def __init__(
        self,
        first_puzzle_date: date = FIRST_PUZZLE_DATE,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._first_puzzle_date = first_puzzle_date
        self._now = now or _local_now

    def now(self) -> datetime:
        return self._now()

    def today(self) -> date:
        return self._now().date()

    def today_string(self) -> str:
        return day_string(self.today())

    def yesterday_string(self) -> str:
        return day_string(self.today() - timedelta(days=1))

    def puzzle_number(self, day: date | None = None) -> int:
        """Puzzle number for a day (default today). The first puzzle date is #1."""
        if day is None:
            day = self.today()
        return (day - self._first_puzzle_date).days + 1

    def time_until_next_puzzle(self) -> timedelta:
        """Time left until the next local midnight, across any DST change in between."""
        now = self._now()
        tomorrow = datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=now.tzinfo)
        return timedelta(seconds=tomorrow.timestamp() - now.timestamp())

    def countdown_text(self) -> str:
        """Countdown to the next puzzle as HH:MM:SS."""
        remaining = int(self.time_until_next_puzzle().total_seconds())
        hours, rest = divmod(remaining, 3600)
        minutes, seconds = divmod(rest, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
