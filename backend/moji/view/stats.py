"""Statistics screen: headline numbers and the distribution chart."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from moji.logic.enums import SPECIAL_TYPES, ResultType
from moji.logic.stats import SPECIAL_LABELS
from moji.logic.types import SCORE_LABELS

if TYPE_CHECKING:
    from moji.logic.types import HistoryEntry, StatsRecord

MIN_BAR_WIDTH_PCT = 8.0
FAIL_LABEL = "X"

_SPECIAL_WIN_LABEL = SPECIAL_LABELS[ResultType.SPECIAL_WIN]
_SPECIAL_FAIL_LABEL = SPECIAL_LABELS[ResultType.SPECIAL_FAIL]
_STAR_LABEL = SPECIAL_LABELS[ResultType.SPECIAL_STAR]
_BULB_LABEL = SPECIAL_LABELS[ResultType.SPECIAL_BULB]
_SPECIAL_LABEL_SET = frozenset(SPECIAL_LABELS.values())


class DistributionBar(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    count: int
    width_pct: float
    is_special: bool
    is_fail: bool
    is_highlighted: bool


class StatsView(BaseModel):
    model_config = ConfigDict(frozen=True)

    games_played: int
    win_pct: int
    current_streak: int
    max_streak: int
    bars: list[DistributionBar]


def win_percentage(stats: StatsRecord) -> int:
    """Share of plays that were not an X, rounded half up. Special fails count as wins."""
    if stats.games_played <= 0:
        return 0
    wins = stats.games_played - stats.distribution.get(FAIL_LABEL, 0)
    return math.floor(wins / stats.games_played * 100 + 0.5)


def chart_labels(stats: StatsRecord) -> list[str]:
    """Row order: 0, 1-6, 7, star, bulb, X; special rows only once they have happened."""
    specials = stats.special_outcomes
    labels = [_SPECIAL_WIN_LABEL] if specials.get(_SPECIAL_WIN_LABEL) else []
    labels.extend(SCORE_LABELS[:-1])
    labels.extend(label for label in (_SPECIAL_FAIL_LABEL, _STAR_LABEL, _BULB_LABEL) if specials.get(label))
    labels.append(FAIL_LABEL)
    return labels


def entry_label(entry: HistoryEntry) -> str:
    """Chart label a history entry counts toward."""
    if entry.type in SPECIAL_TYPES:
        return SPECIAL_LABELS[entry.type]
    return entry.score


def render_stats(stats: StatsRecord, today_entry: HistoryEntry | None = None) -> StatsView:
    max_count = max([*stats.distribution.values(), *stats.special_outcomes.values(), 1])
    highlight = entry_label(today_entry) if today_entry is not None else None

    bars = []
    for label in chart_labels(stats):
        is_special = label in _SPECIAL_LABEL_SET
        count = stats.special_outcomes.get(label, 0) if is_special else stats.distribution.get(label, 0)
        width = max(count / max_count * 100, MIN_BAR_WIDTH_PCT) if count > 0 else MIN_BAR_WIDTH_PCT
        bars.append(
            DistributionBar(
                label=label,
                count=count,
                width_pct=width,
                is_special=is_special,
                is_fail=not is_special and label == FAIL_LABEL,
                is_highlighted=label == highlight,
            ),
        )

    return StatsView(
        games_played=stats.games_played,
        win_pct=win_percentage(stats),
        current_streak=stats.current_streak,
        max_streak=stats.max_streak,
        bars=bars,
    )
