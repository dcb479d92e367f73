"""Day-of-week and hour-of-day activity slots.

Every record counts toward its slot, settled or not; only settled records
move the profit.  The stored ``placed_at`` is used as-is: a bet stored in
UTC lands in the UTC hour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Tuple

from bet_analytics.core.records import BetRecord, bet_profit

#: Slot order for the day-of-week view (Sunday first).
DAY_LABELS: Final[Tuple[str, ...]] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)


@dataclass(frozen=True, slots=True)
class TimeSlot:
    label: str
    bet_count: int
    profit: float


@dataclass(frozen=True, slots=True)
class TimeAnalysis:
    day_of_week: Tuple[TimeSlot, ...]   # 7 slots, Sunday..Saturday
    hour_of_day: Tuple[TimeSlot, ...]   # 24 slots, 00..23


def day_slot(record: BetRecord) -> int:
    """Index into :data:`DAY_LABELS` (0 = Sunday)."""
    return (record.placed_at.weekday() + 1) % 7


def compute_time_analysis(records: Iterable[BetRecord]) -> TimeAnalysis:
    day_counts = [0] * 7
    day_profit = [0.0] * 7
    hour_counts = [0] * 24
    hour_profit = [0.0] * 24

    for record in records:
        profit = bet_profit(record)
        day = day_slot(record)
        hour = record.placed_at.hour
        day_counts[day] += 1
        day_profit[day] += profit
        hour_counts[hour] += 1
        hour_profit[hour] += profit

    days: List[TimeSlot] = [
        TimeSlot(DAY_LABELS[i], day_counts[i], day_profit[i]) for i in range(7)
    ]
    hours: List[TimeSlot] = [
        TimeSlot(f"{h:02d}:00", hour_counts[h], hour_profit[h]) for h in range(24)
    ]
    return TimeAnalysis(day_of_week=tuple(days), hour_of_day=tuple(hours))
