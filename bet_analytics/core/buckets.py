"""Chronological profit buckets for profit-over-time charts.

Bucket keys are produced by three pure functions, one per interval.  Every
key is an ISO-formatted string, so lexical order equals chronological order:

================  =====================================  ==============
Interval          Key                                    Example
================  =====================================  ==============
``daily``         calendar date                          ``2025-01-14``
``weekly``        date of the first day of that week     ``2025-01-12``
``monthly``       year-month                             ``2025-01``
================  =====================================  ==============

Weeks start on Sunday unless ``week_start="monday"`` is passed.

:func:`aggregate_time_buckets` feeds the cumulative profit chart;
:func:`timeframe_breakdown` is the per-period table (monthly by default).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Final, Iterable, List, Literal, Optional, Tuple

from bet_analytics.core.metrics import compute_performance_metrics
from bet_analytics.core.records import BetRecord, bet_profit, settled_only

BucketInterval = Literal["daily", "weekly", "monthly"]
WeekStart = Literal["sunday", "monday"]

INTERVAL_DAILY: Final[str] = "daily"
INTERVAL_WEEKLY: Final[str] = "weekly"
INTERVAL_MONTHLY: Final[str] = "monthly"

VALID_INTERVALS: Final[Tuple[str, ...]] = (INTERVAL_DAILY, INTERVAL_WEEKLY, INTERVAL_MONTHLY)
VALID_WEEK_STARTS: Final[Tuple[str, ...]] = ("sunday", "monday")


@dataclass(frozen=True, slots=True)
class TimeBucket:
    bucket_key: str
    profit: float
    cumulative_profit: float
    bet_count: int


# ---------------------------------------------------------------------------
# Key functions
# ---------------------------------------------------------------------------


def daily_key(ts: datetime) -> str:
    return ts.date().isoformat()


def weekly_key(ts: datetime, week_start: WeekStart = "sunday") -> str:
    if week_start not in VALID_WEEK_STARTS:
        raise ValueError(f"week_start must be one of {VALID_WEEK_STARTS}, got {week_start!r}")
    # datetime.weekday(): Monday == 0 ... Sunday == 6
    offset = ts.weekday() if week_start == "monday" else (ts.weekday() + 1) % 7
    return (ts.date() - timedelta(days=offset)).isoformat()


def monthly_key(ts: datetime) -> str:
    return f"{ts.year:04d}-{ts.month:02d}"


def key_function(
    interval: BucketInterval, week_start: WeekStart = "sunday"
) -> Callable[[datetime], str]:
    """Return the ``datetime -> key`` function for ``interval``."""
    if interval == INTERVAL_DAILY:
        return daily_key
    if interval == INTERVAL_WEEKLY:
        if week_start not in VALID_WEEK_STARTS:
            raise ValueError(
                f"week_start must be one of {VALID_WEEK_STARTS}, got {week_start!r}"
            )
        return lambda ts: weekly_key(ts, week_start)
    if interval == INTERVAL_MONTHLY:
        return monthly_key
    raise ValueError(f"interval must be one of {VALID_INTERVALS}, got {interval!r}")


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def aggregate_time_buckets(
    records: Iterable[BetRecord],
    interval: BucketInterval = "daily",
    week_start: WeekStart = "sunday",
) -> Tuple[TimeBucket, ...]:
    """Group settled records by ``interval`` and attach a running profit total.

    Buckets come back in ascending key order regardless of input order.
    """
    to_key = key_function(interval, week_start)

    totals: Dict[str, List] = {}
    for record in settled_only(records):
        slot = totals.setdefault(to_key(record.placed_at), [0.0, 0])
        slot[0] += bet_profit(record)
        slot[1] += 1

    buckets: List[TimeBucket] = []
    running = 0.0
    for key in sorted(totals):
        profit, count = totals[key]
        running += profit
        buckets.append(TimeBucket(
            bucket_key=key,
            profit=profit,
            cumulative_profit=running,
            bet_count=count,
        ))
    return tuple(buckets)


# ---------------------------------------------------------------------------
# Per-timeframe rollup
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TimeframePerformance:
    timeframe: str
    bets: int
    profit: float
    win_rate: float          # percent of settled bets
    roi: float               # percent of total staked
    total_staked: float


def timeframe_breakdown(
    records: Iterable[BetRecord],
    interval: BucketInterval = "monthly",
    week_start: WeekStart = "sunday",
    max_periods: Optional[int] = 12,
) -> Tuple[TimeframePerformance, ...]:
    """Headline metrics per period, oldest first, limited to the last ``max_periods``.

    Every record is counted, pending included, and each period is aggregated
    with :func:`compute_performance_metrics`, so the stake semantics match the
    overall metrics and the period profits add up to the overall profit when
    ``max_periods`` keeps every period.  ``max_periods=None`` keeps all.
    """
    if max_periods is not None and max_periods < 1:
        raise ValueError(f"max_periods must be >= 1 or None, got {max_periods!r}")
    to_key = key_function(interval, week_start)

    groups: Dict[str, List[BetRecord]] = {}
    for record in records:
        groups.setdefault(to_key(record.placed_at), []).append(record)

    keys = sorted(groups)
    if max_periods is not None:
        keys = keys[-max_periods:]

    rows: List[TimeframePerformance] = []
    for key in keys:
        m = compute_performance_metrics(groups[key])
        rows.append(TimeframePerformance(
            timeframe=key,
            bets=m.total_bets,
            profit=m.profit,
            win_rate=m.win_rate,
            roi=m.roi,
            total_staked=m.total_staked,
        ))
    return tuple(rows)
