"""
Performance report composition.

:func:`build_performance_report` receives an already-fetched list of
:class:`BetRecord` snapshots and returns one immutable
:class:`PerformanceReport`, so it can be called from an API handler or a
background job without importing any persistence or web-layer code.

Each section is an independent pass over the same list.  A host that runs
reports inside a cancellable task can pass ``should_cancel``; it is polled
between passes and :class:`AnalysisCancelled` is raised once it returns True.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Tuple

from bet_analytics.config import AnalyticsSettings
from bet_analytics.core.bankroll import BankrollCurve, bankroll_curve
from bet_analytics.core.breakdown import CategoryBreakdown, breakdown_by, by_bet_type, by_sport
from bet_analytics.core.buckets import (
    TimeBucket,
    TimeframePerformance,
    aggregate_time_buckets,
    timeframe_breakdown,
)
from bet_analytics.core.distribution import ProfitDistribution, compute_profit_distribution
from bet_analytics.core.metrics import PerformanceMetrics, compute_performance_metrics
from bet_analytics.core.odds import (
    ExpectedWinRateBucket,
    OddsRangePerformance,
    odds_range_breakdown,
    win_rate_vs_expected,
)
from bet_analytics.core.records import BetRecord
from bet_analytics.core.risk import RiskMetrics, compute_risk_metrics
from bet_analytics.core.streaks import StreakSegment, streak_history
from bet_analytics.core.time_analysis import TimeAnalysis, compute_time_analysis

logger = logging.getLogger(__name__)


class AnalysisCancelled(Exception):
    """Raised when the host cancels a report between passes."""


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PerformanceReport:
    overall: PerformanceMetrics
    by_sport: Tuple[CategoryBreakdown, ...]
    by_bet_type: Tuple[CategoryBreakdown, ...]
    profit_distribution: ProfitDistribution
    time_analysis: TimeAnalysis
    streak_history: Tuple[StreakSegment, ...]
    risk: RiskMetrics
    bucket_interval: str
    profit_over_time: Tuple[TimeBucket, ...]
    odds_ranges: Tuple[OddsRangePerformance, ...]
    win_rate_vs_expected: Tuple[ExpectedWinRateBucket, ...]
    bankroll: BankrollCurve
    monthly_breakdown: Tuple[TimeframePerformance, ...]

    def to_dict(self) -> Dict:
        """Plain JSON-safe structure: tuples become lists, datetimes ISO strings."""
        return _jsonable(asdict(self))


def _jsonable(value):
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# ---------------------------------------------------------------------------
# build_performance_report
# ---------------------------------------------------------------------------

def build_performance_report(
    records: Iterable[BetRecord],
    settings: Optional[AnalyticsSettings] = None,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> PerformanceReport:
    """
    Full performance report including:
      - overall metrics (win rate, ROI, profit, variance, streaks)
      - by_sport / by_bet_type breakdowns
      - profit distribution, day-of-week / hour-of-day slots
      - streak history and risk metrics
      - profit over time, odds ranges, win rate vs expected, bankroll curve
      - monthly win rate / ROI / staked table

    Without ``settings`` the values are read with
    :meth:`AnalyticsSettings.from_env`.
    """
    records = list(records)
    settings = settings or AnalyticsSettings.from_env()

    def _checkpoint(section: str) -> None:
        if should_cancel is not None and should_cancel():
            logger.info("Performance report cancelled before %s (%d records)", section, len(records))
            raise AnalysisCancelled(f"cancelled before {section}")
        logger.debug("Computing %s over %d records", section, len(records))

    _checkpoint("overall")
    overall = compute_performance_metrics(records)
    _checkpoint("by_sport")
    sports = breakdown_by(records, by_sport)
    _checkpoint("by_bet_type")
    bet_types = breakdown_by(records, by_bet_type)
    _checkpoint("profit_distribution")
    distribution = compute_profit_distribution(records)
    _checkpoint("time_analysis")
    time_slots = compute_time_analysis(records)
    _checkpoint("streak_history")
    history = streak_history(records)
    _checkpoint("risk")
    risk = compute_risk_metrics(records)
    _checkpoint("profit_over_time")
    buckets = aggregate_time_buckets(records, settings.bucket_interval, settings.week_start)
    _checkpoint("odds_ranges")
    odds_ranges = odds_range_breakdown(records)
    _checkpoint("win_rate_vs_expected")
    expected = win_rate_vs_expected(
        records, bins=settings.expected_bins, min_bets=settings.min_bets_per_bin
    )
    _checkpoint("bankroll")
    bankroll = bankroll_curve(records, settings.starting_bankroll)
    _checkpoint("monthly_breakdown")
    monthly = timeframe_breakdown(
        records, "monthly", settings.week_start, max_periods=settings.timeframe_periods
    )

    logger.info(
        "Performance report: %d bets (%d settled) W%d-L%d ROI %.1f%% profit %.2f",
        overall.total_bets, overall.settled_bets, overall.wins, overall.losses,
        overall.roi, overall.profit,
    )

    return PerformanceReport(
        overall=overall,
        by_sport=sports,
        by_bet_type=bet_types,
        profit_distribution=distribution,
        time_analysis=time_slots,
        streak_history=history,
        risk=risk,
        bucket_interval=settings.bucket_interval,
        profit_over_time=buckets,
        odds_ranges=odds_ranges,
        win_rate_vs_expected=expected,
        bankroll=bankroll,
        monthly_breakdown=monthly,
    )
