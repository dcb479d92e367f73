"""Headline performance metrics for an arbitrary slice of the ledger.

:func:`compute_performance_metrics` is the workhorse reused by the
per-category breakdowns: the caller filters, this module only aggregates.

Stake semantics
---------------
``total_staked`` sums the stake of **every** record passed in, pending and
void included.  ROI is therefore "return on capital put at risk", not
"return on settled capital".  The distinction matters while bets are open:
a user with one pending $100 bet and nothing settled shows ROI of -100 %.

Settled-only fields
-------------------
``avg_odds``, ``biggest_win``, ``biggest_loss``, ``avg_clv`` and
``profitable_sports`` look at won/lost records only.  ``avg_odds`` and
``avg_clv`` skip records that do not carry the value; ``avg_clv`` is ``None``
when no settled record has one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from bet_analytics.core.records import (
    STATUS_LOST,
    STATUS_WON,
    BetRecord,
    bet_profit,
    bet_return,
    category_label,
    safe_div,
)
from bet_analytics.core.streaks import StreakSummary, summarize_streaks


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    total_bets: int
    settled_bets: int
    wins: int
    losses: int
    win_rate: float          # percent, 0-100
    total_staked: float
    total_returned: float
    profit: float
    roi: float               # percent
    avg_bet_size: float
    return_variance: float
    streaks: StreakSummary
    avg_odds: float          # American, 0.0 when no settled bet has odds
    biggest_win: float       # largest single-bet profit, >= 0
    biggest_loss: float      # largest single-bet loss as a positive amount
    avg_clv: Optional[float]
    profitable_sports: int   # sports with positive settled profit


def population_variance(values: List[float]) -> float:
    """Mean squared deviation from the mean; ``0.0`` for an empty list."""
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def compute_performance_metrics(records: Iterable[BetRecord]) -> PerformanceMetrics:
    records = list(records)

    total_staked = 0.0
    total_returned = 0.0
    wins = losses = 0
    settled: List[BetRecord] = []
    returns: List[float] = []
    odds: List[float] = []
    clvs: List[float] = []
    biggest_win = biggest_loss = 0.0
    sport_profit: Dict[str, float] = {}

    for record in records:
        total_staked += record.stake
        if record.status == STATUS_WON:
            wins += 1
            total_returned += record.actual_payout
        elif record.status == STATUS_LOST:
            losses += 1
        else:
            continue
        settled.append(record)
        returns.append(bet_return(record))

        result = bet_profit(record)
        biggest_win = max(biggest_win, result)
        biggest_loss = max(biggest_loss, -result)
        sport = category_label(record.sport)
        sport_profit[sport] = sport_profit.get(sport, 0.0) + result
        if record.odds is not None:
            odds.append(record.odds)
        if record.clv is not None:
            clvs.append(record.clv)

    total_bets = len(records)
    profit = total_returned - total_staked

    return PerformanceMetrics(
        total_bets=total_bets,
        settled_bets=len(settled),
        wins=wins,
        losses=losses,
        win_rate=safe_div(wins, len(settled)) * 100.0,
        total_staked=total_staked,
        total_returned=total_returned,
        profit=profit,
        roi=safe_div(profit, total_staked) * 100.0,
        avg_bet_size=safe_div(total_staked, total_bets),
        return_variance=population_variance(returns),
        streaks=summarize_streaks(settled),
        avg_odds=safe_div(sum(odds), len(odds)),
        biggest_win=biggest_win,
        biggest_loss=biggest_loss,
        avg_clv=sum(clvs) / len(clvs) if clvs else None,
        profitable_sports=sum(1 for p in sport_profit.values() if p > 0),
    )
