"""Bankroll growth curve and peak-to-trough drawdown.

The curve replays settled bets in placement order against a starting
bankroll.  Drawdown is measured from the running peak (the starting bankroll
counts as the first peak), as a percentage of that peak.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Tuple

from bet_analytics.core.records import BetRecord, bet_profit, chronological, safe_div, settled_only


@dataclass(frozen=True, slots=True)
class BankrollPoint:
    date: datetime
    bankroll: float
    roi: float          # percent vs starting bankroll


@dataclass(frozen=True, slots=True)
class BankrollCurve:
    starting_bankroll: float
    final_bankroll: float
    peak_bankroll: float
    max_drawdown_pct: float
    points: Tuple[BankrollPoint, ...]


def bankroll_curve(records: Iterable[BetRecord], starting_bankroll: float) -> BankrollCurve:
    if not (starting_bankroll >= 0):
        raise ValueError(f"starting_bankroll must be >= 0, got {starting_bankroll!r}")

    bankroll = peak = starting_bankroll
    max_dd = 0.0
    points: List[BankrollPoint] = []

    for record in chronological(settled_only(records)):
        bankroll += bet_profit(record)
        if bankroll > peak:
            peak = bankroll
        if peak > 0:
            max_dd = max(max_dd, (peak - bankroll) / peak * 100.0)
        points.append(BankrollPoint(
            date=record.placed_at,
            bankroll=bankroll,
            roi=safe_div(bankroll - starting_bankroll, starting_bankroll) * 100.0,
        ))

    return BankrollCurve(
        starting_bankroll=starting_bankroll,
        final_bankroll=bankroll,
        peak_bankroll=peak,
        max_drawdown_pct=max_dd,
        points=tuple(points),
    )
