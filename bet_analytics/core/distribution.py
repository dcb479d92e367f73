"""Five-number summary of per-bet profit.

Quantiles use nearest-rank selection on the ascending-sorted profits (no
interpolation), so every reported value is a profit some bet actually made.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from bet_analytics.core.records import BetRecord, bet_profit, settled_only


@dataclass(frozen=True, slots=True)
class ProfitDistribution:
    min: float
    q1: float
    median: float
    q3: float
    max: float


def compute_profit_distribution(records: Iterable[BetRecord]) -> ProfitDistribution:
    profits = sorted(bet_profit(r) for r in settled_only(records))
    n = len(profits)
    if n == 0:
        return ProfitDistribution(0.0, 0.0, 0.0, 0.0, 0.0)

    return ProfitDistribution(
        min=profits[0],
        q1=profits[int(n * 0.25)],
        median=profits[n // 2],
        q3=profits[int(n * 0.75)],
        max=profits[-1],
    )
