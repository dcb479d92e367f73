"""Per-bet risk statistics over settled wagers.

Returns are per unit staked (:func:`~bet_analytics.core.records.bet_return`):
a lost bet is ``-1``, a won bet at -110 is about ``+0.909``.

``reward_risk_ratio`` is ``mean_return / std_dev``.  It is a Sharpe-*like*
ratio only: there is no risk-free rate and no annualization, so it must not be
compared against the Sharpe ratios quoted for funds or strategies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from bet_analytics.core.metrics import population_variance
from bet_analytics.core.records import BetRecord, bet_return, safe_div, settled_only


@dataclass(frozen=True, slots=True)
class RiskMetrics:
    avg_stake: float
    mean_return: float
    return_variance: float
    std_dev: float
    reward_risk_ratio: float


def compute_risk_metrics(records: Iterable[BetRecord]) -> RiskMetrics:
    settled = settled_only(records)
    returns = [bet_return(r) for r in settled]

    mean_return = safe_div(sum(returns), len(returns))
    variance = population_variance(returns)
    std_dev = math.sqrt(variance)

    return RiskMetrics(
        avg_stake=safe_div(sum(r.stake for r in settled), len(settled)),
        mean_return=mean_return,
        return_variance=variance,
        std_dev=std_dev,
        reward_risk_ratio=mean_return / std_dev if std_dev > 0 else 0.0,
    )
