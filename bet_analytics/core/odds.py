"""Odds-aware performance views.

Two views complement the category breakdowns for bets that carry their
American odds:

1. :func:`odds_range_breakdown`: results per favourite / underdog band.
2. :func:`win_rate_vs_expected`: observed win rate against the win rate the
   odds implied, per implied-probability bin.  A bettor with a real edge sits
   above the diagonal.

Only settled bets with known odds participate.  Implied probabilities are
raw (vig-inclusive): the book's stated price, not a fair price.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Iterable, List, Tuple

from bet_analytics.core.records import (
    MIN_ODDS_MAGNITUDE,
    BetRecord,
    bet_profit,
    safe_div,
    settled_only,
)


# ---------------------------------------------------------------------------
# Odds conversion
# ---------------------------------------------------------------------------


def american_to_decimal(american: float) -> float:
    """Convert American odds to decimal odds (stake included).

    Examples::

        american_to_decimal(-110) → 1.9091   (risk 110 to win 100)
        american_to_decimal(+150) → 2.5000   (risk 100 to win 150)

    Raises:
        ValueError: If ``|american| < 100``.
    """
    if abs(american) < MIN_ODDS_MAGNITUDE:
        raise ValueError(
            f"Invalid American odds {american!r}: magnitude must be ≥ 100."
        )
    if american > 0:
        return american / 100.0 + 1.0
    return 100.0 / abs(american) + 1.0


def american_to_implied_prob(american: float) -> float:
    """Raw implied probability in ``(0, 1)``.

    Examples::

        american_to_implied_prob(-110) → 0.5238
        american_to_implied_prob(+150) → 0.4000
    """
    return 1.0 / american_to_decimal(american)


# ---------------------------------------------------------------------------
# Odds-range breakdown
# ---------------------------------------------------------------------------

#: (exclusive upper bound, label), ascending.  Bands cover every valid
#: American price: nothing lives strictly between -100 and +100.
ODDS_RANGES: Final[Tuple[Tuple[float, str], ...]] = (
    (-150, "Heavy Favorites (-151 and shorter)"),
    (-125, "Favorites (-150 to -126)"),
    (0, "Slight Favorites (-125 to -100)"),
    (150, "Slight Underdogs (+100 to +149)"),
    (200, "Underdogs (+150 to +199)"),
    (math.inf, "Heavy Underdogs (+200+)"),
)


@dataclass(frozen=True, slots=True)
class OddsRangePerformance:
    range: str
    bets: int
    win_rate: float     # percent
    profit: float
    roi: float          # percent of settled stake


def odds_band(odds: float) -> int:
    """Index into :data:`ODDS_RANGES` for an American price."""
    for idx, (upper, _) in enumerate(ODDS_RANGES):
        if odds < upper:
            return idx
    return len(ODDS_RANGES) - 1


def odds_range_breakdown(records: Iterable[BetRecord]) -> Tuple[OddsRangePerformance, ...]:
    """Results per odds band, in band order; empty bands are omitted."""
    bets = [0] * len(ODDS_RANGES)
    wins = [0] * len(ODDS_RANGES)
    profit = [0.0] * len(ODDS_RANGES)
    staked = [0.0] * len(ODDS_RANGES)

    for record in settled_only(records):
        if record.odds is None:
            continue
        idx = odds_band(record.odds)
        bets[idx] += 1
        wins[idx] += 1 if record.is_win else 0
        profit[idx] += bet_profit(record)
        staked[idx] += record.stake

    return tuple(
        OddsRangePerformance(
            range=label,
            bets=bets[i],
            win_rate=safe_div(wins[i], bets[i]) * 100.0,
            profit=profit[i],
            roi=safe_div(profit[i], staked[i]) * 100.0,
        )
        for i, (_, label) in enumerate(ODDS_RANGES)
        if bets[i] > 0
    )


# ---------------------------------------------------------------------------
# Win rate vs expected
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExpectedWinRateBucket:
    bucket_label: str
    bucket_start_pct: float
    bucket_end_pct: float
    bets: int
    expected_pct: float     # mean implied probability of the bets in the bin
    actual_pct: float       # observed win rate

    @property
    def edge_pct(self) -> float:
        return self.actual_pct - self.expected_pct


def win_rate_vs_expected(
    records: Iterable[BetRecord],
    bins: int = 10,
    min_bets: int = 5,
) -> Tuple[ExpectedWinRateBucket, ...]:
    """Compare observed win rate to odds-implied win rate per probability bin.

    Bins split ``[0, 100)`` percent into ``bins`` equal widths.  Bins with
    fewer than ``min_bets`` bets are dropped as too noisy to plot.
    """
    if bins < 1:
        raise ValueError(f"bins must be >= 1, got {bins!r}")
    if min_bets < 1:
        raise ValueError(f"min_bets must be >= 1, got {min_bets!r}")

    width = 100.0 / bins
    probs: List[List[float]] = [[] for _ in range(bins)]
    outcomes: List[List[int]] = [[] for _ in range(bins)]

    for record in settled_only(records):
        if record.odds is None:
            continue
        p = american_to_implied_prob(record.odds) * 100.0
        idx = min(int(p // width), bins - 1)
        probs[idx].append(p)
        outcomes[idx].append(1 if record.is_win else 0)

    buckets: List[ExpectedWinRateBucket] = []
    for idx in range(bins):
        n = len(outcomes[idx])
        if n < min_bets:
            continue
        lo = idx * width
        hi = lo + width
        buckets.append(ExpectedWinRateBucket(
            bucket_label=f"{lo:g}-{hi:g}%",
            bucket_start_pct=lo,
            bucket_end_pct=hi,
            bets=n,
            expected_pct=sum(probs[idx]) / n,
            actual_pct=sum(outcomes[idx]) / n * 100.0,
        ))
    return tuple(buckets)
