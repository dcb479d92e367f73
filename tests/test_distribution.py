"""Tests for distribution.py: nearest-rank profit quantiles."""

import pytest
from datetime import datetime, timedelta

from bet_analytics.core.distribution import ProfitDistribution, compute_profit_distribution
from bet_analytics.core.records import BetRecord

T0 = datetime(2025, 4, 5, 13, 0)


def _won(profit, stake=10.0, i=0):
    return BetRecord(
        id=f"w{i}", user_id="u1", sport="MLB", bet_type="moneyline",
        stake=stake, status="won", placed_at=T0 + timedelta(hours=i),
        actual_payout=stake + profit,
    )


def _lost(stake, i=0):
    return BetRecord(
        id=f"l{i}", user_id="u1", sport="MLB", bet_type="moneyline",
        stake=stake, status="lost", placed_at=T0 + timedelta(hours=i),
    )


def test_empty_is_all_zero():
    assert compute_profit_distribution([]) == ProfitDistribution(0.0, 0.0, 0.0, 0.0, 0.0)


def test_single_bet():
    d = compute_profit_distribution([_lost(25.0)])
    assert d == ProfitDistribution(-25.0, -25.0, -25.0, -25.0, -25.0)


def test_nearest_rank_indices():
    # profits sorted: -30, -20, -10, 5, 15 (n=5)
    # q1 = s[1], median = s[2], q3 = s[3]
    bets = [_won(15.0, i=0), _lost(20.0, i=1), _won(5.0, i=2), _lost(30.0, i=3), _lost(10.0, i=4)]
    d = compute_profit_distribution(bets)
    assert d.min == pytest.approx(-30.0)
    assert d.q1 == pytest.approx(-20.0)
    assert d.median == pytest.approx(-10.0)
    assert d.q3 == pytest.approx(5.0)
    assert d.max == pytest.approx(15.0)


def test_even_count_uses_upper_middle():
    # sorted: -10, 1, 2, 3 -> median = s[2] = 2 (no interpolation)
    bets = [_won(3.0, i=0), _lost(10.0, i=1), _won(1.0, i=2), _won(2.0, i=3)]
    d = compute_profit_distribution(bets)
    assert d.median == pytest.approx(2.0)
    assert d.q1 == pytest.approx(1.0)
    assert d.q3 == pytest.approx(3.0)


def test_unsettled_excluded():
    pending = BetRecord(
        id="p", user_id="u1", sport="MLB", bet_type="moneyline",
        stake=1000.0, status="pending", placed_at=T0,
    )
    d = compute_profit_distribution([pending, _lost(5.0)])
    assert d.min == pytest.approx(-5.0)
    assert d.max == pytest.approx(-5.0)


@pytest.mark.parametrize("n", [1, 2, 3, 7, 10, 33])
def test_ordering_invariant(n):
    bets = [_won(float(i * 3 % 11), i=i) if i % 2 else _lost(float(i + 1), i=i) for i in range(n)]
    d = compute_profit_distribution(bets)
    assert d.min <= d.q1 <= d.median <= d.q3 <= d.max
