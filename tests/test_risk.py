"""Tests for risk.py: per-bet return dispersion."""

import math
import pytest
from datetime import datetime, timedelta

from bet_analytics.core.records import BetRecord
from bet_analytics.core.risk import compute_risk_metrics

T0 = datetime(2025, 2, 1, 19, 30)


def _bet(status, stake=10.0, payout=None, i=0):
    return BetRecord(
        id=f"b{i}", user_id="u1", sport="NHL", bet_type="puckline",
        stake=stake, status=status, placed_at=T0 + timedelta(hours=i),
        actual_payout=payout,
    )


def test_empty():
    r = compute_risk_metrics([])
    assert r.avg_stake == 0.0
    assert r.mean_return == 0.0
    assert r.return_variance == 0.0
    assert r.std_dev == 0.0
    assert r.reward_risk_ratio == 0.0


def test_win_and_loss():
    # returns +2.0 and -1.0 -> mean 0.5, variance 2.25, std 1.5
    r = compute_risk_metrics([
        _bet("won", stake=10.0, payout=30.0, i=0),
        _bet("lost", stake=30.0, i=1),
    ])
    assert r.avg_stake == pytest.approx(20.0)
    assert r.mean_return == pytest.approx(0.5)
    assert r.return_variance == pytest.approx(2.25)
    assert r.std_dev == pytest.approx(1.5)
    assert r.reward_risk_ratio == pytest.approx(0.5 / 1.5)


def test_zero_dispersion_ratio_is_zero():
    r = compute_risk_metrics([_bet("lost", i=i) for i in range(3)])
    assert r.std_dev == 0.0
    assert r.reward_risk_ratio == 0.0
    assert r.mean_return == pytest.approx(-1.0)


def test_unsettled_ignored():
    r = compute_risk_metrics([
        _bet("lost", stake=10.0, i=0),
        _bet("pending", stake=500.0, i=1),
        _bet("void", stake=500.0, i=2),
    ])
    assert r.avg_stake == pytest.approx(10.0)


def test_std_dev_is_sqrt_of_variance():
    bets = [
        _bet("won", payout=19.1, i=0),
        _bet("won", payout=25.0, i=1),
        _bet("lost", i=2),
        _bet("lost", i=3),
        _bet("won", payout=14.0, i=4),
    ]
    r = compute_risk_metrics(bets)
    assert r.std_dev == pytest.approx(math.sqrt(r.return_variance))
    assert not math.isnan(r.reward_risk_ratio)
