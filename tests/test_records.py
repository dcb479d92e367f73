"""Tests for records.py: BetRecord invariants and per-bet arithmetic."""

import math
import pytest
from datetime import datetime, timedelta, timezone

from bet_analytics.core.records import (
    MIN_ODDS_MAGNITUDE,
    BetRecord,
    InvalidRecordError,
    as_naive_utc,
    bet_profit,
    bet_return,
    category_label,
    chronological,
    safe_div,
    settled_only,
)

T0 = datetime(2025, 1, 12, 18, 0)


def _bet(status="lost", stake=10.0, payout=None, placed_at=T0, settled_at=None,
         odds=None, bet_id="b1"):
    return BetRecord(
        id=bet_id, user_id="u1", sport="NFL", bet_type="spread",
        stake=stake, status=status, placed_at=placed_at,
        actual_payout=payout, settled_at=settled_at, odds=odds,
    )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("stake", [0.0, -5.0, float("nan"), float("inf")])
def test_rejects_non_positive_stake(stake):
    with pytest.raises(InvalidRecordError, match="stake"):
        _bet(stake=stake)


def test_rejects_won_without_payout():
    with pytest.raises(InvalidRecordError, match="actual_payout"):
        _bet(status="won", payout=None)


def test_rejects_negative_payout():
    with pytest.raises(InvalidRecordError):
        _bet(status="won", payout=-1.0)


@pytest.mark.parametrize("status", ["lost", "pending", "void", "cancelled"])
def test_rejects_payout_on_non_won(status):
    with pytest.raises(InvalidRecordError):
        _bet(status=status, payout=5.0)


def test_rejects_settled_before_placed():
    with pytest.raises(InvalidRecordError, match="precedes"):
        _bet(settled_at=T0 - timedelta(minutes=1))


def test_settled_equal_to_placed_is_fine():
    assert _bet(settled_at=T0).settled_at == T0


def test_rejects_unknown_status():
    with pytest.raises(InvalidRecordError, match="status"):
        _bet(status="push")


@pytest.mark.parametrize("odds", [0, 50, -99.5])
def test_rejects_invalid_american_odds(odds):
    with pytest.raises(InvalidRecordError, match="American odds"):
        _bet(odds=odds)


def test_rejects_mixed_timezone_awareness():
    with pytest.raises(InvalidRecordError, match="timezone-aware"):
        _bet(placed_at=T0.replace(tzinfo=timezone.utc), settled_at=T0 + timedelta(hours=3))


def test_aware_placed_and_settled_is_fine():
    placed = T0.replace(tzinfo=timezone.utc)
    assert _bet(placed_at=placed, settled_at=placed + timedelta(hours=3)).settled_at > placed


def test_odds_magnitude_boundary_accepted():
    assert _bet(odds=MIN_ODDS_MAGNITUDE).odds == 100
    assert _bet(odds=-MIN_ODDS_MAGNITUDE).odds == -100


def test_invalid_record_is_value_error():
    with pytest.raises(ValueError):
        _bet(stake=0)


def test_error_carries_record_id():
    with pytest.raises(InvalidRecordError) as info:
        _bet(stake=-1, bet_id="abc")
    assert info.value.record_id == "abc"


def test_record_is_immutable():
    bet = _bet()
    with pytest.raises(AttributeError):
        bet.stake = 20.0


# ---------------------------------------------------------------------------
# Per-bet arithmetic
# ---------------------------------------------------------------------------

def test_profit_and_return_won():
    bet = _bet(status="won", stake=10.0, payout=19.0)
    assert bet_profit(bet) == pytest.approx(9.0)
    assert bet_return(bet) == pytest.approx(0.9)


def test_profit_and_return_lost():
    bet = _bet(status="lost", stake=25.0)
    assert bet_profit(bet) == -25.0
    assert bet_return(bet) == -1.0


@pytest.mark.parametrize("status", ["pending", "void", "cancelled"])
def test_unsettled_contributes_nothing(status):
    bet = _bet(status=status)
    assert bet_profit(bet) == 0.0
    assert bet_return(bet) == 0.0
    assert not bet.is_settled


def test_settled_only_preserves_order():
    bets = [
        _bet(status="won", payout=20.0, bet_id="a"),
        _bet(status="pending", bet_id="b"),
        _bet(status="lost", bet_id="c"),
    ]
    assert [b.id for b in settled_only(bets)] == ["a", "c"]


def test_chronological_is_stable_on_ties():
    bets = [
        _bet(bet_id="late", placed_at=T0 + timedelta(hours=1)),
        _bet(bet_id="x", placed_at=T0),
        _bet(bet_id="y", placed_at=T0),
    ]
    assert [b.id for b in chronological(bets)] == ["x", "y", "late"]


def test_safe_div():
    assert safe_div(5.0, 0.0) == 0.0
    assert safe_div(5.0, 2.0) == 2.5
    assert not math.isnan(safe_div(0.0, 0.0))


# ---------------------------------------------------------------------------
# Timestamps and categories
# ---------------------------------------------------------------------------

def test_as_naive_utc():
    plus_two = timezone(timedelta(hours=2))
    assert as_naive_utc(datetime(2025, 1, 12, 20, 0, tzinfo=plus_two)) == datetime(2025, 1, 12, 18, 0)
    assert as_naive_utc(T0) is T0


def test_chronological_with_mixed_awareness():
    plus_two = timezone(timedelta(hours=2))
    bets = [
        _bet(bet_id="naive_1800", placed_at=T0),
        _bet(bet_id="aware_1700utc", placed_at=datetime(2025, 1, 12, 19, 0, tzinfo=plus_two)),
        _bet(bet_id="aware_1830utc", placed_at=datetime(2025, 1, 12, 18, 30, tzinfo=timezone.utc)),
    ]
    assert [b.id for b in chronological(bets)] == ["aware_1700utc", "naive_1800", "aware_1830utc"]


@pytest.mark.parametrize("raw, expected", [
    (None, "Unknown"),
    ("", "Unknown"),
    ("  ", "Unknown"),
    ("NFL", "NFL"),
    ("NFL ", "NFL "),
])
def test_category_label(raw, expected):
    assert category_label(raw) == expected
