"""Tests for config.py: env-driven analytics settings."""

import pytest
from dataclasses import replace

from bet_analytics.config import AnalyticsSettings

_ENV_VARS = (
    "ANALYTICS_BUCKET_INTERVAL",
    "ANALYTICS_WEEK_START",
    "STARTING_BANKROLL",
    "ANALYTICS_EXPECTED_BINS",
    "ANALYTICS_MIN_BETS_PER_BIN",
    "ANALYTICS_TIMEFRAME_PERIODS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = AnalyticsSettings.from_env()
    assert s == AnalyticsSettings()
    assert s.bucket_interval == "daily"
    assert s.week_start == "sunday"
    assert s.starting_bankroll == 1000.0
    assert s.expected_bins == 10
    assert s.min_bets_per_bin == 5
    assert s.timeframe_periods == 12


def test_from_env(monkeypatch):
    monkeypatch.setenv("ANALYTICS_BUCKET_INTERVAL", "Weekly")
    monkeypatch.setenv("ANALYTICS_WEEK_START", "monday")
    monkeypatch.setenv("STARTING_BANKROLL", "2500")
    monkeypatch.setenv("ANALYTICS_EXPECTED_BINS", "20")
    monkeypatch.setenv("ANALYTICS_MIN_BETS_PER_BIN", "3")
    monkeypatch.setenv("ANALYTICS_TIMEFRAME_PERIODS", "6")
    s = AnalyticsSettings.from_env()
    assert s.bucket_interval == "weekly"
    assert s.week_start == "monday"
    assert s.starting_bankroll == 2500.0
    assert s.expected_bins == 20
    assert s.min_bets_per_bin == 3
    assert s.timeframe_periods == 6


@pytest.mark.parametrize("field, value", [
    ("bucket_interval", "hourly"),
    ("week_start", "friday"),
    ("starting_bankroll", -1.0),
    ("expected_bins", 0),
    ("min_bets_per_bin", 0),
    ("timeframe_periods", 0),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValueError):
        replace(AnalyticsSettings(), **{field: value})


def test_invalid_env_rejected(monkeypatch):
    monkeypatch.setenv("ANALYTICS_BUCKET_INTERVAL", "yearly")
    with pytest.raises(ValueError):
        AnalyticsSettings.from_env()


def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        AnalyticsSettings().week_start = "monday"
