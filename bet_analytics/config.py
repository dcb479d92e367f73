"""
Analytics settings.

Everything tunable about a report lives in :class:`AnalyticsSettings`.
Values come from the environment (a ``.env`` file is loaded first), with
defaults matching the dashboard's behaviour:

    ANALYTICS_BUCKET_INTERVAL   daily | weekly | monthly     (daily)
    ANALYTICS_WEEK_START        sunday | monday              (sunday)
    STARTING_BANKROLL           bankroll for the growth curve (1000)
    ANALYTICS_EXPECTED_BINS     win-rate-vs-expected bins    (10)
    ANALYTICS_MIN_BETS_PER_BIN  minimum bets to report a bin (5)
    ANALYTICS_TIMEFRAME_PERIODS months in the monthly table   (12)

Override a single value in code with :func:`dataclasses.replace`.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from bet_analytics.core.buckets import VALID_INTERVALS, VALID_WEEK_STARTS

load_dotenv()


@dataclass(frozen=True)
class AnalyticsSettings:
    bucket_interval: str = "daily"
    week_start: str = "sunday"
    starting_bankroll: float = 1000.0
    expected_bins: int = 10
    min_bets_per_bin: int = 5
    timeframe_periods: int = 12

    def __post_init__(self):
        if self.bucket_interval not in VALID_INTERVALS:
            raise ValueError(
                f"bucket_interval must be one of {VALID_INTERVALS}, got {self.bucket_interval!r}"
            )
        if self.week_start not in VALID_WEEK_STARTS:
            raise ValueError(
                f"week_start must be one of {VALID_WEEK_STARTS}, got {self.week_start!r}"
            )
        if not (self.starting_bankroll >= 0):
            raise ValueError(f"starting_bankroll must be >= 0, got {self.starting_bankroll!r}")
        if self.expected_bins < 1:
            raise ValueError(f"expected_bins must be >= 1, got {self.expected_bins!r}")
        if self.min_bets_per_bin < 1:
            raise ValueError(f"min_bets_per_bin must be >= 1, got {self.min_bets_per_bin!r}")
        if self.timeframe_periods < 1:
            raise ValueError(f"timeframe_periods must be >= 1, got {self.timeframe_periods!r}")

    @classmethod
    def from_env(cls) -> "AnalyticsSettings":
        return cls(
            bucket_interval=os.getenv("ANALYTICS_BUCKET_INTERVAL", "daily").strip().lower(),
            week_start=os.getenv("ANALYTICS_WEEK_START", "sunday").strip().lower(),
            starting_bankroll=float(os.getenv("STARTING_BANKROLL", "1000")),
            expected_bins=int(os.getenv("ANALYTICS_EXPECTED_BINS", "10")),
            min_bets_per_bin=int(os.getenv("ANALYTICS_MIN_BETS_PER_BIN", "5")),
            timeframe_periods=int(os.getenv("ANALYTICS_TIMEFRAME_PERIODS", "12")),
        )
