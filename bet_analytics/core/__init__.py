"""Pure analytics building blocks for the bet performance engine.

This package contains side-effect-free aggregators over :class:`BetRecord`:

- ``records``      : the record type, status vocabulary, per-bet profit/return
- ``metrics``      : win rate, ROI, profit, stake, return variance, odds and CLV
- ``streaks``      : current / longest streaks and streak-segment history
- ``risk``         : return std-dev and reward/risk ratio
- ``distribution`` : nearest-rank profit quantiles
- ``buckets``      : daily / weekly / monthly profit buckets, per-period rollup
- ``breakdown``    : per-category re-aggregation
- ``time_analysis``: day-of-week and hour-of-day slots
- ``odds``         : odds-range breakdown and win rate vs implied probability
- ``bankroll``     : bankroll growth curve and drawdown
- ``kelly``        : Kelly criterion stake sizing

Nothing in this package imports from ``bet_analytics.services``, reads the
environment or logs.  All modules are unit-testable in isolation.
"""
