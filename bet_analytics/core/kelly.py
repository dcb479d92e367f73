"""Kelly criterion stake sizing for a single win/loss wager.

Full Kelly for profit-per-unit ``b = decimal_odds - 1`` and win probability
``p`` is::

    f*  =  (b · p - q) / b,   q = 1 - p

:func:`kelly_stake` turns that fraction into a currency amount and clips it
to ``[0, max_fraction · bankroll]``.  A negative ``f*`` (negative-EV bet)
recommends a stake of 0.

Examples::

    kelly_fraction(0.55, -110)          →  0.055
    kelly_stake(0.55, -110, 1000.0)     →  55.0
    kelly_stake(0.90, +200, 1000.0)     →  250.0  (capped at 25 %)
"""

from __future__ import annotations

from typing import Final

from bet_analytics.core.odds import american_to_decimal

#: Largest share of the bankroll ever recommended on one wager.
MAX_KELLY_FRACTION: Final[float] = 0.25


def kelly_fraction(win_prob: float, american_odds: float) -> float:
    """Full (unclipped) Kelly fraction.  May be negative.

    Raises:
        ValueError: If ``win_prob`` is outside ``[0, 1]`` or the odds are not
            valid American odds.
    """
    if not (0.0 <= win_prob <= 1.0):
        raise ValueError(f"win_prob must be in [0, 1], got {win_prob!r}")
    b = american_to_decimal(american_odds) - 1.0
    return (b * win_prob - (1.0 - win_prob)) / b


def kelly_stake(
    win_prob: float,
    american_odds: float,
    bankroll: float,
    *,
    max_fraction: float = MAX_KELLY_FRACTION,
) -> float:
    """Recommended stake in currency units, in ``[0, max_fraction · bankroll]``."""
    if not (bankroll >= 0):
        raise ValueError(f"bankroll must be >= 0, got {bankroll!r}")
    if not (0.0 < max_fraction <= 1.0):
        raise ValueError(f"max_fraction must be in (0, 1], got {max_fraction!r}")
    fraction = kelly_fraction(win_prob, american_odds)
    return max(0.0, min(fraction * bankroll, max_fraction * bankroll))
