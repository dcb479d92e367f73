"""Win/loss streak analysis over settled wagers.

A *streak* is a maximal run of consecutive same-outcome settled bets in
chronological order.  Three views are exposed:

* :func:`current_streak`: the run that ends with the most recent bet.
* :func:`longest_streaks`: the longest win run and longest loss run.
* :func:`streak_history`: every run, oldest first, as :class:`StreakSegment`.

Ordering
--------
Records are sorted ascending by ``placed_at`` with a stable sort, so bets
placed at the same instant keep their input order.  "Most recent first" is
the exact reverse of that sequence, which keeps the current streak equal to
the trailing segment of :func:`streak_history`.  Non-settled records passed
in by mistake are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final, Iterable, List, Literal, Optional, Tuple

from bet_analytics.core.records import BetRecord, chronological, settled_only

StreakType = Literal["win", "loss"]

STREAK_WIN: Final[str] = "win"
STREAK_LOSS: Final[str] = "loss"


@dataclass(frozen=True, slots=True)
class Streak:
    type: StreakType
    count: int


@dataclass(frozen=True, slots=True)
class StreakSummary:
    """Current streak plus the longest runs of each outcome.

    ``longest`` is whichever of the two runs is longer; a tie reports ``win``.
    """

    current: Streak
    longest: Streak
    longest_win: int
    longest_loss: int


@dataclass(frozen=True, slots=True)
class StreakSegment:
    type: StreakType
    count: int
    start_date: datetime
    end_date: datetime


def _outcome(record: BetRecord) -> str:
    return STREAK_WIN if record.is_win else STREAK_LOSS


def _ordered(records: Iterable[BetRecord]) -> List[BetRecord]:
    return chronological(settled_only(records))


def current_streak(records: Iterable[BetRecord]) -> Streak:
    """Outcome of the most recent settled bet and how many in a row share it.

    Empty input returns ``Streak("win", 0)``.
    """
    ordered = _ordered(records)
    if not ordered:
        return Streak(STREAK_WIN, 0)

    latest = _outcome(ordered[-1])
    count = 0
    for record in reversed(ordered):
        if _outcome(record) != latest:
            break
        count += 1
    return Streak(latest, count)


def longest_streaks(records: Iterable[BetRecord]) -> Tuple[int, int]:
    """Return ``(longest_win_run, longest_loss_run)``."""
    win_run = loss_run = 0
    best_win = best_loss = 0
    for record in _ordered(records):
        if record.is_win:
            win_run += 1
            loss_run = 0
            best_win = max(best_win, win_run)
        else:
            loss_run += 1
            win_run = 0
            best_loss = max(best_loss, loss_run)
    return best_win, best_loss


def summarize_streaks(records: Iterable[BetRecord]) -> StreakSummary:
    settled = _ordered(records)
    best_win, best_loss = longest_streaks(settled)
    if best_win >= best_loss:
        longest = Streak(STREAK_WIN, best_win)
    else:
        longest = Streak(STREAK_LOSS, best_loss)
    return StreakSummary(
        current=current_streak(settled),
        longest=longest,
        longest_win=best_win,
        longest_loss=best_loss,
    )


def streak_history(records: Iterable[BetRecord]) -> Tuple[StreakSegment, ...]:
    """Every maximal same-outcome run, oldest first."""
    segments: List[StreakSegment] = []
    run_type: Optional[str] = None
    run_count = 0
    run_start: Optional[datetime] = None
    run_end: Optional[datetime] = None

    for record in _ordered(records):
        outcome = _outcome(record)
        if outcome != run_type:
            if run_type is not None:
                segments.append(StreakSegment(run_type, run_count, run_start, run_end))
            run_type = outcome
            run_count = 0
            run_start = record.placed_at
        run_count += 1
        run_end = record.placed_at

    if run_type is not None:
        segments.append(StreakSegment(run_type, run_count, run_start, run_end))
    return tuple(segments)
