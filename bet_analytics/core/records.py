"""Wager records, the single input type of the analytics engine.

A :class:`BetRecord` is an immutable snapshot of one row of the external bet
ledger.  Every invariant is checked in ``__post_init__`` so that a record
which exists is a record every analyzer can trust: no analyzer re-validates,
and no malformed row can surface later as a ``NaN`` in a dashboard metric.

Per-bet arithmetic used by more than one analyzer lives here too:

* :func:`bet_profit`: net result in currency units.
* :func:`bet_return`: net result per unit staked.

Both are defined for *settled* records only (``won`` / ``lost``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Final, Iterable, List, Literal, Optional

# ---------------------------------------------------------------------------
# Status vocabulary
# ---------------------------------------------------------------------------

STATUS_PENDING: Final[str] = "pending"
STATUS_WON: Final[str] = "won"
STATUS_LOST: Final[str] = "lost"
STATUS_VOID: Final[str] = "void"
STATUS_CANCELLED: Final[str] = "cancelled"

BetStatus = Literal["pending", "won", "lost", "void", "cancelled"]

VALID_STATUSES: Final[frozenset] = frozenset(
    {STATUS_PENDING, STATUS_WON, STATUS_LOST, STATUS_VOID, STATUS_CANCELLED}
)

#: Statuses with a known outcome.  Everything else is excluded from win
#: rate, returns, streaks and distributions.
SETTLED_STATUSES: Final[frozenset] = frozenset({STATUS_WON, STATUS_LOST})

#: Label used when a categorical field is missing or blank.
UNKNOWN_CATEGORY: Final[str] = "Unknown"

#: American-odds magnitude floor; anything inside (-100, +100) is a data error.
MIN_ODDS_MAGNITUDE: Final[int] = 100


class InvalidRecordError(ValueError):
    """Raised when a wager record violates a ledger invariant."""

    def __init__(self, record_id: object, reason: str):
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Invalid bet record {record_id!r}: {reason}")


# ---------------------------------------------------------------------------
# BetRecord
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BetRecord:
    """One wager as supplied by the external ledger.

    Attributes:
        id: Ledger identifier.  Only used in error messages here.
        user_id: Owner of the wager.
        sport: League / sport label (``"NFL"``, ``"NBA"``...).  May be empty;
            breakdowns then report it under ``"Unknown"``.
        bet_type: Market type (``"spread"``, ``"moneyline"``, ``"total"``...).
        stake: Amount risked.  Strictly positive.
        status: One of :data:`VALID_STATUSES`.
        placed_at: When the wager was placed.  Bucket keys and time slots
            use it as stored; only ordering normalizes aware values (see
            :func:`as_naive_utc`).
        actual_payout: Total amount returned on a won wager, stake included.
            Present if and only if ``status == "won"``.
        settled_at: When the wager was graded, if it has been.
        odds: American odds at placement, if known.
        sportsbook: Book the wager was placed with, if known.
        clv: Closing line value recorded by the ledger, if tracked.
    """

    id: str
    user_id: str
    sport: Optional[str]
    bet_type: Optional[str]
    stake: float
    status: BetStatus
    placed_at: datetime
    actual_payout: Optional[float] = None
    settled_at: Optional[datetime] = None
    odds: Optional[float] = None
    sportsbook: Optional[str] = None
    clv: Optional[float] = None

    def __post_init__(self) -> None:
        if self.status not in VALID_STATUSES:
            raise InvalidRecordError(self.id, f"unknown status {self.status!r}")
        # ``not stake > 0`` also rejects NaN
        if not (self.stake > 0) or math.isinf(self.stake):
            raise InvalidRecordError(self.id, f"stake must be positive, got {self.stake!r}")

        if self.status == STATUS_WON:
            if self.actual_payout is None:
                raise InvalidRecordError(self.id, "won bet has no actual_payout")
            if not (self.actual_payout >= 0) or math.isinf(self.actual_payout):
                raise InvalidRecordError(
                    self.id, f"actual_payout must be >= 0, got {self.actual_payout!r}"
                )
        elif self.actual_payout is not None:
            raise InvalidRecordError(
                self.id, f"actual_payout is only allowed on won bets (status={self.status!r})"
            )

        if self.settled_at is not None and is_aware(self.settled_at) != is_aware(self.placed_at):
            raise InvalidRecordError(
                self.id,
                "settled_at and placed_at must both be timezone-aware or both naive",
            )
        if self.settled_at is not None and self.settled_at < self.placed_at:
            raise InvalidRecordError(
                self.id,
                f"settled_at {self.settled_at.isoformat()} precedes "
                f"placed_at {self.placed_at.isoformat()}",
            )

        if self.odds is not None and not (abs(self.odds) >= MIN_ODDS_MAGNITUDE):
            raise InvalidRecordError(
                self.id,
                f"odds={self.odds!r} is not valid American odds. "
                "Must be >= +100 or <= -100.",
            )

    @property
    def is_settled(self) -> bool:
        return self.status in SETTLED_STATUSES

    @property
    def is_win(self) -> bool:
        return self.status == STATUS_WON


# ---------------------------------------------------------------------------
# Per-bet arithmetic
# ---------------------------------------------------------------------------


def bet_profit(record: BetRecord) -> float:
    """Net profit of a settled wager: ``payout - stake`` if won, ``-stake`` if lost.

    Unsettled records contribute nothing and return ``0.0``.
    """
    if record.status == STATUS_WON:
        return record.actual_payout - record.stake
    if record.status == STATUS_LOST:
        return -record.stake
    return 0.0


def bet_return(record: BetRecord) -> float:
    """Net return per unit staked: ``(payout - stake) / stake`` if won, ``-1`` if lost."""
    if record.status == STATUS_WON:
        return (record.actual_payout - record.stake) / record.stake
    if record.status == STATUS_LOST:
        return -1.0
    return 0.0


def settled_only(records: Iterable[BetRecord]) -> List[BetRecord]:
    """Filter to records with a known outcome, preserving input order."""
    return [r for r in records if r.status in SETTLED_STATUSES]


def chronological(records: Iterable[BetRecord]) -> List[BetRecord]:
    """Sort ascending by ``placed_at``.  Stable: ties keep input order.

    A ledger may mix aware and naive timestamps; aware values are compared
    in UTC and naive values are taken to already be UTC.
    """
    return sorted(records, key=lambda r: as_naive_utc(r.placed_at))


def safe_div(numerator: float, denominator: float) -> float:
    """Division that yields ``0.0`` instead of ``NaN``/``inf`` on a zero denominator."""
    return numerator / denominator if denominator else 0.0


# ---------------------------------------------------------------------------
# Timestamps and categories
# ---------------------------------------------------------------------------


def is_aware(ts: datetime) -> bool:
    return ts.utcoffset() is not None


def as_naive_utc(ts: datetime) -> datetime:
    """Convert an aware timestamp to naive UTC; naive timestamps pass through."""
    if not is_aware(ts):
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def category_label(value: Optional[str]) -> str:
    """Group label for a raw category value.

    ``None``, empty and whitespace-only values map to ``"Unknown"``.  Any
    other value is used verbatim, so ``"NFL "`` and ``"NFL"`` stay distinct.
    """
    if value is None or not value.strip():
        return UNKNOWN_CATEGORY
    return value
