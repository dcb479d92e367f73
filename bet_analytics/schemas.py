"""
Pydantic ingestion schema for raw ledger rows.

The external ledger hands over loosely-typed rows (database dicts, JSON
exports) with snake_case or camelCase keys, string timestamps and the
occasional ``actual_payout = 0`` on a lost bet.  :class:`BetRecordIn`
validates and normalizes a row once, at the boundary, and converts it into
the strict :class:`~bet_analytics.core.records.BetRecord` the engine runs on.

Timestamps with an offset (``...Z``, ``...+02:00``) are converted to naive
UTC; naive timestamps are taken to be UTC already.  Every record leaving
this module therefore carries naive timestamps.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from bet_analytics.core.records import MIN_ODDS_MAGNITUDE, STATUS_WON, BetRecord, as_naive_utc


class BetRecordIn(BaseModel):
    """One raw ledger row."""

    id: str = Field(..., description="Ledger primary key")
    user_id: str = Field(..., validation_alias=AliasChoices("user_id", "userId"))
    sport: Optional[str] = Field(None, description='League label, e.g. "NFL"')
    bet_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("bet_type", "betType")
    )
    stake: float = Field(..., gt=0, description="Amount risked")
    status: Literal["pending", "won", "lost", "void", "cancelled"]
    actual_payout: Optional[float] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("actual_payout", "actualPayout"),
        description="Total returned on a won bet, stake included",
    )
    placed_at: datetime = Field(..., validation_alias=AliasChoices("placed_at", "placedAt"))
    settled_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("settled_at", "settledAt")
    )
    odds: Optional[float] = Field(None, description="American odds at placement")
    sportsbook: Optional[str] = Field(None, max_length=120)
    clv: Optional[float] = Field(None, description="Closing line value, if tracked")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "b-1042",
                "user_id": "u-7",
                "sport": "NFL",
                "bet_type": "spread",
                "stake": 110.0,
                "status": "won",
                "actual_payout": 210.0,
                "placed_at": "2025-01-12T17:55:00",
                "settled_at": "2025-01-12T21:20:00",
                "odds": -110,
                "sportsbook": "DraftKings",
            }
        },
    }

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("placed_at", "settled_at")
    @classmethod
    def normalize_timestamp(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None:
            return v
        return as_naive_utc(v)

    @field_validator("odds")
    @classmethod
    def validate_american_odds(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return v
        if abs(v) < MIN_ODDS_MAGNITUDE:
            raise ValueError(
                f"odds={v} is not valid American odds. "
                "Must be >= +100 or <= -100."
            )
        return v

    @model_validator(mode="after")
    def check_lifecycle(self) -> "BetRecordIn":
        if self.status == STATUS_WON:
            if self.actual_payout is None:
                raise ValueError("won bet requires actual_payout")
        else:
            # Ledgers commonly store 0 payout on lost/void rows
            self.actual_payout = None
        if self.settled_at is not None and self.settled_at < self.placed_at:
            raise ValueError("settled_at cannot precede placed_at")
        return self

    def to_record(self) -> BetRecord:
        return BetRecord(
            id=self.id,
            user_id=self.user_id,
            sport=self.sport,
            bet_type=self.bet_type,
            stake=self.stake,
            status=self.status,
            placed_at=self.placed_at,
            actual_payout=self.actual_payout,
            settled_at=self.settled_at,
            odds=self.odds,
            sportsbook=self.sportsbook,
            clv=self.clv,
        )


def parse_ledger(rows: Iterable[dict]) -> List[BetRecord]:
    """Validate raw rows and convert them to records.  Fails on the first bad row."""
    return [BetRecordIn.model_validate(row).to_record() for row in rows]
