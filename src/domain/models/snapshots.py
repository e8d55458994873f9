"""Historical snapshot domain models.

A FundSnapshot is an immutable record of one fund's valuation for one user
on one as-of day.  The set of rows for (user_id, as_of_day) is written once,
atomically, by the snapshot capture service.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class FundSnapshot(BaseModel):
    """One fund's captured valuation."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    fund_code: str
    price: Decimal
    units: Decimal = Field(ge=0)
    market_value: Decimal
    mix_percent: Decimal
    contribution_percent_at_capture: Decimal | None = None
    as_of_day: date
    captured_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SnapshotMeta(BaseModel):
    """Summary of the most recent captured day for a user."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    as_of_day: date
    captured_at: datetime
    fund_count: int = Field(ge=0)
    total_market_value: Decimal
