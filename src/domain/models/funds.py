"""Retirement fund position domain models.

FundPosition is the current-state row for one user and one fund code.  Its
cached_* fields form a denormalized view that only the valuation service
writes; user edits touch contribution_percent and units.

ProfileAggregate is the single per-user row that predates per-fund
positions.  The five base-fund percentages and current_balance are kept so
that users who never migrated to FundPosition rows can still be valued.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

_ZERO = Decimal("0")


class FundPosition(BaseModel):
    """A user's holding in one fund.

    contribution_percent has no single-row bound; the cross-fund sum is a
    soft business rule owned by whoever edits allocations.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    fund_code: str = Field(min_length=1, max_length=10)
    contribution_percent: Decimal = _ZERO
    units: Decimal = Field(default=_ZERO, ge=0)
    cached_price: Decimal | None = None
    cached_market_value: Decimal | None = None
    cached_mix_percent: Decimal | None = None
    last_priced_as_of: date | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def placeholder(cls, user_id: int, fund_code: str) -> FundPosition:
        """Return an empty baseline row (zero units, zero contribution)."""
        return cls(user_id=user_id, fund_code=fund_code)


class ProfileAggregate(BaseModel):
    """Per-user retirement profile row.

    Legacy fields: contribution rates, current/target balance and the five
    base-fund percentages.  total_balance and last_updated_at are rewritten
    by every valuation run.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    contribution_rate_percent: Decimal = _ZERO
    employer_match_percent: Decimal = _ZERO
    current_balance: Decimal = _ZERO
    target_balance: Decimal = _ZERO
    g_fund_percent: Decimal = _ZERO
    f_fund_percent: Decimal = _ZERO
    c_fund_percent: Decimal = _ZERO
    s_fund_percent: Decimal = _ZERO
    i_fund_percent: Decimal = _ZERO
    total_balance: Decimal | None = None
    last_updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def legacy_allocations(self) -> dict[str, Decimal]:
        """Return the non-zero base-fund percentages keyed by fund code."""
        percents = {
            "G": self.g_fund_percent,
            "F": self.f_fund_percent,
            "C": self.c_fund_percent,
            "S": self.s_fund_percent,
            "I": self.i_fund_percent,
        }
        return {code: pct for code, pct in percents.items() if pct != 0}

    def has_legacy_allocation(self) -> bool:
        return self.current_balance > 0 and bool(self.legacy_allocations())
