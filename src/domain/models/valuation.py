"""Valuation result models.

ValuationSummary is the read view produced by the valuation service: one
FundSummaryItem per priced fund, ordered by fund code, plus the total and the
as-of day the prices are attributed to.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import PositionSource


class FundSummaryItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    fund_code: str
    price: Decimal
    units: Decimal = Field(ge=0)
    market_value: Decimal
    mix_percent: Decimal
    contribution_percent: Decimal | None = None


class ValuationSummary(BaseModel):
    """Point-in-time valuation of a user's retirement funds.

    items are sorted by fund_code ascending, one per canonical code.
    mix_percent values are all zero when total_market_value is not positive.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    as_of_day: date | None
    items: list[FundSummaryItem] = Field(default_factory=list)
    total_market_value: Decimal = Decimal("0")
    source: PositionSource = PositionSource.EMPTY

    @model_validator(mode="after")
    def _items_sorted_by_code(self) -> ValuationSummary:
        codes = [item.fund_code for item in self.items]
        if codes != sorted(set(codes)):
            raise ValueError(
                f"Summary items must be sorted by fund_code without repeats, got {codes}"
            )
        return self

    @classmethod
    def empty(cls, user_id: int, as_of_day: date | None) -> ValuationSummary:
        return cls(user_id=user_id, as_of_day=as_of_day)


class BackfillResult(BaseModel):
    """Outcome of a base-fund backfill.

    created counts rows inserted (or that would be inserted on a dry run);
    existing counts base funds the user already had.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    created: int = Field(ge=0)
    existing: int = Field(ge=0)
    dry_run: bool
    missing_codes: list[str] = Field(default_factory=list)
