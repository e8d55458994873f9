"""Fund position repository interface."""

from __future__ import annotations

from abc import abstractmethod
from datetime import date
from decimal import Decimal

from src.domain.models.funds import FundPosition

from .base import UserScopedRepository


class FundPositionRepository(UserScopedRepository[FundPosition]):
    """Read/write interface for current-state FundPosition rows.

    (user_id, fund_code) is unique.  The cached valuation fields are written
    only through update_cached_valuation().
    """

    @abstractmethod
    async def add_many(self, positions: list[FundPosition]) -> int:
        """Stage new rows for insert.  Returns the number staged."""

    @abstractmethod
    async def update_cached_valuation(
        self,
        user_id: int,
        fund_code: str,
        price: Decimal,
        market_value: Decimal,
        mix_percent: Decimal,
        as_of_day: date,
    ) -> None:
        """Overwrite the cached price/value/mix fields on one stored row.

        fund_code is the code exactly as stored on the row.
        """
