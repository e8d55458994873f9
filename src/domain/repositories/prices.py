"""Fund price cache repository interface.

FundPriceRepository is a specialised time-series interface and does not extend
UserScopedRepository; quotes are global, ingested in bulk and read back as
the latest complete price date.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal


class FundPriceRepository(ABC):
    """Read/write interface for cached daily fund prices."""

    @abstractmethod
    async def get_latest_prices(self) -> tuple[date | None, dict[str, Decimal]]:
        """Return (price_date, code → price) for the most recent price date.

        Returns (None, {}) when the cache is empty.
        """

    @abstractmethod
    async def bulk_upsert(self, price_date: date, prices: dict[str, Decimal]) -> int:
        """Insert or update one row per fund for price_date.

        Returns the number of rows affected.
        """
