"""Price source collaborator interface.

A PriceSource supplies the current price for each fund, keyed by canonical
fund code.  Quotes are valid for one valuation call only and are never a
source of truth; they reach the database solely through the cached fields
on FundPosition rows.

Contract for implementations:
  - Return an empty mapping when no data is available.
  - Raise PriceSourceError only for unrecoverable transport failures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from .fund_codes import normalize_fund_code


class PriceSource(ABC):
    """Supplies current fund prices."""

    @abstractmethod
    async def get_current_prices(self) -> dict[str, Decimal]:
        """Return canonical fund code → latest price.  May be empty."""


class StaticPriceSource(PriceSource):
    """Serves a fixed price map.  Keys are normalized on construction."""

    def __init__(self, prices: dict[str, Decimal] | None = None) -> None:
        self._prices = {
            normalize_fund_code(code): Decimal(str(price))
            for code, price in (prices or {}).items()
        }

    async def get_current_prices(self) -> dict[str, Decimal]:
        return dict(self._prices)
