"""Price source backed by the fund_prices cache table.

Reads the most recent price date in a short session of its own, so the
valuation transaction never waits on it.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.exceptions import PriceSourceError
from src.domain.services.pricing import PriceSource
from src.infrastructure.persistence.repositories.prices import SqlFundPriceRepository

logger = logging.getLogger(__name__)


class SqlPriceSource(PriceSource):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_current_prices(self) -> dict[str, Decimal]:
        try:
            async with self._session_factory() as session:
                price_date, prices = await SqlFundPriceRepository(session).get_latest_prices()
        except SQLAlchemyError as exc:
            raise PriceSourceError(f"Could not read cached fund prices: {exc}") from exc

        if price_date is None:
            logger.info("Fund price cache is empty")
            return {}
        logger.debug("Loaded %d cached fund price(s) for %s", len(prices), price_date)
        return prices
