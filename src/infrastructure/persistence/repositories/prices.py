"""SQLAlchemy implementation of FundPriceRepository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.repositories.prices import FundPriceRepository
from src.domain.services.fund_codes import normalize_fund_code
from src.infrastructure.persistence.models.prices import FundPrice as OrmFundPrice


class SqlFundPriceRepository(FundPriceRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_latest_prices(self) -> tuple[date | None, dict[str, Decimal]]:
        latest = await self._session.execute(select(func.max(OrmFundPrice.price_date)))
        price_date = latest.scalar_one_or_none()
        if price_date is None:
            return None, {}
        stmt = select(OrmFundPrice).where(OrmFundPrice.price_date == price_date)
        result = await self._session.execute(stmt)
        return price_date, {row.fund_code: row.price for row in result.scalars()}

    async def bulk_upsert(self, price_date: date, prices: dict[str, Decimal]) -> int:
        if not prices:
            return 0
        non_positive = [code for code, price in prices.items() if price <= 0]
        if non_positive:
            raise ValueError(
                f"Prices must be positive; got non-positive values for {sorted(non_positive)}"
            )
        # One row per canonical code; ON CONFLICT cannot touch a row twice.
        canonical = {normalize_fund_code(code): price for code, price in prices.items()}
        pulled_at = datetime.now(timezone.utc)
        values = [
            {
                "price_date": price_date,
                "fund_code": code,
                "price": price,
                "pulled_at": pulled_at,
            }
            for code, price in canonical.items()
        ]
        stmt = pg_insert(OrmFundPrice).values(values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["price_date", "fund_code"],
            set_={
                "price": stmt.excluded.price,
                "pulled_at": stmt.excluded.pulled_at,
            },
        )
        result = await self._session.execute(stmt)
        return result.rowcount
