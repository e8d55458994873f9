"""SQLAlchemy implementation of FundPositionRepository."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.funds import FundPosition as DomainPosition
from src.domain.repositories.positions import FundPositionRepository
from src.infrastructure.persistence.models.positions import FundPosition as OrmPosition


def _position_to_domain(row: OrmPosition) -> DomainPosition:
    return DomainPosition(
        user_id=row.user_id,
        fund_code=row.fund_code,
        contribution_percent=row.contribution_percent,
        units=row.units,
        cached_price=row.current_price,
        cached_market_value=row.current_market_value,
        cached_mix_percent=row.current_mix_percent,
        last_priced_as_of=row.last_priced_as_of,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlFundPositionRepository(FundPositionRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(self, user_id: int) -> list[DomainPosition]:
        stmt = (
            select(OrmPosition)
            .where(OrmPosition.user_id == user_id)
            .order_by(OrmPosition.fund_code.asc())
        )
        result = await self._session.execute(stmt)
        return [_position_to_domain(row) for row in result.scalars()]

    async def add_many(self, positions: list[DomainPosition]) -> int:
        rows = [
            OrmPosition(
                user_id=p.user_id,
                fund_code=p.fund_code,
                contribution_percent=p.contribution_percent,
                units=p.units,
                created_at=p.created_at,
                updated_at=p.updated_at,
            )
            for p in positions
        ]
        self._session.add_all(rows)
        return len(rows)

    async def update_cached_valuation(
        self,
        user_id: int,
        fund_code: str,
        price: Decimal,
        market_value: Decimal,
        mix_percent: Decimal,
        as_of_day: date,
    ) -> None:
        stmt = (
            update(OrmPosition)
            .where(OrmPosition.user_id == user_id, OrmPosition.fund_code == fund_code)
            .values(
                current_price=price,
                current_market_value=market_value,
                current_mix_percent=mix_percent,
                last_priced_as_of=as_of_day,
                updated_at=func.now(),
            )
        )
        await self._session.execute(stmt)
