"""SQLAlchemy implementation of ProfileRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.funds import ProfileAggregate
from src.domain.repositories.profiles import ProfileRepository
from src.infrastructure.persistence.models.positions import RetirementProfile as OrmProfile


def _profile_to_domain(row: OrmProfile) -> ProfileAggregate:
    return ProfileAggregate(
        user_id=row.user_id,
        contribution_rate_percent=row.contribution_rate_percent,
        employer_match_percent=row.employer_match_percent,
        current_balance=row.current_balance,
        target_balance=row.target_balance,
        g_fund_percent=row.g_fund_percent,
        f_fund_percent=row.f_fund_percent,
        c_fund_percent=row.c_fund_percent,
        s_fund_percent=row.s_fund_percent,
        i_fund_percent=row.i_fund_percent,
        total_balance=row.total_balance,
        last_updated_at=row.last_updated_at,
    )


class SqlProfileRepository(ProfileRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: int) -> ProfileAggregate | None:
        stmt = select(OrmProfile).where(OrmProfile.user_id == user_id)
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        return _profile_to_domain(row) if row else None

    async def update_total_balance(
        self, user_id: int, total_balance: Decimal, updated_at: datetime
    ) -> bool:
        stmt = (
            update(OrmProfile)
            .where(OrmProfile.user_id == user_id)
            .values(total_balance=total_balance, last_updated_at=updated_at)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
