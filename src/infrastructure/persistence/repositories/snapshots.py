"""SQLAlchemy implementation of SnapshotRepository."""

from __future__ import annotations

from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.snapshots import FundSnapshot as DomainSnapshot
from src.domain.models.snapshots import SnapshotMeta
from src.domain.repositories.snapshots import SnapshotRepository
from src.infrastructure.persistence.models.snapshots import FundSnapshot as OrmSnapshot


def _snapshot_to_domain(row: OrmSnapshot) -> DomainSnapshot:
    return DomainSnapshot(
        user_id=row.user_id,
        fund_code=row.fund_code,
        price=row.price,
        units=row.units,
        market_value=row.market_value,
        mix_percent=row.mix_percent,
        contribution_percent_at_capture=row.contribution_percent,
        as_of_day=row.as_of_day,
        captured_at=row.captured_at,
    )


def _snapshot_to_orm(entity: DomainSnapshot) -> OrmSnapshot:
    return OrmSnapshot(
        user_id=entity.user_id,
        fund_code=entity.fund_code,
        price=entity.price,
        units=entity.units,
        market_value=entity.market_value,
        mix_percent=entity.mix_percent,
        contribution_percent=entity.contribution_percent_at_capture,
        as_of_day=entity.as_of_day,
        captured_at=entity.captured_at,
    )


class SqlSnapshotRepository(SnapshotRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(self, user_id: int) -> list[DomainSnapshot]:
        return await self.list_between(user_id)

    async def list_between(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> list[DomainSnapshot]:
        stmt = (
            select(OrmSnapshot)
            .where(OrmSnapshot.user_id == user_id)
            .order_by(OrmSnapshot.as_of_day.asc(), OrmSnapshot.fund_code.asc())
        )
        if start is not None:
            stmt = stmt.where(OrmSnapshot.as_of_day >= start)
        if end is not None:
            stmt = stmt.where(OrmSnapshot.as_of_day <= end)
        result = await self._session.execute(stmt)
        return [_snapshot_to_domain(row) for row in result.scalars()]

    async def exists_for_day(self, user_id: int, as_of_day: date) -> bool:
        stmt = (
            select(OrmSnapshot.id)
            .where(OrmSnapshot.user_id == user_id, OrmSnapshot.as_of_day == as_of_day)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def delete_for_day(self, user_id: int, as_of_day: date) -> int:
        stmt = delete(OrmSnapshot).where(
            OrmSnapshot.user_id == user_id, OrmSnapshot.as_of_day == as_of_day
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def add_many(self, snapshots: list[DomainSnapshot]) -> int:
        self._session.add_all([_snapshot_to_orm(s) for s in snapshots])
        return len(snapshots)

    async def get_latest_meta(self, user_id: int) -> SnapshotMeta | None:
        latest_day = (
            select(func.max(OrmSnapshot.as_of_day))
            .where(OrmSnapshot.user_id == user_id)
            .scalar_subquery()
        )
        stmt = (
            select(
                OrmSnapshot.as_of_day,
                func.max(OrmSnapshot.captured_at),
                func.count(OrmSnapshot.id),
                func.sum(OrmSnapshot.market_value),
            )
            .where(OrmSnapshot.user_id == user_id, OrmSnapshot.as_of_day == latest_day)
            .group_by(OrmSnapshot.as_of_day)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        as_of_day, captured_at, fund_count, total = row
        return SnapshotMeta(
            user_id=user_id,
            as_of_day=as_of_day,
            captured_at=captured_at,
            fund_count=fund_count,
            total_market_value=total,
        )
