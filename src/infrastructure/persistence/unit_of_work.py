"""SQLAlchemy implementation of UnitOfWork.

One AsyncSession per unit of work, one transaction per session.  Repositories
are rebound on every begin() so they never outlive their transaction.
"""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.exceptions import PersistenceError, SnapshotConflictError
from src.domain.repositories.unit_of_work import UnitOfWork, UnitOfWorkFactory
from src.infrastructure.persistence.repositories import get_repositories

logger = logging.getLogger(__name__)

_SNAPSHOT_UNIQUE = "uq_fund_snapshots_user_fund_day"


class SqlUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._pending_day: tuple[int, date] | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work is not active; use 'async with'")
        return self._session

    async def begin(self) -> None:
        self._session = self._session_factory()
        await self._session.begin()
        repos = get_repositories(self._session)
        self.positions = repos.positions
        self.profiles = repos.profiles
        self.snapshots = repos.snapshots

    async def commit(self) -> None:
        session = self.session
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            if _SNAPSHOT_UNIQUE in str(exc.orig) and self._pending_day is not None:
                raise SnapshotConflictError(*self._pending_day) from exc
            raise PersistenceError(f"Commit rejected by a constraint: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            await session.rollback()
            raise PersistenceError(f"Commit failed: {exc}") from exc

    async def rollback(self) -> None:
        if self._session is not None and self._session.in_transaction():
            await self._session.rollback()

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
        self._pending_day = None

    async def lock_user_day(self, user_id: int, as_of_day: date) -> None:
        """Take a transaction-scoped advisory lock on PostgreSQL.

        Other dialects rely on the snapshot unique constraint alone.
        """
        self._pending_day = (user_id, as_of_day)
        session = self.session
        if session.bind.dialect.name != "postgresql":
            logger.debug("Advisory locks unavailable on %s", session.bind.dialect.name)
            return
        await session.execute(
            text("SELECT pg_advisory_xact_lock(:user_id, :day)"),
            {"user_id": user_id, "day": as_of_day.toordinal()},
        )


def sql_unit_of_work_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> UnitOfWorkFactory:
    """Return a zero-argument factory producing fresh SqlUnitOfWork instances."""

    def factory() -> SqlUnitOfWork:
        return SqlUnitOfWork(session_factory)

    return factory
