"""Unit of work interface.

A UnitOfWork scopes one transaction and exposes the repositories bound to
it.  Usage:

    async with uow_factory() as uow:
        positions = await uow.positions.list_for_user(user_id)
        ...
        await uow.commit()

Leaving the block without commit() rolls back every staged write, so a
caller never observes a partially applied change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date
from types import TracebackType

from .positions import FundPositionRepository
from .profiles import ProfileRepository
from .snapshots import SnapshotRepository


class UnitOfWork(ABC):
    positions: FundPositionRepository
    profiles: ProfileRepository
    snapshots: SnapshotRepository

    async def __aenter__(self) -> UnitOfWork:
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.rollback()
        await self.close()

    @abstractmethod
    async def begin(self) -> None:
        """Open the transaction and bind repositories."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit staged writes.

        Raises SnapshotConflictError when a snapshot insert hits the unique
        (user_id, fund_code, as_of_day) constraint, and PersistenceError for
        any other failure.  The transaction is rolled back in both cases.
        """

    @abstractmethod
    async def rollback(self) -> None:
        """Discard staged writes.  A no-op after a successful commit."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    async def lock_user_day(self, user_id: int, as_of_day: date) -> None:
        """Serialize writers for (user_id, as_of_day) until this transaction ends."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
