"""Snapshot repository interface."""

from __future__ import annotations

from abc import abstractmethod
from datetime import date

from src.domain.models.snapshots import FundSnapshot, SnapshotMeta

from .base import UserScopedRepository


class SnapshotRepository(UserScopedRepository[FundSnapshot]):
    """Read/append interface for FundSnapshot rows.

    Snapshots are immutable: there is no update.  delete_for_day() exists only
    to clear an interrupted write inside the same transaction that rewrites it.
    """

    @abstractmethod
    async def exists_for_day(self, user_id: int, as_of_day: date) -> bool:
        """Return True if any snapshot row exists for (user_id, as_of_day)."""

    @abstractmethod
    async def delete_for_day(self, user_id: int, as_of_day: date) -> int:
        """Remove any rows for (user_id, as_of_day).  Returns the count removed."""

    @abstractmethod
    async def add_many(self, snapshots: list[FundSnapshot]) -> int:
        """Stage snapshot rows for insert.  Returns the number staged."""

    @abstractmethod
    async def list_between(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> list[FundSnapshot]:
        """Return rows ordered by as_of_day then fund_code.  Bounds are inclusive."""

    @abstractmethod
    async def get_latest_meta(self, user_id: int) -> SnapshotMeta | None:
        """Return metadata for the most recent captured day, or None."""
