"""Concrete SQLAlchemy repository implementations.

Exports all SqlRepository classes and the get_repositories() factory used by
SqlUnitOfWork to bind repositories to its session.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .positions import SqlFundPositionRepository
from .prices import SqlFundPriceRepository
from .profiles import SqlProfileRepository
from .snapshots import SqlSnapshotRepository


@dataclass
class Repositories:
    """All repository instances bound to a single AsyncSession."""

    positions: SqlFundPositionRepository
    profiles: SqlProfileRepository
    snapshots: SqlSnapshotRepository
    prices: SqlFundPriceRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all repositories bound to the given session.

        async with AsyncSessionLocal() as session:
            repos = get_repositories(session)
            positions = await repos.positions.list_for_user(user_id)
    """
    return Repositories(
        positions=SqlFundPositionRepository(session),
        profiles=SqlProfileRepository(session),
        snapshots=SqlSnapshotRepository(session),
        prices=SqlFundPriceRepository(session),
    )


__all__ = [
    "SqlFundPositionRepository",
    "SqlProfileRepository",
    "SqlSnapshotRepository",
    "SqlFundPriceRepository",
    "Repositories",
    "get_repositories",
]
