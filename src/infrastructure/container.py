"""Service wiring for scripts and jobs.

Builds the engine, session factory, unit-of-work factory, price source and
services from Settings in one place.  Callers own the returned container and
should await dispose() when done.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from src.domain.services.backfill import BackfillService
from src.domain.services.pricing import PriceSource
from src.domain.services.snapshot_capture import SnapshotCaptureService
from src.domain.services.valuation import ValuationService
from src.infrastructure.config import Settings, get_settings
from src.infrastructure.database import create_engine, create_session_factory
from src.infrastructure.persistence.unit_of_work import sql_unit_of_work_factory
from src.infrastructure.price_source import SqlPriceSource


@dataclass
class Services:
    """All services bound to one engine."""

    engine: AsyncEngine
    valuation: ValuationService
    snapshots: SnapshotCaptureService
    backfill: BackfillService

    async def dispose(self) -> None:
        await self.engine.dispose()


def build_services(
    settings: Settings | None = None, price_source: PriceSource | None = None
) -> Services:
    """Wire services against the configured database.

    price_source defaults to the fund_prices cache table.
    """
    settings = settings or get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    uow_factory = sql_unit_of_work_factory(session_factory)

    valuation = ValuationService(
        uow_factory,
        price_source or SqlPriceSource(session_factory),
        price_timeout_seconds=settings.price_fetch_timeout_seconds,
    )
    return Services(
        engine=engine,
        valuation=valuation,
        snapshots=SnapshotCaptureService(uow_factory, valuation),
        backfill=BackfillService(uow_factory),
    )
