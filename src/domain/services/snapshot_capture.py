"""Daily snapshot capture service.

Persists the valuation of a user's funds once per trading day.  The result is
idempotent under retries and overlapping triggers:

    1. A cheap existence check returns early when the day is already captured.
    2. The write transaction takes a per-(user, day) lock and re-checks, so two
       callers that both passed step 1 cannot both write.
    3. The unique (user_id, fund_code, as_of_day) constraint is the last line;
       a conflict on commit is reported as "already captured".

The transaction also clears any rows left for the day before inserting, so a
reader sees either no snapshot or the complete set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime

from src.domain.exceptions import SnapshotConflictError
from src.domain.models.snapshots import FundSnapshot, SnapshotMeta
from src.domain.models.valuation import ValuationSummary
from src.domain.repositories.unit_of_work import UnitOfWorkFactory

from .trading_calendar import resolve_as_of, utc_now
from .valuation import ValuationService

logger = logging.getLogger(__name__)


def snapshots_from_summary(
    summary: ValuationSummary, as_of_day: date, captured_at: datetime
) -> list[FundSnapshot]:
    """Turn each summary item into an immutable snapshot row."""
    return [
        FundSnapshot(
            user_id=summary.user_id,
            fund_code=item.fund_code,
            price=item.price,
            units=item.units,
            market_value=item.market_value,
            mix_percent=item.mix_percent,
            contribution_percent_at_capture=item.contribution_percent,
            as_of_day=as_of_day,
            captured_at=captured_at,
        )
        for item in summary.items
    ]


class SnapshotCaptureService:
    """Writes at most one snapshot set per user per as-of day."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        valuation: ValuationService,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = uow_factory
        self._valuation = valuation
        self._clock = clock

    async def capture_if_absent(self, user_id: int) -> bool:
        """Capture today's snapshot for the user unless one already exists.

        Returns True when rows were written, False for every no-op (already
        captured, nothing to snapshot, lost a concurrent race).

        Raises:
            PersistenceError: the write transaction failed; nothing was written.
        """
        as_of_day = resolve_as_of(self._clock())

        async with self._uow_factory() as uow:
            if await uow.snapshots.exists_for_day(user_id, as_of_day):
                logger.debug("Snapshot for user %s on %s already captured", user_id, as_of_day)
                return False

        summary = await self._valuation.summarize(user_id)
        if not summary.items:
            logger.debug("Nothing to snapshot for user %s on %s", user_id, as_of_day)
            return False

        rows = snapshots_from_summary(summary, as_of_day, self._clock())
        async with self._uow_factory() as uow:
            await uow.lock_user_day(user_id, as_of_day)
            if await uow.snapshots.exists_for_day(user_id, as_of_day):
                logger.debug(
                    "Snapshot for user %s on %s captured concurrently", user_id, as_of_day
                )
                return False
            await uow.snapshots.delete_for_day(user_id, as_of_day)
            await uow.snapshots.add_many(rows)
            try:
                await uow.commit()
            except SnapshotConflictError:
                logger.info(
                    "Snapshot for user %s on %s lost insert race; keeping existing rows",
                    user_id,
                    as_of_day,
                )
                return False

        logger.info(
            "Captured %d fund snapshot(s) for user %s on %s (total %s)",
            len(rows),
            user_id,
            as_of_day,
            summary.total_market_value,
        )
        return True

    async def latest_snapshot(self, user_id: int) -> SnapshotMeta | None:
        """Return metadata for the user's most recent captured day."""
        async with self._uow_factory() as uow:
            return await uow.snapshots.get_latest_meta(user_id)

    async def history(
        self, user_id: int, start: date | None = None, end: date | None = None
    ) -> list[FundSnapshot]:
        """Return captured rows between start and end (inclusive)."""
        if start is not None and end is not None and start > end:
            raise ValueError(f"start ({start}) must not be after end ({end})")
        async with self._uow_factory() as uow:
            return await uow.snapshots.list_between(user_id, start, end)
