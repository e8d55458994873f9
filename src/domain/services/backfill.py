"""Base-fund backfill.

Ensures a user has a FundPosition row for each baseline fund code
(G, F, C, S, I, L-INCOME).  Missing rows are inserted with zero units and a
zero contribution percent; existing rows are never touched, so re-running
after a successful run creates nothing.
"""

from __future__ import annotations

import logging

from src.domain.models.funds import FundPosition
from src.domain.models.valuation import BackfillResult
from src.domain.repositories.unit_of_work import UnitOfWorkFactory

from .fund_codes import BASELINE_FUND_CODES, normalize_fund_code

logger = logging.getLogger(__name__)


class BackfillService:
    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def backfill_base_funds(self, user_id: int, dry_run: bool = True) -> BackfillResult:
        """Create the baseline fund rows the user is missing.

        Existing codes are compared after normalization, so a legacy
        "LIncome" row counts as L-INCOME.  With dry_run=True nothing is
        written and created reports what would be inserted.
        """
        async with self._uow_factory() as uow:
            positions = await uow.positions.list_for_user(user_id)
            held = {normalize_fund_code(p.fund_code) for p in positions}
            missing = [code for code in BASELINE_FUND_CODES if code not in held]
            existing = len(BASELINE_FUND_CODES) - len(missing)

            if not dry_run and missing:
                await uow.positions.add_many(
                    [FundPosition.placeholder(user_id, code) for code in missing]
                )
                await uow.commit()
                logger.info(
                    "Backfilled %d base fund row(s) for user %s: %s",
                    len(missing),
                    user_id,
                    ", ".join(missing),
                )

        return BackfillResult(
            user_id=user_id,
            created=len(missing),
            existing=existing,
            dry_run=dry_run,
            missing_codes=missing,
        )
