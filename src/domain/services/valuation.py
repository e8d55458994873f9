"""Retirement fund valuation service.

Resolves a user's fund positions to market values and refreshes the
denormalized caches that hang off them.

Pipeline (summarize):
    resolve_as_of              (trading day the prices are attributed to)
    → _fetch_prices            (outside any transaction; failures → {})
    → resolve_positions        (stored rows, else legacy profile, never both)
    → compute_summary          (pure: value, total, mix, sort)
    → _refresh_caches          (same transaction as the reads, then commit)

Stored rows whose fund codes normalize to the same canonical code are valued
as one fund.  Funds with no price are left out of the summary and of the
total; their cached fields keep the values from the last priced run.  Legacy
profile summaries are synthesized per call and never written back as
FundPosition rows.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from src.domain.exceptions import PriceSourceError
from src.domain.models.enums import PositionSource
from src.domain.models.funds import FundPosition, ProfileAggregate
from src.domain.models.valuation import FundSummaryItem, ValuationSummary
from src.domain.repositories.unit_of_work import UnitOfWork, UnitOfWorkFactory

from .fund_codes import normalize_fund_code
from .pricing import PriceSource
from .trading_calendar import resolve_as_of, utc_now

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_CENT = Decimal("0.01")            # market values: numeric(18,2)
_MIX_QUANTUM = Decimal("0.0001")   # percents: numeric(8,4)
_UNIT_QUANTUM = Decimal("0.000001")  # units: numeric(18,6)


# ------------------------------------------------------------------ #
# Position resolution                                                  #
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class ResolvedPositions:
    """Positions to value for one call, tagged with where they came from.

    STORED carries the FundPosition rows; LEGACY_PROFILE carries the profile
    balance and its non-zero base-fund percentages; EMPTY carries nothing.
    """

    source: PositionSource
    positions: tuple[FundPosition, ...] = ()
    legacy_balance: Decimal = _ZERO
    legacy_allocations: dict[str, Decimal] = field(default_factory=dict)


def resolve_positions(
    positions: list[FundPosition], profile: ProfileAggregate | None
) -> ResolvedPositions:
    """Pick the position source for a valuation.

    Stored rows always win.  The legacy profile is used only when the user
    has no rows at all and the profile carries a positive balance with at
    least one non-zero base-fund percentage.
    """
    if positions:
        return ResolvedPositions(source=PositionSource.STORED, positions=tuple(positions))
    if profile is not None and profile.has_legacy_allocation():
        return ResolvedPositions(
            source=PositionSource.LEGACY_PROFILE,
            legacy_balance=profile.current_balance,
            legacy_allocations=profile.legacy_allocations(),
        )
    return ResolvedPositions(source=PositionSource.EMPTY)


# ------------------------------------------------------------------ #
# Pure computation                                                     #
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class CacheWrite:
    """Cached valuation for one stored row, keyed by its stored spelling."""

    stored_code: str
    market_value: Decimal
    mix_percent: Decimal


@dataclass(frozen=True)
class PricedRow:
    """A summary item paired with the stored rows it was built from.

    Several stored spellings of one fund ("LIncome", "L-INCOME") collapse
    into a single item; writes carries one entry per spelling.  Synthesized
    legacy items have no rows to refresh.
    """

    item: FundSummaryItem
    writes: tuple[CacheWrite, ...] = ()


@dataclass(frozen=True)
class _Valued:
    fund_code: str
    price: Decimal
    units: Decimal
    market_value: Decimal
    contribution_percent: Decimal | None
    # (stored_code, market_value) per contributing row
    members: tuple[tuple[str, Decimal], ...] = ()


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def _mix(value: Decimal, total: Decimal) -> Decimal:
    if total <= 0:
        return _ZERO
    return (value / total * _HUNDRED).quantize(_MIX_QUANTUM, rounding=ROUND_HALF_UP)


def _value_stored(
    positions: tuple[FundPosition, ...], prices: dict[str, Decimal]
) -> list[_Valued]:
    groups: dict[str, list[FundPosition]] = {}
    for position in positions:
        groups.setdefault(normalize_fund_code(position.fund_code), []).append(position)

    valued: list[_Valued] = []
    for code, rows in groups.items():
        price = prices.get(code)
        if price is None:
            logger.debug(
                "No price for fund %s (stored as %s); omitted",
                code,
                ", ".join(repr(r.fund_code) for r in rows),
            )
            continue
        members = tuple((r.fund_code, _money(r.units * price)) for r in rows)
        valued.append(
            _Valued(
                fund_code=code,
                price=price,
                units=sum((r.units for r in rows), _ZERO),
                market_value=sum((value for _, value in members), _ZERO),
                contribution_percent=sum((r.contribution_percent for r in rows), _ZERO),
                members=members,
            )
        )
    return valued


def _value_legacy(resolved: ResolvedPositions, prices: dict[str, Decimal]) -> list[_Valued]:
    valued: list[_Valued] = []
    for code, percent in resolved.legacy_allocations.items():
        price = prices.get(code)
        if price is None:
            logger.debug("No price for legacy fund %s; omitted", code)
            continue
        value = _money(resolved.legacy_balance * percent / _HUNDRED)
        valued.append(
            _Valued(
                fund_code=code,
                price=price,
                units=(value / price).quantize(_UNIT_QUANTUM, rounding=ROUND_HALF_UP),
                market_value=value,
                contribution_percent=percent,
            )
        )
    return valued


def compute_summary(
    user_id: int,
    as_of_day: date,
    resolved: ResolvedPositions,
    prices: dict[str, Decimal],
) -> tuple[ValuationSummary, list[PricedRow]]:
    """Value the resolved positions against prices keyed by canonical code.

    Returns the summary plus, per item, the stored rows to refresh.  Rows
    sharing a canonical code are summed into one item.
    """
    if resolved.source is PositionSource.STORED:
        valued = _value_stored(resolved.positions, prices)
    elif resolved.source is PositionSource.LEGACY_PROFILE:
        valued = _value_legacy(resolved, prices)
    else:
        valued = []

    total = sum((v.market_value for v in valued), _ZERO)
    rows: list[PricedRow] = []
    for v in sorted(valued, key=lambda v: v.fund_code):
        item = FundSummaryItem(
            fund_code=v.fund_code,
            price=v.price,
            units=v.units,
            market_value=v.market_value,
            mix_percent=_mix(v.market_value, total),
            contribution_percent=v.contribution_percent,
        )
        writes = tuple(
            CacheWrite(stored_code=code, market_value=value, mix_percent=_mix(value, total))
            for code, value in v.members
        )
        rows.append(PricedRow(item=item, writes=writes))

    summary = ValuationSummary(
        user_id=user_id,
        as_of_day=as_of_day,
        items=[r.item for r in rows],
        total_market_value=total,
        source=resolved.source if rows else PositionSource.EMPTY,
    )
    return summary, rows


# ------------------------------------------------------------------ #
# Service                                                              #
# ------------------------------------------------------------------ #


class ValuationService:
    """Values retirement positions and refreshes their cached fields.

    The price fetch runs before the transaction opens, so no row locks are
    held across the call to the price source.  A failed, empty, timed-out or
    cancelled fetch is logged and treated as "no prices this call".
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        price_source: PriceSource,
        clock: Callable[[], datetime] = utc_now,
        price_timeout_seconds: float | None = 10.0,
    ) -> None:
        self._uow_factory = uow_factory
        self._price_source = price_source
        self._clock = clock
        self._price_timeout = price_timeout_seconds

    def current_as_of(self) -> date:
        return resolve_as_of(self._clock())

    async def summarize(
        self, user_id: int, cancel: asyncio.Event | None = None
    ) -> ValuationSummary:
        """Value the user's funds at the current as-of day and refresh caches.

        Args:
            user_id: Owner of the positions.
            cancel: Optional signal; once set, a pending price fetch is
                abandoned and the call proceeds with no prices.

        Raises:
            PersistenceError: the cache refresh could not be committed.
        """
        as_of_day = self.current_as_of()
        prices = await self._fetch_prices(cancel)

        async with self._uow_factory() as uow:
            positions = await uow.positions.list_for_user(user_id)
            profile = await uow.profiles.get(user_id)
            resolved = resolve_positions(positions, profile)
            if resolved.source is PositionSource.EMPTY:
                return ValuationSummary.empty(user_id, as_of_day)

            summary, rows = compute_summary(user_id, as_of_day, resolved, prices)
            await self._refresh_caches(uow, user_id, as_of_day, summary, rows, profile)
            await uow.commit()

        return summary

    async def cached_summary(self, user_id: int) -> ValuationSummary:
        """Build a summary from the cached fields of the last valuation run.

        Reads only; never contacts the price source.  Rows that were not
        priced on the most recent as-of day are excluded so that items and
        total describe the same run.  Stored spellings of one fund are
        summed into a single item, as in summarize().
        """
        async with self._uow_factory() as uow:
            positions = await uow.positions.list_for_user(user_id)

        days = [p.last_priced_as_of for p in positions if p.last_priced_as_of is not None]
        if not days:
            return ValuationSummary.empty(user_id, None)
        latest = max(days)

        groups: dict[str, list[tuple[FundPosition, Decimal, Decimal]]] = {}
        for p in positions:
            if p.last_priced_as_of != latest:
                continue
            if p.cached_price is None or p.cached_market_value is None:
                continue
            groups.setdefault(normalize_fund_code(p.fund_code), []).append(
                (p, p.cached_price, p.cached_market_value)
            )
        if not groups:
            return ValuationSummary.empty(user_id, None)

        values = {
            code: sum((value for _, _, value in rows), _ZERO) for code, rows in groups.items()
        }
        total = sum(values.values(), _ZERO)
        items = [
            FundSummaryItem(
                fund_code=code,
                price=groups[code][0][1],
                units=sum((p.units for p, _, _ in groups[code]), _ZERO),
                market_value=values[code],
                mix_percent=_mix(values[code], total),
                contribution_percent=sum(
                    (p.contribution_percent for p, _, _ in groups[code]), _ZERO
                ),
            )
            for code in sorted(groups)
        ]
        return ValuationSummary(
            user_id=user_id,
            as_of_day=latest,
            items=items,
            total_market_value=total,
            source=PositionSource.STORED,
        )

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    async def _fetch_prices(self, cancel: asyncio.Event | None) -> dict[str, Decimal]:
        fetch = asyncio.ensure_future(self._price_source.get_current_prices())
        waiters: set[asyncio.Future] = {fetch}
        cancelled = None
        if cancel is not None:
            cancelled = asyncio.ensure_future(cancel.wait())
            waiters.add(cancelled)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=self._price_timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in waiters:
                if not task.done():
                    task.cancel()

        if fetch not in done:
            if cancelled is not None and cancelled in done:
                logger.warning("Price fetch cancelled by caller; valuing with no prices")
            else:
                logger.warning(
                    "Price fetch timed out after %ss; valuing with no prices", self._price_timeout
                )
            return {}

        try:
            raw = fetch.result()
        except (PriceSourceError, OSError) as exc:
            logger.warning("Price source unavailable: %s; valuing with no prices", exc)
            return {}

        prices: dict[str, Decimal] = {}
        for code, price in (raw or {}).items():
            if price is None:
                continue
            price = Decimal(str(price))
            if price > 0:
                prices[normalize_fund_code(code)] = price
        if not prices:
            logger.warning("Price source returned no usable prices")
        return prices

    async def _refresh_caches(
        self,
        uow: UnitOfWork,
        user_id: int,
        as_of_day: date,
        summary: ValuationSummary,
        rows: list[PricedRow],
        profile: ProfileAggregate | None,
    ) -> None:
        for row in rows:
            for write in row.writes:
                await uow.positions.update_cached_valuation(
                    user_id=user_id,
                    fund_code=write.stored_code,
                    price=row.item.price,
                    market_value=write.market_value,
                    mix_percent=write.mix_percent,
                    as_of_day=as_of_day,
                )
        if profile is None:
            logger.debug("No profile row for user %s; total balance not cached", user_id)
            return
        await uow.profiles.update_total_balance(
            user_id, summary.total_market_value, self._clock()
        )
