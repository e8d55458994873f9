"""Tests for SqlFundPriceRepository: latest-date reads and bulk upsert."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from src.infrastructure.persistence.repositories.prices import SqlFundPriceRepository

DAY = date(2025, 6, 10)


def _session(*results):
    session = MagicMock()
    session.execute = AsyncMock(side_effect=list(results))
    return session


async def test_get_latest_prices_empty_cache():
    empty = MagicMock()
    empty.scalar_one_or_none.return_value = None
    session = _session(empty)

    assert await SqlFundPriceRepository(session).get_latest_prices() == (None, {})
    assert session.execute.await_count == 1


async def test_get_latest_prices_returns_latest_date_map():
    latest = MagicMock()
    latest.scalar_one_or_none.return_value = DAY
    rows = MagicMock()
    rows.scalars.return_value = [
        MagicMock(fund_code="G", price=Decimal("18.1")),
        MagicMock(fund_code="C", price=Decimal("90.2")),
    ]

    price_date, prices = await SqlFundPriceRepository(_session(latest, rows)).get_latest_prices()

    assert price_date == DAY
    assert prices == {"G": Decimal("18.1"), "C": Decimal("90.2")}


async def test_bulk_upsert_empty_is_noop():
    session = _session()
    assert await SqlFundPriceRepository(session).bulk_upsert(DAY, {}) == 0
    session.execute.assert_not_awaited()


async def test_bulk_upsert_rejects_non_positive_price():
    session = _session()
    with pytest.raises(ValueError):
        await SqlFundPriceRepository(session).bulk_upsert(DAY, {"G": Decimal("0")})
    session.execute.assert_not_awaited()


async def test_bulk_upsert_collapses_spellings_to_one_row():
    done = MagicMock()
    done.rowcount = 1
    session = _session(done)

    count = await SqlFundPriceRepository(session).bulk_upsert(
        DAY, {"L Income": Decimal("12"), "LIncome": Decimal("12.5")}
    )

    assert count == 1
    stmt = session.execute.call_args.args[0]
    params = stmt.compile(dialect=postgresql.dialect()).params
    assert "L-INCOME" in params.values()
    assert "LIncome" not in params.values()
