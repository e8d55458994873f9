"""Tests for SqlPriceSource, backed by the fund_prices cache table."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.domain.exceptions import PriceSourceError
from src.infrastructure import price_source
from src.infrastructure.price_source import SqlPriceSource


def _fake_repository(result=None, exc=None):
    class _Repo:
        def __init__(self, session):
            self.session = session

        async def get_latest_prices(self):
            if exc is not None:
                raise exc
            return result

    return _Repo


async def test_returns_latest_cached_prices(monkeypatch):
    prices = {"G": Decimal("18.1"), "C": Decimal("90.2")}
    monkeypatch.setattr(
        price_source, "SqlFundPriceRepository", _fake_repository((date(2025, 6, 10), prices))
    )
    assert await SqlPriceSource(MagicMock()).get_current_prices() == prices


async def test_empty_cache_returns_empty_map(monkeypatch):
    monkeypatch.setattr(price_source, "SqlFundPriceRepository", _fake_repository((None, {})))
    assert await SqlPriceSource(MagicMock()).get_current_prices() == {}


async def test_database_error_raises_price_source_error(monkeypatch):
    error = OperationalError("SELECT", {}, Exception("connection refused"))
    monkeypatch.setattr(price_source, "SqlFundPriceRepository", _fake_repository(exc=error))
    with pytest.raises(PriceSourceError):
        await SqlPriceSource(MagicMock()).get_current_prices()
