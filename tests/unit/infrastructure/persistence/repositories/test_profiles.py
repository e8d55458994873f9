"""Tests for SqlProfileRepository: mapping and total balance refresh."""

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from src.infrastructure.persistence.repositories.profiles import (
    SqlProfileRepository,
    _profile_to_domain,
)

NOW = datetime(2025, 6, 10, 23, tzinfo=timezone.utc)


def _orm_profile(**overrides):
    defaults = {
        "user_id": 1,
        "contribution_rate_percent": Decimal("5"),
        "employer_match_percent": Decimal("5"),
        "current_balance": Decimal("10000.00"),
        "target_balance": Decimal("500000.00"),
        "g_fund_percent": Decimal("40"),
        "f_fund_percent": Decimal("0"),
        "c_fund_percent": Decimal("60"),
        "s_fund_percent": Decimal("0"),
        "i_fund_percent": Decimal("0"),
        "total_balance": None,
        "last_updated_at": NOW,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _session(scalar=None, rowcount=1):
    session = MagicMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.rowcount = rowcount
    session.execute = AsyncMock(return_value=result)
    return session


def test_profile_to_domain_maps_percents():
    result = _profile_to_domain(_orm_profile())
    assert result.legacy_allocations() == {"G": Decimal("40"), "C": Decimal("60")}


def test_profile_to_domain_total_balance_none():
    assert _profile_to_domain(_orm_profile()).total_balance is None


async def test_get_returns_none_for_unknown_user():
    assert await SqlProfileRepository(_session()).get(99) is None


async def test_get_maps_row():
    profile = await SqlProfileRepository(_session(_orm_profile())).get(1)
    assert profile.current_balance == Decimal("10000.00")


async def test_update_total_balance_true_when_row_updated():
    repo = SqlProfileRepository(_session(rowcount=1))
    assert await repo.update_total_balance(1, Decimal("2000"), NOW) is True


async def test_update_total_balance_false_when_no_row():
    repo = SqlProfileRepository(_session(rowcount=0))
    assert await repo.update_total_balance(1, Decimal("2000"), NOW) is False
