"""Tests for the get_repositories() DI factory."""

from unittest.mock import AsyncMock

from src.infrastructure.persistence.repositories import (
    Repositories,
    SqlFundPositionRepository,
    SqlFundPriceRepository,
    SqlProfileRepository,
    SqlSnapshotRepository,
    get_repositories,
)


def _repos():
    return get_repositories(AsyncMock())


def test_get_repositories_returns_repositories_instance():
    assert isinstance(_repos(), Repositories)


def test_repositories_positions_is_correct_type():
    assert isinstance(_repos().positions, SqlFundPositionRepository)


def test_repositories_profiles_is_correct_type():
    assert isinstance(_repos().profiles, SqlProfileRepository)


def test_repositories_snapshots_is_correct_type():
    assert isinstance(_repos().snapshots, SqlSnapshotRepository)


def test_repositories_prices_is_correct_type():
    assert isinstance(_repos().prices, SqlFundPriceRepository)


def test_repositories_dataclass_has_four_fields():
    assert len(Repositories.__dataclass_fields__) == 4
