"""Shared fixtures for service tests.

InMemoryStore stands in for the database.  Each FakeUnitOfWork works on a
private copy of the store and publishes it on commit, so uncommitted writes
are invisible to other units of work exactly as with a real transaction.
The snapshot unique key (user_id, fund_code, as_of_day) is enforced on commit.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from src.domain.exceptions import PersistenceError, SnapshotConflictError
from src.domain.models.funds import FundPosition, ProfileAggregate
from src.domain.models.snapshots import FundSnapshot, SnapshotMeta
from src.domain.repositories.positions import FundPositionRepository
from src.domain.repositories.profiles import ProfileRepository
from src.domain.repositories.snapshots import SnapshotRepository
from src.domain.repositories.unit_of_work import UnitOfWork


@dataclass
class _State:
    positions: dict[tuple[int, str], FundPosition] = field(default_factory=dict)
    profiles: dict[int, ProfileAggregate] = field(default_factory=dict)
    snapshots: list[FundSnapshot] = field(default_factory=list)

    def copy(self) -> _State:
        return _State(dict(self.positions), dict(self.profiles), list(self.snapshots))


class InMemoryStore:
    def __init__(self) -> None:
        self.state = _State()
        self.commits = 0
        self.locks: list[tuple[int, date]] = []
        self.fail_next_commit = False
        # Called with the committing unit of work just before publish.
        self.before_commit: Callable[[FakeUnitOfWork], None] | None = None

    # -- seeding helpers (write straight to committed state) --

    def add_position(self, user_id: int, fund_code: str, units: str = "0", **fields) -> None:
        self.state.positions[(user_id, fund_code)] = FundPosition(
            user_id=user_id, fund_code=fund_code, units=Decimal(units), **fields
        )

    def add_profile(self, user_id: int, **fields) -> None:
        self.state.profiles[user_id] = ProfileAggregate(user_id=user_id, **fields)

    def add_snapshot(self, snapshot: FundSnapshot) -> None:
        self.state.snapshots.append(snapshot)

    # -- read helpers --

    def positions_for(self, user_id: int) -> list[FundPosition]:
        return sorted(
            (p for (uid, _), p in self.state.positions.items() if uid == user_id),
            key=lambda p: p.fund_code,
        )

    def snapshots_for(self, user_id: int, as_of_day: date | None = None) -> list[FundSnapshot]:
        return [
            s for s in self.state.snapshots
            if s.user_id == user_id and (as_of_day is None or s.as_of_day == as_of_day)
        ]

    def uow_factory(self) -> FakeUnitOfWork:
        return FakeUnitOfWork(self)


class _FakePositions(FundPositionRepository):
    def __init__(self, uow: FakeUnitOfWork) -> None:
        self._uow = uow

    async def list_for_user(self, user_id):
        rows = self._uow.work.positions
        return sorted(
            (p for (uid, _), p in rows.items() if uid == user_id), key=lambda p: p.fund_code
        )

    async def add_many(self, positions):
        for p in positions:
            key = (p.user_id, p.fund_code)
            if key in self._uow.work.positions:
                raise PersistenceError(f"duplicate position {key}")
            self._uow.work.positions[key] = p
        return len(positions)

    async def update_cached_valuation(
        self, user_id, fund_code, price, market_value, mix_percent, as_of_day
    ):
        key = (user_id, fund_code)
        row = self._uow.work.positions[key]
        self._uow.work.positions[key] = row.model_copy(
            update={
                "cached_price": price,
                "cached_market_value": market_value,
                "cached_mix_percent": mix_percent,
                "last_priced_as_of": as_of_day,
            }
        )


class _FakeProfiles(ProfileRepository):
    def __init__(self, uow: FakeUnitOfWork) -> None:
        self._uow = uow

    async def get(self, user_id):
        return self._uow.work.profiles.get(user_id)

    async def update_total_balance(self, user_id, total_balance, updated_at):
        row = self._uow.work.profiles.get(user_id)
        if row is None:
            return False
        self._uow.work.profiles[user_id] = row.model_copy(
            update={"total_balance": total_balance, "last_updated_at": updated_at}
        )
        return True


class _FakeSnapshots(SnapshotRepository):
    def __init__(self, uow: FakeUnitOfWork) -> None:
        self._uow = uow

    async def list_for_user(self, user_id):
        return await self.list_between(user_id)

    async def list_between(self, user_id, start=None, end=None):
        rows = [
            s for s in self._uow.work.snapshots
            if s.user_id == user_id
            and (start is None or s.as_of_day >= start)
            and (end is None or s.as_of_day <= end)
        ]
        return sorted(rows, key=lambda s: (s.as_of_day, s.fund_code))

    async def exists_for_day(self, user_id, as_of_day):
        return any(
            s.user_id == user_id and s.as_of_day == as_of_day for s in self._uow.work.snapshots
        )

    async def delete_for_day(self, user_id, as_of_day):
        before = len(self._uow.work.snapshots)
        self._uow.work.snapshots = [
            s for s in self._uow.work.snapshots
            if not (s.user_id == user_id and s.as_of_day == as_of_day)
        ]
        return before - len(self._uow.work.snapshots)

    async def add_many(self, snapshots):
        self._uow.work.snapshots.extend(snapshots)
        return len(snapshots)

    async def get_latest_meta(self, user_id):
        rows = [s for s in self._uow.work.snapshots if s.user_id == user_id]
        if not rows:
            return None
        latest = max(s.as_of_day for s in rows)
        day_rows = [s for s in rows if s.as_of_day == latest]
        return SnapshotMeta(
            user_id=user_id,
            as_of_day=latest,
            captured_at=max(s.captured_at for s in day_rows),
            fund_count=len(day_rows),
            total_market_value=sum((s.market_value for s in day_rows), Decimal("0")),
        )


class FakeUnitOfWork(UnitOfWork):
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.work = _State()
        self.committed = False

    async def begin(self):
        self.work = self.store.state.copy()
        self.positions = _FakePositions(self)
        self.profiles = _FakeProfiles(self)
        self.snapshots = _FakeSnapshots(self)

    async def commit(self):
        if self.store.before_commit is not None:
            hook, self.store.before_commit = self.store.before_commit, None
            hook(self)
        if self.store.fail_next_commit:
            self.store.fail_next_commit = False
            raise PersistenceError("simulated commit failure")
        seen: set[tuple[int, str, date]] = set()
        for s in self.work.snapshots:
            key = (s.user_id, s.fund_code, s.as_of_day)
            if key in seen:
                raise SnapshotConflictError(s.user_id, s.as_of_day)
            seen.add(key)
        self.store.state = self.work
        self.store.commits += 1
        self.committed = True

    async def rollback(self):
        self.work = _State()

    async def close(self):
        pass

    async def lock_user_day(self, user_id, as_of_day):
        self.store.locks.append((user_id, as_of_day))


# Tuesday 2025-06-10 23:00 UTC, after the close: as-of day is the same Tuesday.
AFTER_CLOSE = datetime(2025, 6, 10, 23, 0, tzinfo=timezone.utc)


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    return lambda: AFTER_CLOSE
