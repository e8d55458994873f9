"""Generic repository base interface.

UserScopedRepository[T] is the root abstraction for data-access interfaces
whose rows belong to a single user.  Concrete implementations live in
src/infrastructure/persistence/ and are bound to one unit of work.

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / SQLAlchemy async).
  - T is the domain model type (never an ORM row or DTO).
  - Writes are staged on the owning unit of work and become visible only on commit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class UserScopedRepository(ABC, Generic[T]):
    """Abstract read interface shared by per-user repositories."""

    @abstractmethod
    async def list_for_user(self, user_id: int) -> list[T]:
        """Return every row owned by the user, ordered by fund code."""
