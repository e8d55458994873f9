"""Profile aggregate repository interface.

One row per user, so this interface does not extend UserScopedRepository.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from src.domain.models.funds import ProfileAggregate


class ProfileRepository(ABC):
    """Read/write interface for ProfileAggregate rows."""

    @abstractmethod
    async def get(self, user_id: int) -> ProfileAggregate | None:
        """Return the user's profile row, or None."""

    @abstractmethod
    async def update_total_balance(
        self, user_id: int, total_balance: Decimal, updated_at: datetime
    ) -> bool:
        """Rewrite the denormalized total.  Returns False when no row exists."""
