"""Domain exceptions.

Only persistence failures are meant to reach callers.  Price source errors
are absorbed by the valuation service, and snapshot conflicts are folded
into the idempotent no-op path of snapshot capture.
"""

from __future__ import annotations


class RetirementError(Exception):
    """Base exception for retirement valuation errors."""


class PriceSourceError(RetirementError):
    """Raised by a price source when quotes cannot be fetched at all.

    "No data" is not an error; implementations return an empty mapping
    for that case and raise this only for transport-level failures.
    """


class SnapshotConflictError(RetirementError):
    """Raised when a snapshot insert collides with an already captured day."""

    def __init__(self, user_id: int, as_of_day: object) -> None:
        self.user_id = user_id
        self.as_of_day = as_of_day
        super().__init__(f"Snapshot already captured for user {user_id} on {as_of_day}")


class PersistenceError(RetirementError):
    """Raised when a unit of work fails to commit.  The transaction is rolled back."""
