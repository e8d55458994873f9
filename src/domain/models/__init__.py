"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .enums import PositionSource
from .funds import FundPosition, ProfileAggregate
from .snapshots import FundSnapshot, SnapshotMeta
from .valuation import BackfillResult, FundSummaryItem, ValuationSummary

__all__ = [
    # enums
    "PositionSource",
    # funds
    "FundPosition",
    "ProfileAggregate",
    # snapshots
    "FundSnapshot",
    "SnapshotMeta",
    # valuation
    "FundSummaryItem",
    "ValuationSummary",
    "BackfillResult",
]
