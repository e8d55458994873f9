"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in src/infrastructure/persistence/ and are
bound to a session by the SQL unit of work.

Import from this package rather than individual modules to avoid coupling
services to specific repository module paths.
"""

from .base import UserScopedRepository
from .positions import FundPositionRepository
from .prices import FundPriceRepository
from .profiles import ProfileRepository
from .snapshots import SnapshotRepository
from .unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "UserScopedRepository",
    "FundPositionRepository",
    "ProfileRepository",
    "SnapshotRepository",
    "FundPriceRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
