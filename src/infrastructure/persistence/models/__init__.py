"""ORM model registry: imports all layer modules so every mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.positions import (
    FundPosition,
    RetirementProfile,
)
from src.infrastructure.persistence.models.prices import FundPrice
from src.infrastructure.persistence.models.snapshots import FundSnapshot

__all__ = [
    # Positions
    "FundPosition",
    "RetirementProfile",
    # Snapshots
    "FundSnapshot",
    # Prices
    "FundPrice",
]
