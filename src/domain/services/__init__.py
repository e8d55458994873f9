"""Domain services package."""

from .backfill import BackfillService
from .fund_codes import normalize_fund_code
from .pricing import PriceSource, StaticPriceSource
from .snapshot_capture import SnapshotCaptureService
from .trading_calendar import resolve_as_of
from .valuation import ValuationService, resolve_positions

__all__ = [
    "BackfillService",
    "PriceSource",
    "SnapshotCaptureService",
    "StaticPriceSource",
    "ValuationService",
    "normalize_fund_code",
    "resolve_as_of",
    "resolve_positions",
]
