"""Trading-day resolution.

Fund prices are published once per business day after the US market close.
resolve_as_of() maps a wall-clock instant to the trading day whose closing
price is authoritative at that instant:

    1. Before the cutoff (22:00 UTC) the latest close is yesterday's.
    2. Weekends roll back to the preceding Friday.

The cutoff is fixed in UTC and approximates the close across both EST and
EDT.  Market holidays are not modelled.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

MARKET_CLOSE_CUTOFF_UTC = time(22, 0)

_SATURDAY = 5


def resolve_as_of(now_utc: datetime, cutoff: time = MARKET_CLOSE_CUTOFF_UTC) -> date:
    """Return the as-of trading day for the given instant.

    Naive datetimes are taken to be UTC.  The result is always a weekday and
    never later than the instant's UTC calendar date.
    """
    if now_utc.tzinfo is None:
        now_utc = now_utc.replace(tzinfo=timezone.utc)
    else:
        now_utc = now_utc.astimezone(timezone.utc)

    candidate = now_utc.date()
    if now_utc.time() < cutoff:
        candidate -= timedelta(days=1)
    while candidate.weekday() >= _SATURDAY:
        candidate -= timedelta(days=1)
    return candidate


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
