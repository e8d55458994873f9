"""Unit tests for as-of trading day resolution.

Calendar reference (June 2025):
    Fri 06  Sat 07  Sun 08  Mon 09  Tue 10
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from src.domain.services.trading_calendar import MARKET_CLOSE_CUTOFF_UTC, resolve_as_of

FRIDAY = date(2025, 6, 6)
MONDAY = date(2025, 6, 9)


def _utc(day: date, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=timezone.utc)


# --- cutoff ---

def test_cutoff_is_2200_utc():
    assert MARKET_CLOSE_CUTOFF_UTC == time(22, 0)


def test_exactly_at_cutoff_resolves_to_same_day():
    assert resolve_as_of(_utc(MONDAY, 22, 0, 0)) == MONDAY


def test_one_second_before_cutoff_resolves_to_previous_trading_day():
    assert resolve_as_of(_utc(date(2025, 6, 10), 21, 59, 59)) == MONDAY


def test_monday_2159_rolls_back_to_friday():
    assert resolve_as_of(_utc(MONDAY, 21, 59)) == FRIDAY


def test_monday_2201_resolves_to_monday():
    assert resolve_as_of(_utc(MONDAY, 22, 1)) == MONDAY


def test_just_after_midnight_monday_resolves_to_friday():
    assert resolve_as_of(_utc(MONDAY, 0, 0, 1)) == FRIDAY


# --- weekends ---

def test_saturday_morning_resolves_to_friday():
    assert resolve_as_of(_utc(date(2025, 6, 7), 10)) == FRIDAY


def test_sunday_late_evening_resolves_to_friday():
    assert resolve_as_of(_utc(date(2025, 6, 8), 23)) == FRIDAY


def test_friday_after_close_resolves_to_friday():
    assert resolve_as_of(_utc(FRIDAY, 22, 30)) == FRIDAY


# --- timezone handling ---

def test_naive_datetime_is_treated_as_utc():
    assert resolve_as_of(datetime(2025, 6, 9, 22, 1)) == MONDAY


def test_aware_non_utc_datetime_is_converted():
    # 18:30 US/Eastern (EDT, UTC-4) is 22:30 UTC.
    eastern = timezone(timedelta(hours=-4))
    assert resolve_as_of(datetime(2025, 6, 9, 18, 30, tzinfo=eastern)) == MONDAY


# --- properties over a two-week sweep ---

def _sweep():
    start = _utc(date(2025, 6, 1), 0)
    return [start + timedelta(minutes=37 * i) for i in range(14 * 24 * 60 // 37)]


def test_result_is_always_a_weekday():
    assert all(resolve_as_of(t).weekday() < 5 for t in _sweep())


def test_result_never_after_calendar_date():
    assert all(resolve_as_of(t) <= t.date() for t in _sweep())


def test_result_is_stable_for_same_instant():
    for t in _sweep()[:50]:
        assert resolve_as_of(t) == resolve_as_of(t)


@pytest.mark.parametrize("hour", [0, 6, 12, 21])
def test_tuesday_before_cutoff_resolves_to_monday(hour):
    assert resolve_as_of(_utc(date(2025, 6, 10), hour)) == MONDAY
