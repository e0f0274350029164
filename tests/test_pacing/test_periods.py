"""Period resolution: week/month boundaries, day counts, weekday/weekend split."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from pennypace.pacing import InvalidInputError, PeriodKind, resolve_period
from pennypace.pacing.periods import is_weekend_day

UTC = timezone.utc


# --- Weekly ---

def test_weekly_starts_on_sunday_midnight():
    now = datetime(2026, 10, 21, 15, 30, tzinfo=UTC)  # Wednesday

    period = resolve_period(now, PeriodKind.weekly)

    assert period.start == datetime(2026, 10, 18, tzinfo=UTC)
    assert period.end == datetime(2026, 10, 25, tzinfo=UTC)
    assert period.days_total == 7
    assert period.days_elapsed == 4
    assert period.days_remaining == 3


def test_weekly_on_sunday_boundary_belongs_to_new_week():
    now = datetime(2026, 10, 18, 0, 0, tzinfo=UTC)

    period = resolve_period(now, "weekly")

    assert period.start == now
    assert period.days_elapsed == 1
    assert period.contains(now)
    assert not period.contains(period.end)


def test_weekly_last_moment_of_saturday():
    now = datetime(2026, 10, 24, 23, 59, 59, tzinfo=UTC)

    period = resolve_period(now, PeriodKind.weekly)

    assert period.start == datetime(2026, 10, 18, tzinfo=UTC)
    assert period.days_elapsed == 7
    assert period.days_remaining == 0


def test_weekly_day_split():
    period = resolve_period(datetime(2026, 10, 20, 9, tzinfo=UTC), PeriodKind.weekly)  # Tuesday

    assert period.weekday_days_total == 5
    assert period.weekend_days_total == 2
    # Sunday (weekend) and Monday, Tuesday (weekdays) have elapsed
    assert period.day_split.weekend_days_elapsed == 1
    assert period.day_split.weekday_days_elapsed == 2
    assert period.weekday_days_remaining == 3
    assert period.weekend_days_remaining == 1


def test_weekly_total_is_seven_for_every_day_of_year():
    day = datetime(2026, 1, 1, 12, tzinfo=UTC)
    for _ in range(365):
        period = resolve_period(day, PeriodKind.weekly)
        assert period.days_total == 7
        assert period.start.weekday() == 6  # Sunday
        day += timedelta(days=1)


# --- Monthly ---

def test_monthly_boundaries_and_counts():
    now = datetime(2026, 10, 19, 10, 0, tzinfo=UTC)

    period = resolve_period(now, PeriodKind.monthly)

    assert period.start == datetime(2026, 10, 1, tzinfo=UTC)
    assert period.end == datetime(2026, 11, 1, tzinfo=UTC)
    assert period.days_total == 31
    assert period.days_elapsed == 19
    assert period.days_remaining == 12


def test_monthly_day_split_october_2026():
    period = resolve_period(datetime(2026, 10, 19, 10, tzinfo=UTC), PeriodKind.monthly)

    assert period.weekday_days_total == 22
    assert period.weekend_days_total == 9
    assert period.day_split.weekend_days_elapsed == 6
    assert period.day_split.weekday_days_elapsed == 13
    assert period.weekend_days_remaining == 3
    assert period.weekday_days_remaining == 9


def test_monthly_december_rolls_into_next_year():
    period = resolve_period(datetime(2026, 12, 31, 23, tzinfo=UTC), PeriodKind.monthly)

    assert period.end == datetime(2027, 1, 1, tzinfo=UTC)
    assert period.days_elapsed == 31
    assert period.days_remaining == 0


@pytest.mark.parametrize(
    "year, month, expected",
    [(2026, 2, 28), (2028, 2, 29), (2026, 4, 30), (2026, 9, 30), (2026, 12, 31)],
)
def test_monthly_days_total(year, month, expected):
    period = resolve_period(datetime(year, month, 1, tzinfo=UTC), PeriodKind.monthly)
    assert period.days_total == expected


def test_monthly_first_instant_of_month():
    now = datetime(2026, 11, 1, tzinfo=UTC)

    period = resolve_period(now, PeriodKind.monthly)

    assert period.start == now
    assert period.days_elapsed == 1


def test_day_partition_sums_to_total_for_every_month():
    for year in range(2024, 2031):
        for month in range(1, 13):
            period = resolve_period(datetime(year, month, 15, tzinfo=UTC), PeriodKind.monthly)
            assert period.weekday_days_total + period.weekend_days_total == period.days_total
            split = period.day_split
            assert split.weekday_days_elapsed + split.weekend_days_elapsed == period.days_elapsed


@pytest.mark.parametrize("kind", list(PeriodKind))
def test_elapsed_plus_remaining_is_total(kind):
    day = datetime(2026, 1, 1, 18, tzinfo=UTC)
    for _ in range(365):
        period = resolve_period(day, kind)
        assert 1 <= period.days_elapsed <= period.days_total
        assert period.days_elapsed + period.days_remaining == period.days_total
        day += timedelta(days=1)


# --- Timezones & classification ---

def test_boundaries_follow_tzinfo_of_now():
    tz = ZoneInfo("America/New_York")
    now = datetime(2026, 11, 1, 0, 30, tzinfo=tz)  # Sunday, DST ends later today

    period = resolve_period(now, PeriodKind.weekly)

    assert period.start == datetime(2026, 11, 1, tzinfo=tz)
    assert period.end == datetime(2026, 11, 8, tzinfo=tz)
    assert period.days_elapsed == 1


def test_is_weekend_uses_period_timezone():
    tz = ZoneInfo("America/Los_Angeles")
    period = resolve_period(datetime(2026, 10, 19, 12, tzinfo=tz), PeriodKind.monthly)

    # Saturday 02:00 UTC is still Friday evening in Los Angeles
    assert not period.is_weekend(datetime(2026, 10, 24, 2, 0, tzinfo=UTC))
    assert period.is_weekend(datetime(2026, 10, 24, 12, 0, tzinfo=UTC))


def test_naive_now_gives_naive_boundaries():
    period = resolve_period(datetime(2026, 10, 19, 8), PeriodKind.weekly)

    assert period.start == datetime(2026, 10, 18)
    assert period.start.tzinfo is None


def test_is_weekend_day():
    assert is_weekend_day(date(2026, 10, 24))
    assert is_weekend_day(date(2026, 10, 25))
    assert not is_weekend_day(date(2026, 10, 23))


def test_is_today_weekend():
    assert resolve_period(datetime(2026, 10, 25, 9, tzinfo=UTC), "monthly").is_today_weekend
    assert not resolve_period(datetime(2026, 10, 26, 9, tzinfo=UTC), "monthly").is_today_weekend


# --- Invalid input ---

def test_unknown_kind_rejected():
    with pytest.raises(InvalidInputError):
        resolve_period(datetime(2026, 10, 19, tzinfo=UTC), "yearly")


def test_non_datetime_now_rejected():
    with pytest.raises(InvalidInputError):
        resolve_period(date(2026, 10, 19), PeriodKind.weekly)
