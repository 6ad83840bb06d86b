"""
Tests for the recurrence calculator.

Reference point for most tests is Thursday 15 October 2026.
"""

from datetime import datetime, time, timedelta

import pytest
from hypothesis import given, strategies as st

from family_allowance.models.enums import AllowanceInterval, Weekday
from family_allowance.services.recurrence import compute_next


THURSDAY_10AM = datetime(2026, 10, 15, 10, 0)


def next_for(interval, from_local, day_of_week=Weekday.MONDAY,
             day_of_month=1, month_of_year=1, time_of_day=time(9, 0)):
    return compute_next(
        interval, day_of_week, day_of_month, month_of_year,
        time_of_day, from_local,
    )


# --- Hourly ---

class TestHourly:

    def test_advances_to_next_hour(self):
        result = next_for(
            AllowanceInterval.HOURLY, datetime(2026, 10, 15, 10, 37, 12)
        )
        assert result == datetime(2026, 10, 15, 11, 0)

    def test_round_hour_still_advances(self):
        result = next_for(AllowanceInterval.HOURLY, THURSDAY_10AM)
        assert result == datetime(2026, 10, 15, 11, 0)

    def test_rolls_over_midnight(self):
        result = next_for(
            AllowanceInterval.HOURLY, datetime(2026, 12, 31, 23, 30)
        )
        assert result == datetime(2027, 1, 1, 0, 0)


# --- Daily ---

class TestDaily:

    def test_later_today(self):
        result = next_for(
            AllowanceInterval.DAILY, THURSDAY_10AM, time_of_day=time(14, 0)
        )
        assert result == datetime(2026, 10, 15, 14, 0)

    def test_time_passed_goes_to_tomorrow(self):
        result = next_for(
            AllowanceInterval.DAILY, THURSDAY_10AM, time_of_day=time(9, 0)
        )
        assert result == datetime(2026, 10, 16, 9, 0)

    def test_exact_time_goes_to_tomorrow(self):
        result = next_for(
            AllowanceInterval.DAILY, THURSDAY_10AM, time_of_day=time(10, 0)
        )
        assert result == datetime(2026, 10, 16, 10, 0)


# --- Weekly ---

class TestWeekly:

    def test_same_day_before_time(self):
        result = next_for(
            AllowanceInterval.WEEKLY, THURSDAY_10AM,
            day_of_week=Weekday.THURSDAY, time_of_day=time(14, 0),
        )
        assert result == datetime(2026, 10, 15, 14, 0)

    def test_same_day_after_time(self):
        result = next_for(
            AllowanceInterval.WEEKLY, THURSDAY_10AM,
            day_of_week=Weekday.THURSDAY, time_of_day=time(9, 0),
        )
        assert result == datetime(2026, 10, 22, 9, 0)

    def test_same_day_exact_time(self):
        result = next_for(
            AllowanceInterval.WEEKLY, THURSDAY_10AM,
            day_of_week=Weekday.THURSDAY, time_of_day=time(10, 0),
        )
        assert result == datetime(2026, 10, 22, 10, 0)

    def test_future_day(self):
        result = next_for(
            AllowanceInterval.WEEKLY, THURSDAY_10AM,
            day_of_week=Weekday.SATURDAY, time_of_day=time(9, 0),
        )
        assert result == datetime(2026, 10, 17, 9, 0)

    def test_earlier_weekday_wraps_to_next_week(self):
        result = next_for(
            AllowanceInterval.WEEKLY, THURSDAY_10AM,
            day_of_week=Weekday.MONDAY, time_of_day=time(18, 30),
        )
        assert result == datetime(2026, 10, 19, 18, 30)


# --- Monthly ---

class TestMonthly:

    def test_later_this_month(self):
        result = next_for(
            AllowanceInterval.MONTHLY, THURSDAY_10AM, day_of_month=20
        )
        assert result == datetime(2026, 10, 20, 9, 0)

    def test_day_passed_goes_to_next_month(self):
        result = next_for(
            AllowanceInterval.MONTHLY, THURSDAY_10AM, day_of_month=1
        )
        assert result == datetime(2026, 11, 1, 9, 0)

    def test_day_30_is_treated_as_28(self):
        result = next_for(
            AllowanceInterval.MONTHLY, THURSDAY_10AM, day_of_month=30
        )
        assert result == datetime(2026, 10, 28, 9, 0)

    def test_day_31_in_february(self):
        result = next_for(
            AllowanceInterval.MONTHLY, datetime(2026, 2, 1),
            day_of_month=31,
        )
        assert result == datetime(2026, 2, 28, 9, 0)

    def test_day_below_one_is_treated_as_first(self):
        result = next_for(
            AllowanceInterval.MONTHLY, THURSDAY_10AM, day_of_month=0
        )
        assert result == datetime(2026, 11, 1, 9, 0)

    def test_december_rolls_into_january(self):
        result = next_for(
            AllowanceInterval.MONTHLY, datetime(2026, 12, 29, 8, 0),
            day_of_month=28,
        )
        assert result == datetime(2027, 1, 28, 9, 0)


# --- Yearly ---

class TestYearly:

    def test_later_this_year(self):
        result = next_for(
            AllowanceInterval.YEARLY, THURSDAY_10AM,
            day_of_month=24, month_of_year=12,
        )
        assert result == datetime(2026, 12, 24, 9, 0)

    def test_date_passed_goes_to_next_year(self):
        result = next_for(
            AllowanceInterval.YEARLY, THURSDAY_10AM,
            day_of_month=3, month_of_year=5,
        )
        assert result == datetime(2027, 5, 3, 9, 0)

    def test_month_and_day_are_clamped(self):
        result = next_for(
            AllowanceInterval.YEARLY, THURSDAY_10AM,
            day_of_month=31, month_of_year=13,
        )
        assert result == datetime(2026, 12, 28, 9, 0)


# --- Errors ---

class TestInvalidInterval:

    def test_unknown_interval_raises(self):
        with pytest.raises(ValueError, match="Unsupported allowance interval"):
            next_for("FORTNIGHTLY", THURSDAY_10AM)

    def test_interval_value_string_is_accepted(self):
        assert next_for("DAILY", THURSDAY_10AM) == datetime(2026, 10, 16, 9, 0)


# --- Properties ---

from_datetimes = st.datetimes(
    min_value=datetime(2000, 1, 1), max_value=datetime(2099, 12, 31)
)
minute_times = st.times().map(lambda t: t.replace(second=0, microsecond=0))


@given(
    interval=st.sampled_from(list(AllowanceInterval)),
    day_of_week=st.integers(min_value=0, max_value=6),
    day_of_month=st.integers(min_value=-3, max_value=40),
    month_of_year=st.integers(min_value=-1, max_value=14),
    time_of_day=minute_times,
    from_local=from_datetimes,
)
def test_next_is_always_strictly_after_reference(
    interval, day_of_week, day_of_month, month_of_year, time_of_day, from_local
):
    result = compute_next(
        interval, day_of_week, day_of_month, month_of_year,
        time_of_day, from_local,
    )
    assert result > from_local


@given(from_local=from_datetimes)
def test_hourly_lands_on_next_hour_boundary(from_local):
    result = next_for(AllowanceInterval.HOURLY, from_local)
    assert result.minute == 0
    assert result.second == 0
    assert result.microsecond == 0
    assert timedelta(0) < result - from_local <= timedelta(hours=1)


@given(
    day_of_week=st.integers(min_value=0, max_value=6),
    time_of_day=minute_times,
    from_local=from_datetimes,
)
def test_weekly_lands_on_target_day_within_a_week(
    day_of_week, time_of_day, from_local
):
    result = next_for(
        AllowanceInterval.WEEKLY, from_local,
        day_of_week=day_of_week, time_of_day=time_of_day,
    )
    assert result.weekday() == day_of_week
    assert result.time() == time_of_day
    assert result - from_local <= timedelta(days=7)


@given(
    day_of_month=st.integers(min_value=1, max_value=31),
    time_of_day=minute_times,
    from_local=from_datetimes,
)
def test_monthly_uses_clamped_day(day_of_month, time_of_day, from_local):
    result = next_for(
        AllowanceInterval.MONTHLY, from_local,
        day_of_month=day_of_month, time_of_day=time_of_day,
    )
    assert result.day == min(day_of_month, 28)
    assert result.time() == time_of_day


@given(
    interval=st.sampled_from(list(AllowanceInterval)),
    time_of_day=minute_times,
    from_local=from_datetimes,
)
def test_result_is_a_fixed_point(interval, time_of_day, from_local):
    """Re-deriving from just before an occurrence gives it back."""
    result = next_for(interval, from_local, time_of_day=time_of_day)
    again = next_for(
        interval, result - timedelta(minutes=1), time_of_day=time_of_day
    )
    assert again == result
