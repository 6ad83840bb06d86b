"""
Recurrence calculator — when does a scheduled order fire next?

compute_next() is a pure function. It takes every schedule
parameter explicitly plus a reference time and returns the
next occurrence strictly after that reference. It never looks
at the wall clock and never touches the database.

Both the reference and the result are naive *local* times.
Converting to and from the order's time zone is the caller's
job; next_run_utc() does that for a ScheduledOrder.

Rules:
- HOURLY:  top of the next hour, always at least one boundary ahead
- DAILY:   today at time_of_day if still ahead, else tomorrow
- WEEKLY:  the next target weekday at time_of_day (today counts
           only if the time is still ahead)
- MONTHLY: day_of_month (clamped to 1..28) of this month if still
           ahead, else of next month
- YEARLY:  month_of_year/day_of_month of this year if still ahead,
           else of next year

Clamping the day to 28 means every month has the day, so rolling
forward never has to deal with short months.
"""

from datetime import datetime, time, timedelta, tzinfo

from dateutil.relativedelta import relativedelta

from family_allowance.models.enums import AllowanceInterval
from family_allowance.services.timezones import to_local, to_utc


MAX_DAY_OF_MONTH = 28


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _at(day: datetime, time_of_day: time) -> datetime:
    """The calendar date of `day` at hour:minute of `time_of_day`."""
    return datetime(
        day.year, day.month, day.day,
        time_of_day.hour, time_of_day.minute,
    )


def next_hourly(from_local: datetime) -> datetime:
    next_hour = from_local + timedelta(hours=1)
    return next_hour.replace(minute=0, second=0, microsecond=0)


def next_daily(time_of_day: time, from_local: datetime) -> datetime:
    today_at_time = _at(from_local, time_of_day)
    if from_local < today_at_time:
        return today_at_time
    return today_at_time + timedelta(days=1)


def next_weekly(
    day_of_week: int, time_of_day: time, from_local: datetime
) -> datetime:
    days_until_target = (int(day_of_week) - from_local.weekday() + 7) % 7

    if days_until_target == 0:
        today_at_time = _at(from_local, time_of_day)
        if from_local < today_at_time:
            return today_at_time
        days_until_target = 7

    return _at(from_local + timedelta(days=days_until_target), time_of_day)


def next_monthly(
    day_of_month: int, time_of_day: time, from_local: datetime
) -> datetime:
    day = _clamp(day_of_month, 1, MAX_DAY_OF_MONTH)
    this_month = datetime(
        from_local.year, from_local.month, day,
        time_of_day.hour, time_of_day.minute,
    )
    if from_local < this_month:
        return this_month
    return this_month + relativedelta(months=1)


def next_yearly(
    day_of_month: int,
    month_of_year: int,
    time_of_day: time,
    from_local: datetime,
) -> datetime:
    day = _clamp(day_of_month, 1, MAX_DAY_OF_MONTH)
    month = _clamp(month_of_year, 1, 12)
    this_year = datetime(
        from_local.year, month, day,
        time_of_day.hour, time_of_day.minute,
    )
    if from_local < this_year:
        return this_year
    return this_year + relativedelta(years=1)


def compute_next(
    interval: AllowanceInterval,
    day_of_week: int,
    day_of_month: int,
    month_of_year: int,
    time_of_day: time,
    from_local: datetime,
) -> datetime:
    """
    Return the next occurrence strictly after from_local.

    Raises ValueError for an interval that is not one of the
    five supported kinds. There is no fallback interval: a bad
    value means corrupted data or a programming error.
    """
    try:
        interval = AllowanceInterval(interval)
    except ValueError:
        raise ValueError(
            f"Unsupported allowance interval: {interval!r}"
        ) from None

    if interval == AllowanceInterval.HOURLY:
        return next_hourly(from_local)
    if interval == AllowanceInterval.DAILY:
        return next_daily(time_of_day, from_local)
    if interval == AllowanceInterval.WEEKLY:
        return next_weekly(day_of_week, time_of_day, from_local)
    if interval == AllowanceInterval.MONTHLY:
        return next_monthly(day_of_month, time_of_day, from_local)
    if interval == AllowanceInterval.YEARLY:
        return next_yearly(
            day_of_month, month_of_year, time_of_day, from_local
        )
    raise ValueError(f"Unsupported allowance interval: {interval!r}")


def next_run_utc(order, zone: tzinfo, after_utc: datetime) -> datetime:
    """
    Next occurrence of `order` strictly after `after_utc`, in UTC.

    The order's day and time fields are evaluated in `zone`.
    A local time repeated by a DST fall-back resolves to its
    earlier instant unless that is not after `after_utc`, in
    which case the later (standard time) instant is used.
    """
    next_local = compute_next(
        order.interval,
        order.day_of_week,
        order.day_of_month,
        order.month_of_year,
        order.time_of_day,
        to_local(after_utc, zone),
    )
    next_utc = to_utc(next_local, zone)
    if next_utc <= after_utc:
        next_utc = to_utc(next_local.replace(fold=1), zone)
    return next_utc
