"""
Clock abstraction.

Scheduling logic never reads the system clock directly.
Services receive a clock and ask it for the current time,
which lets tests pin "now" to an exact instant.

All times are naive UTC datetimes, matching how the
database columns store them.
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SystemClock:
    """Clock backed by the real system time."""

    def utc_now(self) -> datetime:
        return utc_now()


class FixedClock:
    """
    Clock that always returns the same instant until told otherwise.

    Useful for tests and for replaying a processing pass at a
    specific point in time.
    """

    def __init__(self, now: datetime):
        self.now = now

    def utc_now(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> datetime:
        self.now = self.now + delta
        return self.now
