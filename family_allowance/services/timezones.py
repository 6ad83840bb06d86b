"""
Time zone resolution and conversion.

Orders store an IANA zone id ("Europe/London", "America/New_York").
A zone id that cannot be resolved is not fatal: the order is
evaluated in UTC and a warning is logged so the bad value can
be fixed.
"""

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from family_allowance.logging_config import get_logger

logger = get_logger(__name__)


def resolve_time_zone(zone_id: str | None) -> tzinfo:
    """Return the zone for `zone_id`, or UTC if it cannot be resolved."""
    if not zone_id:
        logger.warning("Missing time zone id, falling back to UTC")
        return timezone.utc

    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
        logger.warning(
            "Invalid time zone '%s', falling back to UTC: %s", zone_id, e
        )
        return timezone.utc


def to_local(utc: datetime, zone: tzinfo) -> datetime:
    """Convert a naive UTC datetime to naive local time in `zone`."""
    return (
        utc.replace(tzinfo=timezone.utc)
        .astimezone(zone)
        .replace(tzinfo=None)
    )


def to_utc(local: datetime, zone: tzinfo) -> datetime:
    """Convert a naive local time in `zone` to a naive UTC datetime."""
    return (
        local.replace(tzinfo=zone)
        .astimezone(timezone.utc)
        .replace(tzinfo=None)
    )
