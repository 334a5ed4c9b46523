"""
Fixed-offset time helpers.

All "today" arithmetic uses a fixed offset from UTC (Beijing time, UTC+8, by
default). Shifted values are returned as naive wall-clock datetimes so the
host's local timezone never takes part in the comparison.
"""

import logging
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

logger = logging.getLogger(__name__)

BEIJING_OFFSET_HOURS = 8

# zh-CN locale rendering of a date and time with 2-digit fields
REPORT_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # Naive datetimes are taken as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def shift_to_offset(dt: datetime, offset_hours: int = BEIJING_OFFSET_HOURS) -> datetime:
    """Convert an instant to naive wall-clock time at a fixed UTC offset.

    Args:
        dt: Instant to convert (naive values are treated as UTC)
        offset_hours: Hours east of UTC

    Returns:
        Naive datetime holding the wall-clock time at that offset
    """
    return (_as_utc(dt) + timedelta(hours=offset_hours)).replace(tzinfo=None)


def beijing_now(now: Optional[datetime] = None, offset_hours: int = BEIJING_OFFSET_HOURS) -> datetime:
    """Get the current wall-clock time at the fixed offset."""
    return shift_to_offset(now if now is not None else utc_now(), offset_hours)


def start_of_day(shifted: datetime) -> datetime:
    """Midnight of the day containing a shifted wall-clock time."""
    return shifted.replace(hour=0, minute=0, second=0, microsecond=0)


def _parse_timestamp_string(value: str) -> Optional[datetime]:
    value = value.strip()
    try:
        # Accept 'Z' by replacing with +00:00
        return _as_utc(datetime.fromisoformat(value.replace('Z', '+00:00')))
    except ValueError:
        pass
    # RFC 2822 dates, e.g. "Wed, 15 Jan 2025 01:00:00 GMT"
    try:
        return _as_utc(parsedate_to_datetime(value))
    except (TypeError, ValueError, IndexError):
        return None


def parse_recorded_at(value: Any) -> Optional[datetime]:
    """Parse a log timestamp into an aware UTC datetime.

    Accepts ISO 8601 strings (a trailing 'Z' is allowed, a missing offset means
    UTC), RFC 2822 date strings and numeric epoch milliseconds.

    Args:
        value: Raw ``recorded_at`` value from the log record

    Returns:
        UTC datetime, or None if the value cannot be parsed
    """
    parsed = None
    if isinstance(value, str):
        parsed = _parse_timestamp_string(value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            parsed = None

    if parsed is None and value is not None:
        logger.debug("Unparseable recorded_at value: %r", value)
    return parsed


def format_report_time(shifted: datetime) -> str:
    """Format a shifted wall-clock time for display in the report."""
    return shifted.strftime(REPORT_TIME_FORMAT)
