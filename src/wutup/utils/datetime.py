"""DateTime utilities for rendering timestamps into SQL text."""

from datetime import datetime
from typing import Optional

import pytz

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def to_time_zone(value: datetime, time_zone: Optional[str] = None) -> datetime:
    """Express a datetime as naive wall-clock time in ``time_zone``.

    Naive datetimes are assumed to already be in the target zone and are
    returned unchanged.

    Args:
        value: Datetime to convert
        time_zone: pytz zone name, UTC when omitted

    Returns:
        Naive datetime
    """
    if value.tzinfo is None:
        return value
    zone = pytz.timezone(time_zone or "UTC")
    return value.astimezone(zone).replace(tzinfo=None)


def format_timestamp(value: datetime, time_zone: Optional[str] = None) -> str:
    """Format a datetime as 'YYYY-MM-DD HH:MM:SS' in the given time zone."""
    return to_time_zone(value, time_zone).strftime(TIMESTAMP_FORMAT)
