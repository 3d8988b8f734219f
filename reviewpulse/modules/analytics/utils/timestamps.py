# reviewpulse/modules/analytics/utils/timestamps.py

"""
Timestamp helpers.

All analytics arithmetic runs on naive datetimes expressed in UTC. Review
providers deliver ISO-8601 strings with assorted offsets, so everything is
normalized here before it reaches the bucketing code.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser


def utc_now() -> datetime:
    """Current time as a naive UTC datetime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored timestamp into a naive UTC datetime.

    Returns None for missing or unparsable values instead of raising, so a
    single malformed record never aborts an aggregation.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        try:
            return to_naive_utc(value)
        except OverflowError:
            return None

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return to_naive_utc(date_parser.isoparse(value.strip()))
    except (ValueError, OverflowError):
        # Offsets at the edge of the datetime range overflow during UTC conversion
        return None
