# reviewpulse/modules/analytics/services/bucketing.py

"""
Bucket key function.

A bucket is identified by the date it starts on: the day itself, the
Monday of its ISO-8601 week, or the first of its month. Keys and display
labels are both derived from that start date, so labels never influence
bucket identity or ordering.
"""

from datetime import date, datetime, timedelta
from typing import Tuple, Union

from dateutil.relativedelta import relativedelta

from .period_resolver import Granularity, PeriodToken

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(days=7)
ONE_MONTH = relativedelta(months=1)


def _as_date(moment: Union[date, datetime]) -> date:
    return moment.date() if isinstance(moment, datetime) else moment


def iso_week(day: date) -> Tuple[int, int]:
    """
    ISO-8601 (year, week) of a date.

    The week belongs to the year of its Thursday, so 2021-01-01 is week 53
    of 2020 and 2024-12-30 is week 1 of 2025.
    """
    thursday = day + timedelta(days=4 - day.isoweekday())
    week = (thursday.timetuple().tm_yday - 1) // 7 + 1
    return thursday.year, week


def bucket_start(moment: Union[date, datetime], granularity: Granularity) -> date:
    """First calendar day of the bucket containing ``moment``"""
    day = _as_date(moment)
    if granularity == Granularity.WEEK:
        return day - timedelta(days=day.isoweekday() - 1)
    if granularity == Granularity.MONTH:
        return day.replace(day=1)
    return day


def bucket_key(moment: Union[date, datetime], granularity: Granularity) -> str:
    """Canonical identifier: ``2025-08-03``, ``2025-W31`` or ``2025-08``"""
    day = _as_date(moment)
    if granularity == Granularity.WEEK:
        year, week = iso_week(day)
        return f"{year}-W{week:02d}"
    if granularity == Granularity.MONTH:
        return f"{day.year}-{day.month:02d}"
    return day.isoformat()


def next_bucket(start: date, granularity: Granularity) -> date:
    """Start of the following bucket; months advance the month field"""
    if granularity == Granularity.WEEK:
        return start + ONE_WEEK
    if granularity == Granularity.MONTH:
        return start + ONE_MONTH
    return start + ONE_DAY


def display_label(start: date, period: PeriodToken) -> str:
    """Chart label for a bucket: ``Sun``, ``Aug 3`` or ``Aug 2025``"""
    if period == PeriodToken.SEVEN_DAYS:
        return start.strftime("%a")
    if period == PeriodToken.TWELVE_MONTHS:
        return start.strftime("%b %Y")
    return f"{start.strftime('%b')} {start.day}"
