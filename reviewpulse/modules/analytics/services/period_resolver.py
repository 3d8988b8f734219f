# reviewpulse/modules/analytics/services/period_resolver.py

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, Optional, Union

from reviewpulse.core.exceptions import InvalidPeriodError

logger = logging.getLogger(__name__)


class PeriodToken(str, Enum):
    """Trend periods offered by the dashboard"""
    SEVEN_DAYS = "7d"
    THIRTY_DAYS = "30d"
    THREE_MONTHS = "3m"
    TWELVE_MONTHS = "12m"


class Granularity(str, Enum):
    """Bucket size of a trend series"""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


PERIOD_DURATIONS = {
    PeriodToken.SEVEN_DAYS: timedelta(days=7),
    PeriodToken.THIRTY_DAYS: timedelta(days=30),
    PeriodToken.THREE_MONTHS: timedelta(days=90),
    PeriodToken.TWELVE_MONTHS: timedelta(days=365),
}

PERIOD_GRANULARITY = {
    PeriodToken.SEVEN_DAYS: Granularity.DAY,
    PeriodToken.THIRTY_DAYS: Granularity.DAY,
    PeriodToken.THREE_MONTHS: Granularity.WEEK,
    PeriodToken.TWELVE_MONTHS: Granularity.MONTH,
}

REVIEW_TREND_PERIODS = (
    PeriodToken.SEVEN_DAYS,
    PeriodToken.THIRTY_DAYS,
    PeriodToken.THREE_MONTHS,
    PeriodToken.TWELVE_MONTHS,
)

# Response-time trends are not offered at yearly resolution
RESPONSE_TREND_PERIODS = (
    PeriodToken.SEVEN_DAYS,
    PeriodToken.THIRTY_DAYS,
    PeriodToken.THREE_MONTHS,
)

DEFAULT_PERIOD = PeriodToken.THIRTY_DAYS


@dataclass(frozen=True)
class PeriodWindow:
    """Closed time window ``[start, end]`` and the bucket size used to chart it"""

    period: PeriodToken
    start: datetime
    end: datetime
    granularity: Granularity

    def contains(self, moment: Optional[datetime]) -> bool:
        return moment is not None and self.start <= moment <= self.end


def resolve_period(
    period: Union[PeriodToken, str, None],
    now: datetime,
    supported: Iterable[PeriodToken] = REVIEW_TREND_PERIODS,
    default: Union[PeriodToken, str] = DEFAULT_PERIOD,
) -> PeriodWindow:
    """
    Map a period token onto its time window and granularity.

    Args:
        period: Period token; ``None`` or blank falls back to ``default``
        now: End of the window (naive UTC)
        supported: Tokens the calling operation accepts
        default: Token used when ``period`` is absent

    Raises:
        InvalidPeriodError: Token is not one of ``supported``
    """
    supported = tuple(supported)
    supported_values = [token.value for token in supported]

    if period is None or (isinstance(period, str) and not period.strip()):
        period = default

    raw = period.value if isinstance(period, PeriodToken) else str(period).strip()
    try:
        token = PeriodToken(raw)
    except ValueError:
        raise InvalidPeriodError(raw, supported_values)

    if token not in supported:
        raise InvalidPeriodError(raw, supported_values)

    start = now - PERIOD_DURATIONS[token]
    window = PeriodWindow(
        period=token,
        start=start,
        end=now,
        granularity=PERIOD_GRANULARITY[token],
    )
    logger.debug(
        f"Resolved period {token.value} to {window.start.isoformat()} .. "
        f"{window.end.isoformat()} ({window.granularity.value})"
    )
    return window
