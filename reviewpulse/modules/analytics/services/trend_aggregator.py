# reviewpulse/modules/analytics/services/trend_aggregator.py

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, Optional

from ..schemas.analytics_schemas import ReviewRecord
from ..utils.rounding import percentage, round_one_decimal
from .bucketing import bucket_key, bucket_start
from .period_resolver import PeriodWindow
from .tenant_match import TenantMatch

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


@dataclass
class BucketAccumulator:
    """Running totals for a single bucket"""

    bucket_start: date
    total_count: int = 0
    replied_count: int = 0
    sum_response_hours: float = 0.0
    replied_sample_count: int = 0

    def add(self, record: ReviewRecord, created: datetime) -> None:
        self.total_count += 1
        if not record.has_reply:
            return

        self.replied_count += 1
        # A reply without a usable timestamp still counts, at zero latency
        replied = record.replied or created
        hours = (replied - created).total_seconds() / SECONDS_PER_HOUR
        self.sum_response_hours += max(hours, 0.0)
        self.replied_sample_count += 1

    @property
    def reply_rate_percent(self) -> float:
        return percentage(self.replied_count, self.total_count)

    @property
    def avg_response_hours(self) -> float:
        if self.replied_sample_count == 0:
            return 0.0
        return round_one_decimal(self.sum_response_hours / self.replied_sample_count)


@dataclass
class PartialTrend:
    """Buckets that received at least one record, keyed by bucket key"""

    window: PeriodWindow
    buckets: Dict[str, BucketAccumulator] = field(default_factory=dict)
    record_count: int = 0
    skipped_count: int = 0


def aggregate_trend(
    records: Iterable[ReviewRecord],
    window: PeriodWindow,
    tenant: Optional[TenantMatch] = None,
) -> PartialTrend:
    """
    Group records into the buckets of ``window``.

    Records of another tenant, records created outside the window and
    records whose creation time cannot be parsed are skipped.
    """
    partial = PartialTrend(window=window)

    for record in records:
        if tenant is not None and not tenant.matches_record(record):
            partial.skipped_count += 1
            continue

        created = record.created
        if not window.contains(created):
            partial.skipped_count += 1
            continue

        key = bucket_key(created, window.granularity)
        accumulator = partial.buckets.get(key)
        if accumulator is None:
            accumulator = BucketAccumulator(
                bucket_start=bucket_start(created, window.granularity)
            )
            partial.buckets[key] = accumulator

        accumulator.add(record, created)
        partial.record_count += 1

    if partial.skipped_count:
        logger.debug(
            f"Skipped {partial.skipped_count} records outside the "
            f"{window.period.value} window or with unreadable timestamps"
        )

    return partial
