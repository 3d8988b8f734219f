# reviewpulse/modules/analytics/services/gap_filler.py

from typing import List

from ..schemas.analytics_schemas import TrendBucket
from .bucketing import bucket_key, bucket_start, display_label, next_bucket
from .trend_aggregator import PartialTrend


def fill_gaps(partial: PartialTrend) -> List[TrendBucket]:
    """
    Expand a partial trend into a dense, chronological series.

    Every bucket touched by the window appears exactly once; buckets
    without records are emitted with zero values so charts never see
    missing intervals.
    """
    window = partial.window
    granularity = window.granularity

    series: List[TrendBucket] = []
    current = bucket_start(window.start, granularity)
    last = bucket_start(window.end, granularity)

    while current <= last:
        key = bucket_key(current, granularity)
        label = display_label(current, window.period)
        accumulator = partial.buckets.get(key)

        if accumulator is None:
            series.append(
                TrendBucket(bucket_key=key, display_label=label, bucket_start=current)
            )
        else:
            series.append(
                TrendBucket(
                    bucket_key=key,
                    display_label=label,
                    bucket_start=current,
                    total_count=accumulator.total_count,
                    replied_count=accumulator.replied_count,
                    reply_rate_percent=accumulator.reply_rate_percent,
                    avg_response_hours=accumulator.avg_response_hours,
                )
            )

        current = next_bucket(current, granularity)

    return series
