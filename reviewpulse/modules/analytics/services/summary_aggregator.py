# reviewpulse/modules/analytics/services/summary_aggregator.py

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from ..schemas.analytics_schemas import (
    RatingCount, ReviewRecord, RosterEntry, SummaryStats
)
from ..utils.rounding import percentage, round_one_decimal
from .tenant_match import normalize_tenant_id

logger = logging.getLogger(__name__)

RATING_VALUES = (1, 2, 3, 4, 5)


def summarize(records: Iterable[ReviewRecord]) -> SummaryStats:
    """Reduce records to lifetime totals; timestamps are not consulted"""
    total = 0
    replied = 0
    rating_sum = 0
    histogram: Counter = Counter()

    for record in records:
        total += 1
        if record.has_reply:
            replied += 1
        rating = record.rating_value
        rating_sum += rating
        histogram[rating] += 1

    return SummaryStats(
        total_reviews=total,
        pending_count=total - replied,
        replied_count=replied,
        average_rating=round_one_decimal(rating_sum / total) if total else 0.0,
        response_rate_percent=percentage(replied, total),
        rating_distribution=[
            RatingCount(rating=rating, count=histogram[rating]) for rating in RATING_VALUES
        ],
    )


def summarize_roster(
    records: Iterable[ReviewRecord],
    unknown_tenant_name: str = "Unknown Profile",
    sort_by_name: bool = True,
) -> List[RosterEntry]:
    """Per-tenant summaries grouped by (tenant id, tenant name)"""
    groups: Dict[Tuple[str, Optional[str]], List[ReviewRecord]] = {}
    for record in records:
        key = (normalize_tenant_id(record.tenant_id), record.tenant_name or None)
        groups.setdefault(key, []).append(record)

    roster = []
    for (tenant_id, tenant_name), group in groups.items():
        created = [moment for moment in (r.created for r in group) if moment is not None]
        roster.append(
            RosterEntry(
                tenant_id=tenant_id,
                tenant_name=tenant_name or unknown_tenant_name,
                stats=summarize(group),
                last_review_date=max(created) if created else None,
            )
        )

    if sort_by_name:
        roster.sort(key=lambda entry: (entry.tenant_name.lower(), entry.tenant_id))
    else:
        roster.sort(key=lambda entry: (entry.tenant_id, entry.tenant_name.lower()))

    logger.debug(f"Built roster of {len(roster)} tenants")
    return roster
