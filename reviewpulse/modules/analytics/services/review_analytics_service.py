# reviewpulse/modules/analytics/services/review_analytics_service.py

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, Union

from reviewpulse.core.config import AnalyticsSettings, get_settings
from reviewpulse.core.exceptions import (
    AggregationFailure, AnalyticsCancelled, AnalyticsError
)
from ..schemas.analytics_schemas import (
    DashboardSnapshot, ReviewRecord, RosterEntry, SummaryFilters, SummaryStats, TrendBucket
)
from ..stores.base import ReviewQuery, ReviewRecordStore
from ..utils.timestamps import to_naive_utc, utc_now
from .gap_filler import fill_gaps
from .period_resolver import (
    DEFAULT_PERIOD, PeriodToken, REVIEW_TREND_PERIODS, RESPONSE_TREND_PERIODS, resolve_period
)
from .summary_aggregator import summarize, summarize_roster
from .tenant_match import TenantMatch
from .trend_aggregator import aggregate_trend

logger = logging.getLogger(__name__)


class ReviewAnalyticsService:
    """
    Review trend and summary analytics.

    Stateless apart from its collaborators: every call queries the record
    store and recomputes its result, so concurrent calls never interfere.
    """

    def __init__(
        self,
        store: ReviewRecordStore,
        settings: Optional[AnalyticsSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.clock = clock or utc_now

    async def get_trend(
        self,
        period: Union[PeriodToken, str, None] = None,
        tenant: Any = None,
        supported=REVIEW_TREND_PERIODS,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[TrendBucket]:
        """
        Gap-filled trend series for a period.

        Args:
            period: 7d, 30d, 3m or 12m; defaults to the configured period
            tenant: Tenant id (string or number), display name, or "all"
            supported: Period tokens accepted by the caller
            cancel_event: Abandon the store query once this event is set

        Raises:
            InvalidPeriodError: Unsupported period token
            AggregationFailure: Record store query failed
            AnalyticsCancelled: Cancelled by the caller or timed out
        """
        window = resolve_period(
            period,
            now=to_naive_utc(self.clock()),
            supported=supported,
            default=self._default_period(supported),
        )
        match = TenantMatch.parse(tenant)

        records = await self._fetch(
            ReviewQuery(tenant=match, date_range=(window.start, window.end)),
            operation=f"{window.period.value} trend",
            cancel_event=cancel_event,
        )

        partial = aggregate_trend(records, window, tenant=match)
        series = fill_gaps(partial)

        logger.info(
            f"Computed {window.period.value} trend for tenant={match.text if match else 'all'}: "
            f"{partial.record_count} reviews in {len(series)} buckets"
        )
        return series

    async def get_review_trends(
        self,
        period: Union[PeriodToken, str, None] = None,
        tenant: Any = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[TrendBucket]:
        """Review volume trend; accepts 7d, 30d, 3m and 12m"""
        return await self.get_trend(
            period, tenant, supported=REVIEW_TREND_PERIODS, cancel_event=cancel_event
        )

    async def get_response_trends(
        self,
        period: Union[PeriodToken, str, None] = None,
        tenant: Any = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[TrendBucket]:
        """Reply rate and response time trend; accepts 7d, 30d and 3m"""
        return await self.get_trend(
            period, tenant, supported=RESPONSE_TREND_PERIODS, cancel_event=cancel_event
        )

    async def get_summary(
        self,
        tenant: Any = None,
        filters: Optional[SummaryFilters] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SummaryStats:
        """Lifetime statistics, optionally narrowed to a tenant and filters"""
        filters = filters or SummaryFilters()
        match = TenantMatch.parse(tenant)
        query = ReviewQuery(
            tenant=match,
            status=filters.status.value if filters.status else None,
            rating=filters.rating.value if filters.rating else None,
            search=filters.search,
        )

        records = await self._fetch(query, operation="summary", cancel_event=cancel_event)
        stats = summarize(records)

        logger.info(
            f"Computed summary for tenant={match.text if match else 'all'}: "
            f"{stats.total_reviews} reviews, {stats.pending_count} pending"
        )
        return stats

    async def get_roster(
        self, cancel_event: Optional[asyncio.Event] = None
    ) -> List[RosterEntry]:
        """Per-tenant summaries with each tenant's most recent review date"""
        records = await self._fetch(ReviewQuery(), operation="roster", cancel_event=cancel_event)
        return summarize_roster(
            records,
            unknown_tenant_name=self.settings.unknown_tenant_name,
            sort_by_name=self.settings.roster_sort_by_name,
        )

    async def get_dashboard(
        self,
        tenant: Any = None,
        period: Union[PeriodToken, str, None] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> DashboardSnapshot:
        """Summary, review trend and roster gathered concurrently"""
        now = to_naive_utc(self.clock())
        token = resolve_period(
            period, now=now, default=self.settings.dashboard_trend_period
        ).period

        summary_task = asyncio.ensure_future(self.get_summary(tenant, cancel_event=cancel_event))
        trend_task = asyncio.ensure_future(
            self.get_review_trends(token, tenant, cancel_event=cancel_event)
        )
        roster_task = asyncio.ensure_future(self.get_roster(cancel_event=cancel_event))
        tasks = [summary_task, trend_task, roster_task]

        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        # One failed part fails the snapshot; the sibling queries are abandoned
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        for task in tasks:
            if task in done and not task.cancelled() and task.exception() is not None:
                logger.error(f"Dashboard aborted: {task.exception()}")
                raise task.exception()

        return DashboardSnapshot(
            period=token.value,
            summary=summary_task.result(),
            review_trends=trend_task.result(),
            roster=roster_task.result(),
            last_updated=now,
        )

    def _default_period(self, supported) -> PeriodToken:
        configured = PeriodToken(self.settings.default_trend_period)
        return configured if configured in supported else DEFAULT_PERIOD

    async def _fetch(
        self,
        query: ReviewQuery,
        operation: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[ReviewRecord]:
        """Run one store query, honouring the caller's cancel event and the store timeout"""
        if cancel_event is not None and cancel_event.is_set():
            raise AnalyticsCancelled(f"{operation} cancelled before querying reviews")

        timeout = self.settings.store_timeout_seconds
        fetch_task = asyncio.ensure_future(self.store.find_reviews(query))
        waiters = {fetch_task}
        cancel_task = None
        if cancel_event is not None:
            cancel_task = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_task)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            fetch_task.cancel()
            raise
        finally:
            if cancel_task is not None:
                cancel_task.cancel()

        if fetch_task not in done:
            fetch_task.cancel()
            if cancel_event is not None and cancel_event.is_set():
                reason = "cancelled by caller"
            else:
                reason = f"timed out after {timeout}s"
            logger.warning(f"Review query for {operation} {reason}")
            raise AnalyticsCancelled(f"{operation} {reason}")

        try:
            records = fetch_task.result()
        except AnalyticsError as e:
            logger.error(f"Review store failed during {operation}: {e.detail}")
            raise AggregationFailure(f"Error aggregating {operation}: {e.detail}") from e
        except Exception as e:
            logger.error(f"Review store failed during {operation}: {e}", exc_info=True)
            raise AggregationFailure(f"Error aggregating {operation}: {e}") from e

        logger.debug(f"Fetched {len(records)} reviews for {operation}")
        return records


def create_analytics_service(
    store: Optional[ReviewRecordStore] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> ReviewAnalyticsService:
    """Create an analytics service; defaults to the SQL review store"""
    if store is None:
        from ..stores.sql_store import SQLAlchemyReviewStore

        store = SQLAlchemyReviewStore()
    return ReviewAnalyticsService(store, settings=settings)
