# reviewpulse/modules/analytics/stores/sql_store.py

import asyncio
import logging
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reviewpulse.core.exceptions import StoreError
from ..models.review_models import ReviewRow
from ..schemas.analytics_schemas import ReviewRecord
from .base import ReviewQuery, ReviewRecordStore

logger = logging.getLogger(__name__)


class SQLAlchemyReviewStore(ReviewRecordStore):
    """
    Record store backed by the ``reviews`` table.

    Reply status and star rating are filtered in SQL. Tenant matching,
    free-text search and the date range are evaluated in process because
    tenant ids and timestamps are stored exactly as the provider sent them.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        if session_factory is None:
            from reviewpulse.core.database import SessionLocal

            session_factory = SessionLocal
        self.session_factory = session_factory

    async def find_reviews(self, query: ReviewQuery) -> List[ReviewRecord]:
        # Session work is blocking; keep it off the event loop
        return await asyncio.get_event_loop().run_in_executor(
            None, self._find_reviews_sync, query
        )

    def _find_reviews_sync(self, query: ReviewQuery) -> List[ReviewRecord]:
        db = self.session_factory()
        try:
            rows_query = db.query(ReviewRow)
            if query.status:
                rows_query = rows_query.filter(ReviewRow.reply_status == query.status)
            if query.rating:
                rows_query = rows_query.filter(ReviewRow.star_rating == query.rating)

            rows = rows_query.order_by(ReviewRow.id).all()
            records = [ReviewRecord.model_validate(row.to_record_data()) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load reviews: {e}")
            raise StoreError(f"Failed to load reviews: {e}") from e
        finally:
            db.close()

        matched = [record for record in records if query.matches(record)]
        logger.debug(f"SQL store matched {len(matched)}/{len(records)} reviews")
        return matched
