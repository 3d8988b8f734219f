# reviewpulse/modules/analytics/stores/memory_store.py

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from ..schemas.analytics_schemas import ReviewRecord
from .base import ReviewQuery, ReviewRecordStore

logger = logging.getLogger(__name__)


class InMemoryReviewStore(ReviewRecordStore):
    """Record store over a list of already loaded reviews"""

    def __init__(
        self, records: Optional[Iterable[Union[ReviewRecord, Dict[str, Any]]]] = None
    ):
        self._records: List[ReviewRecord] = []
        for record in records or []:
            self.add(record)

    def add(self, record: Union[ReviewRecord, Dict[str, Any]]) -> ReviewRecord:
        if not isinstance(record, ReviewRecord):
            record = ReviewRecord.model_validate(record)
        self._records.append(record)
        return record

    def __len__(self) -> int:
        return len(self._records)

    async def find_reviews(self, query: ReviewQuery) -> List[ReviewRecord]:
        matched = [record for record in self._records if query.matches(record)]
        logger.debug(f"In-memory store matched {len(matched)}/{len(self._records)} reviews")
        return matched
