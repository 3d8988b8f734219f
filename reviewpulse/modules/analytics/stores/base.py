# reviewpulse/modules/analytics/stores/base.py

"""
Record store contract.

The analytics engine never talks to a database directly. It asks a
``ReviewRecordStore`` for the reviews matching a ``ReviewQuery`` and does
all grouping and reduction itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from ..schemas.analytics_schemas import ReviewRecord
from ..services.tenant_match import TenantMatch


@dataclass(frozen=True)
class ReviewQuery:
    """Filter passed to ``ReviewRecordStore.find_reviews``"""

    tenant: Optional[TenantMatch] = None
    date_range: Optional[Tuple[datetime, datetime]] = None
    status: Optional[str] = None
    rating: Optional[str] = None
    search: Optional[str] = None

    def matches(self, record: ReviewRecord) -> bool:
        if self.tenant is not None and not self.tenant.matches_record(record):
            return False

        if self.status and record.reply_status != self.status:
            return False

        if self.rating and record.star_rating != self.rating:
            return False

        if self.search and not self._matches_search(record):
            return False

        if self.date_range is not None:
            # Unparsable creation times never satisfy a date bound
            created = record.created
            start, end = self.date_range
            if created is None or not (start <= created <= end):
                return False

        return True

    def _matches_search(self, record: ReviewRecord) -> bool:
        needle = self.search.lower()
        haystacks = (record.comment, record.reviewer_name, record.tenant_name)
        return any(text and needle in text.lower() for text in haystacks)


class ReviewRecordStore(ABC):
    """Read access to stored review records"""

    @abstractmethod
    async def find_reviews(self, query: ReviewQuery) -> List[ReviewRecord]:
        """
        Return every record matching ``query``.

        Raises:
            StoreError: The underlying storage could not be read
        """
