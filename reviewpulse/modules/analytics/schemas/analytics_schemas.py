# reviewpulse/modules/analytics/schemas/analytics_schemas.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any, Union
from datetime import date, datetime

from ..models.review_models import ReplyStatus, StarRating, STAR_RATING_VALUES
from ..utils.timestamps import parse_timestamp

DEFAULT_RATING_VALUE = STAR_RATING_VALUES[StarRating.THREE.value]

_SYMBOL_BY_VALUE = {value: symbol for symbol, value in STAR_RATING_VALUES.items()}


# Input records
class Reviewer(BaseModel):
    """Review author as delivered by the provider"""

    display_name: Optional[str] = Field(None, alias="displayName")

    class Config:
        populate_by_name = True


class ReviewReply(BaseModel):
    """Business reply attached to a review"""

    comment: Optional[str] = None
    replied_at: Optional[Any] = Field(None, alias="updateTime")

    class Config:
        populate_by_name = True


class ReviewRecord(BaseModel):
    """
    Read-only review record consumed by the analytics engine.

    Timestamps are kept exactly as stored; they are parsed lazily so that a
    malformed value excludes the record from windowed trends without
    rejecting it from lifetime summaries.
    """

    review_id: Optional[str] = Field(None, alias="reviewId")
    tenant_id: Optional[Union[int, float, str]] = Field(None, alias="businessProfileId")
    tenant_name: Optional[str] = Field(None, alias="businessProfileName")
    star_rating: Optional[str] = Field(None, alias="starRating")
    comment: Optional[str] = None
    reviewer: Optional[Reviewer] = None
    created_at: Optional[Any] = Field(None, alias="createTime")
    reply: Optional[ReviewReply] = Field(None, alias="reviewReply")
    reply_status: str = Field(ReplyStatus.PENDING.value, alias="replyStatus")

    class Config:
        populate_by_name = True

    @field_validator("star_rating", mode="before")
    @classmethod
    def normalize_star_rating(cls, v):
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, int) or (isinstance(v, float) and v.is_integer()):
            return _SYMBOL_BY_VALUE.get(int(v), str(v))
        text = str(v).strip()
        if text.isdigit():
            return _SYMBOL_BY_VALUE.get(int(text), text)
        return text.upper()

    @property
    def has_reply(self) -> bool:
        """Replied only when the reply actually carries a comment"""
        return self.reply is not None and bool(self.reply.comment)

    @property
    def rating_value(self) -> int:
        """Ordinal 1-5; unknown symbols count as a neutral 3"""
        return STAR_RATING_VALUES.get(self.star_rating or "", DEFAULT_RATING_VALUE)

    @property
    def created(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)

    @property
    def replied(self) -> Optional[datetime]:
        if self.reply is None:
            return None
        return parse_timestamp(self.reply.replied_at)

    @property
    def reviewer_name(self) -> Optional[str]:
        return self.reviewer.display_name if self.reviewer else None


# Filters
class SummaryFilters(BaseModel):
    """Optional narrowing applied to summary statistics"""

    status: Optional[ReplyStatus] = None
    rating: Optional[StarRating] = None
    search: Optional[str] = Field(None, max_length=200)

    @field_validator("rating", mode="before")
    @classmethod
    def normalize_rating(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return _SYMBOL_BY_VALUE.get(v, v)
        if isinstance(v, str):
            text = v.strip()
            if text.isdigit():
                return _SYMBOL_BY_VALUE.get(int(text), text)
            return text.upper() or None
        return v

    @field_validator("search")
    @classmethod
    def normalize_search(cls, v):
        if v is None:
            return None
        return v.strip() or None


# Engine output
class TrendBucket(BaseModel):
    """One slot of a gap-filled trend series"""

    bucket_key: str = Field(..., alias="bucketKey")
    display_label: str = Field(..., alias="displayLabel")
    bucket_start: date = Field(..., alias="bucketStart")
    total_count: int = Field(0, ge=0, alias="totalCount")
    replied_count: int = Field(0, ge=0, alias="repliedCount")
    reply_rate_percent: float = Field(0.0, ge=0, le=100, alias="replyRatePercent")
    avg_response_hours: float = Field(0.0, ge=0, alias="avgResponseHours")

    class Config:
        populate_by_name = True


class RatingCount(BaseModel):
    """Histogram entry of the rating distribution"""

    rating: int = Field(..., ge=1, le=5)
    count: int = Field(0, ge=0)


class SummaryStats(BaseModel):
    """Point-in-time review statistics"""

    total_reviews: int = Field(0, alias="totalReviews")
    pending_count: int = Field(0, alias="pendingCount")
    replied_count: int = Field(0, alias="repliedCount")
    average_rating: float = Field(0.0, alias="averageRating")
    response_rate_percent: float = Field(0.0, alias="responseRatePercent")
    rating_distribution: List[RatingCount] = Field(
        default_factory=list, alias="ratingDistribution"
    )

    class Config:
        populate_by_name = True


class RosterEntry(BaseModel):
    """Per-tenant summary row for the roster view"""

    tenant_id: str = Field(..., alias="tenantId")
    tenant_name: str = Field(..., alias="tenantName")
    stats: SummaryStats
    last_review_date: Optional[datetime] = Field(None, alias="lastReviewDate")

    class Config:
        populate_by_name = True


class DashboardSnapshot(BaseModel):
    """Everything the dashboard renders, computed in one request"""

    period: str
    summary: SummaryStats
    review_trends: List[TrendBucket] = Field(default_factory=list, alias="reviewTrends")
    roster: List[RosterEntry] = Field(default_factory=list)
    last_updated: datetime = Field(..., alias="lastUpdated")

    class Config:
        populate_by_name = True
