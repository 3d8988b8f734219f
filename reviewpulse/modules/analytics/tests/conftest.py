# reviewpulse/modules/analytics/tests/conftest.py

import pytest
from datetime import datetime
from typing import Any, Dict, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from reviewpulse.core.config import AnalyticsSettings
from reviewpulse.core.database import Base
from reviewpulse.modules.analytics.schemas.analytics_schemas import ReviewRecord
from reviewpulse.modules.analytics.services.review_analytics_service import (
    ReviewAnalyticsService
)
from reviewpulse.modules.analytics.stores.memory_store import InMemoryReviewStore


FIXED_NOW = datetime(2025, 8, 5, 12, 0, 0)


def make_review(
    created: Any = "2025-08-01T10:00:00Z",
    rating: Any = "FIVE",
    tenant_id: Any = "42",
    tenant_name: Optional[str] = "Acme Dental",
    reply_comment: Optional[str] = None,
    replied_at: Any = None,
    reply_status: Optional[str] = None,
    comment: Optional[str] = None,
    reviewer: Optional[str] = None,
    review_id: Optional[str] = None,
) -> ReviewRecord:
    """Build a review record in the provider's document shape"""
    data: Dict[str, Any] = {
        "reviewId": review_id,
        "businessProfileId": tenant_id,
        "businessProfileName": tenant_name,
        "starRating": rating,
        "comment": comment,
        "createTime": created,
    }
    if reviewer:
        data["reviewer"] = {"displayName": reviewer}
    if reply_comment is not None or replied_at is not None:
        data["reviewReply"] = {"comment": reply_comment, "updateTime": replied_at}
    if reply_status:
        data["replyStatus"] = reply_status
    elif reply_comment:
        data["replyStatus"] = "replied"
    return ReviewRecord.model_validate(data)


@pytest.fixture
def settings() -> AnalyticsSettings:
    """Settings with a short store timeout"""
    return AnalyticsSettings(store_timeout_seconds=2.0)


@pytest.fixture
def sample_reviews():
    """Two reviews on 2025-08-01: one answered after two hours, one pending"""
    return [
        make_review(
            created="2025-08-01T10:00:00Z",
            rating="FIVE",
            reply_comment="Thank you!",
            replied_at="2025-08-01T12:00:00Z",
            review_id="r-1",
        ),
        make_review(
            created="2025-08-01T15:00:00Z",
            rating="ONE",
            review_id="r-2",
        ),
    ]


@pytest.fixture
def memory_store(sample_reviews) -> InMemoryReviewStore:
    return InMemoryReviewStore(sample_reviews)


@pytest.fixture
def analytics_service(memory_store, settings) -> ReviewAnalyticsService:
    """Service over the sample reviews with a frozen clock"""
    return ReviewAnalyticsService(memory_store, settings=settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def sql_engine():
    """In-memory SQLite engine with the review tables created"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(sql_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=sql_engine)
