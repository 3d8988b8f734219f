from .base import ReviewQuery, ReviewRecordStore
from .memory_store import InMemoryReviewStore
from .sql_store import SQLAlchemyReviewStore

__all__ = [
    "ReviewQuery",
    "ReviewRecordStore",
    "InMemoryReviewStore",
    "SQLAlchemyReviewStore",
]
