# reviewpulse/modules/analytics/models/review_models.py

from sqlalchemy import Column, Integer, String, Text, Index
import enum

from reviewpulse.core.database import Base


class StarRating(str, enum.Enum):
    """Star rating symbols as delivered by the review provider"""
    ONE = "ONE"
    TWO = "TWO"
    THREE = "THREE"
    FOUR = "FOUR"
    FIVE = "FIVE"


class ReplyStatus(str, enum.Enum):
    """Reply workflow status of a review"""
    PENDING = "pending"
    REPLIED = "replied"
    IGNORED = "ignored"


STAR_RATING_VALUES = {
    StarRating.ONE.value: 1,
    StarRating.TWO.value: 2,
    StarRating.THREE.value: 3,
    StarRating.FOUR.value: 4,
    StarRating.FIVE.value: 5,
}


class ReviewRow(Base):
    """Stored review as written by webhook ingestion"""

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    review_id = Column(String(255), unique=True, nullable=False)

    # Tenant identity; ids arrive both as numbers and strings and are kept verbatim
    business_profile_id = Column(String(64), nullable=False, index=True)
    business_profile_name = Column(String(255), nullable=True)

    star_rating = Column(String(8), nullable=False, default=StarRating.THREE.value)
    comment = Column(Text, nullable=True)
    reviewer_name = Column(String(255), nullable=True)

    # Provider timestamps are stored raw; parsing happens at aggregation time
    create_time = Column(String(64), nullable=True)
    reply_comment = Column(Text, nullable=True)
    reply_update_time = Column(String(64), nullable=True)
    reply_status = Column(String(16), nullable=False, default=ReplyStatus.PENDING.value)

    __table_args__ = (
        Index("idx_reviews_profile_status", "business_profile_id", "reply_status"),
        Index("idx_reviews_star_rating", "star_rating"),
    )

    def to_record_data(self) -> dict:
        """Document-shaped payload accepted by ``ReviewRecord``"""
        reply = None
        if self.reply_comment is not None or self.reply_update_time is not None:
            reply = {"comment": self.reply_comment, "updateTime": self.reply_update_time}

        return {
            "reviewId": self.review_id,
            "businessProfileId": self.business_profile_id,
            "businessProfileName": self.business_profile_name,
            "starRating": self.star_rating,
            "comment": self.comment,
            "reviewer": {"displayName": self.reviewer_name} if self.reviewer_name else None,
            "createTime": self.create_time,
            "reviewReply": reply,
            "replyStatus": self.reply_status,
        }
