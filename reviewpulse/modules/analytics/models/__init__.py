from .review_models import ReplyStatus, ReviewRow, StarRating, STAR_RATING_VALUES

__all__ = ["ReplyStatus", "ReviewRow", "StarRating", "STAR_RATING_VALUES"]
