# prompt_driver/models/database_models/prompt_rating.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship, validates

from prompt_driver.core.exceptions import InvalidRatingException
from prompt_driver.core.sanitization import sanitize_html
from prompt_driver.data.database import Base, utcnow

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000


class PromptRating(Base):
    __tablename__ = "prompt_ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "prompt_id", name="uq_prompt_ratings_user_prompt"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_prompt_ratings_rating_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    prompt_id = Column(Integer, ForeignKey("prompts.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(String(MAX_COMMENT_LENGTH), nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    prompt = relationship("Prompt", lazy="selectin")
    user = relationship("User", lazy="selectin")

    @validates("rating")
    def validate_rating(self, key, value):
        if value is None or not MIN_RATING <= value <= MAX_RATING:
            raise InvalidRatingException(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        return value

    @validates("comment")
    def validate_comment(self, key, value):
        if value is None:
            return None
        if not value.strip():
            return None
        value = sanitize_html(value)
        if len(value) > MAX_COMMENT_LENGTH:
            raise InvalidRatingException(f"Comment must not exceed {MAX_COMMENT_LENGTH} characters")
        return value
