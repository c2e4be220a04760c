# prompt_driver/models/database_models/prompt_like.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint

from prompt_driver.data.database import Base, utcnow


class PromptLike(Base):
    __tablename__ = "prompt_likes"
    __table_args__ = (UniqueConstraint("user_id", "prompt_id", name="uq_prompt_likes_user_prompt"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    prompt_id = Column(Integer, ForeignKey("prompts.id", ondelete="CASCADE"), index=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
