# prompt_driver/models/database_models/prompt_bookmark.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from prompt_driver.data.database import Base, utcnow


class PromptBookmark(Base):
    __tablename__ = "prompt_bookmarks"
    __table_args__ = (UniqueConstraint("user_id", "prompt_id", name="uq_prompt_bookmarks_user_prompt"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    prompt_id = Column(Integer, ForeignKey("prompts.id", ondelete="CASCADE"), index=True, nullable=False)
    # NULL means uncategorized
    folder_id = Column(Integer, ForeignKey("bookmark_folders.id", ondelete="SET NULL"), index=True, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    prompt = relationship("Prompt", lazy="selectin")
    folder = relationship("BookmarkFolder", lazy="selectin")
