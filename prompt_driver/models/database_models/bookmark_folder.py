# prompt_driver/models/database_models/bookmark_folder.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from prompt_driver.data.database import Base, utcnow


class BookmarkFolder(Base):
    __tablename__ = "bookmark_folders"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_bookmark_folders_user_name"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(String(200), nullable=True)
    bookmark_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
