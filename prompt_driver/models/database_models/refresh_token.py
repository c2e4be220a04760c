# prompt_driver/models/database_models/refresh_token.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from prompt_driver.data.database import Base, utcnow


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(512), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def is_expired(self) -> bool:
        return self.expires_at <= utcnow()
