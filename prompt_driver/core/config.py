# prompt_driver/core/config.py
from typing import Dict, List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Prompt Driver API"
    VERSION: str = "1.0.0"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    MAX_REFRESH_TOKENS_PER_USER: int = 5

    DATABASE_URL: str
    SQL_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = False

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    ALLOWED_HOSTS: List[str] = ["*"]

    RATE_LIMIT_ENABLED: bool = True
    REGISTER_RATE_LIMIT: str = "5/minute"

    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    MAX_BOOKMARK_FOLDERS: int = 20

    NOTIFICATION_READ_RETENTION_DAYS: int = 30
    NOTIFICATION_UNREAD_RETENTION_DAYS: int = 90

    PROMPT_CATEGORIES: Dict[str, str] = {
        "coding": "Programming and code snippets",
        "writing": "Creative writing and content",
        "analysis": "Data analysis and research",
        "design": "Design and UI/UX",
        "marketing": "Marketing and sales",
        "education": "Teaching and learning",
        "productivity": "Productivity and automation",
        "other": "Miscellaneous",
    }

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()
