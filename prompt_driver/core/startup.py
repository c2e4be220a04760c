# prompt_driver/core/startup.py
import logging

from fastapi import FastAPI

from prompt_driver.core.config import settings
from prompt_driver.data.database import init_db

logger = logging.getLogger(__name__)


async def startup_event(app: FastAPI):
    """
    Initialize resources on application startup.
    """
    try:
        if settings.CREATE_TABLES_ON_STARTUP:
            await init_db()
        logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
    except Exception as e:
        logger.error(f"Failed to startup: {e}")
        raise
