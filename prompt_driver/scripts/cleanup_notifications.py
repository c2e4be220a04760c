# prompt_driver/scripts/cleanup_notifications.py
"""Delete notifications past their retention window.

Run periodically, e.g. from cron:

    python -m prompt_driver.scripts.cleanup_notifications
"""
import asyncio
import logging

from prompt_driver.core.config import settings
from prompt_driver.data.database import AsyncSessionLocal, engine
from prompt_driver.models.database_models.user import User  # registers every mapper
from prompt_driver.services.notification_services import cleanup_old_notifications

logger = logging.getLogger(__name__)


async def main() -> int:
    async with AsyncSessionLocal() as db:
        deleted = await cleanup_old_notifications(db)
    await engine.dispose()
    return deleted


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    deleted_count = asyncio.run(main())
    logger.info(f"Removed {deleted_count} notifications")
