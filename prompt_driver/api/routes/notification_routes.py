# prompt_driver/api/routes/notification_routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import PageParams, get_current_user, page_params
from prompt_driver.data.database import get_db
from prompt_driver.models.common_models import CountResponse, PageResponse
from prompt_driver.models.database_models.notification import NotificationType
from prompt_driver.models.database_models.user import User
from prompt_driver.models.notification_models import (
    NotificationResponse,
    NotificationSettingsRequest,
    NotificationSettingsResponse,
)
from prompt_driver.services import notification_services

router = APIRouter()


@router.get("", response_model=PageResponse[NotificationResponse])
async def list_notifications(
    page: PageParams = Depends(page_params),
    unread_only: bool = Query(False, alias="unreadOnly"),
    notification_type: Optional[NotificationType] = Query(None, alias="type"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await notification_services.get_user_notifications(
        db, user.id, page, unread_only=unread_only, notification_type=notification_type
    )


@router.get("/unread-count", response_model=CountResponse)
async def unread_count(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return CountResponse(count=await notification_services.get_unread_count(db, user.id))


@router.put("/read-all", response_model=CountResponse)
async def mark_all_read(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Mark every unread notification as read and report how many changed."""
    return CountResponse(count=await notification_services.mark_all_as_read(db, user.id))


@router.get("/settings", response_model=NotificationSettingsResponse)
async def get_settings(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await notification_services.get_settings(db, user.id)


@router.put("/settings", response_model=NotificationSettingsResponse)
async def update_settings(
    settings_data: NotificationSettingsRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await notification_services.update_settings(db, user.id, settings_data)


@router.put("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(notification_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await notification_services.mark_as_read(db, user.id, notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    await notification_services.delete_notification(db, user.id, notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
