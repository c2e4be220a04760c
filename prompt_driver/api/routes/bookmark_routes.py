# prompt_driver/api/routes/bookmark_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import PageParams, get_current_user, page_params
from prompt_driver.data.database import get_db
from prompt_driver.models.bookmark_models import (
    BookmarkFolderRequest,
    BookmarkFolderResponse,
    BookmarkResponse,
    BookmarkStatusResponse,
    BookmarkToggleResponse,
    MoveBookmarkRequest,
    MoveBookmarkResponse,
)
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.user import User
from prompt_driver.models.prompt_models import PromptListResponse
from prompt_driver.services import bookmark_services

router = APIRouter()


@router.get("/prompts/popular-bookmarks", response_model=PageResponse[PromptListResponse])
async def popular_bookmarked_prompts(
    page: PageParams = Depends(page_params),
    timeframe: str = Query("all", description="week, month or all"),
    db: AsyncSession = Depends(get_db),
):
    return await bookmark_services.get_popular_bookmarked_prompts(db, page, timeframe)


@router.post("/prompts/{prompt_id}/bookmark", response_model=BookmarkToggleResponse)
async def toggle_bookmark(prompt_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await bookmark_services.toggle_bookmark(db, prompt_id, user)


@router.get("/prompts/{prompt_id}/bookmark/status", response_model=BookmarkStatusResponse)
async def bookmark_status(prompt_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return BookmarkStatusResponse(bookmarked=await bookmark_services.is_bookmarked(db, prompt_id, user))


@router.get("/users/me/bookmarks", response_model=PageResponse[BookmarkResponse])
async def list_bookmarks(
    page: PageParams = Depends(page_params),
    folder_id: Optional[int] = Query(None, alias="folderId"),
    search: Optional[str] = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await bookmark_services.get_user_bookmarks(db, user, page, folder_id=folder_id, search=search)


@router.put("/users/me/bookmarks/{bookmark_id}/folder", response_model=MoveBookmarkResponse)
async def move_bookmark(
    bookmark_id: int,
    move_data: MoveBookmarkRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move a bookmark into a folder, or back to uncategorized with a null folderId."""
    return await bookmark_services.move_bookmark(db, user, bookmark_id, move_data.folder_id)


@router.get("/users/me/bookmark-folders", response_model=List[BookmarkFolderResponse])
async def list_folders(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await bookmark_services.get_user_folders(db, user)


@router.post("/users/me/bookmark-folders", response_model=BookmarkFolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    folder_data: BookmarkFolderRequest, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    return await bookmark_services.create_folder(db, user, folder_data)


@router.put("/users/me/bookmark-folders/{folder_id}", response_model=BookmarkFolderResponse)
async def update_folder(
    folder_id: int,
    folder_data: BookmarkFolderRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await bookmark_services.update_folder(db, user, folder_id, folder_data)


@router.delete("/users/me/bookmark-folders/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(folder_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Delete a folder; its bookmarks become uncategorized."""
    await bookmark_services.delete_folder(db, user, folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
