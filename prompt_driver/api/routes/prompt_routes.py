# prompt_driver/api/routes/prompt_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import PageParams, get_current_user, get_current_user_optional, page_params
from prompt_driver.data.database import get_db
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.user import User
from prompt_driver.models.prompt_models import (
    CategoryResponse,
    LikeResponse,
    PromptCreateRequest,
    PromptListResponse,
    PromptResponse,
    PromptUpdateRequest,
)
from prompt_driver.services import prompt_services

router = APIRouter()
categories_router = APIRouter()


@router.get("", response_model=PageResponse[PromptListResponse])
async def list_prompts(
    page: PageParams = Depends(page_params),
    sort: str = Query("createdAt,desc", description="Sort as field,direction"),
    search: Optional[str] = Query(None, description="Case-insensitive search over title, description and content"),
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await prompt_services.get_prompts(db, page, sort=sort, search=search, category=category)


@router.get("/{prompt_id}", response_model=PromptResponse)
async def get_prompt(
    prompt_id: int,
    user: Optional[User] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    return await prompt_services.get_prompt(db, prompt_id, user)


@router.post("", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
async def create_prompt(
    prompt_data: PromptCreateRequest, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    return await prompt_services.create_prompt(db, prompt_data, user)


@router.put("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: int,
    prompt_data: PromptUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await prompt_services.update_prompt(db, prompt_id, prompt_data, user)


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prompt(prompt_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await prompt_services.delete_prompt(db, prompt_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{prompt_id}/like", response_model=LikeResponse)
async def toggle_like(prompt_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await prompt_services.toggle_like(db, prompt_id, user)


@categories_router.get("", response_model=List[CategoryResponse])
async def list_categories():
    return prompt_services.get_categories()
