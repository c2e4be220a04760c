# prompt_driver/api/routes/root_routes.py
from fastapi import APIRouter

from prompt_driver.core.config import settings

router = APIRouter()


@router.get("/")
async def read_root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME}", "version": settings.VERSION}


@router.get("/health")
async def health_check():
    return {"status": "UP"}
