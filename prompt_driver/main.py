# prompt_driver/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from prompt_driver.api.routes import (
    auth_routes,
    bookmark_routes,
    follow_routes,
    notification_routes,
    prompt_routes,
    rating_routes,
    root_routes,
    user_routes,
)
from prompt_driver.core.config import settings
from prompt_driver.core.error_handlers import register_exception_handlers
from prompt_driver.core.security import limiter
from prompt_driver.core.startup import startup_event

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, debug=settings.DEBUG)
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

register_exception_handlers(app)

# Static segments ("me", "popular-bookmarks") must be registered before the {id} routes they overlap
app.include_router(root_routes.router, tags=["Root"])
app.include_router(auth_routes.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(bookmark_routes.router, prefix="/api", tags=["Bookmarks"])
app.include_router(follow_routes.router, prefix="/api/users", tags=["Follows"])
app.include_router(user_routes.router, prefix="/api/users", tags=["Users"])
app.include_router(rating_routes.router, prefix="/api/prompts/{prompt_id}/ratings", tags=["Ratings"])
app.include_router(rating_routes.user_ratings_router, prefix="/api/users/{user_id}/ratings", tags=["Ratings"])
app.include_router(prompt_routes.router, prefix="/api/prompts", tags=["Prompts"])
app.include_router(prompt_routes.categories_router, prefix="/api/v1/categories", tags=["Categories"])
app.include_router(notification_routes.router, prefix="/api/notifications", tags=["Notifications"])


@app.on_event("startup")
async def app_startup():
    await startup_event(app)
