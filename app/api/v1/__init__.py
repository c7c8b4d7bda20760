# app/api/v1/__init__.py

from fastapi import APIRouter
from . import (
    admin,
    auth,
    comments,
    engagement,
    health,
    movies,
    music,
    notifications,
    playlists,
    search,
    shorts,
    social,
    uploads,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(movies.router, prefix="/movies", tags=["Movies"])
api_router.include_router(shorts.router, prefix="/shorts", tags=["Shorts"])
# nested music prefixes go before /music/{music_id}
api_router.include_router(playlists.router, prefix="/music/playlists", tags=["Playlists"])
api_router.include_router(uploads.router, prefix="/music/uploads", tags=["Uploads"])
api_router.include_router(music.router, prefix="/music", tags=["Music"])
api_router.include_router(engagement.router, prefix="/engagement", tags=["Engagement"])
api_router.include_router(comments.router, prefix="/comments", tags=["Comments"])
api_router.include_router(social.router, prefix="/social", tags=["Social"])
api_router.include_router(search.router, prefix="/search", tags=["Search"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
