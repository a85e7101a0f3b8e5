from fastapi import APIRouter

from videohub.api.http import (
    health_router, videos_router, comments_router, tweets_router, likes_router, playlists_router
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health_router)
api_router.include_router(videos_router)
api_router.include_router(comments_router)
api_router.include_router(tweets_router)
api_router.include_router(likes_router)
api_router.include_router(playlists_router)
