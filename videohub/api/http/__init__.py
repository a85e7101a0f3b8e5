from videohub.api.http.health import router as health_router
from videohub.api.http.videos import router as videos_router
from videohub.api.http.comments import router as comments_router
from videohub.api.http.tweets import router as tweets_router
from videohub.api.http.likes import router as likes_router
from videohub.api.http.playlists import router as playlists_router

__all__ = [
    "health_router",
    "videos_router",
    "comments_router",
    "tweets_router",
    "likes_router",
    "playlists_router"
]
