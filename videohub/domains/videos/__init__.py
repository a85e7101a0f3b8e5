from videohub.domains.videos.schemas import (
    VideoBase, VideoCreate, VideoUpdate, VideoResponse, VideoView, VideoDetailView
)

__all__ = [
    "VideoBase", "VideoCreate", "VideoUpdate", "VideoResponse", "VideoView", "VideoDetailView"
]
