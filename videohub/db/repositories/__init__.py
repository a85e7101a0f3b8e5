from videohub.db.repositories.user_repository import UserRepository
from videohub.db.repositories.video_repository import VideoRepository
from videohub.db.repositories.comment_repository import CommentRepository
from videohub.db.repositories.tweet_repository import TweetRepository
from videohub.db.repositories.like_repository import LikeRepository
from videohub.db.repositories.playlist_repository import PlaylistRepository

__all__ = [
    "UserRepository",
    "VideoRepository",
    "CommentRepository",
    "TweetRepository",
    "LikeRepository",
    "PlaylistRepository"
]
