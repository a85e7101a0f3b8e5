from videohub.db.models.user import User
from videohub.db.models.video import Video
from videohub.db.models.comment import Comment
from videohub.db.models.tweet import Tweet
from videohub.db.models.like import Like, LikeTarget
from videohub.db.models.playlist import Playlist, PlaylistVideo
from videohub.db.models.subscription import Subscription

__all__ = [
    "User",
    "Video",
    "Comment",
    "Tweet",
    "Like",
    "LikeTarget",
    "Playlist",
    "PlaylistVideo",
    "Subscription"
]
