from vidhub.models.comment import Comment
from vidhub.models.playlist import Playlist, PlaylistVideo
from vidhub.models.relations import Like, LikeTarget, Subscription
from vidhub.models.user import User
from vidhub.models.video import Video, WatchHistory

__all__ = [
    "Comment",
    "Like",
    "LikeTarget",
    "Playlist",
    "PlaylistVideo",
    "Subscription",
    "User",
    "Video",
    "WatchHistory",
]
