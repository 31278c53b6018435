from vidshare.db.models.user import User
from vidshare.db.models.video import Video
from vidshare.db.models.comment import Comment
from vidshare.db.models.tweet import TWEET_MAX_LENGTH, Tweet
from vidshare.db.models.playlist import Playlist, playlist_videos
from vidshare.db.models.subscription import Subscription
from vidshare.db.models.like import Like, LikeTarget, TargetKind

__all__ = [
    "Comment",
    "Like",
    "LikeTarget",
    "Playlist",
    "Subscription",
    "TWEET_MAX_LENGTH",
    "TargetKind",
    "Tweet",
    "User",
    "Video",
    "playlist_videos",
]
