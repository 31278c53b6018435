from vidshare.controllers.comments import CommentController
from vidshare.controllers.healthcheck import healthcheck
from vidshare.controllers.likes import LikeController
from vidshare.controllers.playlists import PlaylistController
from vidshare.controllers.subscriptions import SubscriptionController
from vidshare.controllers.tweets import TweetController
from vidshare.controllers.users import UserController
from vidshare.controllers.videos import VideoController

__all__ = [
    "CommentController",
    "LikeController",
    "PlaylistController",
    "SubscriptionController",
    "TweetController",
    "UserController",
    "VideoController",
    "healthcheck",
]
