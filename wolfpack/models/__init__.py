from wolfpack.models.location import Location
from wolfpack.models.user import User
from wolfpack.models.video import WolfpackVideo
from wolfpack.models.engagement import Follow, VideoComment, VideoLike
from wolfpack.models.notification import DeviceToken, Notification
from wolfpack.models.message import ChatMessage, PrivateMessage
from wolfpack.models.membership import DJBroadcast, PackMember
from wolfpack.models.menu import MenuCategory, MenuItem

__all__ = [
    "Location",
    "User",
    "WolfpackVideo",
    "Follow",
    "VideoComment",
    "VideoLike",
    "DeviceToken",
    "Notification",
    "ChatMessage",
    "PrivateMessage",
    "DJBroadcast",
    "PackMember",
    "MenuCategory",
    "MenuItem",
]
