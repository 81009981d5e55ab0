"""SQLAlchemy declarative base and model imports for Alembic."""
from wolfpack.db.session import Base  # noqa: F401
from wolfpack.models.location import Location  # noqa: F401
from wolfpack.models.user import User  # noqa: F401
from wolfpack.models.video import WolfpackVideo  # noqa: F401
from wolfpack.models.engagement import Follow, VideoComment, VideoLike  # noqa: F401
from wolfpack.models.notification import DeviceToken, Notification  # noqa: F401
from wolfpack.models.message import ChatMessage, PrivateMessage  # noqa: F401
from wolfpack.models.membership import DJBroadcast, PackMember  # noqa: F401
from wolfpack.models.menu import MenuCategory, MenuItem  # noqa: F401

__all__ = [
    "Base", "Location", "User", "WolfpackVideo", "Follow", "VideoComment", "VideoLike",
    "DeviceToken", "Notification", "ChatMessage", "PrivateMessage", "DJBroadcast", "PackMember",
    "MenuCategory", "MenuItem",
]
