from wolfpack.schemas.user import UserPublic, UserResponse, UserUpdate
from wolfpack.schemas.video import FeedItem, FetchFeedResponse, VideoCreate, VideoUpdate
from wolfpack.schemas.notification import NotificationResponse
from wolfpack.schemas.message import MessageResponse, MessageSend
from wolfpack.schemas.realtime import TypingEvent
