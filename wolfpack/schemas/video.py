"""Pydantic schemas for videos, feed pages, likes and comments."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from wolfpack.schemas.user import UserPublic


class VideoCreate(BaseModel):
    video_url: str = Field(..., min_length=1)
    thumbnail_url: str | None = None
    caption: str | None = Field(None, max_length=2200)
    hashtags: list[str] | None = None
    duration: int | None = Field(None, ge=0)


class VideoUpdate(BaseModel):
    caption: str | None = Field(None, max_length=2200)
    thumbnail_url: str | None = None
    hashtags: list[str] | None = None


class FeedItem(BaseModel):
    id: UUID
    user_id: UUID
    username: str  # resolved display name of the author
    avatar_url: str | None = None
    caption: str = ""
    video_url: str | None = None
    thumbnail_url: str | None = None
    likes_count: int = 0
    comments_count: int = 0
    views_count: int = 0
    shares_count: int = 0
    music_name: str = "Original Sound"
    hashtags: list[str] = []
    created_at: datetime
    user: UserPublic | None = None
    user_liked: bool = False
    user_following: bool = False


class FetchFeedResponse(BaseModel):
    items: list[FeedItem] = []
    total_items: int = 0
    has_more: bool = False


class LikeToggleResponse(BaseModel):
    liked: bool
    likes_count: int


class LikeStatusResponse(BaseModel):
    liked: bool
    count: int


class CommentCreate(BaseModel):
    content: str = Field(..., max_length=1000)


class CommentResponse(BaseModel):
    id: UUID
    video_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    user: UserPublic | None = None

    model_config = {"from_attributes": True}
