"""Pydantic schemas for Notification."""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from wolfpack.schemas.user import UserPublic


class RelatedVideo(BaseModel):
    id: UUID
    thumbnail_url: str | None = None
    caption: str | None = None

    model_config = {"from_attributes": True}


class NotificationResponse(BaseModel):
    id: UUID
    recipient_id: UUID
    type: str
    message: str
    status: Literal["unread", "read"] = "unread"
    related_user_id: UUID | None = None
    related_video_id: UUID | None = None
    created_at: datetime
    related_user: UserPublic | None = None
    related_video: RelatedVideo | None = None

    model_config = {"from_attributes": True}


class DeviceTokenRegister(BaseModel):
    token: str = Field(..., min_length=1)
    platform: Literal["web", "ios", "android"] = "web"
