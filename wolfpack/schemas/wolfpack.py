"""Pydantic schemas for pack membership and DJ broadcasts."""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from wolfpack.schemas.location import LocationResponse
from wolfpack.schemas.user import UserPublic

BroadcastType = Literal["announcement", "howl_request", "contest_announcement", "song_request", "general"]
BroadcastPriority = Literal["low", "normal", "high", "urgent"]


class JoinProfile(BaseModel):
    display_name: str | None = Field(None, max_length=100)
    emoji: str | None = Field(None, max_length=16)
    current_vibe: str | None = None
    favorite_drink: str | None = Field(None, max_length=100)
    looking_for: str | None = None
    instagram_handle: str | None = Field(None, max_length=100)
    table_location: str | None = Field(None, max_length=100)


class JoinRequest(BaseModel):
    location_id: UUID | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    profile_data: JoinProfile | None = None


class MembershipResponse(BaseModel):
    id: UUID
    user_id: UUID
    location_id: UUID | None = None
    status: str
    display_name: str | None = None
    emoji: str | None = None
    current_vibe: str | None = None
    favorite_drink: str | None = None
    looking_for: str | None = None
    instagram_handle: str | None = None
    table_location: str | None = None
    joined_at: datetime | None = None
    last_activity: datetime | None = None

    model_config = {"from_attributes": True}


class JoinResponse(BaseModel):
    success: bool = True
    pack_member_id: UUID
    data: MembershipResponse


class StatusResponse(BaseModel):
    is_member: bool
    membership: MembershipResponse | None = None
    location: LocationResponse | None = None
    membership_days: int | None = None
    user: UserPublic | None = None


class MemberResponse(BaseModel):
    membership: MembershipResponse
    user: UserPublic


class BroadcastCreate(BaseModel):
    message: str
    location_id: UUID
    broadcast_type: BroadcastType = "general"
    priority: BroadcastPriority = "normal"


class BroadcastResponse(BaseModel):
    id: UUID
    dj_id: UUID
    location_id: UUID
    title: str
    message: str
    broadcast_type: str
    priority: str
    status: str
    created_at: datetime
    expires_at: datetime | None = None
    dj: UserPublic | None = None

    model_config = {"from_attributes": True}


class BroadcastCreated(BaseModel):
    success: bool = True
    broadcast: BroadcastResponse
    chat_message_id: UUID | None = None
