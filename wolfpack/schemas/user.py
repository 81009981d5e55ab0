"""Pydantic schemas for User."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class UserPublic(BaseModel):
    id: UUID
    username: str | None = None
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    profile_image_url: str | None = None
    wolf_emoji: str | None = None
    role: str = "user"
    is_wolfpack_member: bool = False
    is_following: bool = False  # Set by API when viewer is authenticated

    model_config = {"from_attributes": True}


class UserResponse(UserPublic):
    email: str | None = None  # Only in own profile
    bio: str | None = None
    is_vip: bool = False
    is_permanent_pack_member: bool = False
    wolfpack_status: str = "inactive"
    wolfpack_joined_at: datetime | None = None
    location_id: UUID | None = None
    last_activity: datetime | None = None
    created_at: datetime | None = None


class UserUpdate(BaseModel):
    username: str | None = Field(None, min_length=1, max_length=50)
    display_name: str | None = Field(None, max_length=100)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    bio: str | None = None
    avatar_url: str | None = None
    profile_image_url: str | None = None
    wolf_emoji: str | None = Field(None, max_length=16)
