"""Pydantic schemas for direct messages and session chat."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from wolfpack.schemas.user import UserPublic


class MessageSend(BaseModel):
    """Body of ``POST /messages/send``; accepts ``receiverId`` or ``receiver_id``."""
    model_config = ConfigDict(populate_by_name=True)

    receiver_id: UUID = Field(..., alias="receiverId")
    content: str = ""


class MessageResponse(BaseModel):
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    is_read: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class ConversationResponse(BaseModel):
    messages: list[MessageResponse] = []


class ConversationSummary(BaseModel):
    other_user: UserPublic
    last_message: MessageResponse
    unread_count: int = 0


class ChatMessageCreate(BaseModel):
    content: str = ""


class ChatMessageResponse(BaseModel):
    id: UUID
    session_id: str
    user_id: UUID
    display_name: str
    avatar_url: str | None = None
    content: str
    message_type: str = "text"
    created_at: datetime

    model_config = {"from_attributes": True}
