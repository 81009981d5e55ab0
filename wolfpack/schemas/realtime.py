"""Realtime broadcast payloads. Field names follow the client's camelCase wire format."""
from pydantic import BaseModel, ConfigDict, Field


class TypingEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Filled in by the server from the socket's token
    user_id: str | None = Field(None, alias="userId")
    display_name: str | None = Field(None, alias="displayName")
    is_typing: bool = Field(..., alias="isTyping")
    timestamp: int | None = None  # ms since epoch, stamped by the server


class TypingUsersResponse(BaseModel):
    session_id: str
    typing_users: list[str] = []
