"""Session chat (e.g. ``location_<id>``). New messages are pushed to realtime subscribers."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_channel_hub, get_current_user, get_db
from wolfpack.models.user import User
from wolfpack.realtime.channels import ChannelHub, chat_topic
from wolfpack.schemas.message import ChatMessageCreate, ChatMessageResponse
from wolfpack.services.messaging_service import list_chat_messages, post_chat_message

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/{session_id}/messages", response_model=list[ChatMessageResponse])
async def get_messages(
    session_id: str,
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_chat_messages(db, session_id, limit=limit)


@router.post("/{session_id}/messages", response_model=ChatMessageResponse, status_code=status.HTTP_201_CREATED)
async def post_message(
    session_id: str,
    data: ChatMessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    hub: ChannelHub = Depends(get_channel_hub),
):
    message = await post_chat_message(db, session_id, current_user, data.content)
    await db.commit()
    response = ChatMessageResponse.model_validate(message)
    await hub.broadcast(chat_topic(session_id), {"type": "chat_message", "message": response.model_dump(mode="json")})
    return response
