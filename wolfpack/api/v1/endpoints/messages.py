"""Direct messages between pack members."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_current_user, get_db
from wolfpack.models.user import User
from wolfpack.schemas.message import ConversationResponse, ConversationSummary, MessageResponse, MessageSend
from wolfpack.services.messaging_service import (
    get_conversation,
    get_unread_message_count,
    list_conversations,
    send_message,
)
from wolfpack.services.notification_service import send_pending_pushes

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/send", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send(
    data: MessageSend,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    message = await send_message(db, current_user, data.receiver_id, data.content)
    await db.commit()
    await send_pending_pushes(db)
    return message


@router.get("/conversation/{user_id}", response_model=ConversationResponse)
async def conversation(
    user_id: UUID,
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    messages = await get_conversation(db, current_user.id, user_id, limit=limit)
    await db.commit()
    return ConversationResponse(messages=[MessageResponse.model_validate(m) for m in messages])


@router.get("/conversations", response_model=list[ConversationSummary])
async def conversations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_conversations(db, current_user)


@router.get("/unread-count")
async def unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await get_unread_message_count(db, current_user.id)
    return {"count": count}
