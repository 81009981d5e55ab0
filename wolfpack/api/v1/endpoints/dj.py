"""DJ broadcasts."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_channel_hub, get_current_dj, get_current_user, get_db
from wolfpack.models.user import User
from wolfpack.realtime.channels import ChannelHub, chat_topic
from wolfpack.schemas.message import ChatMessageResponse
from wolfpack.schemas.wolfpack import BroadcastCreate, BroadcastCreated, BroadcastResponse
from wolfpack.services.dj_service import (
    create_broadcast,
    delete_broadcast,
    get_broadcast,
    list_broadcasts,
)

router = APIRouter(prefix="/dj/broadcast", tags=["dj"])


@router.post("", response_model=BroadcastCreated, status_code=status.HTTP_201_CREATED)
async def broadcast(
    data: BroadcastCreate,
    current_user: User = Depends(get_current_dj),
    db: AsyncSession = Depends(get_db),
    hub: ChannelHub = Depends(get_channel_hub),
):
    created, chat_message = await create_broadcast(db, current_user, data)
    await db.commit()
    message = ChatMessageResponse.model_validate(chat_message)
    await hub.broadcast(
        chat_topic(chat_message.session_id),
        {"type": "chat_message", "message": message.model_dump(mode="json")},
    )
    return BroadcastCreated(
        broadcast=BroadcastResponse.model_validate(created),
        chat_message_id=chat_message.id,
    )


@router.get("", response_model=list[BroadcastResponse])
async def recent_broadcasts(
    location_id: UUID = Query(...),
    include_expired: bool = Query(False),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_broadcasts(db, location_id, include_expired=include_expired, limit=limit)


@router.get("/{broadcast_id}", response_model=BroadcastResponse)
async def get_one(
    broadcast_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_broadcast(db, broadcast_id)


@router.delete("/{broadcast_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove(
    broadcast_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await delete_broadcast(db, broadcast_id, current_user)
    await db.commit()
