"""Notifications API."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_current_user, get_db
from wolfpack.models.user import User
from wolfpack.schemas.notification import DeviceTokenRegister, NotificationResponse
from wolfpack.services.notification_service import (
    deactivate_device_token,
    delete_notification,
    get_notifications,
    get_unread_count,
    mark_all_read,
    mark_one_read,
    register_device_token,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    rows = await get_notifications(db, current_user.id, limit=limit)
    return [NotificationResponse.model_validate(n) for n in rows]


@router.get("/unread-count")
async def unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    count = await get_unread_count(db, current_user.id)
    return {"count": count}


@router.post("/mark-all-read")
async def mark_all_as_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updated = await mark_all_read(db, current_user.id)
    await db.commit()
    return {"updated": updated}


@router.patch("/{notification_id}/read")
async def mark_one_as_read(
    notification_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updated = await mark_one_read(db, current_user.id, notification_id)
    await db.commit()
    return {"updated": updated}


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_notification(
    notification_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await delete_notification(db, current_user.id, notification_id)
    await db.commit()


@router.post("/devices", status_code=status.HTTP_201_CREATED)
async def register_device(
    data: DeviceTokenRegister,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Register an FCM token so new notifications are pushed to this device."""
    device = await register_device_token(db, current_user.id, data.token, data.platform)
    await db.commit()
    return {"id": device.id, "platform": device.platform, "is_active": device.is_active}


@router.delete("/devices/{token}")
async def unregister_device(
    token: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    removed = await deactivate_device_token(db, current_user.id, token)
    await db.commit()
    return {"removed": removed}
