"""Pack membership: join behind the location gate, leave, status, roster."""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_current_user, get_db
from wolfpack.models.user import User
from wolfpack.schemas.wolfpack import JoinRequest, JoinResponse, MemberResponse, MembershipResponse, StatusResponse
from wolfpack.services.membership_service import get_status, join_pack, leave_pack, list_members

router = APIRouter(prefix="/wolfpack", tags=["wolfpack"])


@router.post("/join", response_model=JoinResponse, status_code=status.HTTP_201_CREATED)
async def join(
    data: JoinRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    member = await join_pack(db, current_user, data)
    await db.commit()
    return JoinResponse(pack_member_id=member.id, data=MembershipResponse.model_validate(member))


@router.post("/leave")
async def leave(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    left = await leave_pack(db, current_user)
    await db.commit()
    return {"success": True, "memberships_closed": left}


@router.get("/status", response_model=StatusResponse)
async def membership_status(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_status(db, current_user)


@router.get("/members", response_model=list[MemberResponse])
async def members(
    location_id: UUID | None = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_members(db, location_id)
