"""Wolfpack membership: join (behind the location gate), leave, status, roster."""
import logging
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wolfpack.core.errors import LocationError, NotFoundError, ValidationError
from wolfpack.db.session import utcnow
from wolfpack.models.location import Location
from wolfpack.models.membership import PackMember
from wolfpack.models.user import User
from wolfpack.schemas.location import LocationResponse
from wolfpack.schemas.wolfpack import JoinRequest, MembershipResponse, MemberResponse, StatusResponse
from wolfpack.services.location_service import check_venue_proximity, location_radius_meters
from wolfpack.services.user_service import user_to_public

logger = logging.getLogger(__name__)


def bypasses_location_gate(user: User) -> bool:
    return bool(user.is_vip or user.is_permanent_pack_member)


async def get_active_location(db: AsyncSession, location_id: UUID) -> Location:
    result = await db.execute(
        select(Location).where(Location.id == location_id, Location.is_active.is_(True))
    )
    location = result.scalar_one_or_none()
    if location is None:
        raise NotFoundError("Location")
    return location


def _verify_presence(request: JoinRequest, location: Location | None) -> None:
    if request.latitude is None or request.longitude is None:
        raise ValidationError("Location coordinates are required to join the Wolfpack")
    if location is not None:
        check = check_venue_proximity(
            request.latitude,
            request.longitude,
            venue_latitude=location.latitude,
            venue_longitude=location.longitude,
            radius_meters=location_radius_meters(location),
        )
    else:
        check = check_venue_proximity(request.latitude, request.longitude)
    if not check.verified:
        raise LocationError(
            "You must be at the venue to join the Wolfpack",
            details={"distance_meters": check.distance_meters, "radius_meters": check.radius_meters},
        )


async def get_active_membership(db: AsyncSession, user_id: UUID) -> PackMember | None:
    result = await db.execute(
        select(PackMember)
        .where(PackMember.user_id == user_id, PackMember.status == "active")
        .order_by(desc(PackMember.joined_at))
        .limit(1)
    )
    return result.scalar_one_or_none()


async def join_pack(db: AsyncSession, user: User, request: JoinRequest) -> PackMember:
    """Join (or rejoin) the pack.

    VIP and permanent members skip the location gate. Everyone else has to
    send coordinates inside the venue radius: the requested location's radius
    when ``location_id`` is given, the configured venue otherwise.
    """
    location = await get_active_location(db, request.location_id) if request.location_id else None
    if not bypasses_location_gate(user):
        _verify_presence(request, location)

    profile = request.profile_data.model_dump(exclude_none=True) if request.profile_data else {}
    now = utcnow()

    result = await db.execute(
        select(PackMember)
        .where(PackMember.user_id == user.id, PackMember.location_id == request.location_id)
        .limit(1)
    )
    member = result.scalar_one_or_none()
    if member is None:
        member = PackMember(user_id=user.id, location_id=request.location_id, joined_at=now)
        db.add(member)
    elif member.status != "active":
        member.joined_at = now
    member.status = "active"
    member.last_activity = now
    for field, value in profile.items():
        setattr(member, field, value)
    if not member.display_name:
        member.display_name = user.display_name or user.username

    user.is_wolfpack_member = True
    user.wolfpack_status = "active"
    user.wolfpack_joined_at = user.wolfpack_joined_at or now
    user.last_activity = now
    if request.location_id:
        user.location_id = request.location_id

    await db.flush()
    await db.refresh(member)
    logger.info("User %s joined the pack (location=%s)", user.id, request.location_id)
    return member


async def leave_pack(db: AsyncSession, user: User) -> int:
    """Deactivate every active membership of ``user``. Returns rows changed."""
    result = await db.execute(
        select(PackMember).where(PackMember.user_id == user.id, PackMember.status == "active")
    )
    members = list(result.scalars().all())
    for member in members:
        member.status = "inactive"
    user.wolfpack_status = "inactive"
    if not user.is_permanent_pack_member:
        user.is_wolfpack_member = False
    await db.flush()
    return len(members)


async def get_status(db: AsyncSession, user: User) -> StatusResponse:
    member = await get_active_membership(db, user.id)
    if member is None and not user.is_permanent_pack_member:
        return StatusResponse(is_member=False, user=user_to_public(user))

    location = None
    location_id = member.location_id if member else user.location_id
    if location_id:
        result = await db.execute(select(Location).where(Location.id == location_id))
        location = result.scalar_one_or_none()

    joined_at = (member.joined_at if member else None) or user.wolfpack_joined_at
    days = (utcnow() - joined_at).days if joined_at else None
    return StatusResponse(
        is_member=True,
        membership=MembershipResponse.model_validate(member) if member else None,
        location=LocationResponse.model_validate(location) if location else None,
        membership_days=days,
        user=user_to_public(user),
    )


async def list_members(db: AsyncSession, location_id: UUID | None = None) -> list[MemberResponse]:
    stmt = (
        select(PackMember)
        .where(PackMember.status == "active")
        .options(selectinload(PackMember.user))
        .order_by(desc(PackMember.last_activity))
    )
    if location_id is not None:
        stmt = stmt.where(PackMember.location_id == location_id)
    result = await db.execute(stmt)
    return [
        MemberResponse(
            membership=MembershipResponse.model_validate(member),
            user=user_to_public(member.user),
        )
        for member in result.scalars().all()
        if member.user is not None
    ]
