"""Location gate endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.api.deps import get_db
from wolfpack.models.location import Location
from wolfpack.schemas.location import Coordinates, LocationCheckResponse, LocationResponse, NearestLocationResponse
from wolfpack.services.location_service import check_venue_proximity, find_nearest_location

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=list[LocationResponse])
async def list_locations(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Location).where(Location.is_active.is_(True)).order_by(Location.name))
    return list(result.scalars().all())


@router.post("/check", response_model=LocationCheckResponse)
async def check_location(data: Coordinates):
    """Is the caller within the venue radius? Stateless, nothing is stored."""
    return check_venue_proximity(data.latitude, data.longitude)


@router.get("/verify", response_model=NearestLocationResponse)
async def verify_location(
    lat: str = Query(...),
    lng: str = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return await find_nearest_location(db, lat, lng)
