"""Pydantic schemas for the location gate."""
from uuid import UUID

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationCheckResponse(BaseModel):
    verified: bool
    distance_meters: float
    radius_meters: float
    # Keys the client persists in local storage after a successful check
    location_verified: bool = False
    location_verified_at: int | None = None  # ms since epoch


class NearestLocationResponse(BaseModel):
    location_id: UUID | None = None
    name: str | None = None
    can_join: bool = False
    distance: float | None = None  # miles, 3 decimals
    formatted_distance: str | None = None
    address: str | None = None
    radius_miles: float | None = None
    coordinates: Coordinates | None = None
    message: str | None = None


class LocationResponse(BaseModel):
    id: UUID
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    latitude: float
    longitude: float
    radius_miles: float | None = None
    is_active: bool = True

    model_config = {"from_attributes": True}
