"""Location gate: haversine distance between the caller and the venue.

Two checks exist. ``check_venue_proximity`` compares against the single
configured venue coordinate in meters. ``find_nearest_location`` searches the
active ``locations`` rows and uses each row's radius in miles.
"""
import logging
import math
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wolfpack.core.config import settings
from wolfpack.core.errors import ValidationError
from wolfpack.models.location import Location
from wolfpack.schemas.location import Coordinates, LocationCheckResponse, NearestLocationResponse

logger = logging.getLogger(__name__)

EARTH_RADIUS_METERS = 6_371_000.0
EARTH_RADIUS_MILES = 3959.0
METERS_PER_MILE = 1609.344
FEET_PER_MILE = 5280


def haversine_distance(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    radius: float = EARTH_RADIUS_METERS,
) -> float:
    """Great-circle distance, in the unit of ``radius``."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius * c


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def validate_coordinates(latitude, longitude) -> tuple[float, float]:
    try:
        lat, lng = float(latitude), float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("Invalid coordinates - must be valid numbers") from None
    if not is_valid_coordinate(lat, lng):
        raise ValidationError("Invalid coordinate range")
    return lat, lng


def is_within_radius(distance: float, radius: float) -> bool:
    return distance <= radius


def check_venue_proximity(
    latitude: float,
    longitude: float,
    *,
    venue_latitude: float | None = None,
    venue_longitude: float | None = None,
    radius_meters: float | None = None,
    now_ms: int | None = None,
) -> LocationCheckResponse:
    """Single-shot check against one venue coordinate."""
    lat, lng = validate_coordinates(latitude, longitude)
    venue_lat = settings.VENUE_LATITUDE if venue_latitude is None else venue_latitude
    venue_lng = settings.VENUE_LONGITUDE if venue_longitude is None else venue_longitude
    radius = settings.VENUE_RADIUS_METERS if radius_meters is None else radius_meters

    distance = haversine_distance(lat, lng, venue_lat, venue_lng)
    verified = is_within_radius(distance, radius)
    logger.debug("Location check: distance=%.1fm radius=%.1fm verified=%s", distance, radius, verified)
    return LocationCheckResponse(
        verified=verified,
        distance_meters=round(distance, 1),
        radius_meters=radius,
        location_verified=verified,
        location_verified_at=(now_ms if now_ms is not None else int(time.time() * 1000)) if verified else None,
    )


def format_distance(miles: float) -> str:
    if miles < 0.1:
        return f"{round(miles * FEET_PER_MILE)} ft"
    return f"{miles:.2f} mi"


def location_radius_meters(location: Location) -> float:
    radius_miles = location.radius_miles or settings.DEFAULT_LOCATION_RADIUS_MILES
    return radius_miles * METERS_PER_MILE


async def find_nearest_location(db: AsyncSession, latitude, longitude) -> NearestLocationResponse:
    lat, lng = validate_coordinates(latitude, longitude)
    result = await db.execute(select(Location).where(Location.is_active.is_(True)))
    locations = list(result.scalars().all())
    if not locations:
        return NearestLocationResponse(message="No locations are currently active")

    nearest = min(
        locations,
        key=lambda loc: haversine_distance(lat, lng, loc.latitude, loc.longitude, EARTH_RADIUS_MILES),
    )
    distance = haversine_distance(lat, lng, nearest.latitude, nearest.longitude, EARTH_RADIUS_MILES)
    radius_miles = nearest.radius_miles or settings.DEFAULT_LOCATION_RADIUS_MILES
    address = ", ".join(part for part in (nearest.address, nearest.city, nearest.state) if part)
    return NearestLocationResponse(
        location_id=nearest.id,
        name=nearest.name,
        can_join=is_within_radius(distance, radius_miles),
        distance=round(distance, 3),
        formatted_distance=format_distance(distance),
        address=address or None,
        radius_miles=radius_miles,
        coordinates=Coordinates(latitude=nearest.latitude, longitude=nearest.longitude),
    )
