"""Venue location model."""
import uuid

from sqlalchemy import Boolean, Column, Float, String, Text, Uuid

from wolfpack.db.session import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    radius_miles = Column(Float, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
