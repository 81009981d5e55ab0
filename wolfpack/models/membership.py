"""Wolfpack membership and DJ broadcast models."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from wolfpack.db.session import Base, utcnow


class PackMember(Base):
    __tablename__ = "wolf_pack_members"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    location_id = Column(Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="active")  # active | inactive
    display_name = Column(String(100), nullable=True)
    emoji = Column(String(16), nullable=True)
    current_vibe = Column(Text, nullable=True)
    favorite_drink = Column(String(100), nullable=True)
    looking_for = Column(Text, nullable=True)
    instagram_handle = Column(String(100), nullable=True)
    table_location = Column(String(100), nullable=True)
    joined_at = Column(DateTime, default=utcnow)
    last_activity = Column(DateTime, default=utcnow)

    user = relationship("User")
    location = relationship("Location")


class DJBroadcast(Base):
    __tablename__ = "dj_broadcasts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    dj_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    location_id = Column(Uuid, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    message = Column(Text, nullable=False)
    broadcast_type = Column(String(30), nullable=False, default="general")
    priority = Column(String(10), nullable=False, default="normal")
    status = Column(String(20), nullable=False, default="active")  # active | archived
    created_at = Column(DateTime, default=utcnow, index=True)
    expires_at = Column(DateTime, nullable=True)

    dj = relationship("User")
