"""User profile model. Rows are keyed to the auth provider via ``auth_id``."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from wolfpack.db.session import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    auth_id = Column(Uuid, unique=True, nullable=True, index=True)  # auth provider user id
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=True, index=True)
    display_name = Column(String(100), nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    avatar_url = Column(Text, nullable=True)
    profile_image_url = Column(Text, nullable=True)
    wolf_emoji = Column(String(16), nullable=True)
    bio = Column(Text, nullable=True)
    role = Column(String(20), nullable=False, default="user")  # user | dj | admin
    is_vip = Column(Boolean, default=False, nullable=False)
    is_permanent_pack_member = Column(Boolean, default=False, nullable=False)
    is_wolfpack_member = Column(Boolean, default=False, nullable=False)
    wolfpack_status = Column(String(20), nullable=False, default="inactive")  # active | inactive
    wolfpack_joined_at = Column(DateTime, nullable=True)
    location_id = Column(Uuid, ForeignKey("locations.id", ondelete="SET NULL"), nullable=True)
    last_activity = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    videos = relationship("WolfpackVideo", back_populates="user", cascade="all, delete-orphan")
    likes = relationship("VideoLike", back_populates="user", cascade="all, delete-orphan")
    location = relationship("Location")
    notifications = relationship(
        "Notification",
        foreign_keys="Notification.recipient_id",
        back_populates="recipient",
        cascade="all, delete-orphan",
    )
