"""Activity notification model for likes, comments, follows, messages."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from wolfpack.db.session import Base, utcnow


class Notification(Base):
    __tablename__ = "wolfpack_activity_notifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False)  # like, comment, follow, message, broadcast
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="unread")  # unread | read
    related_user_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    related_video_id = Column(Uuid, ForeignKey("wolfpack_videos.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)

    recipient = relationship("User", foreign_keys=[recipient_id], back_populates="notifications")
    related_user = relationship("User", foreign_keys=[related_user_id])
    related_video = relationship("WolfpackVideo", foreign_keys=[related_video_id])


class DeviceToken(Base):
    """Push token registered by a client device."""
    __tablename__ = "device_tokens"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(Text, unique=True, nullable=False)
    platform = Column(String(20), nullable=False, default="web")  # web | ios | android
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
