"""Engagement models: follows, likes and comments on videos."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from wolfpack.db.session import Base, utcnow


class Follow(Base):
    __tablename__ = "wolfpack_follows"

    follower_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    following_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=utcnow)


class VideoLike(Base):
    """At most one like per (user, video); enforced by the unique constraint."""
    __tablename__ = "wolfpack_post_likes"
    __table_args__ = (UniqueConstraint("user_id", "video_id", name="uq_wolfpack_post_likes_user_video"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    video_id = Column(Uuid, ForeignKey("wolfpack_videos.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="likes")
    video = relationship("WolfpackVideo", back_populates="likes")


class VideoComment(Base):
    __tablename__ = "wolfpack_comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    video_id = Column(Uuid, ForeignKey("wolfpack_videos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User")
    video = relationship("WolfpackVideo", back_populates="comments")
