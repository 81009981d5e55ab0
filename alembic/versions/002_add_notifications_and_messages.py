"""Add activity notifications, device tokens, direct and chat messages.

Revision ID: 002
Revises: 001
Create Date: 2025-06-09

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "wolfpack_activity_notifications",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("recipient_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="unread"),
        sa.Column("related_user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("related_video_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["related_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["related_video_id"], ["wolfpack_videos.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_wolfpack_activity_notifications_recipient_id",
        "wolfpack_activity_notifications",
        ["recipient_id"],
        unique=False,
    )
    op.create_index(
        "ix_wolfpack_activity_notifications_created_at",
        "wolfpack_activity_notifications",
        ["created_at"],
        unique=False,
    )

    op.create_table(
        "device_tokens",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("token", sa.Text(), nullable=False),
        sa.Column("platform", sa.String(20), nullable=False, server_default="web"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token"),
    )
    op.create_index("ix_device_tokens_user_id", "device_tokens", ["user_id"], unique=False)

    op.create_table(
        "wolfpack_messages",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("receiver_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_wolfpack_messages_sender_id", "wolfpack_messages", ["sender_id"], unique=False)
    op.create_index("ix_wolfpack_messages_receiver_id", "wolfpack_messages", ["receiver_id"], unique=False)
    op.create_index("ix_wolfpack_messages_created_at", "wolfpack_messages", ["created_at"], unique=False)

    op.create_table(
        "wolfpack_chat_messages",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("session_id", sa.String(100), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("message_type", sa.String(30), nullable=False, server_default="text"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_wolfpack_chat_messages_session_id", "wolfpack_chat_messages", ["session_id"], unique=False)
    op.create_index("ix_wolfpack_chat_messages_created_at", "wolfpack_chat_messages", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_wolfpack_chat_messages_created_at", table_name="wolfpack_chat_messages")
    op.drop_index("ix_wolfpack_chat_messages_session_id", table_name="wolfpack_chat_messages")
    op.drop_table("wolfpack_chat_messages")
    op.drop_index("ix_wolfpack_messages_created_at", table_name="wolfpack_messages")
    op.drop_index("ix_wolfpack_messages_receiver_id", table_name="wolfpack_messages")
    op.drop_index("ix_wolfpack_messages_sender_id", table_name="wolfpack_messages")
    op.drop_table("wolfpack_messages")
    op.drop_index("ix_device_tokens_user_id", table_name="device_tokens")
    op.drop_table("device_tokens")
    op.drop_index("ix_wolfpack_activity_notifications_created_at", table_name="wolfpack_activity_notifications")
    op.drop_index("ix_wolfpack_activity_notifications_recipient_id", table_name="wolfpack_activity_notifications")
    op.drop_table("wolfpack_activity_notifications")
