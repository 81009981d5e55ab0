"""Add pack membership, DJ broadcasts and the food & drink menu.

Revision ID: 003
Revises: 002
Create Date: 2025-06-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "wolf_pack_members",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("location_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("emoji", sa.String(16), nullable=True),
        sa.Column("current_vibe", sa.Text(), nullable=True),
        sa.Column("favorite_drink", sa.String(100), nullable=True),
        sa.Column("looking_for", sa.Text(), nullable=True),
        sa.Column("instagram_handle", sa.String(100), nullable=True),
        sa.Column("table_location", sa.String(100), nullable=True),
        sa.Column("joined_at", sa.DateTime(), nullable=True),
        sa.Column("last_activity", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_wolf_pack_members_user_id", "wolf_pack_members", ["user_id"], unique=False)
    op.create_index("ix_wolf_pack_members_location_id", "wolf_pack_members", ["location_id"], unique=False)

    op.create_table(
        "dj_broadcasts",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("dj_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("location_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("broadcast_type", sa.String(30), nullable=False, server_default="general"),
        sa.Column("priority", sa.String(10), nullable=False, server_default="normal"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["dj_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dj_broadcasts_dj_id", "dj_broadcasts", ["dj_id"], unique=False)
    op.create_index("ix_dj_broadcasts_location_id", "dj_broadcasts", ["location_id"], unique=False)
    op.create_index("ix_dj_broadcasts_created_at", "dj_broadcasts", ["created_at"], unique=False)

    op.create_table(
        "food_drink_categories",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="food"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "food_drink_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("category_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["category_id"], ["food_drink_categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_food_drink_items_category_id", "food_drink_items", ["category_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_food_drink_items_category_id", table_name="food_drink_items")
    op.drop_table("food_drink_items")
    op.drop_table("food_drink_categories")
    op.drop_index("ix_dj_broadcasts_created_at", table_name="dj_broadcasts")
    op.drop_index("ix_dj_broadcasts_location_id", table_name="dj_broadcasts")
    op.drop_index("ix_dj_broadcasts_dj_id", table_name="dj_broadcasts")
    op.drop_table("dj_broadcasts")
    op.drop_index("ix_wolf_pack_members_location_id", table_name="wolf_pack_members")
    op.drop_index("ix_wolf_pack_members_user_id", table_name="wolf_pack_members")
    op.drop_table("wolf_pack_members")
