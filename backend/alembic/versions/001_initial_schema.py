"""Initial schema: bookings table with status constraints.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("service_type", sa.Text(), nullable=True),
        sa.Column("sub_service_type", sa.Text(), nullable=True),
        sa.Column("source_city", sa.Text(), nullable=True),
        sa.Column("route", sa.JSON(), nullable=False),
        sa.Column("pickup_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("drop_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("distance", sa.Float(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'Pending'")),
        sa.Column("contact_name", sa.Text(), nullable=False),
        sa.Column("contact_email", sa.Text(), nullable=False),
        sa.Column("contact_phone", sa.String(10), nullable=False),
        sa.Column("action", sa.String(20), nullable=True),
        sa.Column("action_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("driver_name", sa.Text(), nullable=True),
        sa.Column("driver_phone", sa.String(10), nullable=True),
        sa.Column("driver_photo", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('Pending', 'Confirmed', 'Canceled')", name="check_booking_status"),
        sa.CheckConstraint(
            "action IS NULL OR action IN ('Confirmed', 'Canceled')", name="check_booking_action"
        ),
    )
    # Listing returns every booking oldest first
    op.create_index("ix_bookings_created_at", "bookings", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_bookings_created_at", table_name="bookings")
    op.drop_table("bookings")
