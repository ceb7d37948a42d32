"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates trips with their days, activities, accommodations, transcript and
todos, plus bucketlist items and travel preferences.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    # trips table
    op.create_table(
        "trips",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("destination", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("total_budget", sa.Float(), nullable=True),
        sa.Column("currency", sa.Text(), server_default="EUR", nullable=False),
        sa.Column("status", sa.Text(), server_default="planned", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_trips_user_created", "trips", ["user_id", "created_at"])

    # trip_days table
    op.create_table(
        "trip_days",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("trip_id", "day_number", name="uq_trip_day_number"),
    )

    # trip_activities table
    op.create_table(
        "trip_activities",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("day_id", sa.Uuid(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("time_slot", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location_name", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("estimated_cost", sa.Float(), nullable=False),
        sa.Column("cost_category", sa.Text(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("suggestion_id", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["day_id"], ["trip_days.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_activity_day_order", "trip_activities", ["day_id", "order_index"])

    # trip_accommodations table
    op.create_table(
        "trip_accommodations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("price_per_night", sa.Float(), nullable=False),
        sa.Column("rating", sa.Float(), server_default="0", nullable=False),
        sa.Column("price_tier", sa.Text(), nullable=False),
        sa.Column("booking_url", sa.Text(), server_default="", nullable=False),
        sa.Column("latitude", sa.Float(), server_default="0", nullable=False),
        sa.Column("longitude", sa.Float(), server_default="0", nullable=False),
        sa.Column("distance_to_center", sa.Text(), server_default="", nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="CASCADE"),
    )

    # trip_conversations table
    op.create_table(
        "trip_conversations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="CASCADE"),
    )

    # trip_todos table
    op.create_table(
        "trip_todos",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_todo_trip_order", "trip_todos", ["trip_id", "order_index"])

    # bucketlist_items table
    op.create_table(
        "bucketlist_items",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.Text(), server_default="destination", nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("destination", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("trip_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="SET NULL"),
    )
    op.create_index("idx_bucketlist_user_created", "bucketlist_items", ["user_id", "created_at"])

    # travel_preferences table
    op.create_table(
        "travel_preferences",
        sa.Column("user_id", sa.Uuid(), primary_key=True),
        sa.Column("default_currency", sa.Text(), server_default="EUR", nullable=False),
        sa.Column("travel_style", sa.Text(), server_default="mid-range", nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("travel_preferences")
    op.drop_index("idx_bucketlist_user_created", table_name="bucketlist_items")
    op.drop_table("bucketlist_items")
    op.drop_index("idx_todo_trip_order", table_name="trip_todos")
    op.drop_table("trip_todos")
    op.drop_table("trip_conversations")
    op.drop_table("trip_accommodations")
    op.drop_index("idx_activity_day_order", table_name="trip_activities")
    op.drop_table("trip_activities")
    op.drop_table("trip_days")
    op.drop_index("idx_trips_user_created", table_name="trips")
    op.drop_table("trips")
