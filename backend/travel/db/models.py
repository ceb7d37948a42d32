"""SQLAlchemy ORM models for trips, itineraries, checklists and wishlists."""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Trip(Base):
    """Trip table - user-owned travel plan header."""

    __tablename__ = "trips"
    __table_args__ = (Index("idx_trips_user_created", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_budget: Mapped[float | None] = mapped_column(Float, nullable=True)
    currency: Mapped[str] = mapped_column(Text, nullable=False, default="EUR")
    status: Mapped[str] = mapped_column(Text, nullable=False, default="planned")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # Relationships
    days: Mapped[list["TripDayRow"]] = relationship(
        "TripDayRow",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripDayRow.day_number",
    )
    accommodations: Mapped[list["TripAccommodationRow"]] = relationship(
        "TripAccommodationRow", back_populates="trip", cascade="all, delete-orphan"
    )
    conversation: Mapped[list["TripConversationRow"]] = relationship(
        "TripConversationRow",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripConversationRow.position",
    )
    todos: Mapped[list["TripTodo"]] = relationship(
        "TripTodo", back_populates="trip", cascade="all, delete-orphan"
    )


class TripDayRow(Base):
    """Trip day table - one numbered day of a trip."""

    __tablename__ = "trip_days"
    __table_args__ = (UniqueConstraint("trip_id", "day_number", name="uq_trip_day_number"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="days")
    activities: Mapped[list["TripActivityRow"]] = relationship(
        "TripActivityRow",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="TripActivityRow.order_index",
    )


class TripActivityRow(Base):
    """Trip activity table - owned by exactly one day."""

    __tablename__ = "trip_activities"
    __table_args__ = (Index("idx_activity_day_order", "day_id", "order_index"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    day_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip_days.id", ondelete="CASCADE"), nullable=False
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    time_slot: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_name: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    estimated_cost: Mapped[float] = mapped_column(Float, nullable=False)
    cost_category: Mapped[str] = mapped_column(Text, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    suggestion_id: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    day: Mapped["TripDayRow"] = relationship("TripDayRow", back_populates="activities")


class TripAccommodationRow(Base):
    """Accommodation options proposed with a plan."""

    __tablename__ = "trip_accommodations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price_per_night: Mapped[float] = mapped_column(Float, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    price_tier: Mapped[str] = mapped_column(Text, nullable=False)
    booking_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    latitude: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    longitude: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    distance_to_center: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="accommodations")


class TripConversationRow(Base):
    """Stored planning transcript, overwritten on every plan attachment."""

    __tablename__ = "trip_conversations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="conversation")


class TripTodo(Base):
    """Trip-scoped ordered checklist."""

    __tablename__ = "trip_todos"
    __table_args__ = (Index("idx_todo_trip_order", "trip_id", "order_index"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="todos")


class BucketlistItem(Base):
    """Wishlist entries, optionally linked to the trip they became."""

    __tablename__ = "bucketlist_items"
    __table_args__ = (Index("idx_bucketlist_user_created", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False, default="destination")
    title: Mapped[str] = mapped_column(Text, nullable=False)
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    trip_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("trips.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )


class TravelPreferences(Base):
    """Per-user travel defaults."""

    __tablename__ = "travel_preferences"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    default_currency: Mapped[str] = mapped_column(Text, nullable=False, default="EUR")
    travel_style: Mapped[str] = mapped_column(Text, nullable=False, default="mid-range")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
