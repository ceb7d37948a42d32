"""Repository protocol interfaces for data access."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from backend.travel.db.context import RequestContext
from backend.travel.models.common import BucketlistType, PriceTier, TripStatus
from backend.travel.models.tools import ChatMessage
from backend.travel.models.trip import Accommodation, TripDay


class _Unset:
    """Marker for partial updates where ``None`` is a meaningful value."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass
class TripRecord:
    """Trip data record."""

    id: UUID
    user_id: UUID
    title: str
    destination: str
    start_date: date | None
    end_date: date | None
    total_budget: float | None
    currency: str
    status: TripStatus
    created_at: datetime


@dataclass
class NewTrip:
    """Fields for creating a trip; defaults match the public API."""

    title: str = "New Trip"
    destination: str = "TBD"
    start_date: date | None = None
    end_date: date | None = None
    total_budget: float | None = None
    currency: str = "EUR"
    status: TripStatus = TripStatus.planned


@dataclass
class TodoRecord:
    """Trip checklist entry."""

    id: UUID
    trip_id: UUID
    title: str
    completed: bool
    order_index: int


@dataclass
class BucketlistRecord:
    """Wishlist entry."""

    id: UUID
    user_id: UUID
    type: BucketlistType
    title: str
    destination: str
    description: str | None
    completed: bool
    trip_id: UUID | None
    created_at: datetime


@dataclass
class PreferencesRecord:
    """Per-user travel defaults."""

    user_id: UUID
    default_currency: str
    travel_style: PriceTier


class TripRepository(Protocol):
    """Repository for trips and their itinerary."""

    async def create_trip(self, new: NewTrip, ctx: RequestContext) -> TripRecord:
        """Create a trip owned by the caller.

        Args:
            new: Field values
            ctx: Request context

        Returns:
            Created record
        """
        ...

    async def get_trip(self, trip_id: UUID, ctx: RequestContext) -> TripRecord | None:
        """Get a trip by ID, or None if missing or owned by someone else."""
        ...

    async def list_trips(self, ctx: RequestContext) -> list[TripRecord]:
        """List the caller's trips, newest first."""
        ...

    async def update_trip(
        self,
        trip_id: UUID,
        ctx: RequestContext,
        *,
        title: str | None = None,
        destination: str | None = None,
        status: TripStatus | None = None,
    ) -> TripRecord | None:
        """Update trip metadata. Returns None if not found."""
        ...

    async def delete_trip(self, trip_id: UUID, ctx: RequestContext) -> bool:
        """Delete a trip with everything it owns in one unit of work.

        Days, activities, accommodations, conversation and todos go with the
        trip; bucketlist items linked to it are unlinked.

        Returns:
            True if a trip was deleted
        """
        ...

    async def get_days(self, trip_id: UUID, ctx: RequestContext) -> list[TripDay]:
        """Days of a trip ordered by day number, activities in stored order."""
        ...

    async def replace_days(
        self, trip_id: UUID, ctx: RequestContext, days: Sequence[TripDay]
    ) -> None:
        """Replace the full day/activity collection in one write."""
        ...

    async def get_accommodations(
        self, trip_id: UUID, ctx: RequestContext
    ) -> list[Accommodation]:
        """Accommodations proposed for a trip."""
        ...

    async def save_plan(
        self,
        trip_id: UUID,
        ctx: RequestContext,
        *,
        title: str,
        destination: str,
        status: TripStatus,
        days: Sequence[TripDay],
        accommodations: Sequence[Accommodation],
    ) -> TripRecord | None:
        """Attach a plan: trip metadata, days and accommodations in one write."""
        ...

    async def save_conversation(
        self, trip_id: UUID, ctx: RequestContext, messages: Sequence[ChatMessage]
    ) -> None:
        """Overwrite the stored planning transcript of a trip."""
        ...

    async def get_conversation(self, trip_id: UUID, ctx: RequestContext) -> list[ChatMessage]:
        """Stored planning transcript of a trip."""
        ...


class TodoRepository(Protocol):
    """Repository for trip checklists."""

    async def list_todos(self, trip_id: UUID) -> list[TodoRecord]:
        """Todos of a trip ordered by order_index."""
        ...

    async def add_todo(self, trip_id: UUID, title: str) -> TodoRecord:
        """Append a todo at the end of the checklist."""
        ...

    async def set_completed(
        self, todo_id: UUID, trip_id: UUID, completed: bool
    ) -> TodoRecord | None:
        """Toggle a todo. Returns None if not found in the trip."""
        ...

    async def delete_todo(self, todo_id: UUID, trip_id: UUID) -> bool:
        """Delete a todo. Returns True if deleted."""
        ...


class BucketlistRepository(Protocol):
    """Repository for wishlist entries."""

    async def list_items(self, ctx: RequestContext) -> list[BucketlistRecord]:
        """List the caller's items, newest first."""
        ...

    async def create_item(
        self,
        ctx: RequestContext,
        *,
        type: BucketlistType,
        title: str,
        destination: str,
        description: str | None,
    ) -> BucketlistRecord:
        """Create a wishlist entry."""
        ...

    async def get_item(self, item_id: UUID, ctx: RequestContext) -> BucketlistRecord | None:
        """Get an item, or None if missing or foreign."""
        ...

    async def update_item(
        self,
        item_id: UUID,
        ctx: RequestContext,
        *,
        completed: "bool | _Unset" = UNSET,
        trip_id: "UUID | None | _Unset" = UNSET,
    ) -> BucketlistRecord | None:
        """Partially update an item. Returns None if not found."""
        ...

    async def delete_item(self, item_id: UUID, ctx: RequestContext) -> bool:
        """Delete an item. Returns True if deleted."""
        ...


class PreferencesRepository(Protocol):
    """Repository for per-user travel preferences."""

    async def get_preferences(self, ctx: RequestContext) -> PreferencesRecord | None:
        """Stored preferences, or None if the user never saved any."""
        ...

    async def upsert_preferences(
        self, ctx: RequestContext, *, default_currency: str, travel_style: PriceTier
    ) -> PreferencesRecord:
        """Create or replace the caller's preferences."""
        ...
