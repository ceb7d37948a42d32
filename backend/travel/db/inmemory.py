"""In-memory implementations of repository interfaces."""

import uuid
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime, timezone

from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import (
    UNSET,
    BucketlistRecord,
    NewTrip,
    PreferencesRecord,
    TodoRecord,
    TripRecord,
    _Unset,
)
from backend.travel.models.common import BucketlistType, PriceTier, TripStatus
from backend.travel.models.tools import ChatMessage
from backend.travel.models.trip import Accommodation, TripDay


class InMemoryTripRepository:
    """In-memory implementation of TripRepository.

    Deleting a trip also drops its todos and unlinks bucketlist items held by
    the given sibling repositories, mirroring the SQL cascade.
    """

    def __init__(
        self,
        todos: "InMemoryTodoRepository | None" = None,
        bucketlist: "InMemoryBucketlistRepository | None" = None,
    ) -> None:
        self._todos = todos
        self._bucketlist = bucketlist
        self._trips: dict[uuid.UUID, TripRecord] = {}
        self._days: dict[uuid.UUID, list[TripDay]] = {}
        self._accommodations: dict[uuid.UUID, list[Accommodation]] = {}
        self._conversations: dict[uuid.UUID, list[ChatMessage]] = {}

    def _owned(self, trip_id: uuid.UUID, ctx: RequestContext) -> TripRecord | None:
        record = self._trips.get(trip_id)

        # Enforce ownership
        if record is None or record.user_id != ctx.user_id:
            return None

        return record

    async def create_trip(self, new: NewTrip, ctx: RequestContext) -> TripRecord:
        """Create a trip owned by the caller."""
        record = TripRecord(
            id=uuid.uuid4(),
            user_id=ctx.user_id,
            title=new.title,
            destination=new.destination,
            start_date=new.start_date,
            end_date=new.end_date,
            total_budget=new.total_budget,
            currency=new.currency,
            status=new.status,
            created_at=datetime.now(timezone.utc),
        )
        self._trips[record.id] = record
        self._days[record.id] = []
        self._accommodations[record.id] = []
        return record

    async def get_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> TripRecord | None:
        """Get a trip by ID."""
        return self._owned(trip_id, ctx)

    async def list_trips(self, ctx: RequestContext) -> list[TripRecord]:
        """List the caller's trips, newest first."""
        # Reverse insertion order first so equal timestamps still list newest first
        results = [t for t in self._trips.values() if t.user_id == ctx.user_id][::-1]
        results.sort(key=lambda t: t.created_at, reverse=True)
        return results

    async def update_trip(
        self,
        trip_id: uuid.UUID,
        ctx: RequestContext,
        *,
        title: str | None = None,
        destination: str | None = None,
        status: TripStatus | None = None,
    ) -> TripRecord | None:
        """Update trip metadata."""
        record = self._owned(trip_id, ctx)
        if record is None:
            return None

        updated = replace(
            record,
            title=title if title is not None else record.title,
            destination=destination if destination is not None else record.destination,
            status=status if status is not None else record.status,
        )
        self._trips[trip_id] = updated
        return updated

    async def delete_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> bool:
        """Delete a trip and everything it owns."""
        if self._owned(trip_id, ctx) is None:
            return False

        del self._trips[trip_id]
        self._days.pop(trip_id, None)
        self._accommodations.pop(trip_id, None)
        self._conversations.pop(trip_id, None)
        if self._todos is not None:
            self._todos.delete_for_trip(trip_id)
        if self._bucketlist is not None:
            self._bucketlist.unlink_trip(trip_id)
        return True

    async def get_days(self, trip_id: uuid.UUID, ctx: RequestContext) -> list[TripDay]:
        """Days of a trip, copied so callers cannot mutate stored state."""
        if self._owned(trip_id, ctx) is None:
            return []
        return [day.model_copy(deep=True) for day in self._days.get(trip_id, [])]

    async def replace_days(
        self, trip_id: uuid.UUID, ctx: RequestContext, days: Sequence[TripDay]
    ) -> None:
        """Replace the full day/activity collection."""
        if self._owned(trip_id, ctx) is None:
            return
        self._days[trip_id] = sorted(
            (day.model_copy(deep=True) for day in days), key=lambda d: d.day_number
        )

    async def get_accommodations(
        self, trip_id: uuid.UUID, ctx: RequestContext
    ) -> list[Accommodation]:
        """Accommodations proposed for a trip."""
        if self._owned(trip_id, ctx) is None:
            return []
        return list(self._accommodations.get(trip_id, []))

    async def save_plan(
        self,
        trip_id: uuid.UUID,
        ctx: RequestContext,
        *,
        title: str,
        destination: str,
        status: TripStatus,
        days: Sequence[TripDay],
        accommodations: Sequence[Accommodation],
    ) -> TripRecord | None:
        """Attach a plan to a trip."""
        record = await self.update_trip(
            trip_id, ctx, title=title, destination=destination, status=status
        )
        if record is None:
            return None

        await self.replace_days(trip_id, ctx, days)
        self._accommodations[trip_id] = list(accommodations)
        return record

    async def save_conversation(
        self, trip_id: uuid.UUID, ctx: RequestContext, messages: Sequence[ChatMessage]
    ) -> None:
        """Overwrite the stored transcript."""
        if self._owned(trip_id, ctx) is None:
            return
        self._conversations[trip_id] = list(messages)

    async def get_conversation(
        self, trip_id: uuid.UUID, ctx: RequestContext
    ) -> list[ChatMessage]:
        """Stored transcript of a trip."""
        if self._owned(trip_id, ctx) is None:
            return []
        return list(self._conversations.get(trip_id, []))


class InMemoryTodoRepository:
    """In-memory implementation of TodoRepository."""

    def __init__(self) -> None:
        self._todos: dict[uuid.UUID, TodoRecord] = {}

    async def list_todos(self, trip_id: uuid.UUID) -> list[TodoRecord]:
        """Todos of a trip ordered by order_index."""
        todos = [t for t in self._todos.values() if t.trip_id == trip_id]
        todos.sort(key=lambda t: t.order_index)
        return todos

    async def add_todo(self, trip_id: uuid.UUID, title: str) -> TodoRecord:
        """Append a todo at the end of the checklist."""
        existing = await self.list_todos(trip_id)
        record = TodoRecord(
            id=uuid.uuid4(),
            trip_id=trip_id,
            title=title,
            completed=False,
            order_index=len(existing),
        )
        self._todos[record.id] = record
        return record

    async def set_completed(
        self, todo_id: uuid.UUID, trip_id: uuid.UUID, completed: bool
    ) -> TodoRecord | None:
        """Toggle a todo."""
        record = self._todos.get(todo_id)
        if record is None or record.trip_id != trip_id:
            return None

        updated = replace(record, completed=completed)
        self._todos[todo_id] = updated
        return updated

    async def delete_todo(self, todo_id: uuid.UUID, trip_id: uuid.UUID) -> bool:
        """Delete a todo."""
        record = self._todos.get(todo_id)
        if record is None or record.trip_id != trip_id:
            return False
        del self._todos[todo_id]
        return True

    def delete_for_trip(self, trip_id: uuid.UUID) -> None:
        """Drop every todo of a trip."""
        for todo_id in [t.id for t in self._todos.values() if t.trip_id == trip_id]:
            del self._todos[todo_id]


class InMemoryBucketlistRepository:
    """In-memory implementation of BucketlistRepository."""

    def __init__(self) -> None:
        self._items: dict[uuid.UUID, BucketlistRecord] = {}

    def _owned(self, item_id: uuid.UUID, ctx: RequestContext) -> BucketlistRecord | None:
        record = self._items.get(item_id)
        if record is None or record.user_id != ctx.user_id:
            return None
        return record

    async def list_items(self, ctx: RequestContext) -> list[BucketlistRecord]:
        """List the caller's items, newest first."""
        items = [i for i in self._items.values() if i.user_id == ctx.user_id][::-1]
        items.sort(key=lambda i: i.created_at, reverse=True)
        return items

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
        record = BucketlistRecord(
            id=uuid.uuid4(),
            user_id=ctx.user_id,
            type=type,
            title=title,
            destination=destination,
            description=description,
            completed=False,
            trip_id=None,
            created_at=datetime.now(timezone.utc),
        )
        self._items[record.id] = record
        return record

    async def get_item(
        self, item_id: uuid.UUID, ctx: RequestContext
    ) -> BucketlistRecord | None:
        """Get an item."""
        return self._owned(item_id, ctx)

    async def update_item(
        self,
        item_id: uuid.UUID,
        ctx: RequestContext,
        *,
        completed: bool | _Unset = UNSET,
        trip_id: uuid.UUID | None | _Unset = UNSET,
    ) -> BucketlistRecord | None:
        """Partially update an item."""
        record = self._owned(item_id, ctx)
        if record is None:
            return None

        updated = replace(
            record,
            completed=record.completed if isinstance(completed, _Unset) else completed,
            trip_id=record.trip_id if isinstance(trip_id, _Unset) else trip_id,
        )
        self._items[item_id] = updated
        return updated

    async def delete_item(self, item_id: uuid.UUID, ctx: RequestContext) -> bool:
        """Delete an item."""
        if self._owned(item_id, ctx) is None:
            return False
        del self._items[item_id]
        return True

    def unlink_trip(self, trip_id: uuid.UUID) -> None:
        """Clear links to a deleted trip."""
        for item in list(self._items.values()):
            if item.trip_id == trip_id:
                self._items[item.id] = replace(item, trip_id=None)


class InMemoryPreferencesRepository:
    """In-memory implementation of PreferencesRepository."""

    def __init__(self) -> None:
        self._prefs: dict[uuid.UUID, PreferencesRecord] = {}

    async def get_preferences(self, ctx: RequestContext) -> PreferencesRecord | None:
        """Stored preferences."""
        return self._prefs.get(ctx.user_id)

    async def upsert_preferences(
        self, ctx: RequestContext, *, default_currency: str, travel_style: PriceTier
    ) -> PreferencesRecord:
        """Create or replace preferences."""
        record = PreferencesRecord(
            user_id=ctx.user_id,
            default_currency=default_currency,
            travel_style=travel_style,
        )
        self._prefs[ctx.user_id] = record
        return record
