"""SQL implementations of repository interfaces."""

import logging
import uuid
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import pydantic
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backend.travel.db.context import RequestContext
from backend.travel.db.models import (
    BucketlistItem,
    TravelPreferences,
    Trip,
    TripAccommodationRow,
    TripActivityRow,
    TripConversationRow,
    TripDayRow,
    TripTodo,
)
from backend.travel.db.queries import day_ids_of_trip, query_bucketlist, query_trips
from backend.travel.db.repositories import (
    UNSET,
    BucketlistRecord,
    NewTrip,
    PreferencesRecord,
    TodoRecord,
    TripRecord,
    _Unset,
)
from backend.travel.errors import StorageError
from backend.travel.models.common import BucketlistType, PriceTier, TripStatus
from backend.travel.models.tools import ChatMessage
from backend.travel.models.trip import Accommodation, TripActivity, TripDay

logger = logging.getLogger(__name__)


@asynccontextmanager
async def storage_errors(session: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Roll back and surface database failures as ``StorageError``."""
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            f"Storage failure during {operation}",
            extra={"structured": {"operation": operation, "error": type(e).__name__}},
        )
        raise StorageError(f"Failed to {operation}") from e


def _trip_record(row: Trip) -> TripRecord:
    return TripRecord(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        destination=row.destination,
        start_date=row.start_date,
        end_date=row.end_date,
        total_budget=row.total_budget,
        currency=row.currency,
        status=TripStatus(row.status),
        created_at=row.created_at,
    )


def _day_from_row(row: TripDayRow) -> TripDay:
    """Read a stored day back through the itinerary models."""
    try:
        return TripDay(
            day_number=row.day_number,
            title=row.title,
            activities=[
                TripActivity(
                    title=a.title,
                    description=a.description,
                    time_slot=a.time_slot,
                    location_name=a.location_name,
                    latitude=a.latitude,
                    longitude=a.longitude,
                    estimated_cost=a.estimated_cost,
                    cost_category=a.cost_category,
                    duration_minutes=a.duration_minutes,
                    suggestion_id=a.suggestion_id,
                )
                for a in row.activities
            ],
        )
    except pydantic.ValidationError as e:
        raise StorageError(f"Stored day {row.day_number} of trip {row.trip_id} is malformed") from e


def _day_rows(trip_id: uuid.UUID, days: Sequence[TripDay]) -> list[TripDayRow]:
    rows = []
    for day in days:
        rows.append(
            TripDayRow(
                id=uuid.uuid4(),
                trip_id=trip_id,
                day_number=day.day_number,
                title=day.title,
                activities=[
                    TripActivityRow(
                        id=uuid.uuid4(),
                        order_index=idx,
                        time_slot=act.time_slot.value,
                        title=act.title,
                        description=act.description,
                        location_name=act.location_name,
                        latitude=act.latitude,
                        longitude=act.longitude,
                        estimated_cost=act.estimated_cost,
                        cost_category=act.cost_category.value,
                        duration_minutes=act.duration_minutes,
                        suggestion_id=act.suggestion_id,
                    )
                    for idx, act in enumerate(day.activities)
                ],
            )
        )
    return rows


class SqlTripRepository:
    """SQL implementation of TripRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _owned(self, trip_id: uuid.UUID, ctx: RequestContext) -> Trip | None:
        result = await self._session.execute(query_trips(ctx).where(Trip.id == trip_id))
        return result.scalar_one_or_none()

    async def _clear_itinerary(self, trip_id: uuid.UUID) -> None:
        await self._session.execute(
            delete(TripActivityRow).where(TripActivityRow.day_id.in_(day_ids_of_trip(trip_id)))
        )
        await self._session.execute(delete(TripDayRow).where(TripDayRow.trip_id == trip_id))

    async def create_trip(self, new: NewTrip, ctx: RequestContext) -> TripRecord:
        """Create a trip owned by the caller."""
        async with storage_errors(self._session, "create trip"):
            trip = Trip(
                id=uuid.uuid4(),
                user_id=ctx.user_id,
                title=new.title,
                destination=new.destination,
                start_date=new.start_date,
                end_date=new.end_date,
                total_budget=new.total_budget,
                currency=new.currency,
                status=new.status.value,
            )
            self._session.add(trip)
            await self._session.commit()
            return _trip_record(trip)

    async def get_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> TripRecord | None:
        """Get a trip by ID."""
        async with storage_errors(self._session, "load trip"):
            trip = await self._owned(trip_id, ctx)
            return _trip_record(trip) if trip else None

    async def list_trips(self, ctx: RequestContext) -> list[TripRecord]:
        """List the caller's trips, newest first."""
        async with storage_errors(self._session, "list trips"):
            result = await self._session.execute(
                query_trips(ctx).order_by(Trip.created_at.desc())
            )
            return [_trip_record(t) for t in result.scalars().all()]

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
        async with storage_errors(self._session, "update trip"):
            trip = await self._owned(trip_id, ctx)
            if trip is None:
                return None

            if title is not None:
                trip.title = title
            if destination is not None:
                trip.destination = destination
            if status is not None:
                trip.status = status.value

            await self._session.commit()
            return _trip_record(trip)

    async def delete_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> bool:
        """Delete a trip and everything it owns."""
        async with storage_errors(self._session, "delete trip"):
            trip = await self._owned(trip_id, ctx)
            if trip is None:
                return False

            await self._clear_itinerary(trip_id)
            for table in (TripAccommodationRow, TripConversationRow, TripTodo):
                await self._session.execute(delete(table).where(table.trip_id == trip_id))
            await self._session.execute(
                update(BucketlistItem)
                .where(BucketlistItem.trip_id == trip_id)
                .values(trip_id=None)
            )
            await self._session.execute(delete(Trip).where(Trip.id == trip_id))
            await self._session.commit()
            return True

    async def get_days(self, trip_id: uuid.UUID, ctx: RequestContext) -> list[TripDay]:
        """Days of a trip ordered by day number."""
        async with storage_errors(self._session, "load itinerary"):
            if await self._owned(trip_id, ctx) is None:
                return []

            result = await self._session.execute(
                select(TripDayRow)
                .where(TripDayRow.trip_id == trip_id)
                .options(selectinload(TripDayRow.activities))
                .order_by(TripDayRow.day_number)
                .execution_options(populate_existing=True)
            )
            return [_day_from_row(row) for row in result.scalars().all()]

    async def replace_days(
        self, trip_id: uuid.UUID, ctx: RequestContext, days: Sequence[TripDay]
    ) -> None:
        """Replace the full day/activity collection in one transaction."""
        async with storage_errors(self._session, "save itinerary"):
            if await self._owned(trip_id, ctx) is None:
                return

            await self._clear_itinerary(trip_id)
            self._session.add_all(_day_rows(trip_id, days))
            await self._session.commit()

    async def get_accommodations(
        self, trip_id: uuid.UUID, ctx: RequestContext
    ) -> list[Accommodation]:
        """Accommodations proposed for a trip."""
        async with storage_errors(self._session, "load accommodations"):
            if await self._owned(trip_id, ctx) is None:
                return []

            result = await self._session.execute(
                select(TripAccommodationRow)
                .where(TripAccommodationRow.trip_id == trip_id)
                .order_by(TripAccommodationRow.position)
            )
            return [
                Accommodation(
                    name=row.name,
                    price_per_night=row.price_per_night,
                    rating=row.rating,
                    price_tier=row.price_tier,
                    booking_url=row.booking_url,
                    latitude=row.latitude,
                    longitude=row.longitude,
                    distance_to_center=row.distance_to_center,
                )
                for row in result.scalars().all()
            ]

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
        """Attach a plan: metadata, days and accommodations in one commit."""
        async with storage_errors(self._session, "save trip plan"):
            trip = await self._owned(trip_id, ctx)
            if trip is None:
                return None

            trip.title = title
            trip.destination = destination
            trip.status = status.value

            await self._clear_itinerary(trip_id)
            await self._session.execute(
                delete(TripAccommodationRow).where(TripAccommodationRow.trip_id == trip_id)
            )
            self._session.add_all(_day_rows(trip_id, days))
            self._session.add_all(
                TripAccommodationRow(
                    id=uuid.uuid4(),
                    trip_id=trip_id,
                    position=idx,
                    name=acc.name,
                    price_per_night=acc.price_per_night,
                    rating=acc.rating,
                    price_tier=acc.price_tier.value,
                    booking_url=acc.booking_url,
                    latitude=acc.latitude,
                    longitude=acc.longitude,
                    distance_to_center=acc.distance_to_center,
                )
                for idx, acc in enumerate(accommodations)
            )
            await self._session.commit()
            return _trip_record(trip)

    async def save_conversation(
        self, trip_id: uuid.UUID, ctx: RequestContext, messages: Sequence[ChatMessage]
    ) -> None:
        """Overwrite the stored transcript."""
        async with storage_errors(self._session, "save conversation"):
            if await self._owned(trip_id, ctx) is None:
                return

            await self._session.execute(
                delete(TripConversationRow).where(TripConversationRow.trip_id == trip_id)
            )
            self._session.add_all(
                TripConversationRow(
                    id=uuid.uuid4(),
                    trip_id=trip_id,
                    position=idx,
                    role=msg.role,
                    content=msg.content,
                )
                for idx, msg in enumerate(messages)
            )
            await self._session.commit()

    async def get_conversation(
        self, trip_id: uuid.UUID, ctx: RequestContext
    ) -> list[ChatMessage]:
        """Stored transcript of a trip."""
        async with storage_errors(self._session, "load conversation"):
            if await self._owned(trip_id, ctx) is None:
                return []

            result = await self._session.execute(
                select(TripConversationRow)
                .where(TripConversationRow.trip_id == trip_id)
                .order_by(TripConversationRow.position)
            )
            return [
                ChatMessage(role=row.role, content=row.content)  # type: ignore[arg-type]
                for row in result.scalars().all()
            ]


def _todo_record(row: TripTodo) -> TodoRecord:
    return TodoRecord(
        id=row.id,
        trip_id=row.trip_id,
        title=row.title,
        completed=row.completed,
        order_index=row.order_index,
    )


class SqlTodoRepository:
    """SQL implementation of TodoRepository.

    Callers verify trip ownership before reaching this repository.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get(self, todo_id: uuid.UUID, trip_id: uuid.UUID) -> TripTodo | None:
        result = await self._session.execute(
            select(TripTodo).where(TripTodo.id == todo_id, TripTodo.trip_id == trip_id)
        )
        return result.scalar_one_or_none()

    async def list_todos(self, trip_id: uuid.UUID) -> list[TodoRecord]:
        """Todos of a trip ordered by order_index."""
        async with storage_errors(self._session, "list todos"):
            result = await self._session.execute(
                select(TripTodo).where(TripTodo.trip_id == trip_id).order_by(TripTodo.order_index)
            )
            return [_todo_record(t) for t in result.scalars().all()]

    async def add_todo(self, trip_id: uuid.UUID, title: str) -> TodoRecord:
        """Append a todo at the end of the checklist."""
        async with storage_errors(self._session, "add todo"):
            count = await self._session.scalar(
                select(func.count()).select_from(TripTodo).where(TripTodo.trip_id == trip_id)
            )
            todo = TripTodo(
                id=uuid.uuid4(),
                trip_id=trip_id,
                title=title,
                completed=False,
                order_index=count or 0,
            )
            self._session.add(todo)
            await self._session.commit()
            return _todo_record(todo)

    async def set_completed(
        self, todo_id: uuid.UUID, trip_id: uuid.UUID, completed: bool
    ) -> TodoRecord | None:
        """Toggle a todo."""
        async with storage_errors(self._session, "update todo"):
            todo = await self._get(todo_id, trip_id)
            if todo is None:
                return None
            todo.completed = completed
            await self._session.commit()
            return _todo_record(todo)

    async def delete_todo(self, todo_id: uuid.UUID, trip_id: uuid.UUID) -> bool:
        """Delete a todo."""
        async with storage_errors(self._session, "delete todo"):
            todo = await self._get(todo_id, trip_id)
            if todo is None:
                return False
            await self._session.delete(todo)
            await self._session.commit()
            return True


def _bucketlist_record(row: BucketlistItem) -> BucketlistRecord:
    return BucketlistRecord(
        id=row.id,
        user_id=row.user_id,
        type=BucketlistType(row.type),
        title=row.title,
        destination=row.destination,
        description=row.description,
        completed=row.completed,
        trip_id=row.trip_id,
        created_at=row.created_at,
    )


class SqlBucketlistRepository:
    """SQL implementation of BucketlistRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _owned(self, item_id: uuid.UUID, ctx: RequestContext) -> BucketlistItem | None:
        result = await self._session.execute(
            query_bucketlist(ctx).where(BucketlistItem.id == item_id)
        )
        return result.scalar_one_or_none()

    async def list_items(self, ctx: RequestContext) -> list[BucketlistRecord]:
        """List the caller's items, newest first."""
        async with storage_errors(self._session, "list bucketlist"):
            result = await self._session.execute(
                query_bucketlist(ctx).order_by(BucketlistItem.created_at.desc())
            )
            return [_bucketlist_record(i) for i in result.scalars().all()]

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
        async with storage_errors(self._session, "create bucketlist item"):
            item = BucketlistItem(
                id=uuid.uuid4(),
                user_id=ctx.user_id,
                type=type.value,
                title=title,
                destination=destination,
                description=description,
                completed=False,
                trip_id=None,
            )
            self._session.add(item)
            await self._session.commit()
            return _bucketlist_record(item)

    async def get_item(
        self, item_id: uuid.UUID, ctx: RequestContext
    ) -> BucketlistRecord | None:
        """Get an item."""
        async with storage_errors(self._session, "load bucketlist item"):
            item = await self._owned(item_id, ctx)
            return _bucketlist_record(item) if item else None

    async def update_item(
        self,
        item_id: uuid.UUID,
        ctx: RequestContext,
        *,
        completed: bool | _Unset = UNSET,
        trip_id: uuid.UUID | None | _Unset = UNSET,
    ) -> BucketlistRecord | None:
        """Partially update an item."""
        async with storage_errors(self._session, "update bucketlist item"):
            item = await self._owned(item_id, ctx)
            if item is None:
                return None

            if not isinstance(completed, _Unset):
                item.completed = completed
            if not isinstance(trip_id, _Unset):
                item.trip_id = trip_id

            await self._session.commit()
            return _bucketlist_record(item)

    async def delete_item(self, item_id: uuid.UUID, ctx: RequestContext) -> bool:
        """Delete an item."""
        async with storage_errors(self._session, "delete bucketlist item"):
            item = await self._owned(item_id, ctx)
            if item is None:
                return False
            await self._session.delete(item)
            await self._session.commit()
            return True


class SqlPreferencesRepository:
    """SQL implementation of PreferencesRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_preferences(self, ctx: RequestContext) -> PreferencesRecord | None:
        """Stored preferences."""
        async with storage_errors(self._session, "load preferences"):
            row = await self._session.get(TravelPreferences, ctx.user_id)
            if row is None:
                return None
            return PreferencesRecord(
                user_id=row.user_id,
                default_currency=row.default_currency,
                travel_style=PriceTier(row.travel_style),
            )

    async def upsert_preferences(
        self, ctx: RequestContext, *, default_currency: str, travel_style: PriceTier
    ) -> PreferencesRecord:
        """Create or replace preferences."""
        async with storage_errors(self._session, "save preferences"):
            row = await self._session.get(TravelPreferences, ctx.user_id)
            if row is None:
                row = TravelPreferences(user_id=ctx.user_id)
                self._session.add(row)
            row.default_currency = default_currency
            row.travel_style = travel_style.value
            await self._session.commit()
            return PreferencesRecord(
                user_id=ctx.user_id,
                default_currency=default_currency,
                travel_style=travel_style,
            )
