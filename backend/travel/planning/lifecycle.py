"""Trip draft lifecycle - creation, plan attachment and status transitions."""

from typing import Any
from uuid import UUID

from backend.travel.config import get_settings
from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import (
    NewTrip,
    PreferencesRepository,
    TripRecord,
    TripRepository,
)
from backend.travel.errors import InvalidTransitionError, NotFoundError
from backend.travel.models.common import TRIP_STATUS_ORDER, TripStatus
from backend.travel.planning.contract import require_valid, validate_plan
from backend.travel.planning.itinerary import ItineraryStore
from backend.travel.utils.logging import planning_log


def next_status(current: TripStatus) -> TripStatus | None:
    """The only status a trip may move to next, or None at the end."""
    idx = TRIP_STATUS_ORDER.index(current)
    if idx + 1 < len(TRIP_STATUS_ORDER):
        return TRIP_STATUS_ORDER[idx + 1]
    return None


class TripLifecycle:
    """Creates trips and moves them through their statuses."""

    def __init__(
        self,
        trips: TripRepository,
        itinerary: ItineraryStore,
        preferences: PreferencesRepository | None = None,
    ) -> None:
        self._trips = trips
        self._itinerary = itinerary
        self._preferences = preferences

    async def _default_currency(self, ctx: RequestContext) -> str:
        if self._preferences is not None:
            prefs = await self._preferences.get_preferences(ctx)
            if prefs is not None:
                return prefs.default_currency
        return get_settings().default_currency

    async def create_trip(self, new: NewTrip, ctx: RequestContext) -> TripRecord:
        """Create a trip with explicit field values."""
        record = await self._trips.create_trip(new, ctx)
        planning_log.log_operation(
            "create_trip", "success", trip_id=record.id, user_id=ctx.user_id
        )
        return record

    async def ensure_draft(
        self,
        ctx: RequestContext,
        existing_id: UUID | None = None,
        *,
        title: str = "New Trip",
        destination: str = "TBD",
    ) -> UUID:
        """Return ``existing_id`` if it names an owned trip, else create one.

        Args:
            ctx: Request context
            existing_id: Trip the caller is already working on, if any
            title: Title for a newly created trip
            destination: Destination for a newly created trip

        Returns:
            ID of the existing or newly created trip
        """
        if existing_id is not None:
            existing = await self._trips.get_trip(existing_id, ctx)
            if existing is not None:
                return existing.id

        record = await self.create_trip(
            NewTrip(
                title=title,
                destination=destination,
                currency=await self._default_currency(ctx),
                status=TripStatus.planned,
            ),
            ctx,
        )
        return record.id

    async def attach_plan(self, trip_id: UUID, ctx: RequestContext, plan: Any) -> TripRecord:
        """Validate a plan and make it the trip's itinerary.

        Days, activities and accommodations are replaced wholesale, and the
        trip takes the plan's title and destination. A draft trip becomes
        planned; later statuses are kept.

        Raises:
            ValidationError: If the plan violates the itinerary schema
            NotFoundError: If the trip is missing
        """
        parsed = require_valid(validate_plan(plan), "Invalid trip plan")

        trip = await self._trips.get_trip(trip_id, ctx)
        if trip is None:
            raise NotFoundError(f"Trip {trip_id} not found")

        status = TripStatus.planned if trip.status == TripStatus.draft else trip.status
        record = await self._itinerary.install_plan(trip_id, ctx, parsed, status)

        planning_log.log_operation(
            "attach_plan",
            "attached",
            trip_id=trip_id,
            user_id=ctx.user_id,
            days=len(parsed.days),
            destination=parsed.destination,
        )
        return record

    async def advance_status(
        self, trip_id: UUID, ctx: RequestContext, target: TripStatus
    ) -> TripRecord:
        """Move a trip one step forward.

        Raises:
            InvalidTransitionError: If ``target`` is not the next status
            NotFoundError: If the trip is missing
        """
        trip = await self._trips.get_trip(trip_id, ctx)
        if trip is None:
            raise NotFoundError(f"Trip {trip_id} not found")

        allowed = next_status(trip.status)
        if target != allowed:
            raise InvalidTransitionError(
                f"Cannot move trip from {trip.status.value} to {target.value}"
            )

        record = await self._trips.update_trip(trip_id, ctx, status=target)
        if record is None:
            raise NotFoundError(f"Trip {trip_id} not found")

        planning_log.log_operation(
            "advance_status",
            "success",
            trip_id=trip_id,
            user_id=ctx.user_id,
            status=target.value,
        )
        return record

    async def delete_trip(self, trip_id: UUID, ctx: RequestContext) -> bool:
        """Delete a trip with its todos, and unlink bucketlist items from it."""
        deleted = await self._trips.delete_trip(trip_id, ctx)
        planning_log.log_operation(
            "delete_trip", "success" if deleted else "missing", trip_id=trip_id, user_id=ctx.user_id
        )
        return deleted
