"""Itinerary store - the single mutation path for a trip's days and activities.

Every mutation loads the current days, applies one change, validates the
result and writes the whole collection back in one repository call. The
budget is recomputed from scratch after each write.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import TripRecord, TripRepository
from backend.travel.errors import FieldError, NotFoundError, ValidationError
from backend.travel.models.budget import BudgetStatus
from backend.travel.models.common import SLOT_ORDER, TripStatus
from backend.travel.models.trip import TripActivity, TripDay, TripPlan, slot_sorted
from backend.travel.planning.budget import compute_breakdown, evaluate_budget
from backend.travel.planning.contract import require_valid, validate_activity
from backend.travel.planning.suggestions import find_suggestion
from backend.travel.utils.logging import planning_log
from backend.travel.utils.metrics import PrometheusPlanningMetrics, metrics


@dataclass
class SuggestionAcceptance:
    """Result of accepting a catalog suggestion into a trip."""

    already_added: bool
    days: list[TripDay]
    budget: BudgetStatus


def insert_by_slot(activities: list[TripActivity], activity: TripActivity) -> list[TripActivity]:
    """Insert after the last activity of the same or an earlier slot."""
    rank = SLOT_ORDER[activity.time_slot]
    position = 0
    for idx, existing in enumerate(activities):
        if SLOT_ORDER[existing.time_slot] <= rank:
            position = idx + 1
    return activities[:position] + [activity] + activities[position:]


def require_contiguous(days: Sequence[TripDay]) -> None:
    """Raise unless day numbers are exactly 1..N."""
    numbers = sorted(day.day_number for day in days)
    if numbers != list(range(1, len(days) + 1)):
        raise ValidationError(
            "Invalid itinerary",
            fields=[
                FieldError(
                    loc="days",
                    message=f"day numbers must be unique and contiguous from 1, got {numbers}",
                )
            ],
        )


def suggestion_ids(days: Sequence[TripDay]) -> set[str]:
    return {
        act.suggestion_id
        for day in days
        for act in day.activities
        if act.suggestion_id is not None
    }


class ItineraryStore:
    """Owns reads and writes of a trip's day/activity collection."""

    def __init__(
        self,
        trips: TripRepository,
        planning_metrics: PrometheusPlanningMetrics = metrics,
    ) -> None:
        self._trips = trips
        self._metrics = planning_metrics

    async def _trip(self, trip_id: UUID, ctx: RequestContext) -> TripRecord:
        trip = await self._trips.get_trip(trip_id, ctx)
        if trip is None:
            raise NotFoundError(f"Trip {trip_id} not found")
        return trip

    async def _budget_for(
        self, trip: TripRecord, ctx: RequestContext, days: Sequence[TripDay]
    ) -> BudgetStatus:
        accommodations = await self._trips.get_accommodations(trip.id, ctx)
        breakdown = compute_breakdown(days, accommodations)
        return evaluate_budget(breakdown, trip.total_budget, trip.currency)

    async def _write(
        self,
        operation: str,
        trip: TripRecord,
        ctx: RequestContext,
        days: list[TripDay],
    ) -> BudgetStatus:
        await self._trips.replace_days(trip.id, ctx, days)
        self._metrics.inc_mutation(operation)
        planning_log.log_operation(
            operation, "success", trip_id=trip.id, user_id=ctx.user_id, days=len(days)
        )
        return await self._budget_for(trip, ctx, days)

    @staticmethod
    def _locate(days: list[TripDay], day_number: int) -> TripDay:
        for day in days:
            if day.day_number == day_number:
                return day
        raise NotFoundError(f"Day {day_number} not found")

    @staticmethod
    def _check_index(day: TripDay, index: int) -> None:
        if index < 0 or index >= len(day.activities):
            raise NotFoundError(f"Activity {index} not found on day {day.day_number}")

    async def get_days(self, trip_id: UUID, ctx: RequestContext) -> list[TripDay]:
        """Current days of an owned trip."""
        await self._trip(trip_id, ctx)
        return await self._trips.get_days(trip_id, ctx)

    async def budget(self, trip_id: UUID, ctx: RequestContext) -> BudgetStatus:
        """Freshly computed budget status of a trip."""
        trip = await self._trip(trip_id, ctx)
        days = await self._trips.get_days(trip_id, ctx)
        return await self._budget_for(trip, ctx, days)

    async def add_activity(
        self, trip_id: UUID, ctx: RequestContext, day_number: int, activity: Any
    ) -> BudgetStatus:
        """Add an activity to a day, keeping slot order.

        A missing day is created as ``"Day N"`` when ``N`` directly follows the
        last existing day.

        Args:
            trip_id: Trip to modify
            ctx: Request context
            day_number: Target day
            activity: Activity payload or model

        Returns:
            Budget status after the write

        Raises:
            ValidationError: If the activity is invalid or the day would leave a gap
            NotFoundError: If the trip is missing
        """
        parsed = require_valid(validate_activity(activity), "Invalid activity")
        trip = await self._trip(trip_id, ctx)
        days = await self._trips.get_days(trip_id, ctx)

        if not any(day.day_number == day_number for day in days):
            if day_number != len(days) + 1:
                raise ValidationError(
                    "Invalid day number",
                    fields=[
                        FieldError(
                            loc="day_number",
                            message=f"day {day_number} does not exist and is not day {len(days) + 1}",
                        )
                    ],
                )
            days.append(TripDay(day_number=day_number, title=f"Day {day_number}"))

        day = self._locate(days, day_number)
        day.activities = insert_by_slot(day.activities, parsed)
        return await self._write("add_activity", trip, ctx, days)

    async def edit_activity(
        self,
        trip_id: UUID,
        ctx: RequestContext,
        day_number: int,
        index: int,
        activity: Any,
    ) -> BudgetStatus:
        """Replace one activity, then re-order the day by slot."""
        parsed = require_valid(validate_activity(activity), "Invalid activity")
        trip = await self._trip(trip_id, ctx)
        days = await self._trips.get_days(trip_id, ctx)

        day = self._locate(days, day_number)
        self._check_index(day, index)

        # Edits from the form carry no catalog link; keep the original one
        if parsed.suggestion_id is None:
            parsed.suggestion_id = day.activities[index].suggestion_id

        activities = list(day.activities)
        activities[index] = parsed
        day.activities = slot_sorted(activities)
        return await self._write("edit_activity", trip, ctx, days)

    async def delete_activity(
        self, trip_id: UUID, ctx: RequestContext, day_number: int, index: int
    ) -> BudgetStatus:
        """Remove one activity."""
        trip = await self._trip(trip_id, ctx)
        days = await self._trips.get_days(trip_id, ctx)

        day = self._locate(days, day_number)
        self._check_index(day, index)
        del day.activities[index]
        return await self._write("delete_activity", trip, ctx, days)

    async def replace_days(
        self, trip_id: UUID, ctx: RequestContext, days: Sequence[TripDay]
    ) -> BudgetStatus:
        """Replace the whole day collection."""
        require_contiguous(days)
        trip = await self._trip(trip_id, ctx)
        return await self._write("replace_days", trip, ctx, sorted(days, key=lambda d: d.day_number))

    async def install_plan(
        self,
        trip_id: UUID,
        ctx: RequestContext,
        plan: TripPlan,
        status: TripStatus,
    ) -> TripRecord:
        """Write a validated plan's metadata, days and accommodations at once."""
        await self._trip(trip_id, ctx)
        record = await self._trips.save_plan(
            trip_id,
            ctx,
            title=plan.resolved_title,
            destination=plan.destination,
            status=status,
            days=plan.days,
            accommodations=plan.accommodations,
        )
        if record is None:
            raise NotFoundError(f"Trip {trip_id} not found")

        self._metrics.inc_mutation("replace_days")
        return record

    async def accept_suggestion(
        self,
        trip_id: UUID,
        ctx: RequestContext,
        sid: str,
        day_number: int,
    ) -> SuggestionAcceptance:
        """Add a catalog suggestion to a day unless the trip already has it.

        Raises:
            NotFoundError: If the trip is missing or no catalog city has the
                suggestion
        """
        trip = await self._trip(trip_id, ctx)
        days = await self._trips.get_days(trip_id, ctx)

        if sid in suggestion_ids(days):
            planning_log.log_operation(
                "accept_suggestion",
                "already_added",
                trip_id=trip.id,
                user_id=ctx.user_id,
                suggestion_id=sid,
            )
            return SuggestionAcceptance(
                already_added=True,
                days=days,
                budget=await self._budget_for(trip, ctx, days),
            )

        seed = find_suggestion(sid)
        if seed is None:
            raise NotFoundError(f"Suggestion {sid} not found")

        budget = await self.add_activity(trip_id, ctx, day_number, seed.to_activity())
        return SuggestionAcceptance(
            already_added=False,
            days=await self._trips.get_days(trip_id, ctx),
            budget=budget,
        )
