"""Itinerary endpoints - day/activity edits and budget rollups."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path
from pydantic import BaseModel

from backend.travel.api.auth import get_current_context
from backend.travel.api.deps import ItineraryDep
from backend.travel.db.context import RequestContext
from backend.travel.models.budget import BudgetStatus
from backend.travel.models.trip import TripDay

router = APIRouter(prefix="/travel/trips/{trip_id}", tags=["itinerary"])

DayNumber = Annotated[int, Path(ge=1)]
ActivityIndex = Annotated[int, Path(ge=0)]
# Validated by the itinerary contract so errors carry field paths without a body prefix
ActivityBody = Annotated[dict[str, Any], Body()]


class ItineraryResponse(BaseModel):
    """Days of a trip with the budget they add up to."""

    days: list[TripDay]
    budget: BudgetStatus


async def _snapshot(
    itinerary: ItineraryDep, trip_id: UUID, ctx: RequestContext, budget: BudgetStatus
) -> ItineraryResponse:
    return ItineraryResponse(days=await itinerary.get_days(trip_id, ctx), budget=budget)


@router.get("/itinerary", response_model=ItineraryResponse)
async def get_itinerary(
    trip_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    itinerary: ItineraryDep,
) -> ItineraryResponse:
    """Current days and budget of a trip."""
    return await _snapshot(itinerary, trip_id, ctx, await itinerary.budget(trip_id, ctx))


@router.get("/budget", response_model=BudgetStatus)
async def get_budget(
    trip_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    itinerary: ItineraryDep,
) -> BudgetStatus:
    """Budget rollup, recomputed on every call."""
    return await itinerary.budget(trip_id, ctx)


@router.post("/days/{day_number}/activities", response_model=ItineraryResponse)
async def add_activity(
    trip_id: UUID,
    day_number: DayNumber,
    activity: ActivityBody,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    itinerary: ItineraryDep,
) -> ItineraryResponse:
    """Add an activity to a day."""
    budget = await itinerary.add_activity(trip_id, ctx, day_number, activity)
    return await _snapshot(itinerary, trip_id, ctx, budget)


@router.put("/days/{day_number}/activities/{index}", response_model=ItineraryResponse)
async def edit_activity(
    trip_id: UUID,
    day_number: DayNumber,
    index: ActivityIndex,
    activity: ActivityBody,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    itinerary: ItineraryDep,
) -> ItineraryResponse:
    """Replace an activity."""
    budget = await itinerary.edit_activity(trip_id, ctx, day_number, index, activity)
    return await _snapshot(itinerary, trip_id, ctx, budget)


@router.delete("/days/{day_number}/activities/{index}", response_model=ItineraryResponse)
async def delete_activity(
    trip_id: UUID,
    day_number: DayNumber,
    index: ActivityIndex,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    itinerary: ItineraryDep,
) -> ItineraryResponse:
    """Remove an activity."""
    budget = await itinerary.delete_activity(trip_id, ctx, day_number, index)
    return await _snapshot(itinerary, trip_id, ctx, budget)
