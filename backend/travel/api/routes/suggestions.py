"""Suggestion endpoints - catalog browsing and acceptance into a trip."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from backend.travel.api.auth import get_current_context
from backend.travel.api.deps import ItineraryDep
from backend.travel.db.context import RequestContext
from backend.travel.models.budget import BudgetStatus
from backend.travel.models.trip import TripDay
from backend.travel.planning.itinerary import suggestion_ids
from backend.travel.planning.suggestions import (
    OfferedSuggestion,
    offer,
    suggestions_for,
    supported_cities,
)

router = APIRouter(tags=["suggestions"])


class SuggestionsResponse(BaseModel):
    """Response for GET /travel/suggestions."""

    destination: str
    suggestions: list[OfferedSuggestion]
    supported_cities: list[str]


class AcceptSuggestionRequest(BaseModel):
    """Request body for accepting a suggestion."""

    day_number: int = Field(1, ge=1, strict=True)


class AcceptSuggestionResponse(BaseModel):
    """Itinerary after accepting a suggestion."""

    already_added: bool
    days: list[TripDay]
    budget: BudgetStatus


@router.get("/travel/suggestions", response_model=SuggestionsResponse)
async def list_suggestions(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    itinerary: ItineraryDep,
    destination: Annotated[str, Query(max_length=200)] = "",
    trip_id: Annotated[UUID | None, Query()] = None,
) -> SuggestionsResponse:
    """Catalog seeds for a destination, flagged when the trip already has them."""
    added: set[str] = set()
    if trip_id is not None:
        added = suggestion_ids(await itinerary.get_days(trip_id, ctx))

    return SuggestionsResponse(
        destination=destination,
        suggestions=offer(suggestions_for(destination), added),
        supported_cities=supported_cities(),
    )


@router.post(
    "/travel/trips/{trip_id}/suggestions/{suggestion_id}",
    response_model=AcceptSuggestionResponse,
)
async def accept_suggestion(
    trip_id: UUID,
    suggestion_id: str,
    request: AcceptSuggestionRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    itinerary: ItineraryDep,
) -> AcceptSuggestionResponse:
    """Add a catalog suggestion to a day. Repeats are no-ops."""
    result = await itinerary.accept_suggestion(trip_id, ctx, suggestion_id, request.day_number)
    return AcceptSuggestionResponse(
        already_added=result.already_added, days=result.days, budget=result.budget
    )
