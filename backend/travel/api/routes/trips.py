"""Trip endpoints - list, create, delete, detail and status transitions."""

from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from backend.travel.api.auth import get_current_context
from backend.travel.api.deps import ItineraryDep, LifecycleDep, RepositoriesDep
from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import NewTrip, TripRecord
from backend.travel.errors import FieldError, NotFoundError, ValidationError
from backend.travel.models.budget import BudgetStatus
from backend.travel.models.common import TripStatus
from backend.travel.models.trip import Accommodation, TripDay
from backend.travel.planning.chat import request_registry

router = APIRouter(prefix="/travel/trips", tags=["trips"])


class CreateTripRequest(BaseModel):
    """Request body for POST /travel/trips. Omitted fields take defaults."""

    title: str | None = Field(None, min_length=1, max_length=200)
    destination: str | None = Field(None, min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    total_budget: float | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=1, max_length=10)


class CreateTripResponse(BaseModel):
    """Response for POST /travel/trips."""

    id: UUID


class TripResponse(BaseModel):
    """Trip header as listed."""

    id: UUID
    title: str
    destination: str
    start_date: date | None
    end_date: date | None
    total_budget: float | None
    currency: str
    status: TripStatus
    created_at: datetime

    @classmethod
    def from_record(cls, record: TripRecord) -> "TripResponse":
        return cls(
            id=record.id,
            title=record.title,
            destination=record.destination,
            start_date=record.start_date,
            end_date=record.end_date,
            total_budget=record.total_budget,
            currency=record.currency,
            status=record.status,
            created_at=record.created_at,
        )


class TripDetailResponse(BaseModel):
    """Response for GET /travel/trips/{trip_id}."""

    trip: TripResponse
    days: list[TripDay]
    accommodations: list[Accommodation]
    budget: BudgetStatus


class StatusRequest(BaseModel):
    """Request body for POST /travel/trips/{trip_id}/status."""

    status: TripStatus


class SuccessResponse(BaseModel):
    success: bool = True


@router.get("", response_model=list[TripResponse])
async def list_trips(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
) -> list[TripResponse]:
    """List the caller's trips, newest first."""
    records = await repos.trips.list_trips(ctx)
    return [TripResponse.from_record(r) for r in records]


@router.post("", response_model=CreateTripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    request: CreateTripRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    lifecycle: LifecycleDep,
) -> CreateTripResponse:
    """Create a trip.

    Args:
        request: Trip fields; omitted ones default to "New Trip", "TBD" and "EUR"
        ctx: Request context
        lifecycle: Trip lifecycle service

    Returns:
        ID of the created trip
    """
    defaults = NewTrip()
    record = await lifecycle.create_trip(
        NewTrip(
            title=request.title or defaults.title,
            destination=request.destination or defaults.destination,
            start_date=request.start_date,
            end_date=request.end_date,
            total_budget=request.total_budget,
            currency=request.currency or defaults.currency,
        ),
        ctx,
    )
    return CreateTripResponse(id=record.id)


@router.delete("", response_model=SuccessResponse)
async def delete_trip(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    lifecycle: LifecycleDep,
    id: Annotated[UUID | None, Query()] = None,
) -> SuccessResponse:
    """Delete a trip by ``?id=``. Deleting an unknown trip still succeeds."""
    if id is None:
        raise ValidationError(
            "Missing trip id", fields=[FieldError(loc="query.id", message="required")]
        )

    if await lifecycle.delete_trip(id, ctx):
        request_registry.forget(id)
    return SuccessResponse()


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
    itinerary: ItineraryDep,
) -> TripDetailResponse:
    """Trip header with its itinerary and budget."""
    record = await repos.trips.get_trip(trip_id, ctx)
    if record is None:
        raise NotFoundError(f"Trip {trip_id} not found")

    return TripDetailResponse(
        trip=TripResponse.from_record(record),
        days=await itinerary.get_days(trip_id, ctx),
        accommodations=await repos.trips.get_accommodations(trip_id, ctx),
        budget=await itinerary.budget(trip_id, ctx),
    )


@router.post("/{trip_id}/status", response_model=TripResponse)
async def advance_status(
    trip_id: UUID,
    request: StatusRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    lifecycle: LifecycleDep,
) -> TripResponse:
    """Move a trip to the next status."""
    record = await lifecycle.advance_status(trip_id, ctx, request.status)
    return TripResponse.from_record(record)
