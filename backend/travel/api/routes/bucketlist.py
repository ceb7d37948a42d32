"""Bucketlist endpoints - wishlist CRUD and promotion into trips."""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from backend.travel.api.auth import get_current_context
from backend.travel.api.deps import LinkerDep, RepositoriesDep
from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import BucketlistRecord
from backend.travel.errors import FieldError, NotFoundError, ValidationError
from backend.travel.models.common import BucketlistType

router = APIRouter(prefix="/travel/bucketlist", tags=["bucketlist"])


class CreateItemRequest(BaseModel):
    """Request body for POST /travel/bucketlist."""

    type: BucketlistType = BucketlistType.destination
    title: str = Field(..., min_length=1, max_length=200)
    destination: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=500)


class UpdateItemRequest(BaseModel):
    """Request body for PATCH /travel/bucketlist. Only sent fields change."""

    id: UUID | None = None
    completed: bool | None = None
    trip_id: UUID | None = None


class CreateItemResponse(BaseModel):
    id: UUID


class ItemResponse(BaseModel):
    id: UUID
    type: BucketlistType
    title: str
    destination: str
    description: str | None
    completed: bool
    trip_id: UUID | None
    created_at: datetime

    @classmethod
    def from_record(cls, record: BucketlistRecord) -> "ItemResponse":
        return cls(
            id=record.id,
            type=record.type,
            title=record.title,
            destination=record.destination,
            description=record.description,
            completed=record.completed,
            trip_id=record.trip_id,
            created_at=record.created_at,
        )


class PromoteResponse(BaseModel):
    trip_id: UUID


class SuccessResponse(BaseModel):
    success: bool = True


def _missing_id() -> ValidationError:
    return ValidationError("Missing id", fields=[FieldError(loc="id", message="required")])


@router.get("", response_model=list[ItemResponse])
async def list_items(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
) -> list[ItemResponse]:
    """List the caller's items, newest first."""
    return [ItemResponse.from_record(i) for i in await repos.bucketlist.list_items(ctx)]


@router.post("", response_model=CreateItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    request: CreateItemRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
) -> CreateItemResponse:
    """Create a wishlist entry."""
    record = await repos.bucketlist.create_item(
        ctx,
        type=request.type,
        title=request.title,
        destination=request.destination,
        description=request.description,
    )
    return CreateItemResponse(id=record.id)


@router.delete("", response_model=SuccessResponse)
async def delete_item(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
    id: Annotated[UUID | None, Query()] = None,
) -> SuccessResponse:
    """Delete an item by ``?id=``."""
    if id is None:
        raise _missing_id()

    await repos.bucketlist.delete_item(id, ctx)
    return SuccessResponse()


@router.patch("", response_model=SuccessResponse)
async def update_item(
    request: UpdateItemRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
) -> SuccessResponse:
    """Mark an item completed or link it to a trip.

    Raises:
        ValidationError: If ``id`` is missing
        NotFoundError: If the item or the linked trip is not the caller's
    """
    if request.id is None:
        raise _missing_id()

    changes: dict[str, Any] = {}
    if "completed" in request.model_fields_set and request.completed is not None:
        changes["completed"] = request.completed
    if "trip_id" in request.model_fields_set:
        if request.trip_id is not None and await repos.trips.get_trip(request.trip_id, ctx) is None:
            raise NotFoundError(f"Trip {request.trip_id} not found")
        changes["trip_id"] = request.trip_id

    record = await repos.bucketlist.update_item(request.id, ctx, **changes)
    if record is None:
        raise NotFoundError(f"Bucketlist item {request.id} not found")
    return SuccessResponse()


@router.post("/{item_id}/promote", response_model=PromoteResponse)
async def promote_item(
    item_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    linker: LinkerDep,
) -> PromoteResponse:
    """Turn an item into a trip, or return the trip it already became."""
    return PromoteResponse(trip_id=await linker.promote(item_id, ctx))
