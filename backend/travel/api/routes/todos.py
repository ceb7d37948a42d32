"""Trip todo endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from backend.travel.api.auth import get_current_context
from backend.travel.api.deps import ChecklistDep
from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import TodoRecord

router = APIRouter(prefix="/travel/trips/{trip_id}/todos", tags=["todos"])


class CreateTodoRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)


class UpdateTodoRequest(BaseModel):
    completed: bool


class TodoResponse(BaseModel):
    id: UUID
    trip_id: UUID
    title: str
    completed: bool
    order_index: int

    @classmethod
    def from_record(cls, record: TodoRecord) -> "TodoResponse":
        return cls(
            id=record.id,
            trip_id=record.trip_id,
            title=record.title,
            completed=record.completed,
            order_index=record.order_index,
        )


class SuccessResponse(BaseModel):
    success: bool = True


@router.get("", response_model=list[TodoResponse])
async def list_todos(
    trip_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    checklist: ChecklistDep,
) -> list[TodoResponse]:
    """Todos of a trip in checklist order."""
    return [TodoResponse.from_record(t) for t in await checklist.list_todos(trip_id, ctx)]


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def add_todo(
    trip_id: UUID,
    request: CreateTodoRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    checklist: ChecklistDep,
) -> TodoResponse:
    """Append a todo."""
    record = await checklist.add_todo(trip_id, ctx, request.title.strip() or request.title)
    return TodoResponse.from_record(record)


@router.patch("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    trip_id: UUID,
    todo_id: UUID,
    request: UpdateTodoRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    checklist: ChecklistDep,
) -> TodoResponse:
    """Toggle a todo."""
    record = await checklist.set_completed(trip_id, ctx, todo_id, request.completed)
    return TodoResponse.from_record(record)


@router.delete("/{todo_id}", response_model=SuccessResponse)
async def delete_todo(
    trip_id: UUID,
    todo_id: UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    checklist: ChecklistDep,
) -> SuccessResponse:
    """Delete a todo."""
    await checklist.delete_todo(trip_id, ctx, todo_id)
    return SuccessResponse()
