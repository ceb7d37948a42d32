"""Planning chat endpoints - conversational planning and replanning."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from backend.travel.api.auth import get_current_context
from backend.travel.api.deps import ChatDep
from backend.travel.db.context import RequestContext
from backend.travel.models.tools import ChatMessage
from backend.travel.planning.chat import ChatResult

router = APIRouter(prefix="/travel", tags=["chat"])


class ChatRequest(BaseModel):
    """Request body for POST /travel/chat."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    trip_id: UUID | None = Field(None, alias="tripId")


class ReplanRequest(BaseModel):
    """Request body for POST /travel/trips/{trip_id}/replan."""

    messages: list[ChatMessage] = Field(..., min_length=1)


@router.post("/chat", response_model=ChatResult)
async def chat(
    request: ChatRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    planner: ChatDep,
) -> ChatResult:
    """Run one planning turn, creating the trip on first use."""
    return await planner.handle(request.messages, ctx, trip_id=request.trip_id)


@router.post("/trips/{trip_id}/replan", response_model=ChatResult)
async def replan(
    trip_id: UUID,
    request: ReplanRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    planner: ChatDep,
) -> ChatResult:
    """Modify an existing plan through the chat."""
    return await planner.handle(request.messages, ctx, trip_id=trip_id, replan=True)
