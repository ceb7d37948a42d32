"""Planning chat orchestration.

One call runs one model turn: make sure a trip exists, ask the model, then
dispatch each tool call it returned over the closed tool set. Plans that fail
the itinerary contract are reported back to the chat, not dropped, and a
reply that arrives after a newer request for the same trip is marked stale
instead of overwriting the newer plan.
"""

import itertools
import json
import threading
from collections import OrderedDict
from collections.abc import Sequence
from typing import Literal
from uuid import UUID

import pydantic
from pydantic import BaseModel, Field, TypeAdapter

from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import TripRepository
from backend.travel.errors import FieldError, NotFoundError, ValidationError
from backend.travel.llm.client import TRAVEL_SYSTEM_PROMPT, LLMClient, build_replan_prompt
from backend.travel.models.tools import (
    ChatMessage,
    GenerateTripPlanCall,
    RawToolCall,
    SuggestActivitiesCall,
    ToolCall,
    ToolName,
)
from backend.travel.models.trip import TripPlan
from backend.travel.planning.contract import PlanValidationError, field_errors, validate_plan
from backend.travel.planning.lifecycle import TripLifecycle
from backend.travel.planning.suggestions import SuggestionSeed, suggestions_for
from backend.travel.utils.logging import planning_log
from backend.travel.utils.metrics import PrometheusPlanningMetrics, metrics

_tool_call_adapter: TypeAdapter[ToolCall] = TypeAdapter(ToolCall)

KNOWN_TOOLS = {tool.value for tool in ToolName}


class RequestRegistry:
    """Tracks the latest request started for each trip.

    Only the most recently started request for a trip may attach its plan.
    At most ``max_entries`` trips are tracked; the least recently started one
    is evicted first, so an in-flight request for it is no longer current.
    """

    def __init__(self, max_entries: int = 10_000) -> None:
        self._latest: OrderedDict[UUID, int] = OrderedDict()
        self._ids = itertools.count(1)
        self._max_entries = max_entries
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._latest)

    def begin(self, trip_id: UUID) -> int:
        with self._lock:
            # Ids are process-wide so a forgotten trip never reuses one
            request_id = next(self._ids)
            self._latest[trip_id] = request_id
            self._latest.move_to_end(trip_id)
            while len(self._latest) > self._max_entries:
                self._latest.popitem(last=False)
            return request_id

    def forget(self, trip_id: UUID) -> None:
        """Stop tracking a deleted trip."""
        with self._lock:
            self._latest.pop(trip_id, None)

    def is_current(self, trip_id: UUID, request_id: int) -> bool:
        with self._lock:
            return self._latest.get(trip_id) == request_id


request_registry = RequestRegistry()


class ToolOutcome(BaseModel):
    """What happened to one tool call."""

    tool: str
    status: Literal["attached", "suggestions", "invalid", "unknown_tool", "stale"]
    message: str | None = None
    fields: list[dict[str, str]] = Field(default_factory=list)
    suggestions: list[SuggestionSeed] = Field(default_factory=list)


class ChatResult(BaseModel):
    """Reply of one planning turn."""

    trip_id: UUID
    message: str
    tool_results: list[ToolOutcome] = Field(default_factory=list)
    plan: TripPlan | None = None
    stale: bool = False


def _fields(errors: Sequence[FieldError]) -> list[dict[str, str]]:
    return [e.to_dict() for e in errors]


class PlanningChat:
    """Conversational planner bound to a model client and trip services."""

    def __init__(
        self,
        llm: LLMClient,
        lifecycle: TripLifecycle,
        trips: TripRepository,
        registry: RequestRegistry = request_registry,
        max_messages: int = 50,
        planning_metrics: PrometheusPlanningMetrics = metrics,
    ) -> None:
        self._llm = llm
        self._lifecycle = lifecycle
        self._trips = trips
        self._registry = registry
        self._max_messages = max_messages
        self._metrics = planning_metrics

    def _check_messages(self, messages: Sequence[ChatMessage]) -> None:
        if not 1 <= len(messages) <= self._max_messages:
            raise ValidationError(
                "Invalid conversation",
                fields=[
                    FieldError(
                        loc="messages",
                        message=f"expected 1 to {self._max_messages} messages, got {len(messages)}",
                    )
                ],
            )

    async def _system_prompt(self, trip_id: UUID, ctx: RequestContext, replan: bool) -> str:
        if not replan:
            return TRAVEL_SYSTEM_PROMPT
        days = await self._trips.get_days(trip_id, ctx)
        days_json = json.dumps([day.model_dump(mode="json") for day in days], indent=2)
        return build_replan_prompt(days_json)

    async def handle(
        self,
        messages: Sequence[ChatMessage],
        ctx: RequestContext,
        trip_id: UUID | None = None,
        replan: bool = False,
    ) -> ChatResult:
        """Run one planning turn.

        Args:
            messages: Conversation so far, oldest first
            ctx: Request context
            trip_id: Trip being planned; a new one is created when missing
            replan: Edit the trip's existing plan instead of starting fresh

        Returns:
            Assistant reply with the outcome of every tool call

        Raises:
            ValidationError: If the conversation is empty or too long
            NotFoundError: If replanning a trip the caller does not own
            PlanGenerationError: If the model could not be reached
        """
        self._check_messages(messages)

        if replan:
            if trip_id is None or await self._trips.get_trip(trip_id, ctx) is None:
                raise NotFoundError(f"Trip {trip_id} not found")
            resolved = trip_id
        else:
            resolved = await self._lifecycle.ensure_draft(ctx, trip_id)

        request_id = self._registry.begin(resolved)
        system_prompt = await self._system_prompt(resolved, ctx, replan)

        reply = await self._llm.plan_chat(system_prompt=system_prompt, messages=list(messages))

        result = ChatResult(trip_id=resolved, message=reply.content)
        for raw in reply.tool_calls:
            outcome = await self._dispatch(raw, resolved, ctx, request_id, messages, reply.content)
            result.tool_results.append(outcome)
            self._metrics.inc_tool_call(raw.name if raw.name in KNOWN_TOOLS else "unknown", outcome.status)

            if outcome.status == "stale":
                result.stale = True

        attached = [o for o in result.tool_results if o.status == "attached"]
        if attached:
            result.plan = await self._current_plan(resolved, ctx)
        return result

    async def _current_plan(self, trip_id: UUID, ctx: RequestContext) -> TripPlan | None:
        trip = await self._trips.get_trip(trip_id, ctx)
        days = await self._trips.get_days(trip_id, ctx)
        if trip is None or not days:
            return None
        return TripPlan(
            title=trip.title,
            destination=trip.destination,
            days=days,
            accommodations=await self._trips.get_accommodations(trip_id, ctx),
        )

    async def _dispatch(
        self,
        raw: RawToolCall,
        trip_id: UUID,
        ctx: RequestContext,
        request_id: int,
        messages: Sequence[ChatMessage],
        reply_text: str,
    ) -> ToolOutcome:
        if raw.name not in KNOWN_TOOLS:
            planning_log.log_operation(
                "tool_call", "unknown_tool", trip_id=trip_id, user_id=ctx.user_id, tool=raw.name
            )
            return ToolOutcome(
                tool=raw.name,
                status="unknown_tool",
                message=f"Unknown tool '{raw.name}'",
            )

        if raw.parse_error is not None:
            return ToolOutcome(
                tool=raw.name,
                status="invalid",
                message="Tool arguments could not be read",
                fields=[{"loc": "arguments", "message": raw.parse_error}],
            )

        try:
            call = _tool_call_adapter.validate_python(
                {"name": raw.name, "arguments": raw.arguments}
            )
        except pydantic.ValidationError as e:
            return ToolOutcome(
                tool=raw.name,
                status="invalid",
                message="Tool arguments are invalid",
                fields=_fields(field_errors(e)),
            )

        if isinstance(call, SuggestActivitiesCall):
            seeds = suggestions_for(call.arguments.destination)
            return ToolOutcome(
                tool=raw.name,
                status="suggestions",
                message=None if seeds else f"No suggestions for {call.arguments.destination}",
                suggestions=seeds,
            )

        return await self._attach(call, trip_id, ctx, request_id, messages, reply_text)

    async def _attach(
        self,
        call: GenerateTripPlanCall,
        trip_id: UUID,
        ctx: RequestContext,
        request_id: int,
        messages: Sequence[ChatMessage],
        reply_text: str,
    ) -> ToolOutcome:
        validated = validate_plan(call.arguments)
        if isinstance(validated, PlanValidationError):
            self._metrics.inc_attachment("invalid")
            self._metrics.observe_validation_errors(len(validated.fields))
            planning_log.log_operation(
                "attach_plan",
                "invalid",
                trip_id=trip_id,
                user_id=ctx.user_id,
                error_reason=validated.summary(),
            )
            return ToolOutcome(
                tool=call.name,
                status="invalid",
                message="The generated plan did not pass validation",
                fields=_fields(validated.fields),
            )

        if not self._registry.is_current(trip_id, request_id):
            self._metrics.inc_attachment("stale")
            planning_log.log_operation(
                "attach_plan", "stale", trip_id=trip_id, user_id=ctx.user_id, request_id=request_id
            )
            return ToolOutcome(
                tool=call.name,
                status="stale",
                message="A newer request for this trip superseded this plan",
            )

        await self._lifecycle.attach_plan(trip_id, ctx, validated)

        transcript = [m for m in messages if m.role != "system"]
        if reply_text:
            transcript.append(ChatMessage(role="assistant", content=reply_text))
        await self._trips.save_conversation(trip_id, ctx, transcript)

        self._metrics.inc_attachment("attached")
        return ToolOutcome(tool=call.name, status="attached")
