"""Tool-call models - closed set of tools the planning model may call."""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class ToolName(str, Enum):
    """Known tool names."""

    generate_trip_plan = "generate_trip_plan"
    suggest_activities = "suggest_activities"


class GenerateTripPlanCall(BaseModel):
    """Request to attach a full plan. Arguments are validated separately."""

    name: Literal["generate_trip_plan"]
    arguments: dict[str, Any]


class SuggestActivitiesArgs(BaseModel):
    destination: str = Field(..., min_length=1)


class SuggestActivitiesCall(BaseModel):
    """Request for catalog suggestions for a destination."""

    name: Literal["suggest_activities"]
    arguments: SuggestActivitiesArgs


ToolCall = Annotated[
    GenerateTripPlanCall | SuggestActivitiesCall,
    Field(discriminator="name"),
]


class RawToolCall(BaseModel):
    """Tool call as emitted by the model, before dispatch."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    parse_error: str | None = None


class ChatMessage(BaseModel):
    """Message exchanged with the planning model."""

    role: Literal["user", "assistant", "system"]
    content: str


class ModelReply(BaseModel):
    """Assistant text plus any tool calls from one model turn."""

    content: str = ""
    tool_calls: list[RawToolCall] = Field(default_factory=list)
