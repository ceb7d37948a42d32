"""Models package - re-exports for convenience."""

from backend.travel.models.budget import BudgetBreakdown, BudgetStatus
from backend.travel.models.common import (
    BucketlistType,
    CostCategory,
    PriceTier,
    TimeSlot,
    TripStatus,
)
from backend.travel.models.tools import (
    ChatMessage,
    GenerateTripPlanCall,
    ModelReply,
    RawToolCall,
    SuggestActivitiesCall,
    ToolCall,
    ToolName,
)
from backend.travel.models.trip import Accommodation, TripActivity, TripDay, TripPlan

__all__ = [
    # Common
    "TimeSlot",
    "CostCategory",
    "TripStatus",
    "PriceTier",
    "BucketlistType",
    # Itinerary
    "TripPlan",
    "TripDay",
    "TripActivity",
    "Accommodation",
    # Budget
    "BudgetBreakdown",
    "BudgetStatus",
    # Tools
    "ToolName",
    "ToolCall",
    "GenerateTripPlanCall",
    "SuggestActivitiesCall",
    "RawToolCall",
    "ChatMessage",
    "ModelReply",
]
