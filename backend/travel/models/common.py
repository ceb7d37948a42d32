"""Common types and enums shared across all models."""

from enum import Enum


class TimeSlot(str, Enum):
    """Part of the day an activity is scheduled in."""

    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"


# Display order of slots within a day
SLOT_ORDER: dict[TimeSlot, int] = {
    TimeSlot.morning: 0,
    TimeSlot.afternoon: 1,
    TimeSlot.evening: 2,
}


class CostCategory(str, Enum):
    """Cost tag used for activity classification and budget rollups."""

    food = "food"
    activity = "activity"
    transport = "transport"
    shopping = "shopping"
    other = "other"


class TripStatus(str, Enum):
    """Trip lifecycle status. Only advances forward, one step at a time."""

    draft = "draft"
    planned = "planned"
    active = "active"
    completed = "completed"


TRIP_STATUS_ORDER: list[TripStatus] = [
    TripStatus.draft,
    TripStatus.planned,
    TripStatus.active,
    TripStatus.completed,
]


class PriceTier(str, Enum):
    """Accommodation price tier."""

    budget = "budget"
    mid_range = "mid-range"
    luxury = "luxury"


class BucketlistType(str, Enum):
    """Kind of wishlist entry."""

    destination = "destination"
    experience = "experience"
