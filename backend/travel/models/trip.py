"""Itinerary models - the typed shape of a trip plan and its days/activities.

The same models validate language-model tool-call arguments, REST request
bodies and day/activity records read back from storage.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from backend.travel.models.common import SLOT_ORDER, CostCategory, PriceTier, TimeSlot

RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

MIN_DURATION_MINUTES = 15
DEFAULT_DURATION_MINUTES = 60


class TripActivity(BaseModel):
    """Single time-slotted activity owned by one day."""

    model_config = ConfigDict(extra="ignore")

    title: RequiredStr
    description: str | None = None
    time_slot: TimeSlot
    location_name: RequiredStr
    latitude: float = Field(..., ge=-90, le=90, strict=True)
    longitude: float = Field(..., ge=-180, le=180, strict=True)
    estimated_cost: float = Field(..., ge=0, strict=True)
    cost_category: CostCategory
    duration_minutes: int = Field(DEFAULT_DURATION_MINUTES, ge=MIN_DURATION_MINUTES, strict=True)
    suggestion_id: str | None = None


class TripDay(BaseModel):
    """One numbered day of a trip."""

    model_config = ConfigDict(extra="ignore")

    day_number: int = Field(..., ge=1, strict=True)
    title: RequiredStr
    activities: list[TripActivity] = Field(default_factory=list)


class Accommodation(BaseModel):
    """Candidate place to stay, as proposed alongside a plan."""

    model_config = ConfigDict(extra="ignore")

    name: RequiredStr
    price_per_night: float = Field(..., ge=0, strict=True)
    rating: float = Field(0, ge=0, le=5)
    price_tier: PriceTier
    booking_url: str = ""
    latitude: float = Field(0, ge=-90, le=90)
    longitude: float = Field(0, ge=-180, le=180)
    distance_to_center: str = ""


class TripPlan(BaseModel):
    """Complete generated plan, unpacked into trip/day/activity records."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    destination: RequiredStr
    days: Annotated[list[TripDay], Field(min_length=1)]
    accommodations: list[Accommodation] = Field(default_factory=list)

    @field_validator("days")
    @classmethod
    def validate_contiguous_days(cls, v: list[TripDay]) -> list[TripDay]:
        """Ensure day numbers are exactly 1..N, and order days by number."""
        numbers = sorted(day.day_number for day in v)
        expected = list(range(1, len(v) + 1))
        if numbers != expected:
            raise ValueError(
                f"day numbers must be unique and contiguous from 1, got {numbers}"
            )
        return sorted(v, key=lambda d: d.day_number)

    @property
    def resolved_title(self) -> str:
        if self.title and self.title.strip():
            return self.title.strip()
        return f"Trip to {self.destination}"


def slot_sorted(activities: list[TripActivity]) -> list[TripActivity]:
    """Stable sort of activities by time slot."""
    return sorted(activities, key=lambda a: SLOT_ORDER[a.time_slot])
