"""Budget models - derived cost rollups, never persisted."""

from pydantic import BaseModel


class BudgetBreakdown(BaseModel):
    """Cost rollup by budget bucket. ``total`` is the sum of the five buckets."""

    accommodation: float = 0
    food: float = 0
    activities: float = 0
    transport: float = 0
    other: float = 0
    total: float = 0


class BudgetStatus(BaseModel):
    """Breakdown compared against the trip-level budget ceiling."""

    breakdown: BudgetBreakdown
    total_budget: float | None
    currency: str
    over_budget: bool
    overage: float
