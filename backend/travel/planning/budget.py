"""Budget aggregation - pure rollups over a trip's current activity set."""

from collections.abc import Iterable, Sequence

from backend.travel.models.budget import BudgetBreakdown, BudgetStatus
from backend.travel.models.common import CostCategory, PriceTier
from backend.travel.models.trip import Accommodation, TripActivity, TripDay

# Budget bucket for each activity cost category. Shopping has no bucket of
# its own and is rolled into "other" so the total covers every activity.
CATEGORY_BUCKETS: dict[CostCategory, str] = {
    CostCategory.food: "food",
    CostCategory.activity: "activities",
    CostCategory.transport: "transport",
    CostCategory.shopping: "other",
    CostCategory.other: "other",
}


def iter_activities(days: Iterable[TripDay]) -> Iterable[TripActivity]:
    for day in days:
        yield from day.activities


def pick_accommodation(accommodations: Sequence[Accommodation]) -> Accommodation | None:
    """Mid-range option if one exists, otherwise the first listed."""
    for acc in accommodations:
        if acc.price_tier == PriceTier.mid_range:
            return acc
    return accommodations[0] if accommodations else None


def compute_breakdown(
    days: Sequence[TripDay],
    accommodations: Sequence[Accommodation] = (),
) -> BudgetBreakdown:
    """Bucket activity costs by category and sum into a total.

    Args:
        days: Current days of the trip
        accommodations: Optional stay options; the selected one contributes
            ``price_per_night`` for each day of the trip

    Returns:
        Freshly computed breakdown
    """
    buckets = {"accommodation": 0.0, "food": 0.0, "activities": 0.0, "transport": 0.0, "other": 0.0}

    for activity in iter_activities(days):
        buckets[CATEGORY_BUCKETS[activity.cost_category]] += activity.estimated_cost

    stay = pick_accommodation(accommodations)
    if stay is not None:
        buckets["accommodation"] = stay.price_per_night * len(days)

    total = (
        buckets["accommodation"]
        + buckets["food"]
        + buckets["activities"]
        + buckets["transport"]
        + buckets["other"]
    )
    return BudgetBreakdown(**buckets, total=total)


def evaluate_budget(
    breakdown: BudgetBreakdown,
    total_budget: float | None,
    currency: str = "EUR",
) -> BudgetStatus:
    """Compare a breakdown with the trip's budget ceiling."""
    over_budget = total_budget is not None and breakdown.total > total_budget
    overage = breakdown.total - total_budget if over_budget and total_budget is not None else 0.0
    return BudgetStatus(
        breakdown=breakdown,
        total_budget=total_budget,
        currency=currency,
        over_budget=over_budget,
        overage=overage,
    )
