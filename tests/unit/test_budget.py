"""Unit tests for budget aggregation."""

import pytest

from backend.travel.models.common import CostCategory, PriceTier, TimeSlot
from backend.travel.models.trip import Accommodation, TripActivity, TripDay
from backend.travel.planning.budget import (
    compute_breakdown,
    evaluate_budget,
    pick_accommodation,
)


def _activity(cost: float, category: CostCategory) -> TripActivity:
    return TripActivity(
        title="Thing",
        time_slot=TimeSlot.morning,
        location_name="Somewhere",
        latitude=0.0,
        longitude=0.0,
        estimated_cost=cost,
        cost_category=category,
    )


def _days(*activities: TripActivity) -> list[TripDay]:
    return [TripDay(day_number=1, title="Day 1", activities=list(activities))]


def _stay(name: str, price: float, tier: PriceTier) -> Accommodation:
    return Accommodation(name=name, price_per_night=price, price_tier=tier)


def test_two_food_activities_sum_into_food() -> None:
    """Test that food 20 + 35 yields food 55 and total 55."""
    breakdown = compute_breakdown(
        _days(_activity(20, CostCategory.food), _activity(35, CostCategory.food))
    )

    assert breakdown.food == 55
    assert breakdown.total == 55
    assert breakdown.accommodation == 0
    assert breakdown.activities == 0
    assert breakdown.transport == 0
    assert breakdown.other == 0


def test_categories_map_to_buckets() -> None:
    breakdown = compute_breakdown(
        _days(
            _activity(10, CostCategory.activity),
            _activity(4, CostCategory.transport),
            _activity(6, CostCategory.other),
            _activity(8, CostCategory.food),
        )
    )

    assert breakdown.activities == 10
    assert breakdown.transport == 4
    assert breakdown.other == 6
    assert breakdown.food == 8


def test_shopping_is_rolled_into_other() -> None:
    """Test that shopping costs still count toward the total."""
    breakdown = compute_breakdown(
        _days(_activity(25, CostCategory.shopping), _activity(5, CostCategory.other))
    )

    assert breakdown.other == 30
    assert breakdown.total == 30


def test_total_equals_sum_of_activity_costs() -> None:
    """Test the total over every category on a multi-day set."""
    costs = [(12.5, CostCategory.food), (0, CostCategory.activity), (7.25, CostCategory.shopping)]
    days = [
        TripDay(day_number=1, title="One", activities=[_activity(c, cat) for c, cat in costs]),
        TripDay(day_number=2, title="Two", activities=[_activity(3, CostCategory.transport)]),
    ]

    breakdown = compute_breakdown(days)

    assert breakdown.total == 12.5 + 0 + 7.25 + 3
    assert breakdown.total == (
        breakdown.accommodation
        + breakdown.food
        + breakdown.activities
        + breakdown.transport
        + breakdown.other
    )


def test_empty_trip_is_all_zero() -> None:
    breakdown = compute_breakdown([])

    assert breakdown.total == 0


def test_accommodation_uses_mid_range_option_per_day() -> None:
    """Test that the mid-range stay is charged once per day of the trip."""
    days = [
        TripDay(day_number=1, title="One", activities=[_activity(10, CostCategory.food)]),
        TripDay(day_number=2, title="Two"),
        TripDay(day_number=3, title="Three"),
    ]
    stays = [
        _stay("Hostel", 25, PriceTier.budget),
        _stay("Hotel", 90, PriceTier.mid_range),
        _stay("Palace", 400, PriceTier.luxury),
    ]

    breakdown = compute_breakdown(days, stays)

    assert breakdown.accommodation == 270
    assert breakdown.total == 280


def test_pick_accommodation_falls_back_to_first() -> None:
    stays = [_stay("Hostel", 25, PriceTier.budget), _stay("Palace", 400, PriceTier.luxury)]

    assert pick_accommodation(stays) == stays[0]
    assert pick_accommodation([]) is None


@pytest.mark.parametrize(
    ("total_budget", "over_budget", "overage"),
    [
        (50, True, 5),
        (55, False, 0),
        (100, False, 0),
        (None, False, 0),
    ],
)
def test_evaluate_budget(total_budget: float | None, over_budget: bool, overage: float) -> None:
    """Test that over-budget holds iff total exceeds the budget, with exact overage."""
    breakdown = compute_breakdown(
        _days(_activity(20, CostCategory.food), _activity(35, CostCategory.food))
    )

    status = evaluate_budget(breakdown, total_budget, "EUR")

    assert status.over_budget is over_budget
    assert status.overage == overage
    assert status.currency == "EUR"
    assert status.breakdown.total == 55
