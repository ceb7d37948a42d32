"""Unit tests for the destination suggestion catalog."""

import pytest

from backend.travel.models.common import TimeSlot
from backend.travel.planning.suggestions import (
    find_suggestion,
    match_city,
    normalize_destination,
    offer,
    suggestion_id,
    suggestions_for,
    supported_cities,
)


def test_every_city_has_eight_seeds() -> None:
    cities = supported_cities()

    assert cities == ["Barcelona", "Paris", "Rome", "Amsterdam", "London", "Tokyo", "Istanbul", "Lisbon"]
    for city in cities:
        assert len(suggestions_for(city)) == 8


@pytest.mark.parametrize(
    ("destination", "city"),
    [
        ("Lisbon", "lisbon"),
        ("LISBON", "lisbon"),
        ("Lisbon, Portugal", "lisbon"),
        ("Tokio", None),
        ("Lis", "lisbon"),
        ("İstanbul", "istanbul"),
        ("Rôme", "rome"),
        ("a", None),
        ("ro", None),
        ("Ams", "amsterdam"),
    ],
)
def test_match_city(destination: str, city: str | None) -> None:
    """Test case/accent-insensitive matching; fragments need three letters."""
    assert match_city(destination) == city


@pytest.mark.parametrize("destination", ["", "   ", "Atlantis", "123", "a", "on"])
def test_unmatched_or_blank_yields_empty(destination: str) -> None:
    assert suggestions_for(destination) == []


def test_normalize_strips_accents_and_punctuation() -> None:
    assert normalize_destination("  São Paulo!  ") == "sao paulo"


def test_suggestion_ids_are_stable_and_unique() -> None:
    """Test that ids depend on city and title, not on list position."""
    first = suggestions_for("Paris")
    second = suggestions_for("paris")

    assert [s.suggestion_id for s in first] == [s.suggestion_id for s in second]
    assert len({s.suggestion_id for s in first}) == 8
    assert first[0].suggestion_id == suggestion_id("paris", first[0].title)
    assert first[0].suggestion_id.startswith("sug_")


def test_seed_converts_to_activity_without_coordinates() -> None:
    seed = suggestions_for("Lisbon")[0]

    activity = seed.to_activity()

    assert activity.title == seed.title
    assert activity.latitude == 0.0
    assert activity.longitude == 0.0
    assert activity.suggestion_id == seed.suggestion_id
    assert activity.time_slot in TimeSlot


def test_every_seed_is_a_valid_activity() -> None:
    for city in supported_cities():
        for seed in suggestions_for(city):
            assert seed.to_activity().duration_minutes >= 15


def test_offer_marks_added_seeds() -> None:
    seeds = suggestions_for("Rome")
    added = {seeds[2].suggestion_id}

    offered = offer(seeds, added)

    assert [o.added for o in offered] == [False, False, True, False, False, False, False, False]


def test_find_suggestion() -> None:
    seed = suggestions_for("Tokyo")[3]

    assert find_suggestion(seed.suggestion_id) == seed
    assert find_suggestion("sug_0000000000000000") is None
