"""Integration tests for itinerary edits and budget rollups."""

from fastapi.testclient import TestClient

from tests.factories import make_activity


def _trip(client: TestClient, headers: dict[str, str], **body: object) -> str:
    return client.post("/travel/trips", json=body, headers=headers).json()["id"]


def test_food_costs_roll_up(client: TestClient, auth_headers: dict[str, str]) -> None:
    """Test that two food activities of 20 and 35 add up to 55."""
    trip_id = _trip(client, auth_headers, destination="Lisbon", total_budget=50)

    client.post(
        f"/travel/trips/{trip_id}/days/1/activities",
        json=make_activity(estimated_cost=20),
        headers=auth_headers,
    )
    response = client.post(
        f"/travel/trips/{trip_id}/days/1/activities",
        json=make_activity(title="Dinner", time_slot="evening", estimated_cost=35),
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["days"][0]["title"] == "Day 1"
    assert [a["title"] for a in data["days"][0]["activities"]] == ["Lunch at Time Out Market", "Dinner"]
    assert data["budget"]["breakdown"]["food"] == 55
    assert data["budget"]["breakdown"]["total"] == 55
    assert data["budget"]["over_budget"] is True
    assert data["budget"]["overage"] == 5

    budget = client.get(f"/travel/trips/{trip_id}/budget", headers=auth_headers).json()
    assert budget == data["budget"]


def test_negative_cost_is_rejected_with_field_path(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    trip_id = _trip(client, auth_headers)

    response = client.post(
        f"/travel/trips/{trip_id}/days/1/activities",
        json=make_activity(estimated_cost=-5),
        headers=auth_headers,
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "validation_error"
    assert [f["loc"] for f in data["fields"]] == ["estimated_cost"]
    assert client.get(f"/travel/trips/{trip_id}/itinerary", headers=auth_headers).json()["days"] == []


def test_skipping_a_day_is_rejected(client: TestClient, auth_headers: dict[str, str]) -> None:
    trip_id = _trip(client, auth_headers)

    response = client.post(
        f"/travel/trips/{trip_id}/days/3/activities", json=make_activity(), headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["fields"][0]["loc"] == "day_number"


def test_edit_and_delete_activity(client: TestClient, auth_headers: dict[str, str]) -> None:
    trip_id = _trip(client, auth_headers)
    client.post(
        f"/travel/trips/{trip_id}/days/1/activities", json=make_activity(), headers=auth_headers
    )

    edited = client.put(
        f"/travel/trips/{trip_id}/days/1/activities/0",
        json=make_activity(title="Brunch", estimated_cost=12),
        headers=auth_headers,
    )
    assert edited.status_code == 200
    assert edited.json()["days"][0]["activities"][0]["title"] == "Brunch"
    assert edited.json()["budget"]["breakdown"]["food"] == 12

    deleted = client.delete(f"/travel/trips/{trip_id}/days/1/activities/0", headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json()["days"][0]["activities"] == []
    assert deleted.json()["budget"]["breakdown"]["total"] == 0


def test_unknown_activity_index_is_404(client: TestClient, auth_headers: dict[str, str]) -> None:
    trip_id = _trip(client, auth_headers)
    client.post(
        f"/travel/trips/{trip_id}/days/1/activities", json=make_activity(), headers=auth_headers
    )

    response = client.delete(f"/travel/trips/{trip_id}/days/1/activities/4", headers=auth_headers)

    assert response.status_code == 404
