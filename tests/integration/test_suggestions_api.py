"""Integration tests for catalog suggestions."""

from fastapi.testclient import TestClient

from backend.travel.planning.suggestions import suggestions_for


def _trip(client: TestClient, headers: dict[str, str]) -> str:
    return client.post(
        "/travel/trips", json={"destination": "Lisbon", "total_budget": 100}, headers=headers
    ).json()["id"]


def test_catalog_lookup_is_case_and_accent_insensitive(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get("/travel/suggestions?destination=LISBOA, lisbon", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert len(data["suggestions"]) == 8
    assert all(s["added"] is False for s in data["suggestions"])
    assert "Lisbon" in data["supported_cities"]


def test_unknown_destination_has_no_suggestions(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get("/travel/suggestions?destination=Atlantis", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["suggestions"] == []


def test_accepting_twice_is_a_no_op(client: TestClient, auth_headers: dict[str, str]) -> None:
    trip_id = _trip(client, auth_headers)
    seed = suggestions_for("Lisbon")[0]
    url = f"/travel/trips/{trip_id}/suggestions/{seed.suggestion_id}"

    first = client.post(url, json={"day_number": 1}, headers=auth_headers)
    second = client.post(url, json={"day_number": 1}, headers=auth_headers)

    assert first.status_code == 200
    assert first.json()["already_added"] is False
    assert second.json()["already_added"] is True
    assert len(second.json()["days"][0]["activities"]) == 1
    assert second.json()["budget"]["breakdown"]["total"] == seed.estimated_cost

    offered = client.get(
        f"/travel/suggestions?destination=Lisbon&trip_id={trip_id}", headers=auth_headers
    ).json()["suggestions"]
    added = [s["suggestion_id"] for s in offered if s["added"]]
    assert added == [seed.suggestion_id]


def test_unknown_suggestion_is_404(client: TestClient, auth_headers: dict[str, str]) -> None:
    trip_id = _trip(client, auth_headers)

    response = client.post(
        f"/travel/trips/{trip_id}/suggestions/lisbon-nope", json={}, headers=auth_headers
    )

    assert response.status_code == 404


def test_offered_seed_can_join_trip_without_destination(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    """Test that a seed offered for Lisbon is accepted on a trip still headed to TBD."""
    trip_id = client.post("/travel/trips", json={}, headers=auth_headers).json()["id"]
    url = f"/travel/suggestions?destination=Lisbon&trip_id={trip_id}"
    offered = client.get(url, headers=auth_headers).json()["suggestions"]

    response = client.post(
        f"/travel/trips/{trip_id}/suggestions/{offered[0]['suggestion_id']}",
        json={"day_number": 1},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["already_added"] is False
    refreshed = client.get(url, headers=auth_headers).json()["suggestions"]
    assert [s["added"] for s in refreshed][:2] == [True, False]
