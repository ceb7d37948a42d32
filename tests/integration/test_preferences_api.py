"""Integration tests for user preferences."""

from fastapi.testclient import TestClient


def test_defaults_before_first_save(client: TestClient, auth_headers: dict[str, str]) -> None:
    response = client.get("/travel/preferences", headers=auth_headers)

    assert response.json() == {"default_currency": "EUR", "travel_style": "mid-range"}


def test_saved_currency_applies_to_new_drafts(client: TestClient, auth_headers: dict[str, str]) -> None:
    saved = client.put(
        "/travel/preferences",
        json={"default_currency": "GBP", "travel_style": "budget"},
        headers=auth_headers,
    )
    assert saved.json() == {"default_currency": "GBP", "travel_style": "budget"}

    chat = client.post(
        "/travel/chat",
        json={"messages": [{"role": "user", "content": "Where should I go?"}]},
        headers=auth_headers,
    ).json()

    trip = client.get(f"/travel/trips/{chat['trip_id']}", headers=auth_headers).json()["trip"]
    assert trip["currency"] == "GBP"
