"""Integration tests for the planning chat endpoints."""

import uuid
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from backend.travel.config import get_settings
from backend.travel.planning.chat import request_registry


def _say(content: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": content}]


def test_chat_attaches_plan_to_new_trip(client: TestClient, auth_headers: dict[str, str]) -> None:
    response = client.post(
        "/travel/chat", json={"messages": _say("Two days in Rome")}, headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["tool_results"][0]["status"] == "attached"
    assert data["plan"]["destination"] == "Rome"

    detail = client.get(f"/travel/trips/{data['trip_id']}", headers=auth_headers).json()
    assert [d["day_number"] for d in detail["days"]] == [1, 2]
    assert detail["budget"]["breakdown"]["total"] > 0


def test_chat_continues_on_trip_id(client: TestClient, auth_headers: dict[str, str]) -> None:
    first = client.post(
        "/travel/chat", json={"messages": _say("Somewhere nice")}, headers=auth_headers
    ).json()

    second = client.post(
        "/travel/chat",
        json={"messages": _say("Tokyo"), "tripId": first["trip_id"]},
        headers=auth_headers,
    ).json()

    assert second["trip_id"] == first["trip_id"]
    assert len(client.get("/travel/trips", headers=auth_headers).json()) == 1


def test_chat_rejects_empty_conversation(client: TestClient, auth_headers: dict[str, str]) -> None:
    response = client.post("/travel/chat", json={"messages": []}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["fields"][0]["loc"] == "body.messages"


@pytest.fixture
def two_message_limit(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("MAX_CHAT_MESSAGES", "2")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_chat_rejects_overlong_conversation(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.post("/travel/chat", json={"messages": _say("hi") * 51}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["fields"][0]["loc"] == "messages"
    assert client.get("/travel/trips", headers=auth_headers).json() == []


@pytest.mark.usefixtures("two_message_limit")
def test_message_limit_follows_settings(client: TestClient, auth_headers: dict[str, str]) -> None:
    rejected = client.post("/travel/chat", json={"messages": _say("hi") * 3}, headers=auth_headers)
    accepted = client.post(
        "/travel/chat", json={"messages": _say("Two days in Rome") * 2}, headers=auth_headers
    )

    assert rejected.status_code == 400
    assert rejected.json()["fields"][0]["loc"] == "messages"
    assert accepted.status_code == 200


def test_deleting_trip_forgets_its_requests(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    trip_id = client.post(
        "/travel/chat", json={"messages": _say("Two days in Rome")}, headers=auth_headers
    ).json()["trip_id"]
    tracked = len(request_registry)

    response = client.delete(f"/travel/trips?id={trip_id}", headers=auth_headers)

    assert response.status_code == 200
    assert len(request_registry) == tracked - 1


def test_replan_of_foreign_trip_is_404(client: TestClient, auth_headers: dict[str, str]) -> None:
    trip_id = client.post("/travel/trips", json={}, headers=auth_headers).json()["id"]

    response = client.post(
        f"/travel/trips/{trip_id}/replan",
        json={"messages": _say("Make day 1 lighter")},
        headers={"Authorization": f"Bearer {uuid.uuid4()}"},
    )

    assert response.status_code == 404


def test_replan_rewrites_plan(client: TestClient, auth_headers: dict[str, str]) -> None:
    trip_id = client.post(
        "/travel/chat", json={"messages": _say("Paris")}, headers=auth_headers
    ).json()["trip_id"]

    response = client.post(
        f"/travel/trips/{trip_id}/replan",
        json={"messages": _say("Actually do Amsterdam")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["plan"]["destination"] == "Amsterdam"
