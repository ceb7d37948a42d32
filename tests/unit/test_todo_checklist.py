"""Unit tests for the trip todo checklist."""

import uuid

import pytest

from backend.travel.api.deps import Repositories
from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import NewTrip
from backend.travel.errors import NotFoundError
from backend.travel.planning.todos import TodoChecklist


@pytest.mark.asyncio
async def test_todos_are_appended_in_order(repos: Repositories, ctx: RequestContext) -> None:
    checklist = TodoChecklist(repos.trips, repos.todos)
    trip = await repos.trips.create_trip(NewTrip(), ctx)

    await checklist.add_todo(trip.id, ctx, "Passport")
    await checklist.add_todo(trip.id, ctx, "Adapter")
    await checklist.add_todo(trip.id, ctx, "Insurance")

    todos = await checklist.list_todos(trip.id, ctx)
    assert [(t.title, t.order_index) for t in todos] == [
        ("Passport", 0),
        ("Adapter", 1),
        ("Insurance", 2),
    ]


@pytest.mark.asyncio
async def test_toggle_and_delete(repos: Repositories, ctx: RequestContext) -> None:
    checklist = TodoChecklist(repos.trips, repos.todos)
    trip = await repos.trips.create_trip(NewTrip(), ctx)
    todo = await checklist.add_todo(trip.id, ctx, "Passport")

    toggled = await checklist.set_completed(trip.id, ctx, todo.id, True)
    assert toggled.completed is True

    await checklist.delete_todo(trip.id, ctx, todo.id)
    assert await checklist.list_todos(trip.id, ctx) == []

    with pytest.raises(NotFoundError):
        await checklist.delete_todo(trip.id, ctx, todo.id)


@pytest.mark.asyncio
async def test_todos_require_owned_trip(
    repos: Repositories, ctx: RequestContext, other_ctx: RequestContext
) -> None:
    checklist = TodoChecklist(repos.trips, repos.todos)
    trip = await repos.trips.create_trip(NewTrip(), ctx)

    with pytest.raises(NotFoundError):
        await checklist.add_todo(trip.id, other_ctx, "Sneaky")
    with pytest.raises(NotFoundError):
        await checklist.list_todos(uuid.uuid4(), ctx)
