"""Trip todo checklist."""

from uuid import UUID

from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import TodoRecord, TodoRepository, TripRepository
from backend.travel.errors import NotFoundError


class TodoChecklist:
    """Ordered checklist scoped to an owned trip."""

    def __init__(self, trips: TripRepository, todos: TodoRepository) -> None:
        self._trips = trips
        self._todos = todos

    async def _require_trip(self, trip_id: UUID, ctx: RequestContext) -> None:
        if await self._trips.get_trip(trip_id, ctx) is None:
            raise NotFoundError(f"Trip {trip_id} not found")

    async def list_todos(self, trip_id: UUID, ctx: RequestContext) -> list[TodoRecord]:
        await self._require_trip(trip_id, ctx)
        return await self._todos.list_todos(trip_id)

    async def add_todo(self, trip_id: UUID, ctx: RequestContext, title: str) -> TodoRecord:
        await self._require_trip(trip_id, ctx)
        return await self._todos.add_todo(trip_id, title)

    async def set_completed(
        self, trip_id: UUID, ctx: RequestContext, todo_id: UUID, completed: bool
    ) -> TodoRecord:
        await self._require_trip(trip_id, ctx)
        record = await self._todos.set_completed(todo_id, trip_id, completed)
        if record is None:
            raise NotFoundError(f"Todo {todo_id} not found")
        return record

    async def delete_todo(self, trip_id: UUID, ctx: RequestContext, todo_id: UUID) -> None:
        await self._require_trip(trip_id, ctx)
        if not await self._todos.delete_todo(todo_id, trip_id):
            raise NotFoundError(f"Todo {todo_id} not found")
