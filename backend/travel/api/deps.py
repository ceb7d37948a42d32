"""FastAPI dependencies wiring repositories and planning services."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from backend.travel.config import get_settings
from backend.travel.db.engine import get_session_factory
from backend.travel.db.inmemory import (
    InMemoryBucketlistRepository,
    InMemoryPreferencesRepository,
    InMemoryTodoRepository,
    InMemoryTripRepository,
)
from backend.travel.db.repositories import (
    BucketlistRepository,
    PreferencesRepository,
    TodoRepository,
    TripRepository,
)
from backend.travel.db.sql_repositories import (
    SqlBucketlistRepository,
    SqlPreferencesRepository,
    SqlTodoRepository,
    SqlTripRepository,
)
from backend.travel.llm.client import LLMClient, get_llm_client
from backend.travel.planning.bucketlist import BucketlistLinker
from backend.travel.planning.chat import PlanningChat
from backend.travel.planning.itinerary import ItineraryStore
from backend.travel.planning.lifecycle import TripLifecycle
from backend.travel.planning.todos import TodoChecklist


@dataclass
class Repositories:
    """Repositories for one request, sharing a session when SQL-backed."""

    trips: TripRepository
    todos: TodoRepository
    bucketlist: BucketlistRepository
    preferences: PreferencesRepository


def memory_repositories() -> Repositories:
    """Fresh, empty in-memory repositories."""
    todos = InMemoryTodoRepository()
    bucketlist = InMemoryBucketlistRepository()
    return Repositories(
        trips=InMemoryTripRepository(todos=todos, bucketlist=bucketlist),
        todos=todos,
        bucketlist=bucketlist,
        preferences=InMemoryPreferencesRepository(),
    )


@lru_cache
def _process_memory_repositories() -> Repositories:
    return memory_repositories()


async def get_repositories() -> AsyncGenerator[Repositories, None]:
    """Repositories for the configured storage backend.

    Yields:
        Repositories bound to a request-scoped session, or the process-wide
        in-memory store
    """
    if get_settings().storage_backend == "memory":
        yield _process_memory_repositories()
        return

    async with get_session_factory()() as session:
        yield Repositories(
            trips=SqlTripRepository(session),
            todos=SqlTodoRepository(session),
            bucketlist=SqlBucketlistRepository(session),
            preferences=SqlPreferencesRepository(session),
        )


def get_llm() -> LLMClient:
    return get_llm_client()


RepositoriesDep = Annotated[Repositories, Depends(get_repositories)]


def get_itinerary(repos: RepositoriesDep) -> ItineraryStore:
    return ItineraryStore(repos.trips)


def get_lifecycle(repos: RepositoriesDep) -> TripLifecycle:
    return TripLifecycle(
        repos.trips,
        ItineraryStore(repos.trips),
        preferences=repos.preferences,
    )


def get_linker(
    repos: RepositoriesDep,
    lifecycle: Annotated[TripLifecycle, Depends(get_lifecycle)],
) -> BucketlistLinker:
    return BucketlistLinker(repos.bucketlist, repos.trips, lifecycle)


def get_checklist(repos: RepositoriesDep) -> TodoChecklist:
    return TodoChecklist(repos.trips, repos.todos)


def get_chat(
    repos: RepositoriesDep,
    lifecycle: Annotated[TripLifecycle, Depends(get_lifecycle)],
    llm: Annotated[LLMClient, Depends(get_llm)],
) -> PlanningChat:
    return PlanningChat(
        llm,
        lifecycle,
        repos.trips,
        max_messages=get_settings().max_chat_messages,
    )


ItineraryDep = Annotated[ItineraryStore, Depends(get_itinerary)]
LifecycleDep = Annotated[TripLifecycle, Depends(get_lifecycle)]
LinkerDep = Annotated[BucketlistLinker, Depends(get_linker)]
ChecklistDep = Annotated[TodoChecklist, Depends(get_checklist)]
ChatDep = Annotated[PlanningChat, Depends(get_chat)]
