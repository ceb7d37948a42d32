"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.travel.api.routes.bucketlist import router as bucketlist_router
from backend.travel.api.routes.chat import router as chat_router
from backend.travel.api.routes.health import router as health_router
from backend.travel.api.routes.itinerary import router as itinerary_router
from backend.travel.api.routes.metrics import router as metrics_router
from backend.travel.api.routes.preferences import router as preferences_router
from backend.travel.api.routes.suggestions import router as suggestions_router
from backend.travel.api.routes.todos import router as todos_router
from backend.travel.api.routes.trips import router as trips_router
from backend.travel.config import get_settings
from backend.travel.db.engine import get_async_engine, init_models
from backend.travel.errors import AuthorizationError, FieldError, TravelError, ValidationError
from backend.travel.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.log_level)

    # Local SQLite databases are created in place; Postgres goes through alembic
    if settings.storage_backend == "sql" and settings.database_url.startswith("sqlite"):
        await init_models(get_async_engine())

    logger.info(
        "Travel API started",
        extra={"structured": {"storage_backend": settings.storage_backend}},
    )
    yield


app = FastAPI(title="Travel Planner API", version="0.1.0", lifespan=lifespan)


@app.exception_handler(TravelError)
async def travel_error_handler(request: Request, exc: TravelError) -> JSONResponse:
    """Render domain errors as ``{"error", "message", "fields"}``."""
    if exc.status_code >= 500:
        logger.error(
            f"{exc.code}: {exc.message}",
            extra={"structured": {"path": request.url.path, "code": exc.code}},
        )

    body = exc.to_dict()
    body.setdefault("fields", [])
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthorizationError) else None
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with field paths."""
    fields = [
        FieldError(loc=".".join(str(part) for part in err["loc"]), message=err["msg"])
        for err in exc.errors()
    ]
    error = ValidationError("Invalid request", fields=fields)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(trips_router)
app.include_router(itinerary_router)
app.include_router(suggestions_router)
app.include_router(todos_router)
app.include_router(bucketlist_router)
app.include_router(preferences_router)
app.include_router(chat_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Travel Planner API", "version": "0.1.0"}
