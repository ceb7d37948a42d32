"""Health check endpoints."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from backend.travel.config import Settings, get_settings
from backend.travel.db.engine import get_session_factory

logger = logging.getLogger(__name__)

router = APIRouter()


async def check_db(settings: Settings) -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    if settings.storage_backend == "memory":
        return (True, "not_configured")

    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        return (True, "ok")
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {type(e).__name__}")
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Health check with component status.

    Returns:
        200 with component status if storage is reachable, 503 otherwise
    """
    db_ok, db_status = await check_db(get_settings())

    response_body = {
        "status": "ok" if db_ok else "degraded",
        "components": {"db": db_status},
    }

    if not db_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
