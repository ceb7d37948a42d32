"""Travel preference endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from backend.travel.api.auth import get_current_context
from backend.travel.api.deps import RepositoriesDep
from backend.travel.config import get_settings
from backend.travel.db.context import RequestContext
from backend.travel.models.common import PriceTier

router = APIRouter(prefix="/travel/preferences", tags=["preferences"])


class PreferencesBody(BaseModel):
    """Preferences as read and written. Omitted fields reset to defaults."""

    default_currency: str | None = Field(None, min_length=1, max_length=10)
    travel_style: PriceTier | None = None


class PreferencesResponse(BaseModel):
    default_currency: str
    travel_style: PriceTier


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
) -> PreferencesResponse:
    """Stored preferences, or defaults for users who never saved any."""
    record = await repos.preferences.get_preferences(ctx)
    if record is None:
        return PreferencesResponse(
            default_currency=get_settings().default_currency,
            travel_style=PriceTier.mid_range,
        )
    return PreferencesResponse(
        default_currency=record.default_currency, travel_style=record.travel_style
    )


@router.put("", response_model=PreferencesResponse)
async def put_preferences(
    request: PreferencesBody,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    repos: RepositoriesDep,
) -> PreferencesResponse:
    """Create or replace the caller's preferences."""
    record = await repos.preferences.upsert_preferences(
        ctx,
        default_currency=request.default_currency or get_settings().default_currency,
        travel_style=request.travel_style or PriceTier.mid_range,
    )
    return PreferencesResponse(
        default_currency=record.default_currency, travel_style=record.travel_style
    )
