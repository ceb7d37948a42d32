"""Unit tests for the bearer-token auth dependency."""

import uuid

import pytest

from backend.travel.api.auth import get_current_context
from backend.travel.errors import AuthorizationError


@pytest.mark.asyncio
async def test_get_current_context_valid_token() -> None:
    """Test that a bearer user id becomes the request context."""
    user_id = uuid.uuid4()

    ctx = await get_current_context(authorization=f"Bearer {user_id}")

    assert ctx.user_id == user_id


@pytest.mark.asyncio
async def test_get_current_context_missing_header() -> None:
    """Test that a missing header is rejected instead of defaulted."""
    with pytest.raises(AuthorizationError) as exc_info:
        await get_current_context(authorization=None)

    assert exc_info.value.status_code == 401
    assert "Missing authorization header" in exc_info.value.message


@pytest.mark.asyncio
async def test_get_current_context_invalid_bearer_format() -> None:
    with pytest.raises(AuthorizationError) as exc_info:
        await get_current_context(authorization=f"Token {uuid.uuid4()}")

    assert "Invalid authorization header format" in exc_info.value.message


@pytest.mark.asyncio
async def test_get_current_context_invalid_uuid() -> None:
    with pytest.raises(AuthorizationError):
        await get_current_context(authorization="Bearer not-a-uuid")
