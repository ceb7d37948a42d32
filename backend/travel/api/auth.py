"""Minimal auth dependency.

Session issuing lives outside this service; callers present the user id they
were issued as ``Authorization: Bearer <user-uuid>``.
"""

import uuid
from typing import Annotated

from fastapi import Header

from backend.travel.db.context import RequestContext
from backend.travel.errors import AuthorizationError


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from authorization header.

    Args:
        authorization: Authorization header (e.g., "Bearer <user-uuid>")

    Returns:
        RequestContext with user_id

    Raises:
        AuthorizationError: If the header is missing or malformed
    """
    if not authorization:
        raise AuthorizationError("Missing authorization header")

    if not authorization.startswith("Bearer "):
        raise AuthorizationError("Invalid authorization header format")

    token = authorization[7:].strip()  # Strip "Bearer "

    try:
        return RequestContext(user_id=uuid.UUID(token))
    except ValueError as e:
        raise AuthorizationError("Invalid bearer token (expected user id)") from e
