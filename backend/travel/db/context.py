"""Request context for ownership enforcement."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller.

    Used to enforce owner scoping in all repository operations.
    """

    user_id: UUID
