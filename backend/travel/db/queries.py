"""Ownership-safe query helpers."""

from uuid import UUID

from sqlalchemy import Select, select

from backend.travel.db.context import RequestContext
from backend.travel.db.models import BucketlistItem, Trip, TripDayRow


def query_trips(ctx: RequestContext) -> Select[tuple[Trip]]:
    """Select trips with user scoping enforced.

    Args:
        ctx: Request context with user_id

    Returns:
        Select filtered by user_id
    """
    return select(Trip).where(Trip.user_id == ctx.user_id)


def query_bucketlist(ctx: RequestContext) -> Select[tuple[BucketlistItem]]:
    """Select bucketlist items with user scoping enforced."""
    return select(BucketlistItem).where(BucketlistItem.user_id == ctx.user_id)


def day_ids_of_trip(trip_id: UUID) -> Select[tuple[UUID]]:
    """Subquery of day ids belonging to a trip."""
    return select(TripDayRow.id).where(TripDayRow.trip_id == trip_id)
