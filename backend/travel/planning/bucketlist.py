"""Bucketlist linkage - promoting wishlist items into trips."""

from uuid import UUID

from backend.travel.db.context import RequestContext
from backend.travel.db.repositories import BucketlistRepository, TripRepository
from backend.travel.errors import NotFoundError
from backend.travel.planning.lifecycle import TripLifecycle
from backend.travel.utils.logging import planning_log


class BucketlistLinker:
    """Turns wishlist items into trips, at most one live trip per item."""

    def __init__(
        self,
        items: BucketlistRepository,
        trips: TripRepository,
        lifecycle: TripLifecycle,
    ) -> None:
        self._items = items
        self._trips = trips
        self._lifecycle = lifecycle

    async def promote(self, item_id: UUID, ctx: RequestContext) -> UUID:
        """Create a trip from an item, or return the one it already became.

        A link to a trip that no longer exists is replaced by a fresh trip.
        The item's ``completed`` flag is left alone.

        Raises:
            NotFoundError: If the item is missing
        """
        item = await self._items.get_item(item_id, ctx)
        if item is None:
            raise NotFoundError(f"Bucketlist item {item_id} not found")

        if item.trip_id is not None:
            linked = await self._trips.get_trip(item.trip_id, ctx)
            if linked is not None:
                planning_log.log_operation(
                    "promote", "existing", trip_id=linked.id, user_id=ctx.user_id
                )
                return linked.id

        trip_id = await self._lifecycle.ensure_draft(
            ctx, title=item.title, destination=item.destination
        )
        await self._items.update_item(item_id, ctx, trip_id=trip_id)

        planning_log.log_operation(
            "promote", "success", trip_id=trip_id, user_id=ctx.user_id, item_id=str(item_id)
        )
        return trip_id
