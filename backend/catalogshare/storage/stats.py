# Overview: Per-merchant StoreStats cache and the event -> delta rules.

from __future__ import annotations

from ..models import StoreStats, STATS_COUNTER_FIELDS
from ..time_utils import utcnow
from .tables import EntityTable

# Order status -> StoreStats counter; shipped and delivered share a bucket
STATUS_BUCKETS = {
    "pending": "pending_orders",
    "processing": "processing_orders",
    "shipped": "completed_orders",
    "delivered": "completed_orders",
    "cancelled": "cancelled_orders",
}


def status_bucket(status: str) -> str | None:
    return STATUS_BUCKETS.get(status)


class StatsAggregator:
    """
    Holds one StoreStats record per user id.

    apply_delta() takes absolute values computed by the caller (read then
    write), so callers must hold the storage lock around the whole sequence.
    """

    def __init__(self):
        self._table: EntityTable[StoreStats] = EntityTable(StoreStats)

    def get(self, user_id: int) -> StoreStats | None:
        return self._table.find(lambda s: s.user_id == user_id)

    def current(self, user_id: int) -> StoreStats:
        """Existing record, or a zeroed one created on the spot."""
        stats = self.get(user_id)
        if stats is None:
            stats = self._table.create(user_id=user_id, updated_at=utcnow())
        return stats

    def apply_delta(self, user_id: int, values: dict) -> StoreStats:
        stats = self.current(user_id)
        patch = {k: v for k, v in values.items() if k in STATS_COUNTER_FIELDS}
        patch["updated_at"] = utcnow()
        return self._table.update(stats.id, patch)

    # Event rules. Each returns the new absolute values to merge.

    def product_created(self, user_id: int) -> StoreStats:
        stats = self.current(user_id)
        return self.apply_delta(user_id, {
            "total_products": stats.total_products + 1,
            "products_change": stats.products_change + 1,
        })

    def order_created(self, user_id: int, total_amount: float) -> StoreStats:
        stats = self.current(user_id)
        return self.apply_delta(user_id, {
            "total_orders": stats.total_orders + 1,
            "orders_change": stats.orders_change + 1,
            "total_revenue": stats.total_revenue + total_amount,
            "pending_orders": stats.pending_orders + 1,
        })

    def order_status_changed(self, user_id: int, old_status: str, new_status: str) -> StoreStats:
        stats = self.current(user_id)
        values: dict = {}
        old_bucket = status_bucket(old_status)
        new_bucket = status_bucket(new_status)
        if old_bucket is not None:
            values[old_bucket] = getattr(stats, old_bucket) - 1
        if new_bucket is not None:
            # same bucket on both sides nets out to zero
            values[new_bucket] = values.get(new_bucket, getattr(stats, new_bucket)) + 1
        return self.apply_delta(user_id, values)

    def catalogue_shared(self, user_id: int) -> StoreStats:
        stats = self.current(user_id)
        return self.apply_delta(user_id, {
            "catalogues_shared": stats.catalogues_shared + 1,
            "shares_change": stats.shares_change + 1,
        })
