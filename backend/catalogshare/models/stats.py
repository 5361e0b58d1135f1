from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..time_utils import to_utc_z, utcnow

# Every counter on StoreStats; all start at zero
STATS_COUNTER_FIELDS = (
    "total_revenue",
    "total_orders",
    "catalogues_shared",
    "total_products",
    "revenue_change",
    "orders_change",
    "shares_change",
    "products_change",
    "pending_orders",
    "processing_orders",
    "completed_orders",
    "cancelled_orders",
)


@dataclass
class StoreStats:
    """
    Cached dashboard aggregate for one merchant.

    Push-updated by storage mutations, never recomputed from entities, so it
    drifts if a mutation path skips its update. The *_change counters
    accumulate forever; nothing resets them per period.
    """
    id: int
    user_id: int
    total_revenue: float = 0.0
    total_orders: int = 0
    catalogues_shared: int = 0
    total_products: int = 0
    revenue_change: float = 0.0
    orders_change: int = 0
    shares_change: int = 0
    products_change: int = 0
    pending_orders: int = 0
    processing_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        data = {"id": self.id, "user_id": self.user_id}
        for name in STATS_COUNTER_FIELDS:
            data[name] = getattr(self, name)
        data["updated_at"] = to_utc_z(self.updated_at)
        return data
