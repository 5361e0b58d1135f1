# Overview: Service-layer operations for orders; numbering and order detail payloads.

from __future__ import annotations

import random

from ..models import Order
from ..storage import MemStorage

ORDER_NUMBER_PREFIX = "ORD-"


def generate_order_number(rng: random.Random | None = None) -> str:
    """
    Human-facing order number, "ORD-" plus four random digits.

    Not unique: two orders may share a number and nothing checks for it.
    """
    rng = rng or random
    return f"{ORDER_NUMBER_PREFIX}{rng.randint(1000, 9999)}"


def place_order(
    storage: MemStorage,
    *,
    user_id: int,
    patch: dict,
    items: list[dict],
    rng: random.Random | None = None,
) -> Order:
    """Create an order from a validated patch and item list."""
    fields = dict(patch)
    fields["user_id"] = user_id
    fields["order_number"] = generate_order_number(rng)
    return storage.create_order(fields, items)


def order_detail(storage: MemStorage, order: Order) -> dict:
    data = order.to_dict()
    data["items"] = [item.to_dict() for item in storage.list_order_items(order.id)]
    return data
