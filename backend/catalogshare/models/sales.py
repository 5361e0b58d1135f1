from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..time_utils import to_utc_z, utcnow

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")

INITIAL_ORDER_STATUS = "pending"


@dataclass
class Order:
    """
    Customer order placed through the storefront.

    Orders always start in "pending"; any status may follow any other.
    order_number is for humans and may collide.
    """
    id: int
    order_number: str
    customer_name: str
    total_amount: float
    user_id: int
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    status: str = INITIAL_ORDER_STATUS
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_number": self.order_number,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "total_amount": self.total_amount,
            "status": self.status,
            "user_id": self.user_id,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


@dataclass
class OrderItem:
    # price is the unit price at order time, not a live product reference
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: float

    @property
    def line_total(self) -> float:
        return self.quantity * self.price

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "price": self.price,
        }
