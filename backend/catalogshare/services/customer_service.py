# Overview: Customer list derived from a merchant's orders.

from __future__ import annotations

from ..storage import MemStorage


def list_customers(storage: MemStorage, user_id: int) -> list[dict]:
    """
    One row per customer email, newest customer first.

    Name and phone come from the customer's earliest order. Orders
    without an email are grouped together under email=None.
    """
    customers: dict[str | None, dict] = {}
    for order in storage.list_orders(user_id):
        row = customers.get(order.customer_email)
        if row is None:
            row = {
                "email": order.customer_email,
                "orders": 0,
                "total_spent": 0.0,
            }
            customers[order.customer_email] = row
        # orders arrive newest first, so the last write is the earliest order
        row["name"] = order.customer_name
        row["phone"] = order.customer_phone
        row["orders"] += 1
        row["total_spent"] += order.total_amount
    return list(customers.values())
