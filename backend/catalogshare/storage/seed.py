# Overview: Demo merchant, categories and dashboard numbers for a fresh store.

from __future__ import annotations

from .memory import MemStorage

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "password"

DEMO_STATS = {
    "total_revenue": 28450,
    "total_orders": 146,
    "catalogues_shared": 52,
    "total_products": 38,
    "revenue_change": 12,
    "orders_change": 8,
    "shares_change": 24,
    "products_change": 5,
    "pending_orders": 12,
    "processing_orders": 8,
    "completed_orders": 126,
    "cancelled_orders": 5,
}

DEMO_CATEGORIES = (
    ("Electronics", "Electronic gadgets and devices"),
    ("Accessories", "Fashion accessories"),
    ("Footwear", "Shoes and footwear"),
    ("Sports", "Sports equipment"),
)

DEMO_STORE_SETTINGS = {
    "store_name": "YourStore",
    "store_description": (
        "Your one-stop shop for quality electronics, accessories, footwear and more. "
        "We provide the best products at competitive prices."
    ),
    "store_url": "yourstore",
    "whatsapp_number": "9876543210",
    "primary_color": "#0f766e",
}


def seed_demo_data(storage: MemStorage) -> int:
    """Populate an empty store. Returns the demo user's id."""
    user = storage.create_user({"username": DEMO_USERNAME, "password": DEMO_PASSWORD})
    storage.apply_stats_delta(user.id, DEMO_STATS)
    for name, description in DEMO_CATEGORIES:
        storage.create_category({"name": name, "description": description, "user_id": user.id})
    storage.update_store_settings(user.id, DEMO_STORE_SETTINGS)
    return user.id
