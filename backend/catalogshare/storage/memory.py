# Overview: In-memory storage facade; pairs every entity mutation with its stats update.

"""
MemStorage is the whole storage contract consumed by the HTTP layer.

Absence is reported as None (lookups, updates) or False (deletes). The one
exception is update_store_settings(), which raises UserNotFoundError when
the merchant does not exist.

Stats are push-updated: each business operation mutates its entity table
and then applies the matching StatsAggregator rule inside the same locked
call. Nothing rolls the entity change back if the stats step fails.
"""
from __future__ import annotations

import logging
import threading

from ..models import (
    User,
    Category,
    Product,
    Catalogue,
    Order,
    OrderItem,
    StoreStats,
    STORE_SETTINGS_FIELDS,
    INITIAL_ORDER_STATUS,
    hash_password,
)
from ..time_utils import utcnow
from .concurrency import synchronized
from .links import CatalogueProductLinks
from .stats import StatsAggregator
from .tables import EntityTable

logger = logging.getLogger(__name__)

DEFAULT_POPULAR_LIMIT = 3
DEFAULT_RECENT_LIMIT = 5


class UserNotFoundError(LookupError):
    """Raised when store settings target a user that does not exist."""


class MemStorage:
    def __init__(self, *, password_rounds: int = 12):
        self._lock = threading.RLock()
        self._password_rounds = password_rounds

        self.users: EntityTable[User] = EntityTable(User)
        self.products: EntityTable[Product] = EntityTable(Product)
        self.categories: EntityTable[Category] = EntityTable(Category)
        self.catalogues: EntityTable[Catalogue] = EntityTable(Catalogue)
        self.orders: EntityTable[Order] = EntityTable(Order)
        self.order_items: EntityTable[OrderItem] = EntityTable(OrderItem)
        self.catalogue_products = CatalogueProductLinks()
        self.stats = StatsAggregator()

    # ------------------------------------------------------------------
    # Users / store settings
    # ------------------------------------------------------------------

    @synchronized
    def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    @synchronized
    def get_user_by_username(self, username: str) -> User | None:
        return self.users.find(lambda u: u.username == username)

    @synchronized
    def create_user(self, fields: dict) -> User:
        values = dict(fields)
        password = values.pop("password", None)
        if password is not None:
            values["password_hash"] = hash_password(password, rounds=self._password_rounds)
        user = self.users.create(**values)
        logger.debug("Created user id=%s username=%s", user.id, user.username)
        return user

    @synchronized
    def update_store_settings(self, user_id: int, settings: dict) -> User:
        if self.users.get(user_id) is None:
            raise UserNotFoundError(f"User with ID {user_id} not found")
        patch = {k: v for k, v in settings.items() if k in STORE_SETTINGS_FIELDS}
        return self.users.update(user_id, patch)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    @synchronized
    def create_product(self, fields: dict) -> Product:
        product = self.products.create(**{**fields, "created_at": utcnow()})
        self.stats.product_created(product.user_id)
        logger.debug("Created product id=%s sku=%s", product.id, product.sku)
        return product

    @synchronized
    def get_product(self, product_id: int) -> Product | None:
        return self.products.get(product_id)

    @synchronized
    def list_products(self, user_id: int) -> list[Product]:
        return self.products.filter(lambda p: p.user_id == user_id)

    @synchronized
    def update_product(self, product_id: int, patch: dict) -> Product | None:
        return self.products.update(product_id, patch)

    @synchronized
    def delete_product(self, product_id: int) -> bool:
        # Catalogue links to the product are left in place; readers skip them.
        return self.products.delete(product_id)

    @synchronized
    def list_products_by_category(self, category_id: int) -> list[Product]:
        return self.products.filter(lambda p: p.category_id == category_id)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    @synchronized
    def create_category(self, fields: dict) -> Category:
        return self.categories.create(**fields)

    @synchronized
    def get_category(self, category_id: int) -> Category | None:
        return self.categories.get(category_id)

    @synchronized
    def list_categories(self, user_id: int) -> list[Category]:
        return self.categories.filter(lambda c: c.user_id == user_id)

    @synchronized
    def update_category(self, category_id: int, patch: dict) -> Category | None:
        return self.categories.update(category_id, patch)

    @synchronized
    def delete_category(self, category_id: int) -> bool:
        return self.categories.delete(category_id)

    # ------------------------------------------------------------------
    # Catalogues
    # ------------------------------------------------------------------

    @synchronized
    def create_catalogue(self, fields: dict) -> Catalogue:
        values = {k: v for k, v in fields.items() if k not in ("view_count", "share_count")}
        values.update(view_count=0, share_count=0, created_at=utcnow())
        return self.catalogues.create(**values)

    @synchronized
    def get_catalogue(self, catalogue_id: int) -> Catalogue | None:
        return self.catalogues.get(catalogue_id)

    @synchronized
    def list_catalogues(self, user_id: int) -> list[Catalogue]:
        return self.catalogues.filter(lambda c: c.user_id == user_id)

    @synchronized
    def update_catalogue(self, catalogue_id: int, patch: dict) -> Catalogue | None:
        # Counters belong to the increment operations only
        values = {k: v for k, v in patch.items() if k not in ("view_count", "share_count")}
        return self.catalogues.update(catalogue_id, values)

    @synchronized
    def delete_catalogue(self, catalogue_id: int) -> bool:
        removed = self.catalogue_products.remove_catalogue(catalogue_id)
        deleted = self.catalogues.delete(catalogue_id)
        if deleted:
            logger.debug("Deleted catalogue id=%s with %s product links", catalogue_id, removed)
        return deleted

    @synchronized
    def increment_catalogue_view_count(self, catalogue_id: int) -> Catalogue | None:
        catalogue = self.catalogues.get(catalogue_id)
        if catalogue is None:
            return None
        return self.catalogues.update(catalogue_id, {"view_count": catalogue.view_count + 1})

    @synchronized
    def increment_catalogue_share_count(self, catalogue_id: int) -> Catalogue | None:
        catalogue = self.catalogues.get(catalogue_id)
        if catalogue is None:
            return None
        updated = self.catalogues.update(catalogue_id, {"share_count": catalogue.share_count + 1})
        self.stats.catalogue_shared(catalogue.user_id)
        return updated

    @synchronized
    def list_popular_catalogues(self, user_id: int, limit: int = DEFAULT_POPULAR_LIMIT) -> list[Catalogue]:
        # sorted() is stable: equal view counts keep insertion order
        ranked = sorted(self.list_catalogues(user_id), key=lambda c: c.view_count, reverse=True)
        return ranked[:limit]

    # ------------------------------------------------------------------
    # Catalogue <-> product links
    # ------------------------------------------------------------------

    @synchronized
    def add_product_to_catalogue(self, catalogue_id: int, product_id: int) -> None:
        self.catalogue_products.add(catalogue_id, product_id)

    @synchronized
    def remove_product_from_catalogue(self, catalogue_id: int, product_id: int) -> None:
        self.catalogue_products.remove(catalogue_id, product_id)

    @synchronized
    def list_products_in_catalogue(self, catalogue_id: int) -> list[Product]:
        product_ids = set(self.catalogue_products.product_ids_for(catalogue_id))
        # Dangling ids (deleted products) simply match nothing
        return self.products.filter(lambda p: p.id in product_ids)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    @synchronized
    def create_order(self, fields: dict, items: list[dict]) -> Order:
        now = utcnow()
        values = dict(fields)
        values["status"] = INITIAL_ORDER_STATUS
        values["created_at"] = now
        values["updated_at"] = now
        order = self.orders.create(**values)

        for item in items:
            self.order_items.create(
                order_id=order.id,
                product_id=item["product_id"],
                quantity=item["quantity"],
                price=item["price"],
            )

        self.stats.order_created(order.user_id, order.total_amount)
        logger.debug("Created order id=%s number=%s items=%s", order.id, order.order_number, len(items))
        return order

    @synchronized
    def get_order(self, order_id: int) -> Order | None:
        return self.orders.get(order_id)

    @synchronized
    def list_order_items(self, order_id: int) -> list[OrderItem]:
        return self.order_items.filter(lambda i: i.order_id == order_id)

    @synchronized
    def list_orders(self, user_id: int, limit: int | None = None) -> list[Order]:
        orders = sorted(
            self.orders.filter(lambda o: o.user_id == user_id),
            key=lambda o: (o.created_at, o.id),
            reverse=True,
        )
        if limit:
            orders = orders[:limit]
        return orders

    @synchronized
    def update_order_status(self, order_id: int, status: str) -> Order | None:
        order = self.orders.get(order_id)
        if order is None:
            return None
        old_status = order.status
        updated = self.orders.update(order_id, {"status": status, "updated_at": utcnow()})
        self.stats.order_status_changed(order.user_id, old_status, status)
        logger.debug("Order id=%s status %s -> %s", order_id, old_status, status)
        return updated

    @synchronized
    def list_recent_orders(self, user_id: int, limit: int = DEFAULT_RECENT_LIMIT) -> list[Order]:
        return self.list_orders(user_id, limit)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    @synchronized
    def get_store_stats(self, user_id: int) -> StoreStats | None:
        return self.stats.get(user_id)

    @synchronized
    def apply_stats_delta(self, user_id: int, values: dict) -> StoreStats:
        return self.stats.apply_delta(user_id, values)
