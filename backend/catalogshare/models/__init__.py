from .auth import User, STORE_SETTINGS_FIELDS, hash_password
from .catalog import Category, Product, Catalogue, CatalogueProduct, STOCK_STATUSES
from .sales import Order, OrderItem, ORDER_STATUSES, INITIAL_ORDER_STATUS
from .stats import StoreStats, STATS_COUNTER_FIELDS

__all__ = [
    'User', 'STORE_SETTINGS_FIELDS', 'hash_password',
    'Category', 'Product', 'Catalogue', 'CatalogueProduct', 'STOCK_STATUSES',
    'Order', 'OrderItem', 'ORDER_STATUSES', 'INITIAL_ORDER_STATUS',
    'StoreStats', 'STATS_COUNTER_FIELDS',
]
