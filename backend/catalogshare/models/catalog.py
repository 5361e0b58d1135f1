from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..time_utils import to_utc_z, utcnow

STOCK_STATUSES = ("in_stock", "low_stock", "out_of_stock")


@dataclass
class Category:
    id: int
    name: str
    user_id: int
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "user_id": self.user_id,
        }


@dataclass
class Product:
    """
    Sellable item owned by a merchant.

    stock_status is set by the merchant and is not derived from stock.
    """
    id: int
    name: str
    sku: str
    price: float
    category_id: int
    user_id: int
    description: Optional[str] = None
    stock: int = 0
    stock_status: str = "in_stock"
    image_url: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "sku": self.sku,
            "price": self.price,
            "stock": self.stock,
            "stock_status": self.stock_status,
            "image_url": self.image_url,
            "category_id": self.category_id,
            "user_id": self.user_id,
            "created_at": to_utc_z(self.created_at),
        }


@dataclass
class Catalogue:
    """
    Named, shareable selection of products.

    view_count and share_count only ever grow; updates never reset them.
    """
    id: int
    name: str
    user_id: int
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_public: bool = True
    view_count: int = 0
    share_count: int = 0
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
            "user_id": self.user_id,
            "is_public": self.is_public,
            "view_count": self.view_count,
            "share_count": self.share_count,
            "created_at": to_utc_z(self.created_at),
        }


@dataclass(frozen=True)
class CatalogueProduct:
    catalogue_id: int
    product_id: int

    @property
    def key(self) -> str:
        return f"{self.catalogue_id}:{self.product_id}"

    def to_dict(self) -> dict:
        return {"catalogue_id": self.catalogue_id, "product_id": self.product_id}
