# Overview: Service-layer operations for catalogues and their product links.

from __future__ import annotations

from ..models import Catalogue
from ..storage import MemStorage


def create_catalogue(
    storage: MemStorage,
    *,
    user_id: int,
    patch: dict,
    product_ids: list[int] | None = None,
) -> Catalogue:
    catalogue = storage.create_catalogue({**patch, "user_id": user_id})
    for product_id in product_ids or []:
        storage.add_product_to_catalogue(catalogue.id, product_id)
    return catalogue


def sync_catalogue_products(storage: MemStorage, catalogue_id: int, product_ids: list[int]) -> None:
    """
    Make the catalogue's links match product_ids.

    Links whose product no longer exists are not visible through
    list_products_in_catalogue and are left untouched.
    """
    wanted = set(product_ids)
    current = {p.id for p in storage.list_products_in_catalogue(catalogue_id)}

    for product_id in current - wanted:
        storage.remove_product_from_catalogue(catalogue_id, product_id)
    for product_id in product_ids:
        if product_id not in current:
            storage.add_product_to_catalogue(catalogue_id, product_id)


def update_catalogue(
    storage: MemStorage,
    catalogue_id: int,
    *,
    patch: dict,
    product_ids: list[int] | None = None,
) -> Catalogue | None:
    updated = storage.update_catalogue(catalogue_id, patch)
    if updated is None:
        return None
    if product_ids is not None:
        sync_catalogue_products(storage, catalogue_id, product_ids)
    return updated


def catalogue_detail(storage: MemStorage, catalogue: Catalogue) -> dict:
    data = catalogue.to_dict()
    data["products"] = [p.to_dict() for p in storage.list_products_in_catalogue(catalogue.id)]
    return data
