# Overview: Catalogue <-> product association rows keyed by composite id.

from __future__ import annotations

from ..models import CatalogueProduct


def link_key(catalogue_id: int, product_id: int) -> str:
    return f"{catalogue_id}:{product_id}"


class CatalogueProductLinks:
    """
    Many-to-many join between catalogues and products.

    Rows are keyed by "catalogue_id:product_id", so inserting a pair twice
    keeps a single row and removing a missing pair does nothing.
    """

    def __init__(self):
        self._rows: dict[str, CatalogueProduct] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def add(self, catalogue_id: int, product_id: int) -> bool:
        """Returns True when a new row was inserted."""
        row = CatalogueProduct(catalogue_id=catalogue_id, product_id=product_id)
        if row.key in self._rows:
            return False
        self._rows[row.key] = row
        return True

    def remove(self, catalogue_id: int, product_id: int) -> bool:
        return self._rows.pop(link_key(catalogue_id, product_id), None) is not None

    def contains(self, catalogue_id: int, product_id: int) -> bool:
        return link_key(catalogue_id, product_id) in self._rows

    def product_ids_for(self, catalogue_id: int) -> list[int]:
        return [row.product_id for row in self._rows.values() if row.catalogue_id == catalogue_id]

    def rows_for(self, catalogue_id: int) -> list[CatalogueProduct]:
        return [row for row in self._rows.values() if row.catalogue_id == catalogue_id]

    def remove_catalogue(self, catalogue_id: int) -> int:
        """Drop every row for a catalogue; returns how many were removed."""
        keys = [key for key, row in self._rows.items() if row.catalogue_id == catalogue_id]
        for key in keys:
            del self._rows[key]
        return len(keys)
