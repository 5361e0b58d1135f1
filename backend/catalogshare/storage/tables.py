# Overview: Identity-keyed in-memory tables with per-type id sequences.

from __future__ import annotations

from dataclasses import fields, replace
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class EntityTable(Generic[T]):
    """
    Map of integer id -> record for one entity type.

    Each table owns its own sequence starting at 1; ids are never reused,
    even after a delete. Iteration follows insertion order.
    """

    def __init__(self, record_type: Callable[..., T]):
        self._record_type = record_type
        self._rows: dict[int, T] = {}
        self._next_id = 1
        self._field_names = {f.name for f in fields(record_type)} - {"id"}

    def __len__(self) -> int:
        return len(self._rows)

    def create(self, **values) -> T:
        record_id = self._next_id
        self._next_id += 1
        record = self._record_type(id=record_id, **self._known(values))
        self._rows[record_id] = record
        return record

    def get(self, record_id: int) -> T | None:
        return self._rows.get(record_id)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [row for row in self._rows.values() if predicate(row)]

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        for row in self._rows.values():
            if predicate(row):
                return row
        return None

    def update(self, record_id: int, patch: dict) -> T | None:
        """Shallow merge; keys absent from patch keep their values."""
        existing = self._rows.get(record_id)
        if existing is None:
            return None
        updated = replace(existing, **self._known(patch))
        self._rows[record_id] = updated
        return updated

    def delete(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None

    def _known(self, values: dict) -> dict:
        # id and unknown keys are dropped rather than merged
        return {k: v for k, v in values.items() if k in self._field_names}
