# Overview: Locking helpers for the in-memory store.

from __future__ import annotations

from functools import wraps


def synchronized(method):
    """
    Run a storage method while holding the instance's re-entrant lock.

    Every read-modify-write in the store (stats deltas, counter increments,
    idempotent link inserts) goes through a synchronized method, so a
    threaded server cannot lose updates.
    """
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper
