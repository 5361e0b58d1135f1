# Overview: Flask extension instance holding the per-app in-memory storage.

from __future__ import annotations

from flask import Flask, current_app

from .storage import MemStorage
from .storage.seed import seed_demo_data

EXTENSION_KEY = "catalogshare.storage"


class StorageExtension:
    """
    Binds one MemStorage to each Flask app.

    The store lives in app.extensions rather than at module level so every
    app (and every test) starts from a fresh, independently seeded store.
    """

    def init_app(self, app: Flask, storage: MemStorage | None = None) -> MemStorage:
        if storage is None:
            storage = MemStorage(password_rounds=app.config["BCRYPT_ROUNDS"])
            if app.config.get("SEED_DEMO_DATA", True):
                seed_demo_data(storage)
        app.extensions[EXTENSION_KEY] = storage
        return storage


storage_ext = StorageExtension()


def get_storage() -> MemStorage:
    return current_app.extensions[EXTENSION_KEY]
