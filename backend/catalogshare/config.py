# backend/catalogshare/config.py
from __future__ import annotations
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # No authentication: every request acts as this merchant
    DEFAULT_USER_ID = int(os.environ.get("DEFAULT_USER_ID", "1"))

    # Base for public catalogue links; falls back to the request host when empty
    PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", "")

    # Demo merchant, categories and stats are loaded into every fresh store
    SEED_DEMO_DATA = _env_bool("SEED_DEMO_DATA", True)

    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
