from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import bcrypt

DEFAULT_PRIMARY_COLOR = "#0f766e"

# Store settings live on the user record; these are the only writable ones
STORE_SETTINGS_FIELDS = (
    "store_name",
    "store_description",
    "store_url",
    "whatsapp_number",
    "primary_color",
)


@dataclass
class User:
    """
    Merchant login identity and store configuration in one record.

    Single-tenant: the seeded demo merchant is the only meaningful user and
    every other record points at it through user_id.
    """
    id: int
    username: str
    password_hash: str
    store_name: Optional[str] = None
    store_description: Optional[str] = None
    store_url: Optional[str] = None
    whatsapp_number: Optional[str] = None
    primary_color: Optional[str] = DEFAULT_PRIMARY_COLOR

    def check_password(self, password: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), self.password_hash.encode("utf-8"))
        except ValueError:
            return False

    def to_dict(self) -> dict:
        # password_hash is never serialized
        return {
            "id": self.id,
            "username": self.username,
            "store_name": self.store_name,
            "store_description": self.store_description,
            "store_url": self.store_url,
            "whatsapp_number": self.whatsapp_number,
            "primary_color": self.primary_color,
        }


def hash_password(password: str, *, rounds: int = 12) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
