# backend/catalogshare/routes/system.py
"""
System health endpoint.
"""

from flask import Blueprint

from ..extensions import get_storage

system_bp = Blueprint("system", __name__)


@system_bp.get("/health")
def health():
    storage = get_storage()
    return {
        "status": "healthy",
        "storage": "memory",
        "details": {
            "users": len(storage.users),
            "products": len(storage.products),
            "catalogues": len(storage.catalogues),
            "orders": len(storage.orders),
        },
    }, 200
