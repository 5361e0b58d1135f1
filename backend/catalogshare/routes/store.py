# Overview: Flask API routes for store settings, dashboard stats and customers.

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import with_merchant
from ..extensions import get_storage
from ..services import customer_service
from ..storage import UserNotFoundError
from ..validation import (
    STORE_SETTINGS_FIELDS,
    STORE_SETTINGS_POLICY,
    ValidationError,
    validate_payload,
)

store_bp = Blueprint("store", __name__, url_prefix="/api")


@store_bp.get("/store")
@with_merchant
def get_store_settings():
    user = get_storage().get_user(g.user_id)
    if not user:
        return {"error": "User not found"}, 404
    return user.to_dict(), 200


@store_bp.put("/store")
@with_merchant
def update_store_settings():
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(
            fields=STORE_SETTINGS_FIELDS, payload=payload, policy=STORE_SETTINGS_POLICY, partial=True
        )
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        user = get_storage().update_store_settings(g.user_id, patch)
    except UserNotFoundError:
        current_app.logger.exception("Failed to update store settings")
        return {"error": "Failed to update store settings"}, 500

    return user.to_dict(), 200


@store_bp.get("/stats")
@with_merchant
def get_stats():
    stats = get_storage().get_store_stats(g.user_id)
    if not stats:
        return {"error": "Stats not found"}, 404
    return stats.to_dict(), 200


@store_bp.get("/customers")
@with_merchant
def list_customers():
    return jsonify(customer_service.list_customers(get_storage(), g.user_id)), 200
