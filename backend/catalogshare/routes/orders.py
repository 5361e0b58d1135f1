# Overview: Flask API routes for orders and order status changes.

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import with_merchant
from ..extensions import get_storage
from ..services import order_service
from ..storage.memory import DEFAULT_RECENT_LIMIT
from ..validation import (
    ORDER_FIELDS,
    ORDER_POLICY,
    ValidationError,
    enforce_rules_order,
    require_json_object,
    validate_order_items,
    validate_order_status,
    validate_payload,
)

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


@orders_bp.get("")
@with_merchant
def list_orders():
    """
    Newest orders first.

    Query params:
    - limit: int (optional) - at most this many orders
    """
    limit = request.args.get("limit", type=int)
    orders = get_storage().list_orders(g.user_id, limit)
    return jsonify([o.to_dict() for o in orders]), 200


@orders_bp.get("/recent")
@with_merchant
def list_recent_orders():
    limit = request.args.get("limit", default=DEFAULT_RECENT_LIMIT, type=int)
    orders = get_storage().list_recent_orders(g.user_id, limit)
    return jsonify([o.to_dict() for o in orders]), 200


@orders_bp.get("/<int:order_id>")
@with_merchant
def get_order(order_id: int):
    storage = get_storage()
    order = storage.get_order(order_id)
    if not order:
        return {"error": "Order not found"}, 404
    return order_service.order_detail(storage, order), 200


@orders_bp.post("")
@with_merchant
def create_order():
    """
    Place an order from the storefront.

    Any status in the payload is ignored; new orders are always pending.
    """
    payload = request.get_json(silent=True) or {}
    try:
        payload = require_json_object(payload)
        patch = validate_payload(fields=ORDER_FIELDS, payload=payload, policy=ORDER_POLICY, partial=False)
        enforce_rules_order(patch)
        items = validate_order_items(payload.get("items"))
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        order = order_service.place_order(get_storage(), user_id=g.user_id, patch=patch, items=items)
    except Exception:
        current_app.logger.exception("Failed to create order")
        return {"error": "Failed to create order"}, 500

    current_app.logger.info("Order %s placed (total=%.2f)", order.order_number, order.total_amount)
    return order.to_dict(), 201


@orders_bp.put("/<int:order_id>/status")
@with_merchant
def update_order_status(order_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        payload = require_json_object(payload)
        status = validate_order_status(payload.get("status"))
    except ValidationError as e:
        return {"error": str(e)}, 400

    updated = get_storage().update_order_status(order_id, status)
    if not updated:
        return {"error": "Order not found"}, 404
    return updated.to_dict(), 200
