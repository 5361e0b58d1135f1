# Overview: Flask API routes for products; parses input and returns JSON responses.

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import with_merchant
from ..extensions import get_storage
from ..validation import (
    PRODUCT_FIELDS,
    PRODUCT_POLICY,
    ValidationError,
    enforce_rules_product,
    validate_payload,
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
@with_merchant
def list_products():
    """
    List the merchant's products in creation order.

    Query params:
    - category_id: int (optional) - only products in this category
    """
    storage = get_storage()
    category_id = request.args.get("category_id", type=int)
    if category_id is not None:
        products = storage.list_products_by_category(category_id)
    else:
        products = storage.list_products(g.user_id)
    return jsonify([p.to_dict() for p in products]), 200


@products_bp.get("/<int:product_id>")
@with_merchant
def get_product(product_id: int):
    product = get_storage().get_product(product_id)
    if not product:
        return {"error": "Product not found"}, 404
    return product.to_dict(), 200


@products_bp.post("")
@with_merchant
def create_product_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(fields=PRODUCT_FIELDS, payload=payload, policy=PRODUCT_POLICY, partial=False)
        enforce_rules_product(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        product = get_storage().create_product({**patch, "user_id": g.user_id})
    except Exception:
        current_app.logger.exception("Failed to create product")
        return {"error": "Failed to create product"}, 500

    return product.to_dict(), 201


@products_bp.put("/<int:product_id>")
@with_merchant
def update_product_route(product_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(fields=PRODUCT_FIELDS, payload=payload, policy=PRODUCT_POLICY, partial=True)
        enforce_rules_product(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    updated = get_storage().update_product(product_id, patch)
    if not updated:
        return {"error": "Product not found"}, 404

    return updated.to_dict(), 200


@products_bp.delete("/<int:product_id>")
@with_merchant
def delete_product_route(product_id: int):
    if not get_storage().delete_product(product_id):
        return {"error": "Product not found"}, 404
    return "", 204
