# Overview: Flask API routes for categories.

from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import with_merchant
from ..extensions import get_storage
from ..validation import CATEGORY_FIELDS, CATEGORY_POLICY, ValidationError, validate_payload

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@categories_bp.get("")
@with_merchant
def list_categories():
    categories = get_storage().list_categories(g.user_id)
    return jsonify([c.to_dict() for c in categories]), 200


@categories_bp.get("/<int:category_id>")
@with_merchant
def get_category(category_id: int):
    category = get_storage().get_category(category_id)
    if not category:
        return {"error": "Category not found"}, 404
    return category.to_dict(), 200


@categories_bp.post("")
@with_merchant
def create_category():
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(fields=CATEGORY_FIELDS, payload=payload, policy=CATEGORY_POLICY, partial=False)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        category = get_storage().create_category({**patch, "user_id": g.user_id})
    except Exception:
        current_app.logger.exception("Failed to create category")
        return {"error": "Failed to create category"}, 500

    return category.to_dict(), 201


@categories_bp.put("/<int:category_id>")
@with_merchant
def update_category(category_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(fields=CATEGORY_FIELDS, payload=payload, policy=CATEGORY_POLICY, partial=True)
    except ValidationError as e:
        return {"error": str(e)}, 400

    updated = get_storage().update_category(category_id, patch)
    if not updated:
        return {"error": "Category not found"}, 404
    return updated.to_dict(), 200


@categories_bp.delete("/<int:category_id>")
@with_merchant
def delete_category(category_id: int):
    if not get_storage().delete_category(category_id):
        return {"error": "Category not found"}, 404
    return "", 204
