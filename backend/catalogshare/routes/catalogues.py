# Overview: Flask API routes for catalogues, their products and sharing.

"""
Catalogue routes.

GET /api/catalogues/<id> is the public catalogue view: every call counts
as a view. Sharing counts a share and returns a WhatsApp deep link.
"""
from flask import Blueprint, current_app, g, jsonify, request

from ..decorators import with_merchant
from ..extensions import get_storage
from ..services import catalogue_service, share_service
from ..storage.memory import DEFAULT_POPULAR_LIMIT
from ..validation import (
    CATALOGUE_FIELDS,
    CATALOGUE_POLICY,
    ValidationError,
    require_json_object,
    validate_payload,
    validate_product_ids,
)

catalogues_bp = Blueprint("catalogues", __name__, url_prefix="/api/catalogues")


@catalogues_bp.get("")
@with_merchant
def list_catalogues():
    catalogues = get_storage().list_catalogues(g.user_id)
    return jsonify([c.to_dict() for c in catalogues]), 200


@catalogues_bp.get("/popular")
@with_merchant
def list_popular_catalogues():
    """
    Most viewed catalogues first.

    Query params:
    - limit: int (optional, default 3)
    """
    limit = request.args.get("limit", default=DEFAULT_POPULAR_LIMIT, type=int)
    catalogues = get_storage().list_popular_catalogues(g.user_id, limit)
    return jsonify([c.to_dict() for c in catalogues]), 200


@catalogues_bp.get("/<int:catalogue_id>")
@with_merchant
def view_catalogue(catalogue_id: int):
    storage = get_storage()
    catalogue = storage.get_catalogue(catalogue_id)
    if not catalogue:
        return {"error": "Catalogue not found"}, 404

    viewed = storage.increment_catalogue_view_count(catalogue_id) or catalogue
    return catalogue_service.catalogue_detail(storage, viewed), 200


@catalogues_bp.post("")
@with_merchant
def create_catalogue():
    payload = request.get_json(silent=True) or {}
    try:
        payload = require_json_object(payload)
        patch = validate_payload(fields=CATALOGUE_FIELDS, payload=payload, policy=CATALOGUE_POLICY, partial=False)
        product_ids = validate_product_ids(payload.get("product_ids"))
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        catalogue = catalogue_service.create_catalogue(
            get_storage(), user_id=g.user_id, patch=patch, product_ids=product_ids
        )
    except Exception:
        current_app.logger.exception("Failed to create catalogue")
        return {"error": "Failed to create catalogue"}, 500

    return catalogue.to_dict(), 201


@catalogues_bp.put("/<int:catalogue_id>")
@with_merchant
def update_catalogue(catalogue_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        payload = require_json_object(payload)
        patch = validate_payload(fields=CATALOGUE_FIELDS, payload=payload, policy=CATALOGUE_POLICY, partial=True)
        product_ids = validate_product_ids(payload.get("product_ids"))
    except ValidationError as e:
        return {"error": str(e)}, 400

    updated = catalogue_service.update_catalogue(
        get_storage(), catalogue_id, patch=patch, product_ids=product_ids
    )
    if not updated:
        return {"error": "Catalogue not found"}, 404
    return updated.to_dict(), 200


@catalogues_bp.delete("/<int:catalogue_id>")
@with_merchant
def delete_catalogue(catalogue_id: int):
    if not get_storage().delete_catalogue(catalogue_id):
        return {"error": "Catalogue not found"}, 404
    return "", 204


@catalogues_bp.post("/<int:catalogue_id>/share")
@with_merchant
def share_catalogue(catalogue_id: int):
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return {"error": "Invalid JSON payload"}, 400
    base_url = current_app.config.get("PUBLIC_BASE_URL") or request.host_url

    try:
        result = share_service.share_catalogue(
            get_storage(),
            catalogue_id,
            base_url=base_url,
            message=payload.get("message"),
        )
    except share_service.ShareError as exc:
        return {"error": str(exc)}, 400

    if result is None:
        return {"error": "Catalogue not found"}, 404
    return result, 200


@catalogues_bp.get("/<int:catalogue_id>/products")
@with_merchant
def list_catalogue_products(catalogue_id: int):
    storage = get_storage()
    if not storage.get_catalogue(catalogue_id):
        return {"error": "Catalogue not found"}, 404
    products = storage.list_products_in_catalogue(catalogue_id)
    return jsonify([p.to_dict() for p in products]), 200


@catalogues_bp.post("/<int:catalogue_id>/products")
@with_merchant
def add_catalogue_product(catalogue_id: int):
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return {"error": "Invalid JSON payload"}, 400
    try:
        product_ids = validate_product_ids([payload.get("product_id")])
    except ValidationError:
        return {"error": "product_id must be an integer"}, 400

    storage = get_storage()
    if not storage.get_catalogue(catalogue_id):
        return {"error": "Catalogue not found"}, 404
    if not storage.get_product(product_ids[0]):
        return {"error": "Product not found"}, 404

    storage.add_product_to_catalogue(catalogue_id, product_ids[0])
    return {"message": "Product added to catalogue"}, 201


@catalogues_bp.delete("/<int:catalogue_id>/products/<int:product_id>")
@with_merchant
def remove_catalogue_product(catalogue_id: int, product_id: int):
    storage = get_storage()
    if not storage.get_catalogue(catalogue_id):
        return {"error": "Catalogue not found"}, 404
    storage.remove_product_from_catalogue(catalogue_id, product_id)
    return "", 204
