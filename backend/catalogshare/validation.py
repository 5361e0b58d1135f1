from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .models import ORDER_STATUSES, STOCK_STATUSES

# Maximum price accepted from clients; keeps nonsensical values out of stats
MAX_PRICE = 9_999_999.99


class ValidationError(ValueError):
    """400-level input problem."""


@dataclass(frozen=True)
class FieldSpec:
    """
    Type and shape of one client-writable field.

    kind is one of "str", "int", "float", "bool", "enum".
    """
    kind: str
    nullable: bool = True
    max_length: int | None = None
    choices: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    """
    writable_fields: set[str]
    required_on_create: set[str] = None  # type: ignore


PRODUCT_FIELDS = {
    "name": FieldSpec("str", nullable=False, max_length=255),
    "description": FieldSpec("str"),
    "sku": FieldSpec("str", nullable=False, max_length=64),
    "price": FieldSpec("float", nullable=False),
    "stock": FieldSpec("int", nullable=False),
    "stock_status": FieldSpec("enum", nullable=False, choices=STOCK_STATUSES),
    "image_url": FieldSpec("str", max_length=2048),
    "category_id": FieldSpec("int", nullable=False),
}

CATEGORY_FIELDS = {
    "name": FieldSpec("str", nullable=False, max_length=255),
    "description": FieldSpec("str"),
}

CATALOGUE_FIELDS = {
    "name": FieldSpec("str", nullable=False, max_length=255),
    "description": FieldSpec("str"),
    "image_url": FieldSpec("str", max_length=2048),
    "is_public": FieldSpec("bool", nullable=False),
}

ORDER_FIELDS = {
    "customer_name": FieldSpec("str", nullable=False, max_length=255),
    "customer_email": FieldSpec("str", max_length=255),
    "customer_phone": FieldSpec("str", max_length=32),
    "total_amount": FieldSpec("float", nullable=False),
}

ORDER_ITEM_FIELDS = {
    "product_id": FieldSpec("int", nullable=False),
    "quantity": FieldSpec("int", nullable=False),
    "price": FieldSpec("float", nullable=False),
}

STORE_SETTINGS_FIELDS = {
    "store_name": FieldSpec("str", max_length=255),
    "store_description": FieldSpec("str"),
    "store_url": FieldSpec("str", max_length=255),
    "whatsapp_number": FieldSpec("str", max_length=32),
    "primary_color": FieldSpec("str", max_length=32),
}

PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields=set(PRODUCT_FIELDS),
    required_on_create={"name", "sku", "price", "category_id"},
)

CATEGORY_POLICY = ModelValidationPolicy(
    writable_fields=set(CATEGORY_FIELDS),
    required_on_create={"name"},
)

CATALOGUE_POLICY = ModelValidationPolicy(
    writable_fields=set(CATALOGUE_FIELDS),
    required_on_create={"name"},
)

ORDER_POLICY = ModelValidationPolicy(
    writable_fields=set(ORDER_FIELDS),
    required_on_create={"customer_name", "total_amount"},
)

ORDER_ITEM_POLICY = ModelValidationPolicy(
    writable_fields=set(ORDER_ITEM_FIELDS),
    required_on_create={"product_id", "quantity", "price"},
)

STORE_SETTINGS_POLICY = ModelValidationPolicy(
    writable_fields=set(STORE_SETTINGS_FIELDS),
)


def _coerce_value(key: str, spec: FieldSpec, value: Any):
    # Integers - strict validation to reject floats and scientific notation
    if spec.kind == "int":
        # Already an int (but not bool which is a subclass of int)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped or "e" in stripped.lower() or "." in stripped:
                raise ValidationError(f"{key} must be a plain integer")
            try:
                return int(stripped)
            except ValueError:
                raise ValidationError(f"{key} must be an integer")
        raise ValidationError(f"{key} must be an integer")

    if spec.kind == "float":
        if isinstance(value, bool):
            raise ValidationError(f"{key} must be a number")
        if isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError:
                raise ValidationError(f"{key} must be a finite number")
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                raise ValidationError(f"{key} must be a number")
        else:
            raise ValidationError(f"{key} must be a number")
        # NaN and infinity
        if not math.isfinite(number):
            raise ValidationError(f"{key} must be a finite number")
        return number

    if spec.kind == "bool":
        if isinstance(value, bool):
            return value
        raise ValidationError(f"{key} must be true or false")

    if spec.kind == "enum":
        if value not in (spec.choices or ()):
            raise ValidationError(f"{key} must be one of: {', '.join(spec.choices or ())}")
        return value

    # Strings
    return str(value).strip()


def validate_payload(
    *,
    fields: dict[str, FieldSpec],
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - the field specs (nullable, type, max length, enum choices)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    Unknown keys are ignored rather than rejected; clients send extra
    presentation keys (product_ids, items, message) alongside the record.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    required = policy.required_on_create or set()
    if not partial:
        missing = sorted(f for f in required if f not in payload)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    patch: dict = {}
    for key, raw in payload.items():
        if key not in policy.writable_fields:
            continue
        spec = fields[key]

        if raw is None:
            if not spec.nullable:
                raise ValidationError(f"{key} cannot be null")
            patch[key] = None
            continue

        val = _coerce_value(key, spec, raw)

        if spec.kind == "str" and not spec.nullable and val == "":
            raise ValidationError(f"{key} cannot be blank")
        if spec.kind == "str" and spec.max_length and len(val) > spec.max_length:
            raise ValidationError(f"{key} exceeds max length {spec.max_length}")

        patch[key] = val

    return patch


def enforce_rules_product(patch: dict) -> None:
    if "price" in patch:
        if patch["price"] < 0:
            raise ValidationError("price must be >= 0")
        if patch["price"] > MAX_PRICE:
            raise ValidationError(f"price cannot exceed {MAX_PRICE:,.2f}")
    if "stock" in patch and patch["stock"] < 0:
        raise ValidationError("stock must be >= 0")


def enforce_rules_order(patch: dict) -> None:
    if "total_amount" in patch and patch["total_amount"] < 0:
        raise ValidationError("total_amount must be >= 0")


def validate_order_items(raw_items: Any) -> list[dict]:
    """An order needs at least one item; each with quantity > 0 and price >= 0."""
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("Order must contain at least one item")

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            raise ValidationError("Invalid order item")
        item = validate_payload(fields=ORDER_ITEM_FIELDS, payload=raw, policy=ORDER_ITEM_POLICY, partial=False)
        if item["quantity"] <= 0:
            raise ValidationError("quantity must be > 0")
        if item["price"] < 0:
            raise ValidationError("price must be >= 0")
        items.append(item)
    return items


def validate_order_status(value: Any) -> str:
    if value not in ORDER_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(ORDER_STATUSES)}")
    return value


def validate_product_ids(value: Any) -> list[int] | None:
    """Optional list of product ids sent with a catalogue; None when absent."""
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError("product_ids must be a list")
    spec = FieldSpec("int", nullable=False)
    return [_coerce_value("product_ids", spec, v) for v in value]


def require_json_object(payload: Any) -> dict:
    """Request bodies must be JSON objects; arrays and scalars are rejected."""
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    return payload
