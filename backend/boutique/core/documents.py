"""Document Builders — storage-ready documents from validated request payloads.

Invariants:
    - Builders are PURE: timestamps are passed in, never read from the clock
    - Product builders return (document, errors); errors is a list of
      {"field", "message"} dicts and the document must not be stored when non-empty
    - discount is passed through untouched
    - _id is never writable through an update

Design Decisions:
    - Field names match the stored camelCase documents (productName, userEmail)
      so queries, indexes, and responses share one vocabulary
"""

from datetime import datetime
from typing import Any

from bson import ObjectId

from boutique.core.coercion import (
    Coerced, coerce_float, coerce_int, normalize_flag,
)
from boutique.core.domain_types import Role


NUMERIC_FIELDS: tuple[str, ...] = ("price", "rating", "productQuantity")
FLAG_FIELDS: tuple[str, ...] = ("isStock", "isDiscount")
IMMUTABLE_FIELDS: tuple[str, ...] = ("_id",)


def _coerce_numeric(field: str, raw: Any) -> Coerced:
    if field == "price":
        return coerce_float(raw, minimum=0.0)
    if field == "rating":
        return coerce_float(raw)
    return coerce_int(raw, minimum=0)


def build_product_document(
    payload: dict, created_at: datetime,
) -> tuple[dict, list[dict]]:
    """Coerce a product-creation payload. Returns (document, field errors)."""
    errors: list[dict] = []
    numeric: dict[str, Any] = {}
    for field in NUMERIC_FIELDS:
        result = _coerce_numeric(field, payload.get(field))
        if result.ok:
            numeric[field] = result.value
        else:
            errors.append({"field": field, "message": f"{field} {result.error}"})

    document = {
        "productName": payload.get("productName"),
        "image": payload.get("image"),
        "category": payload.get("category"),
        "subcategory": payload.get("subcategory"),
        "price": numeric.get("price"),
        "discount": payload.get("discount"),
        "rating": numeric.get("rating"),
        "details": payload.get("details"),
        "adminEmail": payload.get("adminEmail"),
        "isStock": normalize_flag(payload.get("isStock")),
        "productQuantity": numeric.get("productQuantity"),
        "isDiscount": normalize_flag(payload.get("isDiscount")),
        "createdAt": created_at,
    }
    return document, errors


def build_product_update(payload: dict) -> tuple[dict, list[dict]]:
    """Fields for a partial $set. Known numeric and flag fields are coerced."""
    if not payload:
        return {}, [{"field": "body", "message": "update must contain at least one field"}]

    errors: list[dict] = []
    fields: dict[str, Any] = {}
    for field, raw in payload.items():
        if field in IMMUTABLE_FIELDS:
            errors.append({"field": field, "message": f"{field} cannot be updated"})
        elif field in NUMERIC_FIELDS:
            result = _coerce_numeric(field, raw)
            if result.ok:
                fields[field] = result.value
            else:
                errors.append({"field": field, "message": f"{field} {result.error}"})
        elif field in FLAG_FIELDS:
            fields[field] = normalize_flag(raw)
        else:
            fields[field] = raw
    return fields, errors


def build_saved_item_document(payload: dict, created_at: datetime) -> dict:
    """Cart / wishlist entry. price is stored as sent."""
    return {
        "productName": payload["productName"],
        "price": payload.get("price"),
        "image": payload.get("image"),
        "userEmail": payload["userEmail"],
        "createdAt": created_at,
    }


def build_user_document(payload: dict) -> dict:
    """New user record with the default role."""
    return {
        "email": payload["email"],
        "name": payload.get("name"),
        "photoURL": payload.get("photoURL"),
        "role": Role.USER.value,
    }


def serialize_document(value: Any) -> Any:
    """Make a stored document JSON-safe: ObjectId -> str, datetime -> ISO-8601."""
    if isinstance(value, dict):
        return {k: serialize_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_document(v) for v in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value
