"""Product Service — catalogue listing, creation, partial update, and deletion.

Invariants:
    - Identifiers are validated before any gateway call (malformed -> 400, storage untouched)
    - Creation stamps createdAt immediately before the insert is issued
    - Update succeeds only when exactly one document was actually modified
    - Delete succeeds only when exactly one document was removed
"""

import logging
from datetime import datetime, timezone

from boutique.core.coercion import parse_object_id
from boutique.core.documents import (
    build_product_document, build_product_update, serialize_document,
)
from boutique.core.domain_types import Collection
from boutique.core.errors import (
    InvalidObjectIdError, RequestValidationFailed, ResourceNotFoundError,
)
from boutique.core.repository_protocols import DocumentGateway
from boutique.services.failure_messages import reported_as

logger = logging.getLogger(__name__)


async def list_products(db: DocumentGateway) -> list[dict]:
    async with reported_as("Failed to fetch products"):
        products = await db.find(Collection.PRODUCTS, {})
    return [serialize_document(p) for p in products]


async def add_product(db: DocumentGateway, payload: dict) -> str:
    """Coerce and insert a product. Returns the new id as a hex string."""
    document, errors = build_product_document(payload, datetime.now(timezone.utc))
    if errors:
        raise RequestValidationFailed("Invalid product data", errors)

    async with reported_as("Failed to add product"):
        product_id = await db.insert_one(Collection.PRODUCTS, document)
    logger.info(
        f"Product created: {document['productName']}",
        extra={"collection": Collection.PRODUCTS.value, "product_id": str(product_id)},
    )
    return str(product_id)


async def update_product(db: DocumentGateway, raw_id: str, payload: dict) -> None:
    """Apply a partial $set to one product."""
    product_id = parse_object_id(raw_id)
    if product_id is None:
        raise InvalidObjectIdError(raw_id, "Invalid product ID")

    fields, errors = build_product_update(payload)
    if errors:
        raise RequestValidationFailed("Invalid product update", errors)

    async with reported_as("Error updating product"):
        outcome = await db.update_one(
            Collection.PRODUCTS, {"_id": product_id}, fields,
        )
    if outcome.modified != 1:
        raise ResourceNotFoundError(
            "Product", raw_id, "Product not found or no changes made",
        )
    logger.info(
        f"Product updated: fields={sorted(fields)}",
        extra={"collection": Collection.PRODUCTS.value, "product_id": raw_id},
    )


async def delete_product(db: DocumentGateway, raw_id: str) -> None:
    product_id = parse_object_id(raw_id)
    if product_id is None:
        raise InvalidObjectIdError(raw_id, "Invalid product ID")

    async with reported_as("An error occurred while deleting the product"):
        deleted = await db.delete_one(Collection.PRODUCTS, {"_id": product_id})
    if deleted == 0:
        raise ResourceNotFoundError("Product", raw_id, "Product not found")
    logger.info(
        "Product deleted",
        extra={"collection": Collection.PRODUCTS.value, "product_id": raw_id},
    )
