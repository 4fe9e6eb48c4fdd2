"""Saved Items Service — cart and wishlist share one set of rules.

Invariants:
    - At most one entry per (productName, userEmail) in a list:
      checked before insert AND enforced by the unique index (race closed)
    - Both duplicate paths produce the same DuplicateItemError (409)
    - Removal matches on (userEmail, _id): a user cannot remove another user's entry
    - Malformed identifiers never reach the gateway

Design Decisions:
    - SavedList descriptor over two copies of the handlers: cart and wishlist differ
      only in collection and the word used in messages
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from boutique.core.coercion import parse_object_id
from boutique.core.documents import build_saved_item_document, serialize_document
from boutique.core.domain_types import Collection
from boutique.core.errors import (
    DuplicateItemError, InvalidObjectIdError, ResourceNotFoundError,
    UniqueConstraintError,
)
from boutique.core.repository_protocols import DocumentGateway
from boutique.services.failure_messages import reported_as

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedList:
    collection: Collection
    label: str


CART = SavedList(Collection.CART, "cart")
WISHLIST = SavedList(Collection.WISHLIST, "wishlist")


async def add_item(db: DocumentGateway, saved: SavedList, payload: dict) -> str:
    """Insert an entry unless the user already saved this product. Returns the id."""
    match = {"productName": payload["productName"], "userEmail": payload["userEmail"]}
    log_extra = {"collection": saved.collection.value, "user_email": match["userEmail"]}

    async with reported_as(f"Failed to add item to {saved.label}"):
        existing = await db.find_one(saved.collection, match)
    if existing:
        logger.warning(f"Duplicate {saved.label} entry rejected", extra=log_extra)
        raise DuplicateItemError(saved.label)

    document = build_saved_item_document(payload, datetime.now(timezone.utc))
    try:
        async with reported_as(f"Failed to add item to {saved.label}"):
            item_id = await db.insert_one(saved.collection, document)
    except UniqueConstraintError:
        # lost the race against a concurrent add of the same pair
        logger.warning(f"Duplicate {saved.label} entry rejected by index", extra=log_extra)
        raise DuplicateItemError(saved.label)

    logger.info(f"Item added to {saved.label}", extra=log_extra)
    return str(item_id)


async def list_items(
    db: DocumentGateway, saved: SavedList, user_email: str,
) -> list[dict]:
    async with reported_as(f"Failed to fetch {saved.label} items"):
        items = await db.find(saved.collection, {"userEmail": user_email})
    return [serialize_document(item) for item in items]


async def remove_item(
    db: DocumentGateway, saved: SavedList, user_email: str, raw_id: str,
) -> None:
    item_id = parse_object_id(raw_id)
    if item_id is None:
        raise InvalidObjectIdError(raw_id, "Invalid product ID")

    async with reported_as(f"Error removing item from {saved.label}"):
        deleted = await db.delete_one(
            saved.collection, {"userEmail": user_email, "_id": item_id},
        )
    if deleted != 1:
        raise ResourceNotFoundError("Item", raw_id, "Item not found")
    logger.info(
        f"Item removed from {saved.label}",
        extra={"collection": saved.collection.value, "user_email": user_email},
    )
