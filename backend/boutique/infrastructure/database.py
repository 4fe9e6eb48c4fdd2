"""Document Gateway — pymongo asyncio client behind the DocumentGateway protocol.

Invariants:
    - One AsyncMongoClient per process, created in the lifespan hook and closed on shutdown
    - Every driver or BSON encoding exception is mapped to DatabaseError (core/errors.py);
      DuplicateKeyError becomes UniqueConstraintError
    - cart and wishlist carry a compound unique index on (productName, userEmail)

Design Decisions:
    - Gateway stored on app.state and handed to routes by get_db(): no module-level
      connection, tests swap it through dependency_overrides
    - Stable API v1 (strict): server rejects commands outside the versioned API
    - tz_aware=True: createdAt round-trips as an aware UTC datetime
"""

import logging

from bson import ObjectId
from bson.errors import BSONError
from fastapi import Request
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError
from pymongo.server_api import ServerApi

from boutique.core.domain_types import (
    Collection, SAVED_ITEM_COLLECTIONS, SAVED_ITEM_UNIQUE_KEYS,
)
from boutique.core.errors import DatabaseError, UniqueConstraintError
from boutique.core.repository_protocols import DocumentGateway, UpdateOutcome

logger = logging.getLogger(__name__)

SAVED_ITEM_INDEX_NAME = "product_user_unique"

# BSON encoding failures (invalid keys, ints beyond 8 bytes) are raised
# client-side, outside the PyMongoError hierarchy
DRIVER_ERRORS = (PyMongoError, BSONError, OverflowError)


class MongoGateway:
    """DocumentGateway over a MongoDB database."""

    def __init__(
        self, database_url: str, database_name: str, timeout_ms: int = 5000,
    ):
        self.client = AsyncMongoClient(
            database_url,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=timeout_ms,
            tz_aware=True,
        )
        self.db = self.client[database_name]

    async def find(self, collection: Collection, query: dict) -> list[dict]:
        try:
            cursor = self.db[collection.value].find(query)
            return await cursor.to_list()
        except DRIVER_ERRORS as e:
            logger.error(f"DB find error: {e}", extra={"collection": collection.value})
            raise DatabaseError("Query failed", "find")

    async def find_one(self, collection: Collection, query: dict) -> dict | None:
        try:
            return await self.db[collection.value].find_one(query)
        except DRIVER_ERRORS as e:
            logger.error(f"DB find_one error: {e}", extra={"collection": collection.value})
            raise DatabaseError("Query failed", "find_one")

    async def insert_one(self, collection: Collection, document: dict) -> ObjectId:
        try:
            result = await self.db[collection.value].insert_one(document)
        except DuplicateKeyError as e:
            logger.warning(
                f"DB unique index rejected insert: {e}",
                extra={"collection": collection.value},
            )
            raise UniqueConstraintError(collection.value)
        except DRIVER_ERRORS as e:
            logger.error(f"DB insert error: {e}", extra={"collection": collection.value})
            raise DatabaseError("Insert failed", "insert")
        return result.inserted_id

    async def update_one(
        self, collection: Collection, query: dict, fields: dict,
    ) -> UpdateOutcome:
        try:
            result = await self.db[collection.value].update_one(query, {"$set": fields})
        except DRIVER_ERRORS as e:
            logger.error(f"DB update error: {e}", extra={"collection": collection.value})
            raise DatabaseError("Update failed", "update")
        return UpdateOutcome(
            matched=result.matched_count, modified=result.modified_count,
        )

    async def delete_one(self, collection: Collection, query: dict) -> int:
        try:
            result = await self.db[collection.value].delete_one(query)
        except DRIVER_ERRORS as e:
            logger.error(f"DB delete error: {e}", extra={"collection": collection.value})
            raise DatabaseError("Delete failed", "delete")
        return result.deleted_count

    async def ensure_indexes(self) -> None:
        """Create the (productName, userEmail) unique index on saved-item collections.

        An index build that fails (e.g. existing duplicates) is logged and
        skipped; the service-level duplicate check still applies.
        """
        keys = [(key, ASCENDING) for key in SAVED_ITEM_UNIQUE_KEYS]
        for collection in SAVED_ITEM_COLLECTIONS:
            try:
                await self.db[collection.value].create_index(
                    keys, unique=True, name=SAVED_ITEM_INDEX_NAME,
                )
            except PyMongoError as e:
                logger.warning(
                    f"Could not build unique index on {collection.value}: {e}",
                    extra={"collection": collection.value},
                )

    async def ping(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"DB ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()


async def init_db(
    database_url: str, database_name: str, timeout_ms: int = 5000,
) -> MongoGateway:
    gateway = MongoGateway(database_url, database_name, timeout_ms)
    if await gateway.ping():
        logger.info("Connected to MongoDB")
        await gateway.ensure_indexes()
    else:
        logger.warning(
            "MongoDB unreachable at startup; unique indexes not built, "
            "saved-item duplicates rely on the pre-insert check",
        )
    return gateway


def get_db(request: Request) -> DocumentGateway:
    """FastAPI dependency for the process-wide document gateway."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("Database not initialized")
    return gateway
