"""Mongo Gateway — driver error mapping and result translation.

Invariants:
    - DuplicateKeyError → UniqueConstraintError; other driver or BSON errors → DatabaseError
    - init_db builds indexes only after a successful ping
    - update_one reports matched/modified counts; delete_one the deleted count
    - ensure_indexes never raises; ping returns False on failure

Design Decisions:
    - Gateway built with __new__ and a dict of AsyncMock collections: no server needed
"""

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo.errors import (
    DuplicateKeyError, OperationFailure, ServerSelectionTimeoutError,
)

from boutique.core.domain_types import Collection
from boutique.core.errors import DatabaseError, UniqueConstraintError
from boutique.infrastructure.database import (
    SAVED_ITEM_INDEX_NAME, MongoGateway, init_db,
)


def _gateway(**collections):
    gateway = MongoGateway.__new__(MongoGateway)
    gateway.db = collections
    gateway.client = MagicMock()
    return gateway


async def test_insert_duplicate_key_maps_to_unique_constraint():
    cart = MagicMock()
    cart.insert_one = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))
    gateway = _gateway(cart=cart)

    with pytest.raises(UniqueConstraintError):
        await gateway.insert_one(Collection.CART, {"productName": "A"})


async def test_insert_returns_inserted_id():
    oid = ObjectId()
    products = MagicMock()
    products.insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id=oid))
    gateway = _gateway(products=products)

    assert await gateway.insert_one(Collection.PRODUCTS, {}) == oid


async def test_find_one_driver_error_maps_to_database_error():
    users = MagicMock()
    users.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    gateway = _gateway(users=users)

    with pytest.raises(DatabaseError) as exc_info:
        await gateway.find_one(Collection.USERS, {"email": "a@x.com"})
    assert exc_info.value.operation == "find_one"


async def test_find_collects_cursor():
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[{"productName": "A"}])
    products = MagicMock()
    products.find = MagicMock(return_value=cursor)
    gateway = _gateway(products=products)

    assert await gateway.find(Collection.PRODUCTS, {}) == [{"productName": "A"}]
    products.find.assert_called_once_with({})


async def test_update_translates_counts():
    products = MagicMock()
    products.update_one = AsyncMock(
        return_value=SimpleNamespace(matched_count=1, modified_count=0),
    )
    gateway = _gateway(products=products)

    outcome = await gateway.update_one(Collection.PRODUCTS, {"_id": 1}, {"price": 2.0})
    assert (outcome.matched, outcome.modified) == (1, 0)
    products.update_one.assert_awaited_once_with({"_id": 1}, {"$set": {"price": 2.0}})


async def test_delete_returns_deleted_count():
    wishlist = MagicMock()
    wishlist.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=1))
    gateway = _gateway(wishlist=wishlist)

    assert await gateway.delete_one(Collection.WISHLIST, {"_id": 1}) == 1


async def test_ensure_indexes_builds_unique_compound_index():
    cart, wishlist = MagicMock(), MagicMock()
    cart.create_index = AsyncMock()
    wishlist.create_index = AsyncMock(side_effect=OperationFailure("dup data"))
    gateway = _gateway(cart=cart, wishlist=wishlist)

    await gateway.ensure_indexes()

    cart.create_index.assert_awaited_once_with(
        [("productName", 1), ("userEmail", 1)],
        unique=True, name=SAVED_ITEM_INDEX_NAME,
    )
    wishlist.create_index.assert_awaited_once()


async def test_ping_false_when_server_unreachable():
    gateway = _gateway()
    gateway.client.admin.command = AsyncMock(
        side_effect=ServerSelectionTimeoutError("timeout"),
    )
    assert await gateway.ping() is False


async def test_ping_true_when_server_answers():
    gateway = _gateway()
    gateway.client.admin.command = AsyncMock(return_value={"ok": 1})
    assert await gateway.ping() is True
    gateway.client.admin.command.assert_awaited_once_with("ping")


async def test_bson_encoding_error_maps_to_database_error():
    products = MagicMock()
    products.update_one = AsyncMock(side_effect=InvalidDocument("key 'a\\x00b' must not contain NULL"))
    gateway = _gateway(products=products)

    with pytest.raises(DatabaseError) as exc_info:
        await gateway.update_one(Collection.PRODUCTS, {"_id": 1}, {"a\x00b": 1})
    assert exc_info.value.operation == "update"


async def test_int_overflow_on_encode_maps_to_database_error():
    products = MagicMock()
    products.insert_one = AsyncMock(
        side_effect=OverflowError("MongoDB can only handle up to 8-byte ints"),
    )
    gateway = _gateway(products=products)

    with pytest.raises(DatabaseError):
        await gateway.insert_one(Collection.PRODUCTS, {"productQuantity": 2 ** 70})


# ─── init_db ────────────────────────────────────────────────────

async def test_init_db_builds_indexes_after_successful_ping(monkeypatch):
    ping = AsyncMock(return_value=True)
    ensure_indexes = AsyncMock()
    monkeypatch.setattr(MongoGateway, "ping", ping)
    monkeypatch.setattr(MongoGateway, "ensure_indexes", ensure_indexes)

    gateway = await init_db("mongodb://localhost:27017", "trendyBoutique", timeout_ms=50)

    assert isinstance(gateway, MongoGateway)
    ping.assert_awaited_once()
    ensure_indexes.assert_awaited_once()
    await gateway.close()


async def test_init_db_skips_indexes_and_warns_when_unreachable(monkeypatch, caplog):
    ensure_indexes = AsyncMock()
    monkeypatch.setattr(MongoGateway, "ping", AsyncMock(return_value=False))
    monkeypatch.setattr(MongoGateway, "ensure_indexes", ensure_indexes)

    with caplog.at_level(logging.WARNING, logger="boutique.infrastructure.database"):
        gateway = await init_db("mongodb://localhost:27017", "trendyBoutique", timeout_ms=50)

    ensure_indexes.assert_not_awaited()
    assert "unique indexes not built" in caplog.text
    await gateway.close()
