"""Cart & Wishlist Routes — duplicate rejection, per-user listing, scoped removal.

Invariants:
    - Same (productName, userEmail) twice → one 201, one 409, one stored item
    - Listing is filtered by userEmail
    - Removal needs both userEmail and _id to match
    - Malformed ids are 400s that never reach the gateway
    - cart and wishlist are independent collections with identical rules
"""

import pytest
from bson import ObjectId

from boutique.core.domain_types import Collection

LISTS = [("cart", Collection.CART), ("wishlist", Collection.WISHLIST)]


def _item(**overrides):
    item = {
        "productName": "Silk Scarf",
        "price": 25,
        "image": "https://img.example.com/scarf.jpg",
        "userEmail": "a@x.com",
    }
    item.update(overrides)
    return item


@pytest.mark.parametrize("path,collection", LISTS)
async def test_add_item_returns_201(client, gateway, path, collection):
    res = await client.post(f"/{path}", json=_item())
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == f"Item added to {path}"
    assert ObjectId.is_valid(body["itemId"])
    stored = gateway.collections[collection][0]
    assert stored["price"] == 25
    assert "createdAt" in stored


@pytest.mark.parametrize("path,collection", LISTS)
async def test_duplicate_add_yields_one_201_and_one_409(client, gateway, path, collection):
    first = await client.post(f"/{path}", json=_item())
    second = await client.post(f"/{path}", json=_item())

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["message"] == f"Item already exists in {path}"

    listed = await client.get(f"/{path}", params={"userEmail": "a@x.com"})
    assert len(listed.json()) == 1
    assert gateway.count(collection) == 1


@pytest.mark.parametrize("path,collection", LISTS)
async def test_same_product_for_different_users_is_allowed(client, path, collection):
    assert (await client.post(f"/{path}", json=_item())).status_code == 201
    assert (await client.post(f"/{path}", json=_item(userEmail="b@x.com"))).status_code == 201


@pytest.mark.parametrize("path,collection", LISTS)
async def test_list_items_filters_by_user(client, path, collection):
    await client.post(f"/{path}", json=_item())
    await client.post(f"/{path}", json=_item(productName="Belt"))
    await client.post(f"/{path}", json=_item(userEmail="b@x.com"))

    res = await client.get(f"/{path}", params={"userEmail": "a@x.com"})
    assert res.status_code == 200
    items = res.json()
    assert sorted(i["productName"] for i in items) == ["Belt", "Silk Scarf"]
    assert all(i["userEmail"] == "a@x.com" for i in items)
    assert all(ObjectId.is_valid(i["_id"]) for i in items)


@pytest.mark.parametrize("path,collection", LISTS)
async def test_list_items_requires_user_email(client, path, collection):
    res = await client.get(f"/{path}")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("path,collection", LISTS)
async def test_add_item_requires_product_name(client, gateway, path, collection):
    payload = _item()
    del payload["productName"]
    res = await client.post(f"/{path}", json=payload)
    assert res.status_code == 400
    assert gateway.count(collection) == 0


@pytest.mark.parametrize("path,collection", LISTS)
async def test_remove_item_then_again_returns_200_then_404(client, gateway, path, collection):
    item_id = (await client.post(f"/{path}", json=_item())).json()["itemId"]
    params = {"userEmail": "a@x.com", "productId": item_id}

    first = await client.delete(f"/{path}", params=params)
    assert first.status_code == 200
    assert first.json() == {"message": f"Item removed from {path}"}
    assert gateway.count(collection) == 0

    second = await client.delete(f"/{path}", params=params)
    assert second.status_code == 404
    assert second.json()["message"] == "Item not found"


@pytest.mark.parametrize("path,collection", LISTS)
async def test_remove_item_of_another_user_returns_404(client, gateway, path, collection):
    item_id = (await client.post(f"/{path}", json=_item())).json()["itemId"]
    res = await client.delete(
        f"/{path}", params={"userEmail": "b@x.com", "productId": item_id},
    )
    assert res.status_code == 404
    assert gateway.count(collection) == 1


@pytest.mark.parametrize("path,collection", LISTS)
async def test_remove_item_with_malformed_id_never_reaches_storage(
    client, gateway, path, collection,
):
    res = await client.delete(
        f"/{path}", params={"userEmail": "a@x.com", "productId": "xyz"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid product ID"
    assert "delete" not in gateway.operations()


async def test_cart_and_wishlist_are_independent(client, gateway):
    assert (await client.post("/cart", json=_item())).status_code == 201
    assert (await client.post("/wishlist", json=_item())).status_code == 201
    assert gateway.count(Collection.CART) == 1
    assert gateway.count(Collection.WISHLIST) == 1


@pytest.mark.parametrize("path,collection", LISTS)
async def test_add_item_storage_failure_returns_500(client, gateway, path, collection):
    gateway.fail_on.add("find_one")
    res = await client.post(f"/{path}", json=_item())
    assert res.status_code == 500
    assert res.json()["message"] == f"Failed to add item to {path}"
    assert gateway.count(collection) == 0


@pytest.mark.parametrize("path,collection", LISTS)
async def test_padded_email_lists_and_removes_stored_item(client, gateway, path, collection):
    item_id = (await client.post(f"/{path}", json=_item(userEmail=" a@x.com "))).json()["itemId"]

    listed = await client.get(f"/{path}", params={"userEmail": "  a@x.com "})
    assert [i["_id"] for i in listed.json()] == [item_id]

    res = await client.delete(
        f"/{path}", params={"userEmail": " a@x.com", "productId": item_id},
    )
    assert res.status_code == 200
    assert gateway.count(collection) == 0
