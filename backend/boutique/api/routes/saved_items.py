"""Saved Item Routes — /cart and /wishlist, built from one router factory.

Invariants:
    - Both routers expose POST, GET ?userEmail=, DELETE ?userEmail=&productId=
    - Response messages name the list ("Item added to cart" / "... to wishlist")
    - userEmail is stripped on every route, matching the POST body schema
"""

from fastapi import APIRouter, Depends, Query, status

from boutique.core.repository_protocols import DocumentGateway
from boutique.infrastructure.database import get_db
from boutique.schemas.saved_item import SavedItemCreate, SavedItemCreated
from boutique.services import saved_items
from boutique.services.saved_items import CART, WISHLIST, SavedList


def build_router(saved: SavedList) -> APIRouter:
    router = APIRouter(prefix=f"/{saved.label}", tags=[saved.label])

    @router.post(
        "", response_model=SavedItemCreated,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_item(body: SavedItemCreate, db: DocumentGateway = Depends(get_db)):
        item_id = await saved_items.add_item(db, saved, body.model_dump())
        return SavedItemCreated(message=f"Item added to {saved.label}", itemId=item_id)

    @router.get("")
    async def list_items(
        userEmail: str = Query(..., min_length=1),
        db: DocumentGateway = Depends(get_db),
    ):
        return await saved_items.list_items(db, saved, userEmail.strip())

    @router.delete("")
    async def remove_item(
        userEmail: str = Query(..., min_length=1),
        productId: str = Query(...),
        db: DocumentGateway = Depends(get_db),
    ):
        await saved_items.remove_item(db, saved, userEmail.strip(), productId)
        return {"message": f"Item removed from {saved.label}"}

    return router


cart_router = build_router(CART)
wishlist_router = build_router(WISHLIST)
