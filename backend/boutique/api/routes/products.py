"""Product Routes — catalogue CRUD.

Invariants:
    - POST requires an admin principal (403 otherwise, before the body is touched)
    - PUT accepts any partial field set; coercion happens in the service
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from boutique.api.auth import require_admin
from boutique.core.domain_types import Principal
from boutique.core.repository_protocols import DocumentGateway
from boutique.infrastructure.database import get_db
from boutique.schemas.product import ProductCreate, ProductCreated
from boutique.services import products

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def get_products(db: DocumentGateway = Depends(get_db)):
    """All products, in storage order."""
    return await products.list_products(db)


@router.post(
    "", response_model=ProductCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate,
    admin: Principal = Depends(require_admin),
    db: DocumentGateway = Depends(get_db),
):
    product_id = await products.add_product(db, body.model_dump())
    return ProductCreated(message="Product added successfully!", productId=product_id)


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    body: dict[str, Any] = Body(...),
    db: DocumentGateway = Depends(get_db),
):
    await products.update_product(db, product_id, body)
    return {"message": "Product updated successfully"}


@router.delete("/{product_id}")
async def delete_product(product_id: str, db: DocumentGateway = Depends(get_db)):
    await products.delete_product(db, product_id)
    return {"message": "Product deleted successfully"}
