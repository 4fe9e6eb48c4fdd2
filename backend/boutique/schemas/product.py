"""Product Schemas — request bodies for product creation.

Invariants:
    - Numeric and flag fields are typed Any: raw JSON values reach the coercion
      layer untouched, so "12.5", 12.5 and true/"true" stay distinguishable
    - Text fields are optional strings; storage imposes no further schema

Design Decisions:
    - Coercion lives in core/coercion.py, not in validators: failures are
      collected per field and reported together with the storefront's own messages
"""

from typing import Any

from pydantic import BaseModel


class ProductCreate(BaseModel):
    """Body of POST /products."""
    productName: str | None = None
    image: str | None = None
    category: str | None = None
    subcategory: str | None = None
    price: Any = None
    discount: Any = None
    rating: Any = None
    details: str | None = None
    adminEmail: str | None = None
    isStock: Any = None
    productQuantity: Any = None
    isDiscount: Any = None


class ProductCreated(BaseModel):
    message: str
    productId: str
