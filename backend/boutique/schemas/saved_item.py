"""Saved Item Schemas — cart and wishlist request bodies."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class SavedItemCreate(BaseModel):
    """Body of POST /cart and POST /wishlist."""
    productName: str = Field(min_length=1, max_length=500)
    price: Any = None
    image: str | None = None
    userEmail: str = Field(min_length=3, max_length=320)

    @field_validator("productName", "userEmail")
    @classmethod
    def strip_and_require(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class SavedItemCreated(BaseModel):
    message: str
    itemId: str
