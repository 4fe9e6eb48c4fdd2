"""Domain Types — names for collections, roles, and the request principal.

Invariants:
    - Collection names are the single source of truth for storage partitions
    - All valid roles encoded as Enum — no raw string matching in handlers
    - Principal is immutable once resolved for a request

Design Decisions:
    - str Enums: usable directly as pymongo collection names and JSON values
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType

from bson import ObjectId


# ─── Identity Types ──────────────────────────────────────────────

DocumentId = NewType("DocumentId", ObjectId)


# ─── Storage Partitions ─────────────────────────────────────────

class Collection(str, Enum):
    """Named document collections in the storefront database."""
    PRODUCTS = "products"
    CART = "cart"
    WISHLIST = "wishlist"
    USERS = "users"


# Collections holding per-user saved items; both carry the same
# (productName, userEmail) uniqueness rule.
SAVED_ITEM_COLLECTIONS: tuple[Collection, ...] = (Collection.CART, Collection.WISHLIST)
SAVED_ITEM_UNIQUE_KEYS: tuple[str, ...] = ("productName", "userEmail")


# ─── Access Control ─────────────────────────────────────────────

class Role(str, Enum):
    """Roles a stored user record may carry."""
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """Identified caller of a request."""
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
