"""Boundary Protocols — contract between the services and the document store.

Invariants:
    - Services NEVER import the driver — they see only DocumentGateway
    - Filters are exact-equality dicts on top-level fields
    - Storage failures surface as DatabaseError; unique-index rejections as
      UniqueConstraintError (both from core/errors.py)

Design Decisions:
    - Protocol over ABC: the pymongo gateway and the in-memory test gateway
      satisfy it structurally, with no shared base class
"""

from dataclasses import dataclass
from typing import Protocol

from bson import ObjectId

from boutique.core.domain_types import Collection


@dataclass(frozen=True)
class UpdateOutcome:
    """Counts reported by a single-document update."""
    matched: int
    modified: int


class DocumentGateway(Protocol):
    """Per-collection persistence operations — implemented by infrastructure."""
    async def find(self, collection: Collection, query: dict) -> list[dict]: ...
    async def find_one(self, collection: Collection, query: dict) -> dict | None: ...
    async def insert_one(self, collection: Collection, document: dict) -> ObjectId: ...
    async def update_one(
        self, collection: Collection, query: dict, fields: dict,
    ) -> UpdateOutcome: ...
    async def delete_one(self, collection: Collection, query: dict) -> int: ...
    async def ping(self) -> bool: ...
    async def close(self) -> None: ...
