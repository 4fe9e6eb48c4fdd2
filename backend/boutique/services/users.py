"""User Service — registration, login lookup, and principal resolution.

Invariants:
    - Registration always stores role "user"; admins are provisioned in storage directly
    - Registration performs no duplicate check (one record per call)
    - Login verifies existence only; there are no credentials to check
    - An unrecognised stored role resolves to Role.USER (never to admin)
"""

import logging

from boutique.core.documents import build_user_document, serialize_document
from boutique.core.domain_types import Collection, Principal, Role
from boutique.core.errors import InvalidCredentialsError
from boutique.core.repository_protocols import DocumentGateway
from boutique.services.failure_messages import reported_as

logger = logging.getLogger(__name__)


async def register_user(db: DocumentGateway, payload: dict) -> str:
    document = build_user_document(payload)
    async with reported_as("Registration failed"):
        user_id = await db.insert_one(Collection.USERS, document)
    logger.info(
        "User registered",
        extra={"collection": Collection.USERS.value, "user_email": document["email"]},
    )
    return str(user_id)


async def login_user(db: DocumentGateway, email: str) -> dict:
    """Return the stored user record, or raise InvalidCredentialsError."""
    async with reported_as("Login failed"):
        user = await db.find_one(Collection.USERS, {"email": email})
    if not user:
        logger.warning("Login rejected: unknown email", extra={"user_email": email})
        raise InvalidCredentialsError()
    return serialize_document(user)


async def resolve_principal(db: DocumentGateway, email: str) -> Principal | None:
    """Look up the caller by email. None when no such user is stored."""
    async with reported_as("Failed to verify caller"):
        user = await db.find_one(Collection.USERS, {"email": email})
    if not user:
        return None
    try:
        role = Role(user.get("role"))
    except ValueError:
        role = Role.USER
    return Principal(email=email, role=role)
