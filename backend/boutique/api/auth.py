"""Caller Identification — resolves the request principal and enforces roles.

Invariants:
    - Role checks only ever see a typed Principal (or its absence)
    - Fail closed: missing header, unknown user, or wrong role -> 403

Design Decisions:
    - Caller identified by the X-User-Email header and looked up in users;
      no passwords or tokens are involved
"""

import logging

from fastapi import Depends, Header, Request

from boutique.core.domain_types import Principal, Role
from boutique.core.errors import AccessDeniedError
from boutique.core.repository_protocols import DocumentGateway
from boutique.infrastructure.database import get_db
from boutique.services.users import resolve_principal

logger = logging.getLogger(__name__)


async def get_principal(
    x_user_email: str | None = Header(None),
    db: DocumentGateway = Depends(get_db),
) -> Principal | None:
    """Resolve the caller, or None when unidentified."""
    if not x_user_email or not x_user_email.strip():
        return None
    return await resolve_principal(db, x_user_email.strip())


async def require_admin(
    request: Request,
    principal: Principal | None = Depends(get_principal),
) -> Principal:
    if principal is None or not principal.is_admin:
        logger.warning(
            "Admin access denied",
            extra={
                "path": request.url.path,
                "user_email": principal.email if principal else None,
            },
        )
        raise AccessDeniedError(Role.ADMIN.value)
    return principal
