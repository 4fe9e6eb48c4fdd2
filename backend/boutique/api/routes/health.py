"""Liveness & Readiness — plain-text root probe plus a database readiness check.

Invariants:
    - GET / always returns 200 plain text if the process is up (liveness)
    - GET /health/ready returns 503 if the database does not answer ping (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from boutique.core.repository_protocols import DocumentGateway
from boutique.infrastructure.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

LIVENESS_MESSAGE = "Trendy Boutique Server is Running"


@router.get("/", response_class=PlainTextResponse)
async def liveness():
    return LIVENESS_MESSAGE


@router.get("/health/ready")
async def readiness_check(db: DocumentGateway = Depends(get_db)):
    """Readiness probe — includes database connectivity."""
    if not await db.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
