"""Failure Messages — relabels storage failures with an endpoint-specific message.

Invariants:
    - Only DatabaseError is touched; every other exception passes through unchanged
    - The original message stays on the exception (logged), the label is what clients see
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from boutique.core.errors import DatabaseError


@asynccontextmanager
async def reported_as(user_message: str) -> AsyncIterator[None]:
    """Attach user_message to any DatabaseError raised inside the block."""
    try:
        yield
    except DatabaseError as e:
        e.context.user_message = user_message
        raise
