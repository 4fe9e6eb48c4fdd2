"""Trendy Boutique API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BoutiqueError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Document gateway opened on startup and closed on shutdown via the lifespan hook

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, explicit teardown
    - Gateway lives on app.state; routes receive it through get_db()
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boutique.api.error_handlers import register_error_handlers
from boutique.api.routes import health, products, users
from boutique.api.routes.saved_items import cart_router, wishlist_router
from boutique.config import get_settings
from boutique.infrastructure.database import init_db
from boutique.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.gateway = await init_db(
        settings.database_url,
        settings.database_name,
        timeout_ms=settings.database_timeout_ms,
    )
    logger.info("Trendy Boutique API started")
    yield
    logger.info("Trendy Boutique API shutting down")
    await app.state.gateway.close()


app = FastAPI(
    title="Trendy Boutique API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(products.router)
app.include_router(cart_router)
app.include_router(wishlist_router)
app.include_router(users.router)

register_error_handlers(app)
