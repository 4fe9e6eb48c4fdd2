"""Service test fixtures — in-memory gateway + FastAPI test client.

Invariants:
    - Every test gets a fresh FakeGateway
    - get_db dependency overridden to return that gateway (auth lookups included)
    - The lifespan hook never runs: no MongoDB connection is attempted

Design Decisions:
    - In-memory gateway over a live MongoDB: fast, no external dependency,
      and the unique-index rule is reproduced so conflict paths are exercised
"""

import pytest
from httpx import ASGITransport, AsyncClient

from boutique.core.domain_types import Collection
from boutique.infrastructure.database import get_db
from boutique.main import app
from tests.services.fake_gateway import FakeGateway

ADMIN_EMAIL = "admin@boutique.test"
SHOPPER_EMAIL = "shopper@boutique.test"


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
async def client(gateway):
    """FastAPI test client with the gateway dependency overridden."""
    app.dependency_overrides[get_db] = lambda: gateway

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(gateway):
    """Seed an admin user (provisioned directly in storage) and identify as them."""
    gateway.seed(Collection.USERS, {
        "email": ADMIN_EMAIL, "name": "Admin", "photoURL": None, "role": "admin",
    })
    return {"X-User-Email": ADMIN_EMAIL}


@pytest.fixture
def shopper_headers(gateway):
    gateway.seed(Collection.USERS, {
        "email": SHOPPER_EMAIL, "name": "Shopper", "photoURL": None, "role": "user",
    })
    return {"X-User-Email": SHOPPER_EMAIL}


@pytest.fixture
def product_payload():
    return {
        "productName": "Linen Summer Dress",
        "image": "https://img.example.com/dress.jpg",
        "category": "women",
        "subcategory": "dresses",
        "price": "49.90",
        "discount": "10%",
        "rating": "4.5",
        "details": "Breathable linen, midi length",
        "adminEmail": ADMIN_EMAIL,
        "isStock": True,
        "productQuantity": "12",
        "isDiscount": "true",
    }
