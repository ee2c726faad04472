"""Pytest fixtures for BOQ matching tests.

Provides reusable test fixtures for:
- A small product catalog (plywood, hardware, laminate)
- BOQ line items exercising each scoring field
- A TestClient whose catalog is isolated per test

Usage:
    def test_match_endpoint(client, catalog_products):
        response = client.post("/api/v1/boq/match", json={...})
        assert response.status_code == 200
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from catalog.store import InMemoryCatalog
from dependencies import get_catalog
from domain.boq.models import BOQLineItem, CatalogProduct


@pytest.fixture
def plywood():
    return CatalogProduct(
        id=1,
        name="Century Plywood",
        category="Plywood",
        brand="Century",
        thickness="12mm",
        unit="sheets",
    )


@pytest.fixture
def hinge():
    return CatalogProduct(
        id=2,
        name="Hettich Soft Close Hinge",
        category="Hardware",
        brand="Hettich",
        unit="pieces",
    )


@pytest.fixture
def laminate():
    return CatalogProduct(
        id=3,
        name="Laminate Sheet",
        category="Laminates",
        size="8x4 feet",
        thickness="1mm calibrated",
        unit="sheets",
    )


@pytest.fixture
def catalog_products(plywood, hinge, laminate):
    """Catalog in import order."""
    return [plywood, hinge, laminate]


@pytest.fixture
def plywood_item():
    """Matches the plywood on name, thickness, brand and unit."""
    return BOQLineItem(description="Century Plywood 12mm", quantity=10, unit="sheets", rate=2500, amount=25000)


@pytest.fixture
def weak_item():
    """Only matches the laminate, on thickness, below the auto-match threshold."""
    return BOQLineItem(description="Qzx 1mm", quantity=1, unit="sheets", rate=100, amount=100)


@pytest.fixture
def hinge_item():
    return BOQLineItem(description="Hettich Hinge", quantity=20, unit="pieces", rate=150, amount=3000)


@pytest.fixture
def catalog(catalog_products):
    return InMemoryCatalog(catalog_products)


@pytest.fixture
def client(catalog):
    """TestClient with the shared catalog replaced by a per-test one."""
    from main import app

    app.dependency_overrides[get_catalog] = lambda: catalog
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
