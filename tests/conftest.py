"""Shared fixtures for variant engine tests.

The scenario catalog is a game account sold by region and account tier:

    (EU, Standard) $10, stock 5
    (EU, Safe)     $15, stock 0
    (US, Standard) $12, stock 3
"""

from decimal import Decimal
from typing import Any

import pytest

from storefront.domain import CatalogItem, Option, Variant
from storefront.infrastructure.logging_config import configure_logging


@pytest.fixture(scope="session", autouse=True)
def _logging() -> None:
    """Configure structlog once for the test session."""
    configure_logging(level="DEBUG", json=False)


@pytest.fixture
def options() -> list[Option]:
    """Region and Tier options."""
    return [
        Option(id="region", name="Region", values=("EU", "US")),
        Option(id="tier", name="Tier", values=("Standard", "Safe")),
    ]


@pytest.fixture
def variants() -> list[Variant]:
    """Variant table of the scenario catalog."""
    return [
        Variant(
            id="eu-standard",
            selected_options={"region": "EU", "tier": "Standard"},
            price=Decimal("10"),
            stock=5,
        ),
        Variant(
            id="eu-safe",
            selected_options={"region": "EU", "tier": "Safe"},
            price=Decimal("15"),
            stock=0,
        ),
        Variant(
            id="us-standard",
            selected_options={"region": "US", "tier": "Standard"},
            price=Decimal("12"),
            stock=3,
        ),
    ]


@pytest.fixture
def catalog_item(options: list[Option], variants: list[Variant]) -> CatalogItem:
    """Catalog item built from the scenario catalog."""
    return CatalogItem(
        id="game-001",
        slug="elden-ring-account",
        title="Elden Ring Account",
        base_price=Decimal("10"),
        options=options,
        variants=variants,
    )


@pytest.fixture
def optionless_item() -> CatalogItem:
    """Catalog item without options, on sale, with tracked stock."""
    return CatalogItem(
        id="figure-001",
        slug="malenia-figure",
        title="Malenia Figure",
        base_price=Decimal("40"),
        on_sale=True,
        sale_price=Decimal("30"),
        stock=2,
    )


@pytest.fixture
def catalog_document() -> dict[str, Any]:
    """Scenario catalog as the document store returns it."""
    return {
        "_id": "game-001",
        "slug": "elden-ring-account",
        "title": "Elden Ring Account",
        "basePrice": 10,
        "options": [
            {"id": "region", "name": "Region", "values": ["EU", "US"]},
            {"id": "tier", "name": "Tier", "values": ["Standard", "Safe"]},
        ],
        "variants": [
            {
                "id": "eu-standard",
                "selectedOptions": {"region": "EU", "tier": "Standard"},
                "price": 10,
                "stock": 5,
            },
            {
                "id": "eu-safe",
                "selectedOptions": {"region": "EU", "tier": "Safe"},
                "price": 15,
                "stock": 0,
            },
            {
                "id": "us-standard",
                "selectedOptions": [
                    {"optionId": "region", "value": "US"},
                    {"optionId": "tier", "value": "Standard"},
                ],
                "price": 12,
                "stock": 3,
            },
        ],
    }
