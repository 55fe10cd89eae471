"""Tests for boundary schemas."""

from decimal import Decimal

import pytest

from storefront.application.schemas import (
    CatalogItemDocument,
    LineItemResponse,
    ResolutionResponse,
    parse_selection,
)
from storefront.domain import AvailabilityPolicy, bind_line_item, resolve_selection
from storefront.domain.exceptions import CatalogDocumentError, MalformedSelectionError


class TestCatalogItemDocument:
    """Tests for decoding stored catalog documents."""

    def test_decode_camel_case(self, catalog_document) -> None:
        """Document-store keys are decoded into a snapshot."""
        item = CatalogItemDocument.parse(catalog_document).to_domain()

        assert item.id == "game-001"
        assert item.base_price == Decimal("10")
        assert item.currency == "USD"
        assert item.option_ids == ("region", "tier")
        assert item.variant("us-standard").selected_options == (
            ("region", "US"),
            ("tier", "Standard"),
        )

    def test_decode_snake_case(self) -> None:
        """Snake-case keys are accepted as well."""
        item = CatalogItemDocument.parse(
            {
                "id": "figure-001",
                "slug": "malenia-figure",
                "base_price": "40",
                "on_sale": True,
                "sale_price": "30",
                "stock": 2,
                "currency": "eur",
            }
        ).to_domain()

        assert item.effective_base_price == Decimal("30")
        assert item.stock == 2
        assert item.currency == "EUR"
        assert not item.has_options

    def test_default_currency(self, catalog_document) -> None:
        """Documents without a currency use the given default."""
        item = CatalogItemDocument.parse(catalog_document).to_domain(default_currency="IRR")
        assert item.currency == "IRR"

    def test_non_string_id(self, catalog_document) -> None:
        """Identifiers from the store are stringified."""
        catalog_document["_id"] = 42
        assert CatalogItemDocument.parse(catalog_document).id == "42"

    def test_fractional_stock_rejected(self, catalog_document) -> None:
        """Stock must be a whole number."""
        catalog_document["variants"][0]["stock"] = 1.5
        with pytest.raises(CatalogDocumentError) as exc_info:
            CatalogItemDocument.parse(catalog_document)
        assert exc_info.value.error_code == "MALFORMED_CATALOG_DOCUMENT"

    def test_negative_values_left_to_validator(self, catalog_document) -> None:
        """Decoding does not judge business rules."""
        catalog_document["variants"][0]["price"] = -5
        item = CatalogItemDocument.parse(catalog_document).to_domain()
        assert item.variant("eu-standard").price == Decimal("-5")


class TestParseSelection:
    """Tests for client selection payloads."""

    def test_valid(self) -> None:
        """A mapping of strings passes through."""
        assert parse_selection({"region": "EU"}) == {"region": "EU"}

    def test_none_is_empty(self) -> None:
        """No payload means nothing selected."""
        assert parse_selection(None) == {}

    @pytest.mark.parametrize(
        "raw",
        [["region", "EU"], {"region": None}, {"region": ""}, {"region": 1}, "EU"],
    )
    def test_malformed(self, raw) -> None:
        """Anything but string keys to non-empty strings is rejected."""
        with pytest.raises(MalformedSelectionError) as exc_info:
            parse_selection(raw)
        assert exc_info.value.details["errors"]


class TestResponses:
    """Tests for JSON-ready responses."""

    def test_partial_response(self, catalog_item) -> None:
        """Partial results list every declared value with its state."""
        result = resolve_selection(
            catalog_item.options,
            catalog_item.variants,
            {"region": "EU"},
            AvailabilityPolicy.SHOW_SOLD_OUT_DISABLED,
        )

        body = ResolutionResponse.from_result(result, catalog_item, 5).model_dump(mode="json")

        assert body["outcome"] == "partial"
        assert body["policy"] == "show_sold_out_disabled"
        assert body["variant"] is None
        assert body["options"] == [
            {
                "option_id": "tier",
                "name": "Tier",
                "values": [
                    {"value": "Standard", "state": "available", "selectable": True},
                    {"value": "Safe", "state": "sold_out", "selectable": False},
                ],
            }
        ]
        assert body["price"]["current"] == {"amount": 1000, "currency": "USD"}

    def test_resolved_response(self, catalog_item) -> None:
        """Resolved results carry the variant and its stock flags."""
        result = resolve_selection(
            catalog_item.options, catalog_item.variants, {"region": "US", "tier": "Standard"}
        )

        body = ResolutionResponse.from_result(result, catalog_item, 5).model_dump(mode="json")

        assert body["outcome"] == "resolved"
        assert body["variant"] == {
            "id": "us-standard",
            "selected_options": {"region": "US", "tier": "Standard"},
            "price": {"amount": 1200, "currency": "USD"},
            "stock": 3,
            "in_stock": True,
            "low_stock": True,
        }
        assert body["options"] == []

    def test_discounted_price(self, optionless_item) -> None:
        """Sale prices show the original price and discount."""
        result = resolve_selection([], [], {})

        body = ResolutionResponse.from_result(result, optionless_item, 5).model_dump(mode="json")

        assert body["price"] == {
            "current": {"amount": 3000, "currency": "USD"},
            "original": {"amount": 4000, "currency": "USD"},
            "discount_percent": 25,
        }

    def test_line_item_response(self, catalog_item) -> None:
        """Line items render totals in cents."""
        result = resolve_selection(
            catalog_item.options, catalog_item.variants, {"region": "US", "tier": "Standard"}
        )
        line = bind_line_item(catalog_item, result, 3)

        body = LineItemResponse.from_line_item(line).model_dump(mode="json")

        assert body == {
            "catalog_item_id": "game-001",
            "variant_id": "us-standard",
            "title": "Elden Ring Account",
            "label": "US | Standard",
            "selected_options": {"region": "US", "tier": "Standard"},
            "quantity": 3,
            "unit_price": {"amount": 1200, "currency": "USD"},
            "line_total": {"amount": 3600, "currency": "USD"},
        }
