"""Tests for line-item binding."""

from dataclasses import replace
from decimal import Decimal

import pytest

from storefront.domain import (
    AvailabilityPolicy,
    LineItem,
    Money,
    bind_line_item,
    cart_total,
    resolve_selection,
)
from storefront.domain.exceptions import (
    BindError,
    CurrencyMismatchError,
    IncompleteSelectionError,
    InsufficientStockError,
    InvalidQuantityError,
    VariantUnavailableError,
)

HIDE = AvailabilityPolicy.HIDE_SOLD_OUT
SHOW = AvailabilityPolicy.SHOW_SOLD_OUT_DISABLED


def _resolve(item, selection, policy=HIDE):
    return resolve_selection(item.options, item.variants, selection, policy)


class TestBindVariant:
    """Tests for binding items with options."""

    def test_quantity_above_stock_fails(self, catalog_item) -> None:
        """Binding 4 units of the stock-3 variant fails."""
        resolution = _resolve(catalog_item, {"region": "US", "tier": "Standard"})

        with pytest.raises(InsufficientStockError) as exc_info:
            bind_line_item(catalog_item, resolution, 4)
        assert exc_info.value.details == {
            "catalog_item_id": "game-001",
            "variant_id": "us-standard",
            "requested": 4,
            "available": 3,
        }

    def test_quantity_at_stock_succeeds(self, catalog_item) -> None:
        """Binding 3 units of the $12 variant totals $36."""
        resolution = _resolve(catalog_item, {"region": "US", "tier": "Standard"})

        line = bind_line_item(catalog_item, resolution, 3)

        assert line.variant_id == "us-standard"
        assert line.unit_price == Money(amount_cents=1200)
        assert line.line_total == Money(amount_cents=3600)
        assert line.line_total == line.unit_price * line.quantity

    def test_snapshot_fields(self, catalog_item) -> None:
        """The line item carries options in declared order and a label."""
        resolution = _resolve(catalog_item, {"tier": "Standard", "region": "EU"})

        line = bind_line_item(catalog_item, resolution, 1)

        assert line.catalog_item_id == "game-001"
        assert line.title == "Elden Ring Account"
        assert line.selected_options == (("region", "EU"), ("tier", "Standard"))
        assert line.options_map == {"region": "EU", "tier": "Standard"}
        assert line.label == "EU | Standard"

    def test_line_item_is_immutable(self, catalog_item) -> None:
        """Line items cannot be modified after binding."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Standard"})
        line = bind_line_item(catalog_item, resolution, 1)
        with pytest.raises(AttributeError):
            line.quantity = 2  # type: ignore

    def test_partial_resolution_is_incomplete(self, catalog_item) -> None:
        """Binding before every option is selected fails."""
        resolution = _resolve(catalog_item, {"region": "EU"})

        with pytest.raises(IncompleteSelectionError) as exc_info:
            bind_line_item(catalog_item, resolution, 1)
        assert exc_info.value.details["missing_option_ids"] == ["tier"]

    def test_missing_resolution_is_incomplete(self, catalog_item) -> None:
        """Items with options need a resolution."""
        with pytest.raises(IncompleteSelectionError) as exc_info:
            bind_line_item(catalog_item, None, 1)
        assert exc_info.value.details["missing_option_ids"] == ["region", "tier"]

    def test_unavailable_resolution(self, catalog_item) -> None:
        """An unavailable combination cannot be bound."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Safe"})

        with pytest.raises(VariantUnavailableError):
            bind_line_item(catalog_item, resolution, 1)

    def test_sold_out_variant_shown_disabled(self, catalog_item) -> None:
        """A sold-out variant resolved under show_sold_out_disabled has no stock."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Safe"}, SHOW)

        with pytest.raises(InsufficientStockError):
            bind_line_item(catalog_item, resolution, 1)

    def test_stock_read_from_current_snapshot(self, catalog_item) -> None:
        """Stock is checked against the item at bind time."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Standard"})
        variants = list(catalog_item.variants)
        variants[0] = replace(variants[0], stock=1)
        current = replace(catalog_item, variants=variants)

        with pytest.raises(InsufficientStockError) as exc_info:
            bind_line_item(current, resolution, 2)
        assert exc_info.value.details["available"] == 1

    def test_removed_variant_is_unavailable(self, catalog_item) -> None:
        """A variant dropped from the item since resolution cannot be bound."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Standard"})
        current = replace(catalog_item, variants=catalog_item.variants[1:])

        with pytest.raises(VariantUnavailableError) as exc_info:
            bind_line_item(current, resolution, 1)
        assert exc_info.value.details["variant_id"] == "eu-standard"

    def test_reassigned_variant_id_is_unavailable(self, catalog_item) -> None:
        """A variant id now pointing at another combination cannot be bound."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Standard"})
        variants = list(catalog_item.variants)
        variants[0] = replace(variants[0], selected_options={"region": "US", "tier": "Safe"})
        current = replace(catalog_item, variants=variants)

        with pytest.raises(VariantUnavailableError) as exc_info:
            bind_line_item(current, resolution, 1)
        assert exc_info.value.details["variant_id"] == "eu-standard"


class TestQuantity:
    """Tests for quantity validation."""

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True, "2"])
    def test_invalid_quantity(self, catalog_item, quantity) -> None:
        """Quantity must be a positive integer."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Standard"})
        with pytest.raises(InvalidQuantityError):
            bind_line_item(catalog_item, resolution, quantity)

    def test_max_quantity(self, catalog_item) -> None:
        """Quantities over the line cap are rejected, not clamped."""
        resolution = _resolve(catalog_item, {"region": "EU", "tier": "Standard"})
        with pytest.raises(InvalidQuantityError):
            bind_line_item(catalog_item, resolution, 5, max_quantity=4)

    def test_bind_errors_share_base(self, catalog_item) -> None:
        """Every bind failure is a BindError."""
        with pytest.raises(BindError):
            bind_line_item(catalog_item, None, 0)


class TestBindOptionless:
    """Tests for binding items without options."""

    def test_uses_sale_price(self, optionless_item) -> None:
        """The effective base price applies to option-less items."""
        line = bind_line_item(optionless_item, resolve_selection([], [], {}), 2)

        assert line.variant_id is None
        assert line.selected_options == ()
        assert line.unit_price == Money(amount_cents=3000)
        assert line.line_total == Money(amount_cents=6000)

    def test_resolution_optional(self, optionless_item) -> None:
        """Option-less items may be bound without resolving first."""
        line = bind_line_item(optionless_item, None, 1)
        assert line.quantity == 1

    def test_item_stock_enforced(self, optionless_item) -> None:
        """Tracked item stock limits the quantity."""
        with pytest.raises(InsufficientStockError) as exc_info:
            bind_line_item(optionless_item, None, 3)
        assert exc_info.value.details["variant_id"] is None

    def test_untracked_stock(self, optionless_item) -> None:
        """Untracked stock never limits the quantity."""
        digital = replace(optionless_item, stock=None)
        line = bind_line_item(digital, None, 50)
        assert line.quantity == 50


class TestCartTotal:
    """Tests for summing line items."""

    def test_sum_of_lines(self, catalog_item, optionless_item) -> None:
        """Cart total is the sum of line totals."""
        resolution = _resolve(catalog_item, {"region": "US", "tier": "Standard"})
        lines = [
            bind_line_item(catalog_item, resolution, 3),
            bind_line_item(optionless_item, None, 1),
        ]
        assert cart_total(lines) == Money(amount_cents=6600)

    def test_empty_cart(self) -> None:
        """An empty cart totals zero."""
        assert cart_total([], currency="EUR") == Money.zero("EUR")

    def test_currency_mismatch(self, optionless_item) -> None:
        """Lines in different currencies cannot be summed."""
        euro_item = replace(optionless_item, currency="EUR")
        lines = [bind_line_item(optionless_item, None, 1), bind_line_item(euro_item, None, 1)]
        with pytest.raises(CurrencyMismatchError):
            cart_total(lines)

    def test_line_item_rejects_non_positive_quantity(self) -> None:
        """LineItem itself guards its quantity."""
        with pytest.raises(InvalidQuantityError):
            LineItem(
                catalog_item_id="x",
                variant_id=None,
                title="X",
                unit_price=Money(amount_cents=100),
                selected_options=(),
                quantity=0,
            )
