"""Line-item binding.

Materializes a resolved selection into an immutable, priced snapshot that
cart and checkout code can hold on to. Binding never touches the catalog;
decrementing stock is the checkout transaction's job.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from storefront.domain.base import ValueObject
from storefront.domain.catalog import CatalogItem, Variant, variant_label
from storefront.domain.exceptions import (
    IncompleteSelectionError,
    InsufficientStockError,
    InvalidQuantityError,
    VariantUnavailableError,
)
from storefront.domain.resolution import ResolutionResult
from storefront.domain.value_objects import Money


@dataclass(frozen=True)
class LineItem(ValueObject):
    """A priced entry for one catalog item (and variant) at a fixed quantity.

    Attributes:
        catalog_item_id: Item the line belongs to.
        variant_id: Bound variant, None for option-less items.
        title: Item title at bind time.
        unit_price: Price per unit at bind time.
        selected_options: (option id, value) pairs in declared option order.
        quantity: Number of units, always positive.
        label: Selected values formatted for display.
    """

    catalog_item_id: str
    variant_id: str | None
    title: str
    unit_price: Money
    selected_options: tuple[tuple[str, str], ...]
    quantity: int
    label: str = ""

    def __post_init__(self) -> None:
        """Validate line item constraints."""
        if self.quantity <= 0:
            raise InvalidQuantityError(self.quantity)

    @property
    def line_total(self) -> Money:
        """Calculate total price for this line item.

        Returns:
            Unit price multiplied by quantity.
        """
        return self.unit_price * self.quantity

    @property
    def options_map(self) -> dict[str, str]:
        return dict(self.selected_options)


def bind_line_item(
    item: CatalogItem,
    resolution: ResolutionResult | None,
    quantity: int,
    max_quantity: int | None = None,
) -> LineItem:
    """Bind a resolution to a priced line item.

    The variant is looked up again in ``item`` so price and stock come from
    the snapshot current at bind time, not from the resolution.

    Args:
        item: Catalog item snapshot.
        resolution: Result of resolving the shopper's selection. May be None
            for option-less items.
        quantity: Requested units.
        max_quantity: Optional cap on a single line's quantity.

    Returns:
        Immutable LineItem.

    Raises:
        InvalidQuantityError: If quantity is not a positive integer or
            exceeds ``max_quantity``.
        IncompleteSelectionError: If options remain unselected.
        VariantUnavailableError: If the selection has no bindable variant.
        InsufficientStockError: If quantity exceeds stock.
    """
    _check_quantity(quantity, max_quantity)

    if not item.has_options:
        if item.stock is not None and quantity > item.stock:
            raise InsufficientStockError(item.id, None, quantity, item.stock)
        return LineItem(
            catalog_item_id=item.id,
            variant_id=None,
            title=item.title,
            unit_price=item.unit_price(),
            selected_options=(),
            quantity=quantity,
        )

    variant = _bound_variant(item, resolution)
    if quantity > variant.stock:
        raise InsufficientStockError(item.id, variant.id, quantity, variant.stock)

    selected = variant.options_map
    return LineItem(
        catalog_item_id=item.id,
        variant_id=variant.id,
        title=item.title,
        unit_price=item.unit_price(variant),
        selected_options=tuple(
            (option.id, selected[option.id]) for option in item.options if option.id in selected
        ),
        quantity=quantity,
        label=variant_label(item.options, selected),
    )


def cart_total(line_items: Iterable[LineItem], currency: str = "USD") -> Money:
    """Sum line totals.

    Raises:
        CurrencyMismatchError: If the lines are priced in different currencies.
    """
    total: Money | None = None
    for line in line_items:
        total = line.line_total if total is None else total + line.line_total
    return total if total is not None else Money.zero(currency)


def _check_quantity(quantity: int, max_quantity: int | None) -> None:
    # bool is an int subclass; True must not bind one unit
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError(quantity)
    if max_quantity is not None and quantity > max_quantity:
        raise InvalidQuantityError(quantity, f"Quantity cannot exceed {max_quantity}")


def _bound_variant(item: CatalogItem, resolution: ResolutionResult | None) -> Variant:
    if resolution is None or resolution.is_partial:
        selected = resolution.selection if resolution is not None else {}
        missing = [option.id for option in item.options if option.id not in selected]
        raise IncompleteSelectionError(item.id, missing)

    if resolution.is_unavailable or resolution.variant is None:
        raise VariantUnavailableError(item.id)

    variant = item.variant(resolution.variant.id)
    if variant is None or not variant.matches(resolution.selection):
        raise VariantUnavailableError(item.id, resolution.variant.id)
    return variant
