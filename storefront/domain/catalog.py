"""Catalog snapshot types.

A catalog item declares an ordered list of options (e.g. Region, Tier),
each with an ordered domain of values, and enumerates the variants that
concretely exist for combinations of those values. The engine only ever
reads these snapshots; they are built once per request from whatever the
document store returned.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from storefront.domain.base import ValueObject
from storefront.domain.value_objects import Money, PriceDisplay

VARIANT_LABEL_SEPARATOR = " | "


def _as_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# ============================================================================
# Availability Policy
# ============================================================================


class AvailabilityPolicy(str, Enum):
    """How zero-stock variants take part in resolution.

    HIDE_SOLD_OUT drops them from the candidate set entirely.
    SHOW_SOLD_OUT_DISABLED keeps them as candidates but flags them
    so the UI can render them as unselectable.
    """

    HIDE_SOLD_OUT = "hide_sold_out"
    SHOW_SOLD_OUT_DISABLED = "show_sold_out_disabled"


# ============================================================================
# Option
# ============================================================================


@dataclass(frozen=True)
class Option(ValueObject):
    """A configurable dimension of a catalog item.

    Attributes:
        id: Stable identifier, unique within the catalog item.
        name: Display label.
        values: Ordered domain of allowed values.
    """

    id: str
    name: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    def allows(self, value: str) -> bool:
        """Check whether a value belongs to this option's domain."""
        return value in self.values


# ============================================================================
# Variant
# ============================================================================


@dataclass(frozen=True)
class Variant(ValueObject):
    """A concrete, priced and stocked combination of option values.

    ``selected_options`` keeps the entries exactly as they were stored
    (option id, value) so that the validator can detect an option appearing
    twice. A mapping is accepted on construction and converted to entries.

    Attributes:
        id: Stable identifier, unique within the catalog item.
        selected_options: (option id, value) entries.
        price: Price in major currency units, overrides the item base price.
        stock: Units available; 0 means sold out.
    """

    id: str
    selected_options: tuple[tuple[str, str], ...]
    price: Decimal
    stock: int = 0

    def __post_init__(self) -> None:
        entries: Mapping[str, str] | Iterable[tuple[str, str]] = self.selected_options
        if isinstance(entries, Mapping):
            entries = entries.items()
        object.__setattr__(
            self,
            "selected_options",
            tuple((option_id, value) for option_id, value in entries),
        )
        object.__setattr__(self, "price", _as_decimal(self.price))

    @property
    def options_map(self) -> dict[str, str]:
        """Selected values keyed by option id."""
        return dict(self.selected_options)

    @property
    def is_sold_out(self) -> bool:
        return self.stock <= 0

    def value_for(self, option_id: str) -> str | None:
        """Get the value this variant selects for an option."""
        for entry_option_id, value in self.selected_options:
            if entry_option_id == option_id:
                return value
        return None

    def matches(self, selection: Mapping[str, str]) -> bool:
        """Check whether this variant agrees with every selected value.

        Args:
            selection: Partial mapping of option id to value.

        Returns:
            True if every selected option has the same value here.
        """
        options = self.options_map
        return all(options.get(option_id) == value for option_id, value in selection.items())

    def combination_key(self, option_ids: Iterable[str]) -> tuple[str | None, ...]:
        """Canonical key of this variant's combination in declared option order."""
        options = self.options_map
        return tuple(options.get(option_id) for option_id in option_ids)


def variant_label(options: Iterable[Option], selected: Mapping[str, str]) -> str:
    """Format selected values for display, in declared option order.

    Example:
        >>> variant_label(options, {"tier": "Safe", "region": "EU"})
        'EU | Safe'
    """
    return VARIANT_LABEL_SEPARATOR.join(
        selected[option.id] for option in options if option.id in selected
    )


# ============================================================================
# Catalog Item
# ============================================================================


@dataclass(frozen=True)
class CatalogItem(ValueObject):
    """A sellable product snapshot: its option catalog and variant table.

    Option-less items have an empty variant table and are priced and
    stocked by the item itself.

    Attributes:
        id: Catalog item identifier.
        slug: URL slug.
        title: Display title.
        base_price: Fallback price in major currency units.
        options: Ordered option catalog.
        variants: Variant table.
        currency: ISO 4217 currency code for all prices of this item.
        on_sale: Whether the sale price applies.
        sale_price: Discounted base price while on sale.
        stock: Item-level stock for option-less items, None if untracked.
    """

    id: str
    slug: str
    title: str
    base_price: Decimal
    options: tuple[Option, ...] = ()
    variants: tuple[Variant, ...] = ()
    currency: str = "USD"
    on_sale: bool = False
    sale_price: Decimal | None = None
    stock: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "variants", tuple(self.variants))
        object.__setattr__(self, "base_price", _as_decimal(self.base_price))
        if self.sale_price is not None:
            object.__setattr__(self, "sale_price", _as_decimal(self.sale_price))
        object.__setattr__(self, "currency", self.currency.upper())

    @property
    def has_options(self) -> bool:
        return len(self.options) > 0

    @property
    def option_ids(self) -> tuple[str, ...]:
        return tuple(option.id for option in self.options)

    @property
    def effective_base_price(self) -> Decimal:
        """Base price after applying an active sale."""
        if self.on_sale and self.sale_price is not None:
            return self.sale_price
        return self.base_price

    def option(self, option_id: str) -> Option | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def variant(self, variant_id: str) -> Variant | None:
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None

    def unit_price(self, variant: Variant | None = None) -> Money:
        """Price of one unit of a variant, or of the item itself."""
        amount = variant.price if variant is not None else self.effective_base_price
        return Money.from_decimal(amount, self.currency)

    def price_display(self, variant: Variant | None = None) -> PriceDisplay:
        """Build the product-page price for the current variant.

        The base price is shown struck through while the item is on sale
        and the current price is below it.

        Args:
            variant: Resolved variant, or None when nothing is resolved yet.

        Returns:
            PriceDisplay with the current price and any discount.
        """
        current = variant.price if variant is not None else self.effective_base_price
        on_sale = self.on_sale and self.sale_price is not None
        if not on_sale or self.base_price <= 0 or current >= self.base_price:
            return PriceDisplay(current=current)

        discount = ((self.base_price - current) / self.base_price * 100).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
        return PriceDisplay(
            current=current,
            original=self.base_price,
            discount_percent=int(discount),
        )
