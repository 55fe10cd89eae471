"""Domain layer - Catalog snapshots, validation, resolution, line items.

This module exports the variant engine's building blocks:

- **Catalog**: Option catalog, variant table and catalog item snapshots
- **Validation**: Consistency checks run before a catalog write is accepted
- **Resolution**: Selection resolution with reachable-value propagation
- **Line items**: Binding a resolved selection to a priced, immutable entry
- **Exceptions**: Consistency, selection and bind errors

Example usage:
    from storefront.domain import (
        AvailabilityPolicy, CatalogItem, Option, Variant,
        bind_line_item, resolve_selection, validate_catalog,
    )

    options = [Option(id="region", name="Region", values=("EU", "US"))]
    variants = [Variant(id="v1", selected_options={"region": "EU"}, price=10, stock=5)]
    validate_catalog(options, variants)

    result = resolve_selection(options, variants, {"region": "EU"})
    item = CatalogItem(id="g1", slug="game", title="Game", base_price=10,
                       options=options, variants=variants)
    line = bind_line_item(item, result, quantity=2)
    print(line.line_total)  # $20.00 USD
"""

# Base classes
from storefront.domain.base import ValueObject

# Catalog
from storefront.domain.catalog import (
    AvailabilityPolicy,
    CatalogItem,
    Option,
    Variant,
    variant_label,
)

# Exceptions
from storefront.domain.exceptions import (
    BindError,
    CatalogDocumentError,
    ConsistencyError,
    CurrencyMismatchError,
    DomainError,
    DuplicateOptionIdError,
    DuplicateOptionValueError,
    DuplicateVariantCombinationError,
    DuplicateVariantIdError,
    EmptyOptionValuesError,
    ExtraOptionInVariantError,
    IncompleteSelectionError,
    InsufficientStockError,
    InvalidAvailabilityPolicyError,
    InvalidQuantityError,
    MalformedSelectionError,
    MissingOptionInVariantError,
    MoneyError,
    NegativeMoneyError,
    NegativePriceOrStockError,
    SelectionError,
    SelectionValueNotInDomainError,
    UnknownOptionError,
    UnknownOptionReferenceError,
    ValueNotInDomainError,
    VariantsWithoutOptionsError,
    VariantUnavailableError,
)

# Line items
from storefront.domain.line_items import LineItem, bind_line_item, cart_total

# Resolution
from storefront.domain.resolution import (
    OptionAvailability,
    ResolutionOutcome,
    ResolutionResult,
    ValueAvailability,
    ValueState,
    default_selection,
    resolve_selection,
)

# Validation
from storefront.domain.validation import validate_catalog

# Value Objects
from storefront.domain.value_objects import Money, PriceDisplay

__all__ = [
    # Base classes
    "ValueObject",
    # Catalog
    "AvailabilityPolicy",
    "CatalogItem",
    "Option",
    "Variant",
    "variant_label",
    # Value Objects
    "Money",
    "PriceDisplay",
    # Validation
    "validate_catalog",
    # Resolution
    "OptionAvailability",
    "ResolutionOutcome",
    "ResolutionResult",
    "ValueAvailability",
    "ValueState",
    "default_selection",
    "resolve_selection",
    # Line items
    "LineItem",
    "bind_line_item",
    "cart_total",
    # Exceptions
    "DomainError",
    "ConsistencyError",
    "DuplicateOptionIdError",
    "EmptyOptionValuesError",
    "DuplicateOptionValueError",
    "DuplicateVariantIdError",
    "VariantsWithoutOptionsError",
    "UnknownOptionReferenceError",
    "MissingOptionInVariantError",
    "ExtraOptionInVariantError",
    "ValueNotInDomainError",
    "DuplicateVariantCombinationError",
    "NegativePriceOrStockError",
    "SelectionError",
    "MalformedSelectionError",
    "InvalidAvailabilityPolicyError",
    "UnknownOptionError",
    "SelectionValueNotInDomainError",
    "BindError",
    "InvalidQuantityError",
    "IncompleteSelectionError",
    "InsufficientStockError",
    "VariantUnavailableError",
    "CatalogDocumentError",
    "MoneyError",
    "CurrencyMismatchError",
    "NegativeMoneyError",
]
