"""Domain exceptions.

All domain-level errors raised by the variant engine. Every error carries a
machine-readable ``error_code`` and a ``details`` dict naming the offending
option, value or variant so callers can report it without parsing messages.

Families:
    ConsistencyError: a catalog write breaks an option/variant invariant.
    SelectionError: a shopper selection is malformed for the catalog item.
    BindError: a line item cannot be materialized from a resolution.
    MoneyError: invalid monetary arithmetic.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Consistency Errors
# ============================================================================


class ConsistencyError(DomainError):
    """Base class for option/variant consistency violations.

    A consistency error blocks the catalog write that triggered validation.
    """

    error_code = "CONSISTENCY_ERROR"


class DuplicateOptionIdError(ConsistencyError):
    """Raised when two options share the same id."""

    error_code = "DUPLICATE_OPTION_ID"

    def __init__(self, option_id: str) -> None:
        super().__init__(
            f"Option id '{option_id}' is declared more than once",
            details={"option_id": option_id},
        )


class EmptyOptionValuesError(ConsistencyError):
    """Raised when an option declares no values."""

    error_code = "EMPTY_OPTION_VALUES"

    def __init__(self, option_id: str) -> None:
        super().__init__(
            f"Option '{option_id}' declares no values",
            details={"option_id": option_id},
        )


class DuplicateOptionValueError(ConsistencyError):
    """Raised when an option lists the same value twice."""

    error_code = "DUPLICATE_OPTION_VALUE"

    def __init__(self, option_id: str, value: str) -> None:
        super().__init__(
            f"Option '{option_id}' lists value '{value}' more than once",
            details={"option_id": option_id, "value": value},
        )


class DuplicateVariantIdError(ConsistencyError):
    """Raised when two variants share the same id."""

    error_code = "DUPLICATE_VARIANT_ID"

    def __init__(self, variant_id: str) -> None:
        super().__init__(
            f"Variant id '{variant_id}' is used more than once",
            details={"variant_id": variant_id},
        )


class VariantsWithoutOptionsError(ConsistencyError):
    """Raised when a catalog item without options carries variants.

    Option-less items are priced and stocked by the item itself, so their
    variant table must be empty.
    """

    error_code = "VARIANTS_WITHOUT_OPTIONS"

    def __init__(self, variant_id: str) -> None:
        super().__init__(
            f"Variant '{variant_id}' belongs to an item that declares no options",
            details={"variant_id": variant_id},
        )


class UnknownOptionReferenceError(ConsistencyError):
    """Raised when a variant references an option the item does not declare."""

    error_code = "UNKNOWN_OPTION_REFERENCE"

    def __init__(self, variant_id: str, option_id: str) -> None:
        super().__init__(
            f"Variant '{variant_id}' references undeclared option '{option_id}'",
            details={"variant_id": variant_id, "option_id": option_id},
        )


class MissingOptionInVariantError(ConsistencyError):
    """Raised when a variant has no entry for a declared option."""

    error_code = "MISSING_OPTION_IN_VARIANT"

    def __init__(self, variant_id: str, option_id: str) -> None:
        super().__init__(
            f"Variant '{variant_id}' has no value for option '{option_id}'",
            details={"variant_id": variant_id, "option_id": option_id},
        )


class ExtraOptionInVariantError(ConsistencyError):
    """Raised when a variant has more than one entry for the same option."""

    error_code = "EXTRA_OPTION_IN_VARIANT"

    def __init__(self, variant_id: str, option_id: str) -> None:
        super().__init__(
            f"Variant '{variant_id}' has more than one entry for option '{option_id}'",
            details={"variant_id": variant_id, "option_id": option_id},
        )


class ValueNotInDomainError(ConsistencyError):
    """Raised when a variant uses a value its option does not declare."""

    error_code = "VALUE_NOT_IN_DOMAIN"

    def __init__(self, variant_id: str, option_id: str, value: str) -> None:
        super().__init__(
            f"Variant '{variant_id}' uses value '{value}' "
            f"which option '{option_id}' does not declare",
            details={"variant_id": variant_id, "option_id": option_id, "value": value},
        )


class DuplicateVariantCombinationError(ConsistencyError):
    """Raised when two variants resolve to the same option-value combination."""

    error_code = "DUPLICATE_VARIANT_COMBINATION"

    def __init__(
        self,
        variant_id: str,
        existing_variant_id: str,
        combination: dict[str, str],
    ) -> None:
        super().__init__(
            f"Variant '{variant_id}' repeats the combination of variant "
            f"'{existing_variant_id}'",
            details={
                "variant_id": variant_id,
                "existing_variant_id": existing_variant_id,
                "combination": combination,
            },
        )


class NegativePriceOrStockError(ConsistencyError):
    """Raised when a variant carries a price or stock outside its range.

    Prices must be finite and non-negative; stock must be a non-negative
    whole number.
    """

    error_code = "NEGATIVE_PRICE_OR_STOCK"

    def __init__(
        self, variant_id: str, field: str, value: Any, problem: str = "negative"
    ) -> None:
        super().__init__(
            f"Variant '{variant_id}' has {problem} {field}: {value}",
            details={"variant_id": variant_id, "field": field, "value": str(value)},
        )


# ============================================================================
# Selection Errors
# ============================================================================


class SelectionError(DomainError):
    """Base class for malformed shopper selections.

    Selection errors describe a bad client request, never a catalog defect.
    """

    error_code = "SELECTION_ERROR"


class MalformedSelectionError(SelectionError):
    """Raised when a selection payload is not a mapping of strings to strings."""

    error_code = "MALFORMED_SELECTION"

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(
            "Selection must map option ids to string values",
            details={"errors": errors},
        )


class InvalidAvailabilityPolicyError(SelectionError):
    """Raised when a request names an availability policy that does not exist."""

    error_code = "INVALID_AVAILABILITY_POLICY"

    def __init__(self, policy: Any) -> None:
        super().__init__(
            f"Unknown availability policy '{policy}'",
            details={"policy": str(policy)},
        )


class UnknownOptionError(SelectionError):
    """Raised when a selection names an option the item does not declare."""

    error_code = "UNKNOWN_OPTION"

    def __init__(self, option_id: str) -> None:
        super().__init__(
            f"Unknown option '{option_id}'",
            details={"option_id": option_id},
        )


class SelectionValueNotInDomainError(SelectionError):
    """Raised when a selection picks a value its option does not declare."""

    error_code = "VALUE_NOT_IN_DOMAIN"

    def __init__(self, option_id: str, value: str) -> None:
        super().__init__(
            f"Value '{value}' is not allowed for option '{option_id}'",
            details={"option_id": option_id, "value": value},
        )


# ============================================================================
# Bind Errors
# ============================================================================


class BindError(DomainError):
    """Base class for line-item binding failures."""

    error_code = "BIND_ERROR"


class InvalidQuantityError(BindError):
    """Raised when an invalid quantity is provided."""

    error_code = "INVALID_QUANTITY"

    def __init__(self, quantity: Any, reason: str = "Quantity must be a positive integer") -> None:
        """Initialize invalid quantity error.

        Args:
            quantity: The invalid quantity value.
            reason: Explanation of why the quantity is invalid.
        """
        super().__init__(
            f"Invalid quantity {quantity}: {reason}",
            details={"quantity": quantity, "reason": reason},
        )


class IncompleteSelectionError(BindError):
    """Raised when binding before every option has been selected."""

    error_code = "INCOMPLETE_SELECTION"

    def __init__(self, catalog_item_id: str, missing_option_ids: list[str]) -> None:
        """Initialize incomplete selection error.

        Args:
            catalog_item_id: Item being bound.
            missing_option_ids: Declared options with no selected value.
        """
        super().__init__(
            "Finish selecting options: " + ", ".join(missing_option_ids),
            details={
                "catalog_item_id": catalog_item_id,
                "missing_option_ids": missing_option_ids,
            },
        )


class InsufficientStockError(BindError):
    """Raised when the requested quantity exceeds available stock."""

    error_code = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        catalog_item_id: str,
        variant_id: str | None,
        requested: int,
        available: int,
    ) -> None:
        """Initialize insufficient stock error.

        Args:
            catalog_item_id: Item being bound.
            variant_id: Variant being bound, None for option-less items.
            requested: Requested quantity.
            available: Stock at bind time.
        """
        super().__init__(
            f"Quantity {requested} exceeds stock ({available} available)",
            details={
                "catalog_item_id": catalog_item_id,
                "variant_id": variant_id,
                "requested": requested,
                "available": available,
            },
        )


class VariantUnavailableError(BindError):
    """Raised when the selected combination has no bindable variant."""

    error_code = "VARIANT_UNAVAILABLE"

    def __init__(self, catalog_item_id: str, variant_id: str | None = None) -> None:
        """Initialize variant unavailable error.

        Args:
            catalog_item_id: Item being bound.
            variant_id: Variant that is no longer part of the item, if known.
        """
        target = f"Variant {variant_id}" if variant_id else "Selected combination"
        super().__init__(
            f"{target} is not available for item {catalog_item_id}",
            details={"catalog_item_id": catalog_item_id, "variant_id": variant_id},
        )


# ============================================================================
# Document Errors
# ============================================================================


class CatalogDocumentError(DomainError):
    """Raised when a stored catalog document cannot be decoded."""

    error_code = "MALFORMED_CATALOG_DOCUMENT"

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(
            "Catalog document does not match the expected shape",
            details={"errors": errors},
        )


# ============================================================================
# Money Errors
# ============================================================================


class MoneyError(DomainError):
    """Base class for money-related errors."""

    pass


class CurrencyMismatchError(MoneyError):
    """Raised when attempting to combine money with different currencies."""

    error_code = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str) -> None:
        """Initialize currency mismatch error.

        Args:
            currency1: First currency code.
            currency2: Second currency code.
        """
        super().__init__(
            f"Cannot combine money with different currencies: {currency1} and {currency2}",
            details={"currency1": currency1, "currency2": currency2},
        )


class NegativeMoneyError(MoneyError):
    """Raised when attempting to create money with negative amount."""

    error_code = "NEGATIVE_MONEY"

    def __init__(self, amount: int) -> None:
        """Initialize negative money error.

        Args:
            amount: The negative amount in cents.
        """
        super().__init__(
            f"Money amount cannot be negative: {amount}",
            details={"amount": amount},
        )
