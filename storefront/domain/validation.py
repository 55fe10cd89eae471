"""Consistency validation for option catalogs and variant tables.

Runs on the catalog write path before an item's options or variants are
persisted. Checks run in a fixed order and stop at the first failure:

1. option ids are distinct
2. every option has a non-empty, duplicate-free value domain
3. variant ids are distinct
4. each variant's entries reference declared options exactly once with
   in-domain values, and no combination repeats
5. prices are finite and non-negative, stock is a non-negative integer
"""

from collections.abc import Sequence

from storefront.domain.catalog import Option, Variant
from storefront.domain.exceptions import (
    DuplicateOptionIdError,
    DuplicateOptionValueError,
    DuplicateVariantCombinationError,
    DuplicateVariantIdError,
    EmptyOptionValuesError,
    ExtraOptionInVariantError,
    MissingOptionInVariantError,
    NegativePriceOrStockError,
    UnknownOptionReferenceError,
    ValueNotInDomainError,
    VariantsWithoutOptionsError,
)


def validate_catalog(options: Sequence[Option], variants: Sequence[Variant]) -> None:
    """Validate that an option catalog and variant table are consistent.

    Args:
        options: Declared options of the catalog item.
        variants: Enumerated variants of the catalog item.

    Raises:
        ConsistencyError: The first violated check, naming the offending
            option or variant.
    """
    domains = _check_options(options)
    _check_variant_ids(variants)
    _check_combinations(options, variants, domains)
    _check_price_and_stock(variants)


def _check_options(options: Sequence[Option]) -> dict[str, frozenset[str]]:
    seen: set[str] = set()
    for option in options:
        if option.id in seen:
            raise DuplicateOptionIdError(option.id)
        seen.add(option.id)

    domains: dict[str, frozenset[str]] = {}
    for option in options:
        if not option.values:
            raise EmptyOptionValuesError(option.id)
        values: set[str] = set()
        for value in option.values:
            if value in values:
                raise DuplicateOptionValueError(option.id, value)
            values.add(value)
        domains[option.id] = frozenset(values)
    return domains


def _check_variant_ids(variants: Sequence[Variant]) -> None:
    seen: set[str] = set()
    for variant in variants:
        if variant.id in seen:
            raise DuplicateVariantIdError(variant.id)
        seen.add(variant.id)


def _check_combinations(
    options: Sequence[Option],
    variants: Sequence[Variant],
    domains: dict[str, frozenset[str]],
) -> None:
    if not options and variants:
        raise VariantsWithoutOptionsError(variants[0].id)

    option_ids = [option.id for option in options]
    combinations: dict[tuple[str | None, ...], str] = {}

    for variant in variants:
        entries: set[str] = set()
        for option_id, value in variant.selected_options:
            if option_id not in domains:
                raise UnknownOptionReferenceError(variant.id, option_id)
            if option_id in entries:
                raise ExtraOptionInVariantError(variant.id, option_id)
            entries.add(option_id)
            if value not in domains[option_id]:
                raise ValueNotInDomainError(variant.id, option_id, value)

        for option_id in option_ids:
            if option_id not in entries:
                raise MissingOptionInVariantError(variant.id, option_id)

        key = variant.combination_key(option_ids)
        existing = combinations.get(key)
        if existing is not None:
            raise DuplicateVariantCombinationError(
                variant.id, existing, dict(zip(option_ids, key))
            )
        combinations[key] = variant.id


def _check_price_and_stock(variants: Sequence[Variant]) -> None:
    for variant in variants:
        # NaN compares by raising, so finiteness is checked before the sign
        if not variant.price.is_finite():
            raise NegativePriceOrStockError(variant.id, "price", variant.price, "non-finite")
        if variant.price < 0:
            raise NegativePriceOrStockError(variant.id, "price", variant.price)
        if isinstance(variant.stock, bool) or not isinstance(variant.stock, int):
            raise NegativePriceOrStockError(variant.id, "stock", variant.stock, "non-integer")
        if variant.stock < 0:
            raise NegativePriceOrStockError(variant.id, "stock", variant.stock)
