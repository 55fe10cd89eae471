"""Selection resolution.

Turns a shopper's (possibly partial) selection of option values into either
a concrete variant or, while options remain unselected, the values that are
still reachable for each of them. Every call is a fresh computation over the
snapshot it is given, so removing a choice and resolving again yields exactly
the state from before that choice was made.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.base import ValueObject
from storefront.domain.catalog import AvailabilityPolicy, Option, Variant
from storefront.domain.exceptions import (
    InvalidAvailabilityPolicyError,
    SelectionValueNotInDomainError,
    UnknownOptionError,
)


class ResolutionOutcome(str, Enum):
    """Terminal states of a resolution. None of them is an error."""

    RESOLVED = "resolved"
    UNAVAILABLE = "unavailable"
    PARTIAL = "partial"


class ValueState(str, Enum):
    """How a value of an unselected option should be presented."""

    AVAILABLE = "available"
    SOLD_OUT = "sold_out"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class ValueAvailability(ValueObject):
    """A declared option value and whether it can still be chosen."""

    value: str
    state: ValueState

    @property
    def selectable(self) -> bool:
        return self.state is ValueState.AVAILABLE


@dataclass(frozen=True)
class OptionAvailability(ValueObject):
    """Every declared value of one unselected option, in declared order.

    Unreachable values stay in the list so the UI can render them disabled.
    """

    option_id: str
    name: str
    values: tuple[ValueAvailability, ...]

    @property
    def reachable(self) -> frozenset[str]:
        """Values present in at least one remaining candidate."""
        return frozenset(v.value for v in self.values if v.state is not ValueState.UNREACHABLE)

    @property
    def sold_out(self) -> frozenset[str]:
        """Reachable values whose remaining candidates are all out of stock."""
        return frozenset(v.value for v in self.values if v.state is ValueState.SOLD_OUT)


@dataclass(frozen=True)
class ResolutionResult(ValueObject):
    """Outcome of resolving a selection against a catalog snapshot.

    Attributes:
        outcome: RESOLVED, UNAVAILABLE or PARTIAL.
        policy: Availability policy the result was computed under.
        selection: The validated selection that was resolved.
        variant: Matching variant when RESOLVED; None for option-less items.
        options: Availability of each unselected option when PARTIAL.
    """

    outcome: ResolutionOutcome
    policy: AvailabilityPolicy
    selection: dict[str, str] = field(default_factory=dict)
    variant: Variant | None = None
    options: tuple[OptionAvailability, ...] = ()

    @property
    def is_resolved(self) -> bool:
        return self.outcome is ResolutionOutcome.RESOLVED

    @property
    def is_unavailable(self) -> bool:
        return self.outcome is ResolutionOutcome.UNAVAILABLE

    @property
    def is_partial(self) -> bool:
        return self.outcome is ResolutionOutcome.PARTIAL

    @property
    def reachable(self) -> dict[str, frozenset[str]]:
        """Reachable values keyed by unselected option id."""
        return {option.option_id: option.reachable for option in self.options}

    @property
    def sold_out(self) -> dict[str, frozenset[str]]:
        """Sold-out reachable values keyed by unselected option id."""
        return {option.option_id: option.sold_out for option in self.options}

    @property
    def in_stock(self) -> bool | None:
        """Whether the resolved variant can be bought; None without a variant."""
        if self.variant is None:
            return None
        return not self.variant.is_sold_out

    def is_low_stock(self, threshold: int) -> bool:
        """Check if the resolved variant is running out.

        Args:
            threshold: Stock at or below which a variant counts as low.

        Returns:
            True if the variant has between 1 and ``threshold`` units.
        """
        if self.variant is None:
            return False
        return 0 < self.variant.stock <= threshold

    def availability(self, option_id: str) -> OptionAvailability | None:
        for option in self.options:
            if option.option_id == option_id:
                return option
        return None


def resolve_selection(
    options: Sequence[Option],
    variants: Sequence[Variant],
    selection: Mapping[str, str],
    policy: AvailabilityPolicy | str = AvailabilityPolicy.HIDE_SOLD_OUT,
) -> ResolutionResult:
    """Resolve a shopper selection against a validated catalog snapshot.

    Args:
        options: Declared options of the catalog item.
        variants: Variant table of the catalog item.
        selection: Partial mapping of option id to chosen value. Unselected
            options are absent.
        policy: Whether sold-out variants are hidden or shown disabled.

    Returns:
        ResolutionResult: RESOLVED with the matching variant, UNAVAILABLE
        when a complete selection has no candidate, or PARTIAL with the
        per-option availability of every unselected option.

    Raises:
        InvalidAvailabilityPolicyError: If the policy is not a known value.
        UnknownOptionError: If the selection names an undeclared option.
        SelectionValueNotInDomainError: If a selected value is not allowed.
    """
    try:
        policy = AvailabilityPolicy(policy)
    except ValueError:
        raise InvalidAvailabilityPolicyError(policy) from None
    _check_selection(options, selection)
    selection = dict(selection)

    candidates = [variant for variant in variants if variant.matches(selection)]
    if policy is AvailabilityPolicy.HIDE_SOLD_OUT:
        candidates = [variant for variant in candidates if not variant.is_sold_out]

    if len(selection) == len(options):
        if not options:
            # The item itself is the only purchasable unit.
            return ResolutionResult(
                outcome=ResolutionOutcome.RESOLVED, policy=policy, selection=selection
            )
        if not candidates:
            return ResolutionResult(
                outcome=ResolutionOutcome.UNAVAILABLE, policy=policy, selection=selection
            )
        return ResolutionResult(
            outcome=ResolutionOutcome.RESOLVED,
            policy=policy,
            selection=selection,
            variant=candidates[0],
        )

    return ResolutionResult(
        outcome=ResolutionOutcome.PARTIAL,
        policy=policy,
        selection=selection,
        options=tuple(
            _option_availability(option, candidates)
            for option in options
            if option.id not in selection
        ),
    )


def default_selection(
    options: Sequence[Option],
    variants: Sequence[Variant],
    policy: AvailabilityPolicy | str = AvailabilityPolicy.HIDE_SOLD_OUT,
) -> dict[str, str]:
    """Pick the initial selection shown on the product page.

    Options are filled in declared order with the first declared value that
    is still available, falling back to the first sold-out one when the
    policy shows sold-out variants.

    Returns:
        A complete selection, or an empty dict when nothing is reachable.
    """
    selection: dict[str, str] = {}
    for option in options:
        result = resolve_selection(options, variants, selection, policy)
        availability = result.availability(option.id)
        if availability is None:
            return {}
        choice = _first_in_state(availability, ValueState.AVAILABLE) or _first_in_state(
            availability, ValueState.SOLD_OUT
        )
        if choice is None:
            return {}
        selection[option.id] = choice
    return selection


def _check_selection(options: Sequence[Option], selection: Mapping[str, str]) -> None:
    declared = {option.id: option for option in options}
    for option_id, value in selection.items():
        option = declared.get(option_id)
        if option is None:
            raise UnknownOptionError(option_id)
        if not option.allows(value):
            raise SelectionValueNotInDomainError(option_id, value)


def _option_availability(option: Option, candidates: Sequence[Variant]) -> OptionAvailability:
    in_stock: set[str | None] = set()
    sold_out: set[str | None] = set()
    for variant in candidates:
        value = variant.value_for(option.id)
        if variant.is_sold_out:
            sold_out.add(value)
        else:
            in_stock.add(value)

    values = []
    for value in option.values:
        if value in in_stock:
            state = ValueState.AVAILABLE
        elif value in sold_out:
            state = ValueState.SOLD_OUT
        else:
            state = ValueState.UNREACHABLE
        values.append(ValueAvailability(value=value, state=state))

    return OptionAvailability(option_id=option.id, name=option.name, values=tuple(values))


def _first_in_state(availability: OptionAvailability, state: ValueState) -> str | None:
    for value in availability.values:
        if value.state is state:
            return value.value
    return None
