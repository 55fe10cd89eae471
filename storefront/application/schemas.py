"""Schemas for the variant engine's boundaries.

Pydantic models that decode catalog documents as the document store returns
them (camelCase or snake_case keys), validate client selection payloads, and
render engine results as JSON-ready responses.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from storefront.domain.catalog import AvailabilityPolicy, CatalogItem, Option, Variant
from storefront.domain.exceptions import CatalogDocumentError, MalformedSelectionError
from storefront.domain.line_items import LineItem
from storefront.domain.resolution import (
    OptionAvailability,
    ResolutionOutcome,
    ResolutionResult,
    ValueState,
)
from storefront.domain.value_objects import Money


def _error_list(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


# ============================================================================
# Catalog Documents
# ============================================================================


class DocumentModel(BaseModel):
    """Base for stored documents; accepts camelCase and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class OptionDocument(DocumentModel):
    """Stored option declaration."""

    id: str
    name: str
    values: list[str] = Field(default_factory=list)

    def to_domain(self) -> Option:
        return Option(id=self.id, name=self.name, values=tuple(self.values))


class SelectedOptionEntry(DocumentModel):
    """One entry of a variant's option/value table."""

    option_id: str
    value: str


class VariantDocument(DocumentModel):
    """Stored variant.

    ``selectedOptions`` may be a mapping or a list of ``{optionId, value}``
    entries. Entries are kept as-is so repeated options reach the validator.
    """

    id: str
    selected_options: dict[str, str] | list[SelectedOptionEntry] = Field(default_factory=dict)
    price: Decimal
    stock: int = 0

    def to_domain(self) -> Variant:
        if isinstance(self.selected_options, dict):
            entries = tuple(self.selected_options.items())
        else:
            entries = tuple((entry.option_id, entry.value) for entry in self.selected_options)
        return Variant(id=self.id, selected_options=entries, price=self.price, stock=self.stock)


class CatalogItemDocument(DocumentModel):
    """Stored catalog item, limited to the fields the engine reads."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    slug: str
    title: str = ""
    base_price: Decimal
    options: list[OptionDocument] = Field(default_factory=list)
    variants: list[VariantDocument] = Field(default_factory=list)
    currency: str | None = None
    on_sale: bool = False
    sale_price: Decimal | None = None
    stock: int | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        # Document stores hand out ObjectId-like identifiers
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def parse(cls, raw: Mapping[str, Any]) -> "CatalogItemDocument":
        """Decode a raw document.

        Raises:
            CatalogDocumentError: If the document does not match the shape.
        """
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise CatalogDocumentError(_error_list(e)) from e

    def to_domain(self, default_currency: str = "USD") -> CatalogItem:
        return CatalogItem(
            id=self.id,
            slug=self.slug,
            title=self.title,
            base_price=self.base_price,
            options=tuple(option.to_domain() for option in self.options),
            variants=tuple(variant.to_domain() for variant in self.variants),
            currency=self.currency or default_currency,
            on_sale=self.on_sale,
            sale_price=self.sale_price,
            stock=self.stock,
        )


# ============================================================================
# Selection Payloads
# ============================================================================


SelectionValue = Annotated[StrictStr, StringConstraints(min_length=1)]

_selection_adapter = TypeAdapter(dict[StrictStr, SelectionValue])


def parse_selection(raw: Any) -> dict[str, str]:
    """Validate a client selection payload.

    Unselected options must be absent; null or empty values are rejected
    rather than treated as "not selected".

    Args:
        raw: Decoded JSON payload, or None for an empty selection.

    Returns:
        Mapping of option id to chosen value.

    Raises:
        MalformedSelectionError: If the payload is not a mapping of
            strings to non-empty strings.
    """
    if raw is None:
        return {}
    try:
        return _selection_adapter.validate_python(raw)
    except ValidationError as e:
        raise MalformedSelectionError(_error_list(e)) from e


# ============================================================================
# Responses
# ============================================================================


class PriceSchema(BaseModel):
    """Price representation."""

    amount: int = Field(..., description="Amount in smallest currency unit (cents)")
    currency: str = Field(..., description="Currency code")

    @classmethod
    def from_money(cls, money: Money) -> "PriceSchema":
        return cls(amount=money.amount_cents, currency=money.currency)


class PriceDisplaySchema(BaseModel):
    """Product-page price for the current selection."""

    current: PriceSchema
    original: PriceSchema | None = None
    discount_percent: int = 0


class VariantSchema(BaseModel):
    """Resolved variant."""

    id: str
    selected_options: dict[str, str]
    price: PriceSchema
    stock: int
    in_stock: bool
    low_stock: bool = Field(default=False, description="Few units left")


class ValueAvailabilitySchema(BaseModel):
    value: str
    state: ValueState
    selectable: bool


class OptionAvailabilitySchema(BaseModel):
    """Availability of every declared value of an unselected option."""

    option_id: str
    name: str
    values: list[ValueAvailabilitySchema]

    @classmethod
    def from_availability(cls, availability: OptionAvailability) -> "OptionAvailabilitySchema":
        return cls(
            option_id=availability.option_id,
            name=availability.name,
            values=[
                ValueAvailabilitySchema(value=v.value, state=v.state, selectable=v.selectable)
                for v in availability.values
            ],
        )


class ResolutionResponse(BaseModel):
    """Resolution result as sent to the product page."""

    outcome: ResolutionOutcome
    policy: AvailabilityPolicy
    selection: dict[str, str]
    variant: VariantSchema | None = None
    options: list[OptionAvailabilitySchema] = Field(
        default_factory=list, description="Unselected options, partial results only"
    )
    price: PriceDisplaySchema

    @classmethod
    def from_result(
        cls,
        result: ResolutionResult,
        item: CatalogItem,
        low_stock_threshold: int,
    ) -> "ResolutionResponse":
        """Render a resolution result for the item it was computed against.

        Args:
            result: Resolution result.
            item: Catalog item snapshot, used for currency and pricing.
            low_stock_threshold: Stock at or below which variants are flagged.
        """
        variant_schema = None
        if result.variant is not None:
            variant = result.variant
            variant_schema = VariantSchema(
                id=variant.id,
                selected_options=variant.options_map,
                price=PriceSchema.from_money(item.unit_price(variant)),
                stock=variant.stock,
                in_stock=not variant.is_sold_out,
                low_stock=result.is_low_stock(low_stock_threshold),
            )

        display = item.price_display(result.variant)
        original = None
        if display.original is not None:
            original = PriceSchema.from_money(Money.from_decimal(display.original, item.currency))

        return cls(
            outcome=result.outcome,
            policy=result.policy,
            selection=dict(result.selection),
            variant=variant_schema,
            options=[OptionAvailabilitySchema.from_availability(o) for o in result.options],
            price=PriceDisplaySchema(
                current=PriceSchema.from_money(Money.from_decimal(display.current, item.currency)),
                original=original,
                discount_percent=display.discount_percent,
            ),
        )


class LineItemResponse(BaseModel):
    """Bound line item."""

    catalog_item_id: str
    variant_id: str | None = None
    title: str
    label: str
    selected_options: dict[str, str]
    quantity: int
    unit_price: PriceSchema
    line_total: PriceSchema

    @classmethod
    def from_line_item(cls, line: LineItem) -> "LineItemResponse":
        return cls(
            catalog_item_id=line.catalog_item_id,
            variant_id=line.variant_id,
            title=line.title,
            label=line.label,
            selected_options=line.options_map,
            quantity=line.quantity,
            unit_price=PriceSchema.from_money(line.unit_price),
            line_total=PriceSchema.from_money(line.line_total),
        )
