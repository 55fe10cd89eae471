"""Variant application service.

Exposes the engine's three call contracts to the surrounding system:
- Validating a catalog write before it is persisted
- Resolving a shopper selection on the product page (and again at checkout)
- Binding a resolved selection to a priced line item

Domain errors raised by the engine are converted to result objects here;
anything else propagates to the caller.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from storefront.application.schemas import CatalogItemDocument, parse_selection
from storefront.domain.catalog import AvailabilityPolicy, CatalogItem, Option, Variant
from storefront.domain.exceptions import (
    BindError,
    CatalogDocumentError,
    ConsistencyError,
    SelectionError,
)
from storefront.domain.line_items import LineItem, bind_line_item
from storefront.domain.resolution import ResolutionResult, default_selection, resolve_selection
from storefront.domain.validation import validate_catalog
from storefront.infrastructure.config import Settings, settings as default_settings

logger = structlog.get_logger()


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class ValidateCatalogResult:
    """Result of validating a catalog write."""

    catalog_item: CatalogItem | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class ResolveSelectionResult:
    """Result of resolving a shopper selection."""

    resolution: ResolutionResult | None = None
    low_stock: bool = False
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class BindLineItemResult:
    """Result of binding a line item."""

    line_item: LineItem | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


# ============================================================================
# Variant Service
# ============================================================================


class VariantService:
    """Application service for the option/variant engine.

    Stateless: every call works on the snapshot passed in, so one instance
    can serve concurrent requests.

    Example usage:
        service = VariantService(request_id=request_id)

        result = service.validate_document(raw_document)
        if not result.success:
            reject(result.error_code, result.details)

        resolved = service.resolve_selection(item, {"region": "EU"})
        bound = service.bind_line_item(item, resolved.resolution, quantity=2)
    """

    def __init__(
        self,
        config: Settings | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            config: Settings to use instead of the process-wide settings.
            request_id: Request ID for correlation.
        """
        self.config = config or default_settings
        self.request_id = request_id

    def validate_catalog(
        self,
        options: Sequence[Option],
        variants: Sequence[Variant],
        catalog_item_id: str | None = None,
    ) -> ValidateCatalogResult:
        """Validate a proposed option catalog and variant table.

        Args:
            options: Proposed options.
            variants: Proposed variants.
            catalog_item_id: Item being written, for logging.

        Returns:
            ValidateCatalogResult; on failure the write must be rejected.
        """
        try:
            validate_catalog(options, variants)
        except ConsistencyError as e:
            logger.warning(
                "Catalog write rejected",
                catalog_item_id=catalog_item_id,
                error_code=e.error_code,
                details=e.details,
                request_id=self.request_id,
            )
            return ValidateCatalogResult(
                success=False,
                error=e.message,
                error_code=e.error_code,
                details=e.details,
            )

        logger.info(
            "Catalog write accepted",
            catalog_item_id=catalog_item_id,
            option_count=len(options),
            variant_count=len(variants),
            request_id=self.request_id,
        )
        return ValidateCatalogResult()

    def validate_document(self, document: Mapping[str, Any]) -> ValidateCatalogResult:
        """Decode a catalog document and validate its options and variants.

        Args:
            document: Raw catalog item document as proposed for write.

        Returns:
            ValidateCatalogResult carrying the decoded item when valid.
        """
        try:
            item = self.load_catalog_item(document)
        except CatalogDocumentError as e:
            logger.warning(
                "Catalog document rejected",
                error_code=e.error_code,
                details=e.details,
                request_id=self.request_id,
            )
            return ValidateCatalogResult(
                success=False,
                error=e.message,
                error_code=e.error_code,
                details=e.details,
            )

        result = self.validate_catalog(item.options, item.variants, catalog_item_id=item.id)
        if result.success:
            result.catalog_item = item
        return result

    def load_catalog_item(self, document: Mapping[str, Any]) -> CatalogItem:
        """Decode a stored catalog document into a snapshot.

        Raises:
            CatalogDocumentError: If the document is malformed.
        """
        return CatalogItemDocument.parse(document).to_domain(
            default_currency=self.config.default_currency
        )

    def resolve_selection(
        self,
        item: CatalogItem,
        selection: Any,
        policy: AvailabilityPolicy | str | None = None,
    ) -> ResolveSelectionResult:
        """Resolve a shopper selection for a catalog item.

        Args:
            item: Catalog item snapshot current at request time.
            selection: Selection payload (option id -> value), possibly partial.
            policy: Availability policy; defaults to the configured policy.

        Returns:
            ResolveSelectionResult; a failure means the request was malformed.
        """
        policy = policy or self.config.default_availability_policy
        try:
            resolution = resolve_selection(
                item.options, item.variants, parse_selection(selection), policy
            )
        except SelectionError as e:
            return self._reject_selection(item, e)

        logger.debug(
            "Selection resolved",
            catalog_item_id=item.id,
            outcome=resolution.outcome.value,
            variant_id=resolution.variant.id if resolution.variant else None,
            request_id=self.request_id,
        )
        return ResolveSelectionResult(
            resolution=resolution,
            low_stock=resolution.is_low_stock(self.config.low_stock_threshold),
        )

    def initial_selection(
        self,
        item: CatalogItem,
        policy: AvailabilityPolicy | str | None = None,
    ) -> ResolveSelectionResult:
        """Resolve the default selection shown when the product page opens."""
        policy = policy or self.config.default_availability_policy
        try:
            selection = default_selection(item.options, item.variants, policy)
        except SelectionError as e:
            return self._reject_selection(item, e)
        return self.resolve_selection(item, selection, policy)

    def _reject_selection(
        self, item: CatalogItem, error: SelectionError
    ) -> ResolveSelectionResult:
        logger.warning(
            "Selection rejected",
            catalog_item_id=item.id,
            error_code=error.error_code,
            details=error.details,
            request_id=self.request_id,
        )
        return ResolveSelectionResult(
            success=False,
            error=error.message,
            error_code=error.error_code,
            details=error.details,
        )

    def bind_line_item(
        self,
        item: CatalogItem,
        resolution: ResolutionResult | None,
        quantity: int,
    ) -> BindLineItemResult:
        """Bind a resolution to a priced line item.

        Args:
            item: Catalog item snapshot current at bind time.
            resolution: Resolution of the shopper's selection.
            quantity: Requested units.

        Returns:
            BindLineItemResult with the line item or an actionable error.
        """
        try:
            line_item = bind_line_item(
                item, resolution, quantity, max_quantity=self.config.max_line_quantity
            )
        except BindError as e:
            logger.warning(
                "Line item rejected",
                catalog_item_id=item.id,
                error_code=e.error_code,
                details=e.details,
                request_id=self.request_id,
            )
            return BindLineItemResult(
                success=False,
                error=e.message,
                error_code=e.error_code,
                details=e.details,
            )

        logger.info(
            "Line item bound",
            catalog_item_id=item.id,
            variant_id=line_item.variant_id,
            quantity=line_item.quantity,
            line_total_cents=line_item.line_total.amount_cents,
            request_id=self.request_id,
        )
        return BindLineItemResult(line_item=line_item)
