"""Application layer module.

Contains the variant service that exposes the engine to the catalog write
path, the product page and checkout, plus boundary schemas.
"""

from storefront.application.schemas import (
    CatalogItemDocument,
    LineItemResponse,
    ResolutionResponse,
    parse_selection,
)
from storefront.application.variant_service import (
    BindLineItemResult,
    ResolveSelectionResult,
    ValidateCatalogResult,
    VariantService,
)

__all__ = [
    "CatalogItemDocument",
    "LineItemResponse",
    "ResolutionResponse",
    "parse_selection",
    "BindLineItemResult",
    "ResolveSelectionResult",
    "ValidateCatalogResult",
    "VariantService",
]
