"""Storefront option/variant engine.

Validates catalog items' option catalogs against their variant tables,
resolves shopper selections to variants, and binds resolved selections
to priced line items.
"""

__version__ = "0.1.0"
