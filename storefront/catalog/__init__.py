"""
Catalog: products and their stock.

    from storefront import catalog

    ledger = catalog.StockLedger()
    reserved = await ledger.reserve(session, product_id, quantity=2)
"""

from storefront.catalog._types import (
    Product,
    ProductDraft,
    ProductPatch,
    Reservation,
)
from storefront.catalog._ledger import StockLedger
from storefront.catalog._service import CatalogService, load_live

__all__ = (
    "Product",
    "ProductDraft",
    "ProductPatch",
    "Reservation",
    "StockLedger",
    "CatalogService",
    "load_live",
)
