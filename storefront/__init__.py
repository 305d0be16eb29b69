"""
storefront: e-commerce backend with catalog, cart, checkout and order lifecycle.

    from storefront import catalog    # Products and the stock ledger
    from storefront import cart       # Per-user carts
    from storefront import accounts   # Users, credentials, fraud state
    from storefront import orders     # Checkout and order lifecycle
    from storefront.api import create_app
"""

from storefront import db
from storefront import catalog
from storefront import cart
from storefront import accounts
from storefront import orders
from storefront._errors import ErrorKind, ShopError, Errors
from storefront._types import Lazy, EntityId

__version__ = "0.1.0"

__all__ = (
    "db",
    "catalog",
    "cart",
    "accounts",
    "orders",
    "ErrorKind",
    "ShopError",
    "Errors",
    "Lazy",
    "EntityId",
)
