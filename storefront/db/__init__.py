"""
db: persistence for storefront.

    from storefront import db

    session_factory, engine = await db.create_database(url)
    result = await db.transaction(session_factory, work)
"""

from storefront.db._tables import (
    Base,
    UserTable,
    ProductTable,
    CartTable,
    OrderTable,
    live_products,
)
from storefront.db._engine import (
    create_engine,
    create_schema,
    create_database,
)
from storefront.db._unit import Work, transaction, read
from storefront.db._insert import insert_ignore

__all__ = (
    # Tables
    "Base",
    "UserTable",
    "ProductTable",
    "CartTable",
    "OrderTable",
    "live_products",
    # Setup
    "create_engine",
    "create_schema",
    "create_database",
    # Unit of work
    "Work",
    "transaction",
    "read",
    "insert_ignore",
)
