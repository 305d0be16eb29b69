"""
Stock ledger: atomic conditional decrement and increment of product stock.

Both operations run on a caller-owned session so they join the caller's
transaction (checkout, cancellation, admin status change).
"""

from __future__ import annotations

import logging
from typing import Any, cast

from kungfu import Error, Ok, Result
from sqlalchemy import select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession

from storefront._errors import Errors, ShopError
from storefront._types import EntityId
from storefront.catalog._types import Reservation
from storefront.db import ProductTable, live_products

logger = logging.getLogger(__name__)


class StockLedger:
    """
    Conditional stock updates at the storage layer.

    reserve() is a single `UPDATE ... WHERE stock >= :quantity`. There is no
    read-then-write window, so two concurrent checkouts can never both take
    the last unit.
    """

    async def reserve(
        self,
        session: AsyncSession,
        product_id: EntityId,
        quantity: int,
        *,
        name_hint: str | None = None,
    ) -> Result[Reservation, ShopError]:
        stmt = (
            update(ProductTable)
            .where(
                ProductTable.id == product_id,
                ProductTable.stock >= quantity,
                live_products(),
            )
            .values(stock=ProductTable.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        cursor = cast(CursorResult[Any], await session.execute(stmt))

        snapshot = (
            await session.execute(
                select(ProductTable.title, ProductTable.price, ProductTable.stock).where(
                    ProductTable.id == product_id, live_products()
                )
            )
        ).one_or_none()

        if snapshot is None:
            return Error(Errors.product_not_found(name_hint))
        if cursor.rowcount == 0:
            logger.info(
                "Stock short for %s: wanted %d, have %d", product_id, quantity, snapshot.stock
            )
            return Error(Errors.insufficient_stock(snapshot.title, snapshot.stock))

        return Ok(
            Reservation(
                product_id=product_id,
                title=snapshot.title,
                price=snapshot.price,
                quantity=quantity,
            )
        )

    async def restock(
        self,
        session: AsyncSession,
        product_id: EntityId,
        quantity: int,
    ) -> bool:
        """Put `quantity` back on a live product. Returns False if it is gone or soft-deleted."""
        stmt = (
            update(ProductTable)
            .where(ProductTable.id == product_id, live_products())
            .values(stock=ProductTable.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        cursor = cast(CursorResult[Any], await session.execute(stmt))
        if cursor.rowcount == 0:
            logger.warning("Restock skipped, product %s is gone or deleted", product_id)
            return False
        return True


__all__ = ("StockLedger",)
