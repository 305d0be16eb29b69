"""
Checkout: turn a user's cart into an order in one transaction.

    load cart ─► reserve stock per line (conditional decrement)
              ─► freeze price/title into line items
              ─► insert order (Pending / Pending)
              ─► clear cart
              ─► commit

Any Error rolls the whole transaction back: decrements, order and cart edit
become visible together or not at all.
"""

from __future__ import annotations

import logging

from kungfu import Error, LazyCoroResult, Ok, Result
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront import db
from storefront._errors import Errors, ShopError
from storefront._types import EntityId
from storefront.cart import store as cart_store
from storefront.catalog import StockLedger
from storefront.db import OrderTable
from storefront.orders._types import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    order_total,
)

logger = logging.getLogger(__name__)


class Checkout:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        ledger: StockLedger | None = None,
    ) -> None:
        self._session = session_factory
        self._ledger = ledger or StockLedger()

    def place_order(self, user_id: EntityId) -> LazyCoroResult[Order, ShopError]:
        return db.transaction(self._session, lambda session: self._place(session, user_id))

    async def _place(self, session: AsyncSession, user_id: EntityId) -> Result[Order, ShopError]:
        cart_row = await cart_store.load(session, user_id, for_update=True)
        if cart_row is None:
            return Error(Errors.empty_cart())
        cart_items = cart_store.items_of(cart_row)
        if not cart_items:
            return Error(Errors.empty_cart())

        lines: list[OrderItem] = []
        for item in cart_items:
            reserved = await self._ledger.reserve(
                session, item.product_id, item.quantity, name_hint=item.name
            )
            match reserved:
                case Ok(reservation):
                    lines.append(OrderItem.from_reservation(reservation))
                case Error(e):
                    logger.info("Checkout for user %s rejected: %s", user_id, e)
                    return Error(e)

        order_row = OrderTable(
            user_id=user_id,
            items=[line.to_document() for line in lines],
            total_amount=order_total(lines),
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
        )
        session.add(order_row)
        cart_store.clear(cart_row)
        await session.flush()

        order = Order.from_row(order_row)
        logger.info(
            "Order %s placed by user %s: %d lines, total %d",
            order.id,
            user_id,
            len(order.items),
            order.total_amount,
        )
        return Ok(order)


__all__ = ("Checkout",)
