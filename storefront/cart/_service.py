"""
Cart service: per-user cart reads and edits.
"""

from __future__ import annotations

import dataclasses
import logging

from combinators import lift as L
from kungfu import Error, LazyCoroResult, Ok, Result
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront import db
from storefront._errors import Errors, ShopError
from storefront._types import EntityId, new_id
from storefront.cart import _store as store
from storefront.cart._types import Cart, CartItem
from storefront.catalog import load_live

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session = session_factory

    def get_cart(self, user_id: EntityId) -> LazyCoroResult[Cart, ShopError]:
        async def work(session: AsyncSession) -> Result[Cart, ShopError]:
            return Ok(store.to_cart(await store.load(session, user_id), user_id))

        return db.read(self._session, work)

    def add_item(
        self, user_id: EntityId, product_id: EntityId, quantity: int = 1
    ) -> LazyCoroResult[Cart, ShopError]:
        """
        Add a product or raise the quantity of the line already holding it.

        Price and name are snapshotted when the line is first created. Stock is
        checked against the cumulative quantity, but only checkout reserves it.
        """
        if quantity < 1:
            return L.fail(Errors.validation("quantity: must be >= 1"))

        async def work(session: AsyncSession) -> Result[Cart, ShopError]:
            product = await load_live(session, product_id)
            if product is None:
                return Error(Errors.product_not_found())
            if product.stock < quantity:
                return Error(Errors.cart_exceeds_stock(0, product.stock))

            row = await store.load_or_create(session, user_id)
            items = list(store.items_of(row))

            for index, item in enumerate(items):
                if item.product_id == product_id:
                    wanted = item.quantity + quantity
                    if product.stock < wanted:
                        return Error(Errors.cart_exceeds_stock(item.quantity, product.stock))
                    items[index] = dataclasses.replace(item, quantity=wanted)
                    break
            else:
                items.append(
                    CartItem(
                        id=new_id(),
                        product_id=product_id,
                        quantity=quantity,
                        price=product.price,
                        name=product.title,
                    )
                )

            store.write_items(row, items)
            return Ok(store.to_cart(row, user_id))

        return db.transaction(self._session, work)

    def set_quantity(
        self, user_id: EntityId, item_id: EntityId, quantity: int
    ) -> LazyCoroResult[Cart, ShopError]:
        """Set a line's quantity; 0 removes the line."""
        if quantity < 0:
            return L.fail(Errors.validation("quantity: must be >= 0"))

        async def work(session: AsyncSession) -> Result[Cart, ShopError]:
            row = await store.load(session, user_id, for_update=True)
            if row is None:
                return Error(Errors.cart_not_found())
            items = list(store.items_of(row))
            index = next((i for i, item in enumerate(items) if item.id == item_id), None)
            if index is None:
                return Error(Errors.cart_item_not_found(item_id))

            if quantity == 0:
                del items[index]
            else:
                product = await load_live(session, items[index].product_id)
                if product is None:
                    return Error(Errors.product_not_found(items[index].name))
                if product.stock < quantity:
                    return Error(Errors.cart_exceeds_stock(0, product.stock))
                items[index] = dataclasses.replace(items[index], quantity=quantity)

            store.write_items(row, items)
            return Ok(store.to_cart(row, user_id))

        return db.transaction(self._session, work)

    def remove_item(self, user_id: EntityId, item_id: EntityId) -> LazyCoroResult[Cart, ShopError]:
        async def work(session: AsyncSession) -> Result[Cart, ShopError]:
            row = await store.load(session, user_id, for_update=True)
            if row is None:
                return Error(Errors.cart_not_found())
            items = [item for item in store.items_of(row) if item.id != item_id]
            store.write_items(row, items)
            return Ok(store.to_cart(row, user_id))

        return db.transaction(self._session, work)


__all__ = ("CartService",)
