"""
Cart store: session-level cart access shared by the cart service and checkout.

write_items() is the only way items reach the row, and it always recomputes
total_price from the items it writes.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront._types import EntityId
from storefront.cart._types import Cart, CartItem, cart_total
from storefront.db import CartTable, insert_ignore


async def load(
    session: AsyncSession, user_id: EntityId, *, for_update: bool = False
) -> CartTable | None:
    stmt = select(CartTable).where(CartTable.user_id == user_id)
    if for_update:
        stmt = stmt.with_for_update()
    return (await session.execute(stmt)).scalar_one_or_none()


async def load_or_create(session: AsyncSession, user_id: EntityId) -> CartTable:
    """Lazily create the user's cart. The unique owner key settles races."""
    await session.execute(
        insert_ignore(
            session,
            CartTable,
            {"user_id": user_id, "items": [], "total_price": 0},
            index_elements=["user_id"],
        )
    )
    row = await load(session, user_id, for_update=True)
    if row is None:
        raise RuntimeError(f"Cart for user {user_id} is missing after insert")
    return row


def items_of(row: CartTable) -> tuple[CartItem, ...]:
    return tuple(CartItem.from_document(doc) for doc in row.items or ())


def write_items(row: CartTable, items: Sequence[CartItem]) -> None:
    # assign a fresh list so the JSON column is flagged dirty
    row.items = [item.to_document() for item in items]
    row.total_price = cart_total(items)


def clear(row: CartTable) -> None:
    write_items(row, ())


def to_cart(row: CartTable | None, user_id: EntityId) -> Cart:
    if row is None:
        return Cart(user_id=user_id)
    return Cart(user_id=row.user_id, items=items_of(row))


__all__ = (
    "load",
    "load_or_create",
    "items_of",
    "write_items",
    "clear",
    "to_cart",
)
